"""
Replace-all for many-to-many link sets.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import StoreError
from .schema import Association
from .store import Store

logger = logging.getLogger(__name__)


async def set_links(
    store: Store,
    association: Association,
    parent_id: int,
    child_ids: Sequence[int],
) -> list[int]:
    """
    Make the link set of `parent_id` exactly `child_ids`.

    Delete-then-insert inside one transaction: if any insert fails (for
    example a foreign-key violation on an unknown child id) the delete is
    rolled back too and the previous set stays intact.

    An empty `child_ids` clears the set. Duplicates collapse to their first
    occurrence. Child ids are not validated here; the store's foreign keys are.
    Returns the ids that were linked, in insertion order.
    """
    unique_ids = list(dict.fromkeys(int(c) for c in child_ids))
    rows = [
        {association.parent_column: parent_id, association.child_column: child_id}
        for child_id in unique_ids
    ]

    try:
        async with store.transaction() as tx:
            await tx.delete_where(association.link_table, {association.parent_column: parent_id})
            await tx.insert_many(association.link_table, rows)
    except StoreError as exc:
        logger.exception(
            "set_links_failed link_table=%s parent_id=%s count=%s",
            association.link_table.name,
            parent_id,
            len(unique_ids),
        )
        raise StoreError(
            str(exc),
            public_message=f"failed to set {association.name} for {association.parent.label}",
        ) from exc

    logger.debug(
        "links_replaced link_table=%s parent_id=%s count=%s",
        association.link_table.name,
        parent_id,
        len(unique_ids),
    )
    return unique_ids
