"""
Delete with store-enforced cascades.

Dependents go through the ON DELETE rules declared in `core/schema.py`;
nothing here fans out deletes by hand. `storage.files` rows (and the blobs
behind them) are never part of a content entity's cascade: orphaned files are
left for the out-of-band cleanup job.
"""

from __future__ import annotations

import logging

from .errors import NotFoundError, StoreError
from .schema import CASCADE, TABLES, Table
from .store import Store

logger = logging.getLogger(__name__)


def cascade_plan(table: Table, tables: tuple[Table, ...] = TABLES) -> list[Table]:
    """
    Tables whose rows disappear, transitively, when a `table` row is deleted.
    """
    plan: list[Table] = []
    pending = [table]
    while pending:
        current = pending.pop(0)
        for candidate in tables:
            if candidate in plan or candidate == table:
                continue
            if any(fk.references == current.name and fk.on_delete == CASCADE for fk in candidate.foreign_keys):
                plan.append(candidate)
                pending.append(candidate)
    return plan


async def delete(store: Store, table: Table, entity_id: int) -> None:
    """
    Delete one row; zero rows deleted means it never existed -> NotFoundError.
    """
    try:
        deleted = await store.delete(table, entity_id)
    except StoreError as exc:
        logger.exception("delete_failed table=%s id=%s", table.name, entity_id)
        raise StoreError(str(exc), public_message=f"failed to delete {table.label}") from exc

    if deleted == 0:
        raise NotFoundError(table.label, entity_id)

    logger.info(
        "deleted table=%s id=%s cascaded=%s",
        table.name,
        entity_id,
        ",".join(t.name for t in cascade_plan(table)) or "-",
    )
