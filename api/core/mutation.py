"""
Safe create/update primitives shared by every entity.

`update` is the only write path for existing rows:
1. count-only existence check (missing -> NotFoundError)
2. partial UPDATE of the supplied columns, id/timestamps excluded

Zero rows touched by step 2 is fine: the row existed at step 1.
There is no full-row save; omitted fields keep their stored values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .associations import set_links
from .errors import NotFoundError, StoreError
from .schema import Association, Table
from .store import Store

logger = logging.getLogger(__name__)


async def create(store: Store, table: Table, values: Mapping[str, Any]) -> dict[str, Any]:
    """
    Insert a row; any caller-supplied id/created_at/updated_at is ignored.
    """
    fields = table.writable(values)
    try:
        return await store.insert(table, fields)
    except StoreError as exc:
        logger.exception("create_failed table=%s", table.name)
        raise StoreError(str(exc), public_message=f"failed to create {table.label}") from exc


async def _check_exists(store: Store, table: Table, entity_id: int) -> None:
    if await store.count(table, entity_id) == 0:
        raise NotFoundError(table.label, entity_id)


async def _apply(store: Store, table: Table, entity_id: int, fields: dict[str, Any]) -> None:
    await _check_exists(store, table, entity_id)
    if not fields:
        return
    await store.update(table, entity_id, fields)


async def update(store: Store, table: Table, entity_id: int, values: Mapping[str, Any]) -> None:
    fields = table.writable(values)
    try:
        await _apply(store, table, entity_id, fields)
    except StoreError as exc:
        logger.exception("update_failed table=%s id=%s", table.name, entity_id)
        raise StoreError(str(exc), public_message=f"failed to update {table.label}") from exc


async def update_with_associations(
    store: Store,
    table: Table,
    entity_id: int,
    values: Mapping[str, Any],
    links: Mapping[Association, Sequence[int] | None],
) -> None:
    """
    Update a row and fully replace the given link sets in one transaction.

    A link set mapped to None is left untouched; an empty list clears it.
    Link replacement goes through `set_links`, same as the dedicated endpoints.
    """
    fields = table.writable(values)
    for association in links:
        if association.parent != table:
            raise ValueError(f"Association {association.name!r} does not belong to {table.name}.")

    try:
        async with store.transaction() as tx:
            await _apply(tx, table, entity_id, fields)
            for association, child_ids in links.items():
                if child_ids is None:
                    continue
                await set_links(tx, association, entity_id, child_ids)
    except StoreError as exc:
        logger.exception("update_failed table=%s id=%s", table.name, entity_id)
        raise StoreError(str(exc), public_message=f"failed to update {table.label}") from exc
