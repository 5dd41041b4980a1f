"""
Read helpers shared by feature repositories.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .errors import NotFoundError
from .schema import Association, OrderedCollection, Table
from .store import Store


async def get_or_raise(store: Store, table: Table, entity_id: int) -> dict[str, Any]:
    row = await store.find_by_id(table, entity_id)
    if row is None:
        raise NotFoundError(table.label, entity_id)
    return row


async def rows_by_id(store: Store, table: Table, ids: Iterable[int | None]) -> dict[int, dict[str, Any]]:
    wanted = sorted({int(i) for i in ids if i is not None})
    if not wanted:
        return {}
    rows = await store.find_all(table, where={"id": wanted})
    return {int(r["id"]): r for r in rows}


async def linked_rows(
    store: Store,
    association: Association,
    parent_ids: Sequence[int],
    *,
    order_by: Sequence[str] = ("id",),
) -> dict[int, list[dict[str, Any]]]:
    """
    Child rows linked to each parent, ordered by `order_by`.

    Link rows carry no position, so the order always comes from here.
    """
    result: dict[int, list[dict[str, Any]]] = {int(p): [] for p in parent_ids}
    if not result:
        return result

    links = await store.find_all(
        association.link_table,
        where={association.parent_column: list(result)},
    )
    child_ids = sorted({int(link[association.child_column]) for link in links})
    if not child_ids:
        return result

    children = await store.find_all(association.child, where={"id": child_ids}, order_by=order_by)
    position = {int(c["id"]): i for i, c in enumerate(children)}
    by_id = {int(c["id"]): c for c in children}
    for link in links:
        child_id = int(link[association.child_column])
        if child_id in by_id:
            result[int(link[association.parent_column])].append(dict(by_id[child_id]))
    for rows in result.values():
        rows.sort(key=lambda c: position[int(c["id"])])
    return result


async def attachment_rows(
    store: Store,
    collection: OrderedCollection,
    parent_ids: Sequence[int],
) -> dict[int, list[tuple[dict[str, Any], dict[str, Any] | None]]]:
    """
    Attachments of each parent with their asset rows, by display order then id.
    """
    result: dict[int, list[tuple[dict[str, Any], dict[str, Any] | None]]] = {int(p): [] for p in parent_ids}
    if not result:
        return result

    rows = await store.find_all(
        collection.table,
        where={collection.parent_column: list(result)},
        order_by=(collection.order_column, "id"),
    )
    assets = await rows_by_id(store, collection.asset, (r[collection.asset_column] for r in rows))
    for row in rows:
        result[int(row[collection.parent_column])].append((row, assets.get(int(row[collection.asset_column]))))
    return result
