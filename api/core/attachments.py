"""
Append-one for ordered attachment collections (miniature images).

Positions are assigned as COALESCE(MAX(display_order), -1) + 1 per parent and
are never renumbered; deletes may leave gaps.

The parent row is locked (SELECT ... FOR UPDATE) for the whole
check/compute/insert sequence, so concurrent appends to one parent serialize
and cannot hand out the same position twice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .errors import NotFoundError, StoreError
from .files import build_file_url, file_meta
from .schema import OrderedCollection
from .store import Store

logger = logging.getLogger(__name__)

UrlBuilder = Callable[[str, str], str]


async def next_order(store: Store, collection: OrderedCollection, parent_id: int) -> int:
    current = await store.max_value(
        collection.table,
        collection.order_column,
        {collection.parent_column: parent_id},
    )
    return 0 if current is None else int(current) + 1


def attachment_view(
    collection: OrderedCollection,
    row: dict[str, Any],
    asset: dict[str, Any] | None,
    *,
    url_builder: UrlBuilder = build_file_url,
) -> dict[str, Any]:
    url = None
    meta = None
    if asset is not None:
        url = url_builder(str(asset["file_type"]), str(asset["s3_key"]))
        meta = file_meta(asset)
    return {
        "id": int(row["id"]),
        collection.parent_column: int(row[collection.parent_column]),
        collection.asset_column: int(row[collection.asset_column]),
        "caption": row.get("caption"),
        collection.order_column: int(row[collection.order_column]),
        "created_at": row.get("created_at"),
        "url": url,
        "file": meta,
    }


async def append_attachment(
    store: Store,
    collection: OrderedCollection,
    parent_id: int,
    asset_id: int,
    caption: str | None = None,
    *,
    url_builder: UrlBuilder = build_file_url,
) -> dict[str, Any]:
    """
    Attach asset `asset_id` to `parent_id` at the next free position.

    Returns the stored attachment resolved against its asset row.
    """
    try:
        async with store.transaction() as tx:
            if not await tx.lock_row(collection.parent, parent_id):
                raise NotFoundError(collection.parent.label, parent_id)

            order = await next_order(tx, collection, parent_id)
            row = await tx.insert(
                collection.table,
                {
                    collection.parent_column: parent_id,
                    collection.asset_column: asset_id,
                    "caption": caption,
                    collection.order_column: order,
                },
            )
            stored = await tx.find_by_id(collection.table, int(row["id"])) or row
            asset = await tx.find_by_id(collection.asset, asset_id)
    except StoreError as exc:
        logger.exception(
            "append_attachment_failed table=%s parent_id=%s asset_id=%s",
            collection.table.name,
            parent_id,
            asset_id,
        )
        raise StoreError(str(exc), public_message=f"failed to add {collection.table.label}") from exc

    logger.info(
        "attachment_added table=%s parent_id=%s id=%s display_order=%s",
        collection.table.name,
        parent_id,
        stored["id"],
        order,
    )
    return attachment_view(collection, stored, asset, url_builder=url_builder)
