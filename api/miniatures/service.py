"""
Miniature project writes beyond plain create/update/delete.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from core import associations
from core.attachments import append_attachment
from core.errors import NotFoundError
from core.schema import (
    MINIATURE_IMAGES,
    MINIATURE_PAINT_LINKS,
    MINIATURE_PROJECTS,
    MINIATURE_TECHNIQUE_LINKS,
    Association,
)
from core.store import Store


async def add_image(store: Store, project_id: int, file_id: int, caption: str | None) -> dict[str, Any]:
    return await append_attachment(store, MINIATURE_IMAGES, project_id, file_id, caption)


async def _replace_links(store: Store, association: Association, project_id: int, ids: Sequence[int]) -> list[int]:
    async with store.transaction() as tx:
        if await tx.count(MINIATURE_PROJECTS, project_id) == 0:
            raise NotFoundError(MINIATURE_PROJECTS.label, project_id)
        return await associations.set_links(tx, association, project_id, ids)


async def set_techniques(store: Store, project_id: int, technique_ids: Sequence[int]) -> list[int]:
    return await _replace_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, technique_ids)


async def set_paints(store: Store, project_id: int, paint_ids: Sequence[int]) -> list[int]:
    return await _replace_links(store, MINIATURE_PAINT_LINKS, project_id, paint_ids)
