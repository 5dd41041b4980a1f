"""
FastAPI router for file endpoints (mounted under /api/v1).

Uploads, blobs and `storage.files` rows belong to the files API; this service
only detaches files from the content that shows them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from auth.dependencies import require_permission
from auth.permissions import LEVEL_DELETE, RESOURCE_FILES
from core import cascade, db
from core.schema import MINIATURE_FILES
from core.store import Store

router = APIRouter()


@router.delete(
    "/files/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(RESOURCE_FILES, LEVEL_DELETE))],
)
async def delete_image(image_id: int, store: Store = Depends(db.get_store)) -> Response:
    """
    Remove one miniature image record (the project/file link).

    The `storage.files` row and its blob stay; the remaining images keep their
    display_order, gaps included.
    """
    await cascade.delete(store, MINIATURE_FILES, image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
