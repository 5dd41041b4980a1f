"""
FastAPI router for miniature endpoints (mounted under /api/v1/miniatures).

Every route needs the `miniatures` resource: read for GET, edit for POST/PUT,
delete for DELETE.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth.dependencies import require_permission
from auth.permissions import LEVEL_DELETE, LEVEL_EDIT, LEVEL_READ, RESOURCE_MINIATURES
from core import cascade, db, mutation
from core.http import set_location_header
from core.schema import MINIATURE_PAINTS, MINIATURE_PROJECTS, MINIATURE_THEMES
from core.store import Store

from . import repository, schemas, service

router = APIRouter()

can_read = Depends(require_permission(RESOURCE_MINIATURES, LEVEL_READ))
can_edit = Depends(require_permission(RESOURCE_MINIATURES, LEVEL_EDIT))
can_delete = Depends(require_permission(RESOURCE_MINIATURES, LEVEL_DELETE))


# --- themes ---


@router.get("/themes", dependencies=[can_read])
async def list_themes(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_themes(store)
    return {"themes": rows, "count": len(rows)}


@router.get("/themes/{theme_id}", dependencies=[can_read])
async def get_theme(theme_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_theme(store, theme_id)


@router.post("/themes", status_code=status.HTTP_201_CREATED, dependencies=[can_edit])
async def create_theme(
    payload: schemas.ThemeCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, MINIATURE_THEMES, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_theme(store, int(row["id"]))


@router.put("/themes/{theme_id}", dependencies=[can_edit])
async def update_theme(
    theme_id: int,
    payload: schemas.ThemeUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, MINIATURE_THEMES, theme_id, payload.changes())
    return await repository.get_theme(store, theme_id)


@router.delete("/themes/{theme_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[can_delete])
async def delete_theme(theme_id: int, store: Store = Depends(db.get_store)) -> Response:
    # Member projects stay; their theme_id is nulled.
    await cascade.delete(store, MINIATURE_THEMES, theme_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- projects ---


@router.get("/projects", dependencies=[can_read])
async def list_projects(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_projects(store)
    return {"projects": rows, "count": len(rows)}


@router.get("/projects/{project_id}", dependencies=[can_read])
async def get_project(project_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_project(store, project_id)


@router.post("/projects", status_code=status.HTTP_201_CREATED, dependencies=[can_edit])
async def create_project(
    payload: schemas.MiniatureProjectCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, MINIATURE_PROJECTS, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_project(store, int(row["id"]))


@router.put("/projects/{project_id}", dependencies=[can_edit])
async def update_project(
    project_id: int,
    payload: schemas.MiniatureProjectUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, MINIATURE_PROJECTS, project_id, payload.changes())
    return await repository.get_project(store, project_id)


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[can_delete])
async def delete_project(project_id: int, store: Store = Depends(db.get_store)) -> Response:
    """
    Delete a project; its images and technique/paint links go with it.

    The referenced files, techniques and paints are kept.
    """
    await cascade.delete(store, MINIATURE_PROJECTS, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/projects/{project_id}/images", status_code=status.HTTP_201_CREATED, dependencies=[can_edit])
async def add_project_image(
    project_id: int,
    payload: schemas.AddImageRequest,
    store: Store = Depends(db.get_store),
) -> dict:
    return await service.add_image(store, project_id, payload.file_id, payload.caption)


@router.put("/projects/{project_id}/techniques", dependencies=[can_edit])
async def set_project_techniques(
    project_id: int,
    payload: schemas.LinkIdsRequest,
    store: Store = Depends(db.get_store),
) -> dict:
    await service.set_techniques(store, project_id, payload.ids)
    return await repository.get_project(store, project_id)


@router.put("/projects/{project_id}/paints", dependencies=[can_edit])
async def set_project_paints(
    project_id: int,
    payload: schemas.LinkIdsRequest,
    store: Store = Depends(db.get_store),
) -> dict:
    await service.set_paints(store, project_id, payload.ids)
    return await repository.get_project(store, project_id)


# --- techniques (read-only reference list) ---


@router.get("/techniques", dependencies=[can_read])
async def list_techniques(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_techniques(store)
    return {"techniques": rows, "count": len(rows)}


# --- paints ---


@router.get("/paints", dependencies=[can_read])
async def list_paints(store: Store = Depends(db.get_store)) -> dict:
    rows = await repository.list_paints(store)
    return {"paints": rows, "count": len(rows)}


@router.get("/paints/{paint_id}", dependencies=[can_read])
async def get_paint(paint_id: int, store: Store = Depends(db.get_store)) -> dict:
    return await repository.get_paint(store, paint_id)


@router.post("/paints", status_code=status.HTTP_201_CREATED, dependencies=[can_edit])
async def create_paint(
    payload: schemas.PaintCreate,
    request: Request,
    response: Response,
    store: Store = Depends(db.get_store),
) -> dict:
    row = await mutation.create(store, MINIATURE_PAINTS, payload.model_dump())
    set_location_header(request, response, row["id"])
    return await repository.get_paint(store, int(row["id"]))


@router.put("/paints/{paint_id}", dependencies=[can_edit])
async def update_paint(
    paint_id: int,
    payload: schemas.PaintUpdate,
    store: Store = Depends(db.get_store),
) -> dict:
    await mutation.update(store, MINIATURE_PAINTS, paint_id, payload.changes())
    return await repository.get_paint(store, paint_id)


@router.delete("/paints/{paint_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[can_delete])
async def delete_paint(paint_id: int, store: Store = Depends(db.get_store)) -> Response:
    await cascade.delete(store, MINIATURE_PAINTS, paint_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
