"""
Miniature reads: projects with their images, techniques and paints; themes
with their cover image and member projects.
"""

from __future__ import annotations

from typing import Any

from core import reads
from core.attachments import attachment_view
from core.files import file_view
from core.schema import (
    FILES,
    MINIATURE_IMAGES,
    MINIATURE_PAINT_LINKS,
    MINIATURE_PAINTS,
    MINIATURE_PROJECTS,
    MINIATURE_TECHNIQUE_LINKS,
    MINIATURE_THEMES,
    TECHNIQUES,
)
from core.store import Store

PROJECT_ORDER = ("display_order", "id")
THEME_ORDER = ("display_order", "name")
TECHNIQUE_ORDER = ("display_order", "name")
PAINT_ORDER = ("manufacturer", "name")


async def _hydrate_projects(store: Store, projects: list[dict[str, Any]]) -> list[dict[str, Any]]:
    ids = [int(p["id"]) for p in projects]
    images = await reads.attachment_rows(store, MINIATURE_IMAGES, ids)
    techniques = await reads.linked_rows(store, MINIATURE_TECHNIQUE_LINKS, ids, order_by=TECHNIQUE_ORDER)
    paints = await reads.linked_rows(store, MINIATURE_PAINT_LINKS, ids, order_by=PAINT_ORDER)
    for project in projects:
        project_id = int(project["id"])
        project["images"] = [
            attachment_view(MINIATURE_IMAGES, row, asset) for row, asset in images.get(project_id, [])
        ]
        project["techniques"] = techniques.get(project_id, [])
        project["paints"] = paints.get(project_id, [])
    return projects


async def list_projects(store: Store) -> list[dict[str, Any]]:
    projects = await store.find_all(MINIATURE_PROJECTS, order_by=PROJECT_ORDER)
    return await _hydrate_projects(store, projects)


async def get_project(store: Store, project_id: int) -> dict[str, Any]:
    project = await reads.get_or_raise(store, MINIATURE_PROJECTS, project_id)
    return (await _hydrate_projects(store, [project]))[0]


async def _hydrate_themes(store: Store, themes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    covers = await reads.rows_by_id(store, FILES, (t.get("cover_image_id") for t in themes))
    members: dict[int, list[dict[str, Any]]] = {int(t["id"]): [] for t in themes}
    if members:
        projects = await store.find_all(
            MINIATURE_PROJECTS,
            where={"theme_id": list(members)},
            order_by=PROJECT_ORDER,
        )
        for project in projects:
            members[int(project["theme_id"])].append(project)
    for theme in themes:
        theme["cover_image"] = file_view(covers.get(theme.get("cover_image_id")))
        theme["miniatures"] = members[int(theme["id"])]
    return themes


async def list_themes(store: Store) -> list[dict[str, Any]]:
    themes = await store.find_all(MINIATURE_THEMES, order_by=THEME_ORDER)
    return await _hydrate_themes(store, themes)


async def get_theme(store: Store, theme_id: int) -> dict[str, Any]:
    theme = await reads.get_or_raise(store, MINIATURE_THEMES, theme_id)
    return (await _hydrate_themes(store, [theme]))[0]


async def list_techniques(store: Store) -> list[dict[str, Any]]:
    return await store.find_all(TECHNIQUES, order_by=TECHNIQUE_ORDER)


async def list_paints(store: Store) -> list[dict[str, Any]]:
    return await store.find_all(MINIATURE_PAINTS, order_by=PAINT_ORDER)


async def get_paint(store: Store, paint_id: int) -> dict[str, Any]:
    return await reads.get_or_raise(store, MINIATURE_PAINTS, paint_id)
