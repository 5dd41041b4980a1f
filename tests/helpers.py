from __future__ import annotations

import asyncio

from auth import security
from auth.permissions import (
    RESOURCE_CERTIFICATIONS,
    RESOURCE_EXPERIENCE,
    RESOURCE_FILES,
    RESOURCE_MINIATURES,
    RESOURCE_PROFILE,
    RESOURCE_PROJECTS,
    RESOURCE_SKILLS,
)
from core.schema import FILES, MINIATURE_PAINTS, MINIATURE_PROJECTS, SKILL_TYPES, SKILLS, TECHNIQUES
from memory_store import MemoryStore

ALL_RESOURCES = (
    RESOURCE_PROFILE,
    RESOURCE_EXPERIENCE,
    RESOURCE_CERTIFICATIONS,
    RESOURCE_SKILLS,
    RESOURCE_PROJECTS,
    RESOURCE_MINIATURES,
    RESOURCE_FILES,
)


def run(coro):
    return asyncio.run(coro)


def bearer(scopes: dict[str, str]) -> dict[str, str]:
    token = security.build_access_token(subject="admin", scopes=scopes)
    return {"Authorization": f"Bearer {token}"}


def add_file(store: MemoryStore, name: str = "photo.jpg", file_type: str = "images") -> int:
    row = run(
        store.insert(
            FILES,
            {
                "s3_key": f"k/{name}",
                "s3_bucket": "portfolio",
                "file_name": name,
                "file_size": 1024,
                "mime_type": "image/jpeg",
                "file_type": file_type,
            },
        )
    )
    return int(row["id"])


def add_miniature(store: MemoryStore, title: str = "Space Marine", **values) -> int:
    return int(run(store.insert(MINIATURE_PROJECTS, {"title": title, **values}))["id"])


def add_technique(store: MemoryStore, name: str, display_order: int = 0) -> int:
    values = {"name": name, "slug": name.lower().replace(" ", "-"), "display_order": display_order}
    return int(run(store.insert(TECHNIQUES, values))["id"])


def add_paint(store: MemoryStore, name: str, manufacturer: str = "Citadel") -> int:
    return int(run(store.insert(MINIATURE_PAINTS, {"name": name, "manufacturer": manufacturer}))["id"])


def add_skill(store: MemoryStore, skill: str, type_name: str = "Languages", display_order: int = 0) -> int:
    types = [r for r in store.data[SKILL_TYPES.name] if r["name"] == type_name]
    if types:
        type_id = types[0]["id"]
    else:
        type_id = run(store.insert(SKILL_TYPES, {"name": type_name}))["id"]
    row = run(store.insert(SKILLS, {"skill": skill, "skill_type_id": type_id, "display_order": display_order}))
    return int(row["id"])
