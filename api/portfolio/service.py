"""
Portfolio writes that need more than a single engine call.

Scope:
- the singleton profile (fixed key, upsert on first write)
- portfolio projects and their technology links
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from core import associations, mutation
from core.errors import NotFoundError, StoreError
from core.schema import PORTFOLIO_PROJECTS, PROFILE, PROFILE_ID, PROJECT_TECHNOLOGY_LINKS
from core.store import Store

logger = logging.getLogger(__name__)

PROFILE_FILE_COLUMNS = {
    "avatar": "avatar_file_id",
    "resume": "resume_file_id",
}


async def upsert_profile(store: Store, values: dict[str, Any]) -> None:
    """
    Create the profile row on first write, otherwise update the sent columns.
    """
    fields = PROFILE.writable(values)
    try:
        await store.upsert(PROFILE, PROFILE_ID, fields)
    except StoreError as exc:
        logger.exception("profile_upsert_failed id=%s", PROFILE_ID)
        raise StoreError(str(exc), public_message="failed to update profile") from exc


async def set_profile_file(store: Store, kind: str, file_id: int | None) -> None:
    """
    Point avatar/resume at a stored file, or clear it with None.

    The profile has to exist already (404 otherwise); the file row is untouched.
    """
    column = PROFILE_FILE_COLUMNS[kind]
    await mutation.update(store, PROFILE, PROFILE_ID, {column: file_id})


async def create_project(store: Store, values: dict[str, Any], technology_ids: Sequence[int]) -> int:
    try:
        async with store.transaction() as tx:
            row = await mutation.create(tx, PORTFOLIO_PROJECTS, values)
            project_id = int(row["id"])
            if technology_ids:
                await associations.set_links(tx, PROJECT_TECHNOLOGY_LINKS, project_id, technology_ids)
    except StoreError as exc:
        raise StoreError(str(exc), public_message=f"failed to create {PORTFOLIO_PROJECTS.label}") from exc
    return project_id


async def update_project(
    store: Store,
    project_id: int,
    values: dict[str, Any],
    technology_ids: Sequence[int] | None,
) -> None:
    if technology_ids is None:
        await mutation.update(store, PORTFOLIO_PROJECTS, project_id, values)
        return

    logger.warning("inline_technology_ids_deprecated project_id=%s", project_id)
    await mutation.update_with_associations(
        store,
        PORTFOLIO_PROJECTS,
        project_id,
        values,
        {PROJECT_TECHNOLOGY_LINKS: technology_ids},
    )


async def set_project_technologies(store: Store, project_id: int, skill_ids: Sequence[int]) -> list[int]:
    async with store.transaction() as tx:
        if await tx.count(PORTFOLIO_PROJECTS, project_id) == 0:
            raise NotFoundError(PORTFOLIO_PROJECTS.label, project_id)
        return await associations.set_links(tx, PROJECT_TECHNOLOGY_LINKS, project_id, skill_ids)
