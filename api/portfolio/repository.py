"""
Portfolio reads: rows from the store, hydrated with their relations.
"""

from __future__ import annotations

from typing import Any

from core import reads
from core.errors import NotFoundError
from core.files import file_view
from core.schema import (
    CERTIFICATIONS,
    FILES,
    PORTFOLIO_PROJECTS,
    PROFILE,
    PROFILE_ID,
    PROJECT_TECHNOLOGY_LINKS,
    SKILL_TYPES,
    SKILLS,
    WORK_EXPERIENCE,
)
from core.store import Store

SKILL_ORDER = ("display_order", "skill")
SKILL_TYPE_ORDER = ("display_order", "name")
EXPERIENCE_ORDER = ("display_order", "-start_date")
CERTIFICATION_ORDER = ("-issue_date", "id")
PROJECT_ORDER = ("display_order", "-created_at")


async def get_profile(store: Store) -> dict[str, Any]:
    row = await store.find_by_id(PROFILE, PROFILE_ID)
    if row is None:
        raise NotFoundError(PROFILE.label)
    files = await reads.rows_by_id(store, FILES, (row.get("avatar_file_id"), row.get("resume_file_id")))
    row["avatar_file"] = file_view(files.get(row.get("avatar_file_id")))
    row["resume_file"] = file_view(files.get(row.get("resume_file_id")))
    return row


async def list_work_experience(store: Store) -> list[dict[str, Any]]:
    return await store.find_all(WORK_EXPERIENCE, order_by=EXPERIENCE_ORDER)


async def get_work_experience(store: Store, experience_id: int) -> dict[str, Any]:
    return await reads.get_or_raise(store, WORK_EXPERIENCE, experience_id)


async def list_certifications(store: Store) -> list[dict[str, Any]]:
    return await store.find_all(CERTIFICATIONS, order_by=CERTIFICATION_ORDER)


async def get_certification(store: Store, certification_id: int) -> dict[str, Any]:
    return await reads.get_or_raise(store, CERTIFICATIONS, certification_id)


async def list_skill_types(store: Store) -> list[dict[str, Any]]:
    return await store.find_all(SKILL_TYPES, order_by=SKILL_TYPE_ORDER)


async def get_skill_type(store: Store, skill_type_id: int) -> dict[str, Any]:
    return await reads.get_or_raise(store, SKILL_TYPES, skill_type_id)


async def _with_skill_types(store: Store, skills: list[dict[str, Any]]) -> list[dict[str, Any]]:
    types = await reads.rows_by_id(store, SKILL_TYPES, (s["skill_type_id"] for s in skills))
    for skill in skills:
        skill["skill_type"] = types.get(int(skill["skill_type_id"]))
    return skills


async def list_skills(store: Store) -> list[dict[str, Any]]:
    skills = await store.find_all(SKILLS, order_by=SKILL_ORDER)
    return await _with_skill_types(store, skills)


async def get_skill(store: Store, skill_id: int) -> dict[str, Any]:
    skill = await reads.get_or_raise(store, SKILLS, skill_id)
    return (await _with_skill_types(store, [skill]))[0]


async def _hydrate_projects(store: Store, projects: list[dict[str, Any]]) -> list[dict[str, Any]]:
    ids = [int(p["id"]) for p in projects]
    technologies = await reads.linked_rows(store, PROJECT_TECHNOLOGY_LINKS, ids, order_by=SKILL_ORDER)
    images = await reads.rows_by_id(store, FILES, (p.get("image_file_id") for p in projects))
    for project in projects:
        project["technologies"] = technologies.get(int(project["id"]), [])
        project["image_file"] = file_view(images.get(project.get("image_file_id")))
    return projects


async def list_projects(store: Store) -> list[dict[str, Any]]:
    projects = await store.find_all(PORTFOLIO_PROJECTS, order_by=PROJECT_ORDER)
    return await _hydrate_projects(store, projects)


async def get_project(store: Store, project_id: int) -> dict[str, Any]:
    project = await reads.get_or_raise(store, PORTFOLIO_PROJECTS, project_id)
    return (await _hydrate_projects(store, [project]))[0]
