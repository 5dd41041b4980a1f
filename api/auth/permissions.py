"""
Resource/level permission model.

A token grants each resource one level; levels are cumulative:
none < read < edit < delete.
"""

from __future__ import annotations

from collections.abc import Mapping

RESOURCE_PROFILE = "profile"
RESOURCE_EXPERIENCE = "experience"
RESOURCE_CERTIFICATIONS = "certifications"
RESOURCE_SKILLS = "skills"
RESOURCE_PROJECTS = "projects"
RESOURCE_MINIATURES = "miniatures"
RESOURCE_FILES = "files"

LEVEL_NONE = "none"
LEVEL_READ = "read"
LEVEL_EDIT = "edit"
LEVEL_DELETE = "delete"

_LEVEL_RANK = {
    LEVEL_NONE: 0,
    LEVEL_READ: 1,
    LEVEL_EDIT: 2,
    LEVEL_DELETE: 3,
}


def level_rank(level: str | None) -> int:
    return _LEVEL_RANK.get(str(level or "").strip().lower(), 0)


def has_permission(scopes: Mapping[str, str], resource: str, required: str) -> bool:
    if required not in _LEVEL_RANK:
        raise ValueError(f"Unknown permission level {required!r}.")
    return level_rank(scopes.get(resource)) >= _LEVEL_RANK[required]
