"""
Pydantic schemas for portfolio endpoints (request bodies).

Create bodies carry the required columns; update bodies are partial.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from pydantic import BaseModel, Field

from core.payload import LinkIdsRequest, PartialUpdate


class ProfileUpdate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    title: str | None = Field(default=None, max_length=200)
    bio: str | None = None
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=200)
    avatar_file_id: int | None = Field(default=None, ge=1)
    resume_file_id: int | None = Field(default=None, ge=1)


class ProfileFileRequest(BaseModel):
    file_id: int = Field(..., ge=1)


class WorkExperienceCreate(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    display_order: int = 0


class WorkExperienceUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "company",
        "position",
        "start_date",
        "is_current",
        "display_order",
    )

    company: str | None = Field(default=None, min_length=1, max_length=200)
    position: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None
    display_order: int | None = None


class CertificationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    issuer: str = Field(..., min_length=1, max_length=200)
    issue_date: date
    expiry_date: date | None = None
    credential_id: str | None = Field(default=None, max_length=200)
    credential_url: str | None = Field(default=None, max_length=500)


class CertificationUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "issuer", "issue_date")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    issuer: str | None = Field(default=None, min_length=1, max_length=200)
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = Field(default=None, max_length=200)
    credential_url: str | None = Field(default=None, max_length=500)


class SkillTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    display_order: int = 0


class SkillTypeUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "display_order")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    display_order: int | None = None


class SkillCreate(BaseModel):
    skill: str = Field(..., min_length=1, max_length=100)
    skill_type_id: int = Field(..., ge=1)
    is_visible: bool = True
    display_order: int = 0


class SkillUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("skill", "skill_type_id", "is_visible", "display_order")

    skill: str | None = Field(default=None, min_length=1, max_length=100)
    skill_type_id: int | None = Field(default=None, ge=1)
    is_visible: bool | None = None
    display_order: int | None = None


class PortfolioProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None
    long_description: str | None = None
    image_file_id: int | None = Field(default=None, ge=1)
    github_url: str | None = Field(default=None, max_length=500)
    live_url: str | None = Field(default=None, max_length=500)
    start_date: date | None = None
    end_date: date | None = None
    is_ongoing: bool = False
    team_size: int | None = Field(default=None, ge=1)
    role: str | None = Field(default=None, max_length=200)
    featured: bool = False
    features: list[str] | None = None
    challenges: list[str] | None = None
    learnings: list[str] | None = None
    display_order: int = 0
    technology_ids: list[int] = Field(default_factory=list)


class PortfolioProjectUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "is_ongoing", "featured", "display_order")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None
    long_description: str | None = None
    image_file_id: int | None = Field(default=None, ge=1)
    github_url: str | None = Field(default=None, max_length=500)
    live_url: str | None = Field(default=None, max_length=500)
    start_date: date | None = None
    end_date: date | None = None
    is_ongoing: bool | None = None
    team_size: int | None = Field(default=None, ge=1)
    role: str | None = Field(default=None, max_length=200)
    featured: bool | None = None
    features: list[str] | None = None
    challenges: list[str] | None = None
    learnings: list[str] | None = None
    display_order: int | None = None
    technology_ids: list[int] | None = Field(
        default=None,
        deprecated="Use PUT /portfolio/projects/{id}/technologies instead.",
        description="Full replacement of linked skills. Omit to keep the current set.",
    )
