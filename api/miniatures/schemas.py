"""
Pydantic schemas for miniature endpoints (request bodies).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, Field

from core.payload import LinkIdsRequest, PartialUpdate


class ThemeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    cover_image_id: int | None = Field(default=None, ge=1)
    display_order: int = 0


class ThemeUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "display_order")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    cover_image_id: int | None = Field(default=None, ge=1)
    display_order: int | None = None


class MiniatureProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    completed_date: date | None = None
    theme_id: int | None = Field(default=None, ge=1)
    scale: str | None = Field(default=None, max_length=50)
    manufacturer: str | None = Field(default=None, max_length=200)
    time_spent: Decimal | None = Field(default=None, ge=0)
    difficulty: str | None = Field(default=None, max_length=50)
    display_order: int = 0


class MiniatureProjectUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "display_order")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    completed_date: date | None = None
    theme_id: int | None = Field(default=None, ge=1)
    scale: str | None = Field(default=None, max_length=50)
    manufacturer: str | None = Field(default=None, max_length=200)
    time_spent: Decimal | None = Field(default=None, ge=0)
    difficulty: str | None = Field(default=None, max_length=50)
    display_order: int | None = None


class PaintCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    manufacturer: str = Field(..., min_length=1, max_length=200)
    color_hex: str | None = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    paint_type: str | None = Field(default=None, max_length=50)


class PaintUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "manufacturer")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    manufacturer: str | None = Field(default=None, min_length=1, max_length=200)
    color_hex: str | None = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    paint_type: str | None = Field(default=None, max_length=50)


class AddImageRequest(BaseModel):
    file_id: int = Field(..., ge=1)
    caption: str | None = Field(default=None, max_length=500)
