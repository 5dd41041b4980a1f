"""
Base class for partial-update request bodies.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PartialUpdate(BaseModel):
    """
    Only the fields the caller actually sent are applied.

    Unknown keys (including id/created_at/updated_at) are ignored. Fields
    listed in `non_nullable` may be omitted but not sent as null.
    """

    model_config = ConfigDict(extra="ignore")

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_required(self) -> PartialUpdate:
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude=exclude)


class LinkIdsRequest(BaseModel):
    """
    Full replacement of a link set; an empty list clears it.
    """

    ids: list[int] = Field(default_factory=list)
