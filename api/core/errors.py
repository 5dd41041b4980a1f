"""
Failure kinds raised by the data-mutation layer.

The HTTP layer maps them in `core/http.py`:
- NotFoundError -> 404
- StoreError    -> 500 (only `public_message` leaves the process)
"""

from __future__ import annotations


class NotFoundError(LookupError):
    def __init__(self, label: str, entity_id: int | None = None) -> None:
        super().__init__(f"{label} not found")
        self.label = label
        self.entity_id = entity_id


class StoreError(RuntimeError):
    def __init__(self, message: str, *, public_message: str = "internal server error") -> None:
        super().__init__(message)
        self.public_message = public_message
