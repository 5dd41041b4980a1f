"""
Asset URL helpers.

Binary assets live in object storage behind the files API; rows in
`storage.files` only reference them. This module turns a reference into a
URL the browser can fetch.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from . import settings


def file_url(base_url: str, file_type: str, s3_key: str) -> str:
    return f"{base_url.rstrip('/')}/files/{file_type}/{s3_key}"


def build_file_url(file_type: str, s3_key: str) -> str:
    return file_url(settings.files_api_url(), file_type, s3_key)


def file_meta(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "file_name": row.get("file_name"),
        "file_size": row.get("file_size"),
        "mime_type": row.get("mime_type"),
        "file_type": row.get("file_type"),
    }


def file_view(
    row: dict[str, Any] | None,
    *,
    url_builder: Callable[[str, str], str] = build_file_url,
) -> dict[str, Any] | None:
    """
    A `storage.files` row plus its derived `url` (None stays None).
    """
    if row is None:
        return None
    view = file_meta(row)
    view["url"] = url_builder(str(row["file_type"]), str(row["s3_key"]))
    return view
