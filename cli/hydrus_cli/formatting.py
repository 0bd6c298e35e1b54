from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterator

from hydrus_client import PageType


def format_size(num_bytes: int | None) -> str:
    if num_bytes is None:
        return "-"
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{int(size)}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}GB"


def format_duration(milliseconds: int | None) -> str:
    if milliseconds is None:
        return "-"
    seconds = int(milliseconds) // 1000
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        return f"{minutes}m{secs:02d}s"
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h{minutes:02d}m"


def format_timestamp(value: int | float | None) -> str:
    if value is None:
        return "-"
    dt = datetime.fromtimestamp(float(value), tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def page_type_label(value: Any) -> str:
    try:
        return PageType(int(value)).label
    except (TypeError, ValueError):
        return str(value) if value is not None else "-"


def iter_pages(page: dict[str, Any], depth: int = 0) -> Iterator[tuple[int, dict[str, Any]]]:
    """Walk the get_pages tree depth-first, yielding (depth, page)."""
    yield depth, page
    for child in page.get("pages") or []:
        if isinstance(child, dict):
            yield from iter_pages(child, depth + 1)


def metadata_rows(items: list[dict[str, Any]]) -> list[list[str]]:
    rows: list[list[str]] = []
    for item in items:
        width, height = item.get("width"), item.get("height")
        resolution = f"{width}x{height}" if width and height else "-"
        rows.append(
            [
                str(item.get("file_id", "-")),
                str(item.get("hash", "-")),
                str(item.get("mime", "-")),
                format_size(item.get("size")),
                resolution,
                format_duration(item.get("duration")),
                format_timestamp(item.get("time_modified")),
            ]
        )
    return rows
