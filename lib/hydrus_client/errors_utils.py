from __future__ import annotations

import json


def parse_api_error_detail(details: str | None) -> dict | None:
    if not details:
        return None
    try:
        data = json.loads(details)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def summarize_error_detail(details: str | None) -> str | None:
    """Short human text for a failed response body.

    Newer hydrus builds answer with ``{"error": ..., "exception_type": ...}``,
    older ones with a plain text traceback whose last line is the message.
    """
    parsed = parse_api_error_detail(details)
    if parsed is not None:
        message = parsed.get("error") or parsed.get("detail")
        if message:
            kind = parsed.get("exception_type")
            return f"{kind}: {message}" if kind else str(message)
        return None
    lines = [line.strip() for line in (details or "").splitlines() if line.strip()]
    return lines[-1] if lines else None
