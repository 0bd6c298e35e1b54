from __future__ import annotations

from importlib import metadata
from typing import Any

from hydrus_client import API_VERSION, HydrusClient, NetworkError, TransportError, VersionMismatchError

from .console import err, ok, warn


def cli_version() -> str:
    try:
        return metadata.version("hydrus-client")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def ensure_api_compatibility(client: HydrusClient, *, warn_only: bool = False) -> dict[str, Any] | None:
    """Run the version handshake and report the outcome on the console.

    Returns ``{"api_version": ..., "compatible": ...}``, or None when the
    server could not be reached. Exits with code 1 on a mismatch unless
    ``warn_only`` is set.
    """
    try:
        version = client.api_check()
    except VersionMismatchError as exc:
        if warn_only:
            warn(str(exc))
            return {"api_version": exc.server_version, "compatible": False}
        err(str(exc))
        raise SystemExit(1)
    except (NetworkError, TransportError) as exc:
        warn(f"Compatibility check skipped: failed to reach {client.address}/api_version ({exc})")
        return None

    ok(f"hydrus API version {version} matches hydrus-client (API {API_VERSION}, cli {cli_version()}).")
    return {"api_version": version, "compatible": True}
