from __future__ import annotations

from typing import NoReturn

import typer
from hydrus_client import (
    AuthError,
    HydrusClient,
    HydrusClientError,
    NetworkError,
    TransportError,
    VersionMismatchError,
)
from hydrus_client.config_types import ClientConfig
from hydrus_client.errors import ArgumentError
from hydrus_client.errors_utils import summarize_error_detail

from . import console
from .config import AppConfig, apply_profile, normalize_address, resolve_access_key, resolve_address


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None = None,
    address_override: str | None = None,
    key_override: str | None = None,
) -> HydrusClient:
    effective_cfg = apply_profile(cfg, profile)
    if address_override:
        address = normalize_address(address_override, warn=True)
    else:
        address = resolve_address(effective_cfg)
    key = key_override if key_override is not None else resolve_access_key(effective_cfg)
    return HydrusClient(ClientConfig(address=address, key=key, timeout_s=effective_cfg.timeout_s))


def report_error(action: str, exc: HydrusClientError) -> NoReturn:
    if isinstance(exc, NetworkError):
        console.err(f"Cannot reach hydrus: {exc}")
    elif isinstance(exc, AuthError):
        console.err(f"{action} failed: {exc.status_code} {exc.reason} (check the access key)")
    elif isinstance(exc, TransportError):
        summary = summarize_error_detail(exc.details)
        suffix = f" ({summary})" if summary else ""
        console.err(f"{action} failed: {exc.status_code} {exc.reason}{suffix}")
    elif isinstance(exc, (ArgumentError, VersionMismatchError)):
        console.err(str(exc))
    else:
        console.err(f"{action} failed: {exc}")
    raise typer.Exit(code=2)
