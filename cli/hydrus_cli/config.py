from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from hydrus_client.constants import DEFAULT_API_ADDRESS

from . import console

APP_NAME = "hydrus"
CONFIG_FILENAME = "config.toml"
ENV_ADDRESS = "HYDRUS_API_ADDRESS"
ENV_ACCESS_KEY = "HYDRUS_ACCESS_KEY"

_LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
_WARNED_ADDRESS_SCHEME = False


@dataclass
class ProfileConfig:
    address: str = ""
    access_key: str = ""


@dataclass
class AppConfig:
    address: str = DEFAULT_API_ADDRESS
    access_key: str = ""
    timeout_s: float | None = None
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(address=DEFAULT_API_ADDRESS, access_key="", timeout_s=None, profiles={})


def normalize_address(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.rsplit(":", 1)[0].strip("[]").lower()
    scheme = "http://" if host in _LOOPBACK_HOSTS else "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_ADDRESS_SCHEME
    if _WARNED_ADDRESS_SCHEME:
        return
    console.warn(f"address missing scheme, assuming {normalized}")
    _WARNED_ADDRESS_SCHEME = True


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "address": cfg.address,
        "access_key": cfg.access_key,
    }
    if cfg.timeout_s is not None:
        data["timeout_s"] = float(cfg.timeout_s)
    if cfg.profiles:
        data["profiles"] = {
            name: {"address": p.address, "access_key": p.access_key}
            for name, p in cfg.profiles.items()
        }
    return data


def _parse_timeout(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def from_toml(data: dict[str, Any]) -> AppConfig:
    address = normalize_address(str(data.get("address") or ""), warn=True)
    access_key = str(data.get("access_key") or "").strip()
    profiles: dict[str, ProfileConfig] = {}
    profiles_raw = data.get("profiles") or {}
    if isinstance(profiles_raw, dict):
        for name, v in profiles_raw.items():
            if not isinstance(v, dict):
                continue
            profiles[str(name)] = ProfileConfig(
                address=normalize_address(str(v.get("address") or ""), warn=True),
                access_key=str(v.get("access_key") or "").strip(),
            )
    return AppConfig(
        address=address or DEFAULT_API_ADDRESS,
        access_key=access_key,
        timeout_s=_parse_timeout(data.get("timeout_s")),
        profiles=profiles,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return default_config()
    return from_toml(data)


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    prof = cfg.profiles.get(profile)
    if prof is None:
        console.warn(f"Unknown profile '{profile}', using defaults.")
        return cfg
    return AppConfig(
        address=prof.address or cfg.address,
        access_key=prof.access_key or cfg.access_key,
        timeout_s=cfg.timeout_s,
        profiles=cfg.profiles,
    )


def resolve_address(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_ADDRESS, "").strip()
    if env_value:
        return normalize_address(env_value)
    return normalize_address(cfg.address) or DEFAULT_API_ADDRESS


def resolve_access_key(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_ACCESS_KEY, "").strip()
    return env_value or cfg.access_key


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
