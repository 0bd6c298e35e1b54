from __future__ import annotations
from dataclasses import dataclass

from .constants import DEFAULT_API_ADDRESS


@dataclass(frozen=True)
class ClientConfig:
    address: str = DEFAULT_API_ADDRESS
    key: str = ""
    timeout_s: float | None = None
