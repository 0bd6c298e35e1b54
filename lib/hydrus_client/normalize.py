from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any, Sequence

from .errors import InvalidArgumentError


def is_collection(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, Set))


def collapse_single(value: Any, singular: str, plural: str) -> dict[str, Any]:
    """Map a scalar or collection onto the API's singular/plural key pair.

    ``"a"`` and ``["a"]`` become ``{singular: "a"}``; ``["a", "b"]`` becomes
    ``{plural: ["a", "b"]}``.
    """
    if not is_collection(value):
        return {singular: value}
    items = list(value)
    if not items:
        raise InvalidArgumentError(f"{plural} must not be empty", plural)
    if len(items) == 1:
        return {singular: items[0]}
    return {plural: items}


def require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"value of {name} is of improper type: expects boolean", name)
    return value


def require_mapping(name: str, value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"value of {name} is of improper type: expects object", name)
    return value


def require_list(name: str, value: Any) -> list:
    if not is_collection(value):
        raise InvalidArgumentError(f"value of {name} is of improper type: expects list", name)
    return list(value)


def exclusive(**named: Any) -> None:
    present = [k for k, v in named.items() if v is not None]
    if len(present) > 1:
        raise InvalidArgumentError(
            f"only one argument is allowed, choose either {' or '.join(named)}",
            present[0],
        )
