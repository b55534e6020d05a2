# envindicator/resolver/contracts.py
"""
Shape checks for override-layer output.

Each checker either returns the normalised value for its domain or raises
``LayerContractError``. The resolver catches that error and keeps the value
from the previous step.
"""

from __future__ import annotations
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List

from .types import DISABLED, Domain

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class LayerContractError(ValueError):
    """Raised when a layer returns a value of the wrong shape for its domain."""


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


def _string_map(value: Any, what: str) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        raise LayerContractError(f"{what} must be a mapping, got {type(value).__name__}")
    out: Dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise LayerContractError(f"{what} entries must be str -> str, got {key!r}: {item!r}")
        out[key] = item
    return out


def check_colors(value: Any) -> Dict[str, str]:
    colors = _string_map(value, "environment colors")
    bad = [env for env, color in colors.items() if not is_hex_color(color)]
    if bad:
        raise LayerContractError(f"invalid hex colour for {bad}")
    return colors


def check_urls(value: Any) -> Dict[str, str]:
    return _string_map(value, "environment urls")


def check_allowed_viewers(value: Any) -> List[str]:
    # a bare string is iterable but almost certainly a mistake
    if not isinstance(value, (list, tuple)):
        raise LayerContractError(f"allowed viewers must be a list, got {type(value).__name__}")
    if not all(isinstance(v, str) for v in value):
        raise LayerContractError("allowed viewers must contain only strings")
    return list(value)


def check_minimum_capability(value: Any):
    if value is None or value is DISABLED:
        return value
    if value is False or value == "":
        return DISABLED
    if isinstance(value, str):
        return value
    raise LayerContractError(f"minimum capability must be a string or DISABLED, got {value!r}")


def check_message(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise LayerContractError(f"no-environment message must be a non-empty string, got {value!r}")
    return value


CHECKS: Dict[Domain, Callable[[Any], Any]] = {
    Domain.COLORS: check_colors,
    Domain.URLS: check_urls,
    Domain.ALLOWED_VIEWERS: check_allowed_viewers,
    Domain.MINIMUM_CAPABILITY: check_minimum_capability,
    Domain.NO_ENVIRONMENT_MESSAGE: check_message,
}


def check(domain: Domain, value: Any) -> Any:
    return CHECKS[domain](value)
