# envindicator/resolver/types.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

Layer = Callable[[Any], Any]

LOCAL = "local"
KNOWN_ENVIRONMENTS = ("local", "development", "staging", "production")

# Names match the declared environment types a host platform reports.
DEFAULT_COLORS: Dict[str, str] = {
    "local": "#6c757d",        # gray
    "development": "#6f42c1",  # purple
    "staging": "#28a745",      # green
    "production": "#dc3545",   # red
}

NO_ENVIRONMENT_SET = "No Environment Set"


class Domain(str, Enum):
    """The configuration values that accept override layers."""
    COLORS = "environment_colors"
    URLS = "environment_urls"
    ALLOWED_VIEWERS = "allowed_viewers"
    MINIMUM_CAPABILITY = "minimum_capability"
    NO_ENVIRONMENT_MESSAGE = "no_environment_message"


class _Disabled(Enum):
    DISABLED = "disabled"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "DISABLED"


# Explicit "skip the capability check" marker, distinct from an unset (None) value.
DISABLED = _Disabled.DISABLED


class DetectionOrder(str, Enum):
    URL_FIRST = "url_first"
    DECLARED_FIRST = "declared_first"


@dataclass(frozen=True)
class RegisteredLayer:
    domain: Domain
    fn: Layer
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or getattr(self.fn, "__name__", repr(self.fn))


def default_bases() -> Dict[Domain, Any]:
    """Compile-time base values, one fresh copy per call."""
    return {
        Domain.COLORS: dict(DEFAULT_COLORS),
        Domain.URLS: {},
        Domain.ALLOWED_VIEWERS: [],
        Domain.MINIMUM_CAPABILITY: DISABLED,
        Domain.NO_ENVIRONMENT_MESSAGE: NO_ENVIRONMENT_SET,
    }
