# envindicator/resolver/__init__.py
from .registry import Resolver
from .contracts import LayerContractError, is_hex_color
from .types import (
    DEFAULT_COLORS,
    DISABLED,
    KNOWN_ENVIRONMENTS,
    LOCAL,
    NO_ENVIRONMENT_SET,
    DetectionOrder,
    Domain,
    Layer,
    RegisteredLayer,
)

__all__ = [
    "Resolver",
    "LayerContractError",
    "is_hex_color",
    "DEFAULT_COLORS",
    "DISABLED",
    "KNOWN_ENVIRONMENTS",
    "LOCAL",
    "NO_ENVIRONMENT_SET",
    "DetectionOrder",
    "Domain",
    "Layer",
    "RegisteredLayer",
]
