"""
Environment utilities for canonical environment mapping.

Maps the many spellings of an environment name (APP_ENV=prod, live, stage ...)
onto the four conventional environment keys, so the config loader can pick
the right config.yaml block.
"""

from __future__ import annotations
import os

_ENV_CANON_MAP = {
    "local": "local",
    "localhost": "local",
    "dev": "development",
    "development": "development",
    "staging": "staging",
    "stage": "staging",
    "preprod": "staging",
    "prod": "production",
    "production": "production",
    "live": "production",
}

# canonical name -> config.yaml block keys accepted for it
ENV_BLOCK_ALIASES = {
    "local": ("local",),
    "development": ("dev", "development"),
    "staging": ("staging", "stage", "preprod"),
    "production": ("prod", "production", "live"),
}


def canonical_env(name: str | None = None) -> str:
    """
    Map any common environment token to a canonical value:
    local | development | staging | production.

    Uses APP_ENV when `name` is None, then defaults to development.
    """
    if name is None:
        name = os.getenv("APP_ENV") or "development"
    return _ENV_CANON_MAP.get(name.lower().strip(), "development")
