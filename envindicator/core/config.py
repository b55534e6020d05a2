"""
Centralized configuration loader.

Load order (highest precedence last):
    1. Built-in safe defaults (field defaults below)
    2. config.yaml: default block
    3. config.yaml: <APP_ENV> block overlay    # APP_ENV=local|dev|staging|prod (aliases ok)
    4. Real environment variables

A missing config.yaml is not an error: defaults and environment variables
still apply. A config.yaml that exists but is malformed fails loudly.

Usage:
    from envindicator.core.config import get_settings
"""

from __future__ import annotations

import os
import pathlib
import functools
import yaml
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .env_utils import ENV_BLOCK_ALIASES, canonical_env
from ..resolver import DISABLED, DetectionOrder

log = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
#  Config path discovery                                                      #
# --------------------------------------------------------------------------- #
def _candidate_paths() -> Iterable[pathlib.Path]:
    """
    Yield candidate config.yaml paths in priority order.

    An explicit $APP_CONFIG_FILE is the *only* candidate when set. Otherwise
    walk upward from the working directory, capped at 6 levels.
    """
    override = os.getenv("APP_CONFIG_FILE")
    if override:
        yield pathlib.Path(override).expanduser().resolve()
        return

    here = pathlib.Path.cwd().resolve()
    for parent in [here, *here.parents][:6]:
        yield parent / "config.yaml"


def discover_config_path() -> Optional[pathlib.Path]:
    """Return the first existing candidate path, or None."""
    tried: List[str] = []
    for cand in _candidate_paths():
        tried.append(str(cand))
        if cand.is_file():
            return cand
    log.info("No config.yaml found (searched %s) – using defaults + environment", tried)
    return None


# --------------------------------------------------------------------------- #
#  Type coercion helpers                                                      #
# --------------------------------------------------------------------------- #
def _coerce_types(d: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize YAML-loaded values prior to BaseSettings construction.

    * YAML lists for ALLOWED_VIEWERS become the comma-separated env form.
    * `MINIMUM_CAPABILITY: false` becomes "" (capability check disabled);
      other scalars such as `0` become their string form.
    * Strip whitespace on string values.
    """
    out = {}
    for k, v in d.items():
        key = k.upper()
        if key == "ALLOWED_VIEWERS" and isinstance(v, (list, tuple)):
            out[key] = ",".join(str(x).strip() for x in v)
        elif key == "MINIMUM_CAPABILITY" and v is False:
            out[key] = ""
        elif key == "MINIMUM_CAPABILITY" and isinstance(v, (int, float)):
            out[key] = str(v)
        elif isinstance(v, str):
            out[key] = v.strip()
        else:
            out[key] = v
    return out


def load_yaml(path: Optional[pathlib.Path], env_token: str) -> Dict[str, Any]:
    """
    Read config.yaml and merge the default block with the APP_ENV block.

    `env_token` may be any alias; it is canonicalized first.
    """
    if path is None:
        return {}

    raw = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        raise TypeError(f"{path} must contain a mapping, got {type(raw).__name__}")
    if "default" not in raw:
        raise KeyError(f"{path} must contain a 'default' section")

    canon = canonical_env(env_token)
    env_block: Dict[str, Any] = {}
    for key in ENV_BLOCK_ALIASES[canon]:
        if key in raw:
            env_block = raw[key] or {}
            break

    merged = {**(raw["default"] or {}), **env_block}
    merged = _coerce_types(merged)

    if os.getenv("CONFIG_DEBUG") == "1":
        log.info("CONFIG_DEBUG: loaded %s (env=%s canonical=%s)", path, env_token, canon)
        log.info("CONFIG_DEBUG: merged keys=%s", sorted(merged.keys()))

    return merged


_DISABLED_TOKENS = {"", "false", "0", "no", "off", "disabled"}


class IndicatorSettings(BaseSettings):
    # --- detection -----------------------------------------------------------
    ENVIRONMENT_TYPE: str = ""          # declared environment type of the host
    SITE_URL: str = ""
    DETECTION_ORDER: DetectionOrder = DetectionOrder.URL_FIRST
    NO_ENVIRONMENT_MESSAGE: Optional[str] = None

    # --- per-environment values (merged over the built-in defaults) ---------
    ENVIRONMENT_COLORS: Dict[str, str] = Field(default_factory=dict)
    ENVIRONMENT_URLS: Dict[str, str] = Field(default_factory=dict)

    # --- visibility ----------------------------------------------------------
    MINIMUM_CAPABILITY: Optional[str] = None   # unset ⇒ leave the default alone
    ALLOWED_VIEWERS: str = ""                   # comma separated

    # --- ambient -------------------------------------------------------------
    SECRET_KEY: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # Computed (not from env): canonical APP_ENV used to pick the YAML block
    APP_ENV: str = "development"

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # YAML data arrives as init kwargs; real env vars must win over it
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def allowed_viewers(self) -> List[str]:
        return [v.strip() for v in self.ALLOWED_VIEWERS.split(",") if v.strip()]

    @property
    def minimum_capability(self):
        """None when unset, DISABLED for an explicit off value, else the capability."""
        if self.MINIMUM_CAPABILITY is None:
            return None
        value = self.MINIMUM_CAPABILITY.strip()
        if value.lower() in _DISABLED_TOKENS:
            return DISABLED
        return value

    @classmethod
    def build(cls) -> "IndicatorSettings":
        env_raw = os.getenv("APP_ENV", "development")

        # 1. merge YAML default + env block
        data = load_yaml(discover_config_path(), env_raw)

        # 2. Honour explicit env vars: a YAML value for the same field would be
        #    deep-merged into dict fields instead of being replaced
        env_keys = {k.upper() for k in os.environ}
        data = {k: v for k, v in data.items() if k.upper() not in env_keys}

        # 3. build settings (env vars overlay YAML)
        inst = cls(**data)

        # 4. FINAL canonical value after all overlays
        inst.APP_ENV = canonical_env(env_raw)

        log.info(
            "📄 Loaded indicator config (APP_ENV=%s ⇒ %s, detection=%s)",
            env_raw,
            inst.APP_ENV,
            inst.DETECTION_ORDER.value,
        )
        return inst


@functools.lru_cache
def get_settings() -> IndicatorSettings:
    """Process-wide settings, built once. Call `get_settings.cache_clear()` to reload."""
    return IndicatorSettings.build()
