# envindicator/store.py
"""
Saved admin settings → override layers.

The persistence engine is the host's business; anything that behaves like a
``MutableMapping`` will do. Settings live under a single key::

    {"staging": {"color": "#ffaa00", "url": "https://staging.example.com"}, ...}

The layers read the store at resolution time, so a save is visible on the
next render without re-registering anything.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Optional, Tuple

from .resolver import DEFAULT_COLORS, KNOWN_ENVIRONMENTS, Domain, Resolver, is_hex_color
from .schemas.settings import EnvironmentOptions

log = logging.getLogger(__name__)

SETTINGS_KEY = "envindicator_settings"


def saved_options(store: Mapping) -> Dict[str, Dict[str, Any]]:
    options = store.get(SETTINGS_KEY) or {}
    if not isinstance(options, Mapping):
        log.warning("Ignoring saved settings of type %s", type(options).__name__)
        return {}
    return {env: opts for env, opts in options.items() if isinstance(opts, Mapping)}


def sanitize_settings(raw: Any, default_colors: Optional[Mapping[str, str]] = None) -> Dict[str, Dict[str, str]]:
    """
    Clean a submitted settings payload for all known environments.

    Colours equal to the default are not stored; empty or invalid URLs are
    dropped.
    """
    defaults = DEFAULT_COLORS if default_colors is None else default_colors
    if not isinstance(raw, Mapping):
        return {}

    sanitized: Dict[str, Dict[str, str]] = {}
    for env in KNOWN_ENVIRONMENTS:
        env_raw = raw.get(env)
        opts = EnvironmentOptions.model_validate(env_raw if isinstance(env_raw, Mapping) else {})

        entry: Dict[str, str] = {}
        if opts.color and opts.color.lower() != defaults.get(env, "").lower():
            entry["color"] = opts.color
        if opts.url:
            entry["url"] = opts.url
        if entry:
            sanitized[env] = entry
    return sanitized


def save_settings(store: MutableMapping, raw: Any, default_colors: Optional[Mapping[str, str]] = None) -> Dict[str, Dict[str, str]]:
    sanitized = sanitize_settings(raw, default_colors)
    store[SETTINGS_KEY] = sanitized
    log.info("💾 Saved indicator settings for %s", sorted(sanitized))
    return sanitized


def field_values(store: Mapping, environment: str, default_colors: Optional[Mapping[str, str]] = None) -> Tuple[str, str]:
    """(colour, url) a settings form should show for `environment`."""
    defaults = DEFAULT_COLORS if default_colors is None else default_colors
    opts = saved_options(store).get(environment, {})
    return opts.get("color") or defaults.get(environment, ""), opts.get("url") or ""


# --------------------------------------------------------------------------- #
#  Layers                                                                     #
# --------------------------------------------------------------------------- #
def saved_colors_layer(store: Mapping) -> Callable[[Dict[str, str]], Dict[str, str]]:
    def apply_saved_colors(colors: Dict[str, str]) -> Dict[str, str]:
        options = saved_options(store)
        for env in KNOWN_ENVIRONMENTS:
            saved = options.get(env, {}).get("color")
            if not saved:
                continue
            if not is_hex_color(saved):
                log.warning("Skipping saved colour %r for %s", saved, env)
                continue
            colors[env] = saved
        return colors

    return apply_saved_colors


def saved_urls_layer(store: Mapping) -> Callable[[Dict[str, str]], Dict[str, str]]:
    def apply_saved_urls(urls: Dict[str, str]) -> Dict[str, str]:
        options = saved_options(store)
        for env in KNOWN_ENVIRONMENTS:
            saved = options.get(env, {}).get("url")
            if saved and isinstance(saved, str):
                urls[env] = saved
        return urls

    return apply_saved_urls


def register_saved_settings(resolver: Resolver, store: Mapping) -> None:
    resolver.register(Domain.COLORS, saved_colors_layer(store), name="saved-settings")
    resolver.register(Domain.URLS, saved_urls_layer(store), name="saved-settings")
