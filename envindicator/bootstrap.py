# envindicator/bootstrap.py
"""
Startup wiring.

Builds ONE resolver + gate for the application and hands it back; the host
passes it to whatever render/settings code needs it. Layer order:

    built-in defaults → config (yaml/env) → saved admin settings → ad-hoc
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Callable, Optional

from .core.config import IndicatorSettings, get_settings
from .gate import EnvironmentGate
from .resolver import Domain, Resolver
from .security import Viewer, resolve_secret_key, viewer_from_token
from .store import register_saved_settings

log = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname).1s] %(asctime)s %(name)s ▶ %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    level = level or get_settings().LOG_LEVEL
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def register_config_layers(resolver: Resolver, settings: IndicatorSettings) -> None:
    """Turn config-file / environment values into override layers."""
    if settings.ENVIRONMENT_COLORS:
        colors = dict(settings.ENVIRONMENT_COLORS)
        resolver.register(Domain.COLORS, lambda current: {**current, **colors}, name="config")

    if settings.ENVIRONMENT_URLS:
        urls = dict(settings.ENVIRONMENT_URLS)
        resolver.register(Domain.URLS, lambda current: {**current, **urls}, name="config")

    viewers = settings.allowed_viewers
    if viewers:
        def extend_viewers(current):
            for viewer in viewers:
                if viewer not in current:
                    current.append(viewer)
            return current
        resolver.register(Domain.ALLOWED_VIEWERS, extend_viewers, name="config")

    capability = settings.minimum_capability
    if capability is not None:
        resolver.register(Domain.MINIMUM_CAPABILITY, lambda _current: capability, name="config")

    if settings.NO_ENVIRONMENT_MESSAGE:
        message = settings.NO_ENVIRONMENT_MESSAGE
        resolver.register(Domain.NO_ENVIRONMENT_MESSAGE, lambda _current: message, name="config")


def viewer_loader(settings: Optional[IndicatorSettings] = None) -> Callable[[Optional[str]], Viewer]:
    """
    Return `load(token) -> Viewer` bound to the configured SECRET_KEY.

    The key is resolved once, so tokens stay valid for the life of the
    loader even when SECRET_KEY is unset and a temporary key is generated.
    """
    settings = settings if settings is not None else get_settings()
    secret_key = resolve_secret_key(settings.SECRET_KEY)

    def load(token: Optional[str]) -> Viewer:
        return viewer_from_token(token, secret_key)

    return load


def build_indicator(
    settings: Optional[IndicatorSettings] = None,
    store: Optional[Mapping] = None,
) -> EnvironmentGate:
    """
    Construct the resolver and gate for this process.

    * `settings` – defaults to the cached `get_settings()`
    * `store` – optional saved-settings mapping; its layers go after config
    """
    settings = settings if settings is not None else get_settings()
    resolver = Resolver()

    register_config_layers(resolver, settings)
    if store is not None:
        register_saved_settings(resolver, store)

    gate = EnvironmentGate(
        resolver,
        detection_order=settings.DETECTION_ORDER,
        site_url=settings.SITE_URL,
        declared_type=settings.ENVIRONMENT_TYPE,
    )
    log.info(
        "🚦 Environment indicator ready (site=%s, declared=%s, detection=%s)",
        settings.SITE_URL or "-",
        settings.ENVIRONMENT_TYPE or "-",
        gate.detection_order.value,
    )
    return gate
