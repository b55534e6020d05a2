# envindicator/gate.py
"""
Environment classification and viewer authorisation.

Both questions are answered from freshly resolved configuration on every
call, so a layer registered after startup is picked up on the next render.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Protocol, Union

from .resolver import DISABLED, LOCAL, DetectionOrder, Domain, Resolver

log = logging.getLogger(__name__)


class SupportsViewer(Protocol):
    # Minimal protocol the identity provider's viewer object must satisfy
    identifier: str
    authenticated: bool

    def has_capability(self, capability: str) -> bool: ...


class EnvironmentGate:
    def __init__(
        self,
        resolver: Resolver,
        *,
        detection_order: Union[DetectionOrder, str] = DetectionOrder.URL_FIRST,
        site_url: str = "",
        declared_type: str = "",
    ) -> None:
        self.resolver = resolver
        self.detection_order = DetectionOrder(detection_order)
        self.site_url = site_url
        self.declared_type = declared_type

    # ------------------------------------------------------------------ #
    #  Resolved values                                                    #
    # ------------------------------------------------------------------ #
    def environment_colors(self) -> Dict[str, str]:
        return self.resolver.resolve(Domain.COLORS)

    def environment_urls(self) -> Dict[str, str]:
        return self.resolver.resolve(Domain.URLS)

    def allowed_viewers(self) -> List[str]:
        return self.resolver.resolve(Domain.ALLOWED_VIEWERS)

    def minimum_capability(self) -> Any:
        return self.resolver.resolve(Domain.MINIMUM_CAPABILITY)

    def no_environment_message(self) -> str:
        return self.resolver.resolve(Domain.NO_ENVIRONMENT_MESSAGE)

    # ------------------------------------------------------------------ #
    #  Classification                                                     #
    # ------------------------------------------------------------------ #
    def match_url(self, site_url: str) -> Optional[str]:
        """Return the first environment whose URL fragment occurs in `site_url`."""
        for environment, fragment in self.environment_urls().items():
            if fragment in site_url:
                return environment
        return None

    def current_environment(
        self, site_url: Optional[str] = None, declared_type: Optional[str] = None
    ) -> str:
        """
        Classify the running site.

        URL matching is tried before the declared environment type unless the
        gate was built with ``DetectionOrder.DECLARED_FIRST``. When neither
        yields anything the resolved "no environment" message is returned.
        """
        site_url = self.site_url if site_url is None else site_url
        declared = self.declared_type if declared_type is None else declared_type

        if self.detection_order is DetectionOrder.DECLARED_FIRST:
            if declared:
                return declared
            matched = self.match_url(site_url or "")
        else:
            matched = self.match_url(site_url or "")
            if matched is None and declared:
                return declared

        if matched is not None:
            return matched

        log.debug("no environment detected for %r (declared=%r)", site_url, declared)
        return self.no_environment_message()

    def color_for(self, environment: str) -> str:
        colors = self.environment_colors()
        return colors.get(environment, colors[LOCAL])

    # ------------------------------------------------------------------ #
    #  Authorisation                                                      #
    # ------------------------------------------------------------------ #
    def can_view(self, viewer: Optional[SupportsViewer]) -> bool:
        if viewer is None or not getattr(viewer, "authenticated", False):
            return False

        capability = self.minimum_capability()
        if capability is not None and capability is not DISABLED:
            if viewer.has_capability(capability):
                return True

        return viewer.identifier in self.allowed_viewers()
