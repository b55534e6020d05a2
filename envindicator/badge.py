"""
Plain-data description of the indicator for the render layer.

No markup is produced here; the host turns a `Badge` into whatever its UI
needs (admin bar node, banner, CLI prompt ...).
"""

from __future__ import annotations
import re
from typing import List, Optional, Tuple

from .gate import EnvironmentGate, SupportsViewer
from .schemas.badge import Badge, SwitchLink

CSS_PREFIX = "envindicator-environment-"
NODE_ID = "envindicator"

_KEY_CHARS = re.compile(r"[^a-z0-9_\-]")


def sanitize_key(key: str) -> str:
    """Lowercase alphanumerics, dashes and underscores only."""
    return _KEY_CHARS.sub("", key.lower())


def css_class_for(environment: str) -> str:
    return CSS_PREFIX + sanitize_key(re.sub(r"\s+", "-", environment.strip()))


def ucwords(text: str) -> str:
    # unlike str.title() the rest of each word is left untouched
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), text)


def switch_links(gate: EnvironmentGate) -> List[SwitchLink]:
    return [
        SwitchLink(
            id=f"{NODE_ID}-{sanitize_key(environment)}",
            environment=environment,
            title=ucwords(environment),
            href=url,
        )
        for environment, url in gate.environment_urls().items()
    ]


def describe_badge(
    gate: EnvironmentGate,
    viewer: Optional[SupportsViewer],
    site_url: Optional[str] = None,
    declared_type: Optional[str] = None,
) -> Optional[Badge]:
    """Return the badge for `viewer`, or None when they may not see it."""
    if not gate.can_view(viewer):
        return None

    environment = gate.current_environment(site_url, declared_type)
    return Badge(
        environment=environment,
        label=environment,
        color=gate.color_for(environment),
        css_class=css_class_for(environment),
        links=switch_links(gate),
    )


def stylesheet_rules(
    gate: EnvironmentGate,
    viewer: Optional[SupportsViewer],
) -> List[Tuple[str, str]]:
    """
    (css class, colour) for every resolved environment colour.

    Empty when `viewer` may not see the badge, so no styles leak to them.
    """
    if not gate.can_view(viewer):
        return []
    return [(css_class_for(env), color) for env, color in gate.environment_colors().items()]
