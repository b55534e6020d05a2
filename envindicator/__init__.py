"""
envindicator – tells a running site which environment it is, what colour
and switch URL belong to each environment, and who may see that.
"""

from .badge import describe_badge, stylesheet_rules
from .bootstrap import build_indicator, configure_logging, viewer_loader
from .gate import EnvironmentGate
from .resolver import DISABLED, DetectionOrder, Domain, Resolver
from .security import ANONYMOUS, Viewer, authenticated_viewer

__version__ = "0.5.0"

__all__ = [
    "describe_badge",
    "stylesheet_rules",
    "build_indicator",
    "configure_logging",
    "viewer_loader",
    "EnvironmentGate",
    "DISABLED",
    "DetectionOrder",
    "Domain",
    "Resolver",
    "ANONYMOUS",
    "Viewer",
    "authenticated_viewer",
]
