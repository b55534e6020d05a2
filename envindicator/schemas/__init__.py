from .badge import Badge, SwitchLink
from .settings import EnvironmentOptions

__all__ = ["Badge", "SwitchLink", "EnvironmentOptions"]
