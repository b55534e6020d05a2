from .config import IndicatorSettings, get_settings
from .env_utils import canonical_env

__all__ = ["IndicatorSettings", "get_settings", "canonical_env"]
