from typing import Any, Optional
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from ..resolver import is_hex_color

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class EnvironmentOptions(BaseModel):
    """
    Admin-entered values for one environment.

    Invalid input is *dropped* rather than rejected, matching how a settings
    form silently discards a bad colour or URL on save.

    • `color` – `#rgb` or `#rrggbb`, anything else becomes None
    • `url` – http(s) URL; a bare host such as `staging.example.com` gets
      `http://` prepended, anything else is kept verbatim so it still
      substring-matches the site URL
    """
    color: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("color", mode="before")
    @classmethod
    def sanitize_color(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v if is_hex_color(v) else None

    @field_validator("url", mode="before")
    @classmethod
    def sanitize_url(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        if ":" not in v and not v.startswith(("/", "#", "?")):
            v = f"http://{v}"
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            return None
        return v
