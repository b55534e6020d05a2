from __future__ import annotations
import logging, secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError

log = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 30


@dataclass(frozen=True)
class Viewer:
    """An identity handed to the gate by the host's authentication layer."""
    identifier: str = ""
    capabilities: FrozenSet[str] = field(default_factory=frozenset)
    authenticated: bool = False

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities


ANONYMOUS = Viewer()


def authenticated_viewer(identifier: str, capabilities: Iterable[str] = ()) -> Viewer:
    return Viewer(identifier=identifier, capabilities=frozenset(capabilities), authenticated=True)


class TokenClaims(BaseModel):
    sub: Optional[str] = None
    capabilities: List[str] = []
    scope: Optional[str] = None


# ---------------------------------------------------------------------------
# SECRET_KEY ***should*** be configured outside of local development.
# ---------------------------------------------------------------------------
def resolve_secret_key(configured: Optional[str]) -> str:
    if configured:
        return configured
    log.critical(
        "SECRET_KEY is missing -- generating a temporary key. "
        "Viewer tokens issued now will be rejected after a restart."
    )
    return secrets.token_urlsafe(32)


def create_access_token(
    subject: str,
    secret_key: str,
    capabilities: Iterable[str] = (),
    expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    claims = {"sub": subject, "capabilities": sorted(capabilities), "exp": expire}
    return jwt.encode(claims, secret_key, algorithm=ALGORITHM)


def viewer_from_claims(claims: Mapping[str, Any]) -> Viewer:
    """
    Build a viewer from decoded token claims.

    `sub` becomes the identifier; capabilities come from a `capabilities`
    list and/or a space-separated OAuth-style `scope`.
    """
    try:
        data = TokenClaims.model_validate(dict(claims))
    except ValidationError as exc:
        log.warning("Malformed viewer claims: %s", exc)
        return ANONYMOUS
    if not data.sub:
        return ANONYMOUS
    caps = set(data.capabilities)
    if data.scope:
        caps.update(data.scope.split())
    return authenticated_viewer(data.sub, caps)


def viewer_from_token(token: Optional[str], secret_key: str) -> Viewer:
    if not token:
        return ANONYMOUS
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        log.info("Rejected viewer token: %s", exc)
        return ANONYMOUS
    return viewer_from_claims(payload)
