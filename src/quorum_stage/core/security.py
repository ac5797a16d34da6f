"""Token helpers and the authenticated actor passed into services."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import jwt

from quorum_stage.core.settings import settings
from quorum_stage.models.enums import UserRole
from quorum_stage.models.user import ADMIN_ROLES, MODERATION_ROLES, User


@dataclass(frozen=True)
class Actor:
    """The authenticated caller: who is acting and with which role."""

    id: int
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(id=user.id, role=user.role)

    @property
    def is_moderation_actor(self) -> bool:
        return self.role in MODERATION_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def note_label(self) -> str:
        """Return the prefix used when this actor appends a moderation note."""
        return "Admin Note" if self.is_admin else "Moderator Note"


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Issue a signed JWT whose subject is the user id.

    Token issuance belongs to the external auth service; this helper exists
    for scripts and tests that need a valid bearer token.
    """
    lifetime = expires_minutes or settings.access_token_expire_minutes
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(UTC) + timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int | None:
    """Return the user id carried by ``token``.

    Raises:
        JWTError: If the token is malformed, expired or wrongly signed.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
