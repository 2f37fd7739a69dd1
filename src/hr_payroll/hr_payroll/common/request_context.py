from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class RequestContext:
    """Caller identity for one request.

    Built at the API boundary from what the upstream gateway forwards and passed
    explicitly into service calls; nothing here validates tokens.
    """

    actor: str
    role: Role

    @classmethod
    def from_headers(cls, actor: str | None, role: str | None) -> "RequestContext":
        actor = (actor or "").strip()
        if not actor:
            raise AuthenticationError("Missing caller identity")
        try:
            parsed_role = Role((role or "").strip().lower())
        except ValueError:
            raise AuthorizationError(f"Unknown role: {role!r}")
        return cls(actor=actor, role=parsed_role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self) -> "RequestContext":
        if not self.is_admin:
            raise AuthorizationError("Administrator role required")
        return self
