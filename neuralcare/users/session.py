"""
Per-request identity and role resolution, and the route guard built on it.

``SessionContextMiddleware`` resolves a ``SessionContext`` once per request and
attaches it to ``request.session_context``. Views read it; only the middleware
and the sign-out view replace it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Identity and role of the current visitor.

    ``resolved`` is False only while resolution has not happened yet; a
    resolved context with ``user=None`` means "signed out".
    """

    user: object | None
    role: str | None
    resolved: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


PENDING_CONTEXT = SessionContext(user=None, role=None, resolved=False)
SIGNED_OUT_CONTEXT = SessionContext(user=None, role=None, resolved=True)


def resolve_session_context(user) -> SessionContext:
    """Resolve identity and role together for ``user`` (may be anonymous or None)."""
    if user is None or not user.is_authenticated:
        return SIGNED_OUT_CONTEXT

    from neuralcare.users.models import UserRole  # local import avoids app-loading order issues

    role = UserRole.objects.filter(user=user).values_list("role", flat=True).first()
    return SessionContext(user=user, role=role)


class GuardDecision(str, Enum):
    PENDING = "pending"
    SIGN_IN = "sign_in"
    DASHBOARD = "dashboard"
    ALLOW = "allow"


def evaluate_route_guard(
    context: SessionContext | None,
    allowed_roles: Iterable[str] | None = None,
) -> GuardDecision:
    """
    Decide what a guarded screen should do for the given session context.

    PENDING    identity/role not known yet; show a loading page, do not redirect.
    SIGN_IN    nobody is signed in, whatever ``allowed_roles`` says.
    DASHBOARD  signed in, but the role (possibly unknown) is not allowed.
    ALLOW      render the screen.
    """
    if context is None or not context.resolved:
        return GuardDecision.PENDING
    if not context.is_authenticated:
        return GuardDecision.SIGN_IN
    if allowed_roles is not None and context.role not in set(allowed_roles):
        return GuardDecision.DASHBOARD
    return GuardDecision.ALLOW
