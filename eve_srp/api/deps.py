"""API dependencies for authentication and authorization.

Two principal kinds, both carried as ``Authorization: Bearer <JWT>``:

* player: issued by ``POST /auth/eve`` after the corporation check
* admin: issued by ``POST /admin/login``; role ``admin`` or ``super_admin``

A valid token of the wrong kind is rejected with the same generic 403 as an
ownership violation, so callers cannot tell which kind an endpoint wanted.
"""
from typing import NamedTuple, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eve_srp.errors import InsufficientRole, InvalidOrExpiredToken, OwnershipViolation
from eve_srp.services.credentials import ROLE_SUPER_ADMIN
from eve_srp.utils.jwt_utils import ADMIN, PLAYER, verify_token

_bearer_scheme = HTTPBearer(auto_error=False)


class PlayerContext(NamedTuple):
    """Resolved player identity, populated by :func:`require_player`."""
    char_id: int
    char_name: str
    corp_id: int


class AdminContext(NamedTuple):
    """Resolved admin identity, populated by :func:`require_admin`."""
    admin_id: int             # 0 = environment superadmin
    username: str
    role: str                 # admin | super_admin


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

def require_player(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> PlayerContext:
    """Require a player token."""
    payload = verify_token(_token(credentials), PLAYER)
    try:
        return PlayerContext(
            char_id=int(payload["char_id"]),
            char_name=str(payload["char_name"]),
            corp_id=int(payload["corp_id"]),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidOrExpiredToken()


def assert_ownership(player: PlayerContext, char_id: int) -> None:
    """Fail unless the path's character is the authenticated one."""
    if player.char_id != char_id:
        raise OwnershipViolation()


def require_owner(
    char_id: int,
    player: PlayerContext = Depends(require_player),
) -> PlayerContext:
    """Player token whose character matches the ``{char_id}`` path parameter.

    The path value only selects data after it has been checked against the token.
    """
    assert_ownership(player, char_id)
    return player


# ---------------------------------------------------------------------------
# Admins
# ---------------------------------------------------------------------------

def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> AdminContext:
    """Require an admin token (any admin role)."""
    payload = verify_token(_token(credentials), ADMIN)
    try:
        return AdminContext(
            admin_id=int(payload["admin_id"]),
            username=str(payload["username"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidOrExpiredToken()


def require_super_admin(ctx: AdminContext = Depends(require_admin)) -> AdminContext:
    """Require an admin token carrying the ``super_admin`` role."""
    if ctx.role != ROLE_SUPER_ADMIN:
        raise InsufficientRole()
    return ctx


# ---------------------------------------------------------------------------
# Shared clients (constructed once in the app lifespan)
# ---------------------------------------------------------------------------

def get_eve_client(request: Request):
    return request.app.state.eve_client


def get_loss_source(request: Request):
    return request.app.state.loss_source
