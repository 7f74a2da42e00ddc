"""Session issuance: EVE SSO login for players, password login for admins"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eve_srp.api.deps import get_eve_client
from eve_srp.database import get_db
from eve_srp.errors import AuthExchangeFailed, ForbiddenNotMember, Unauthenticated
from eve_srp.middleware.monitoring import record_auth_failure
from eve_srp.middleware.rate_limit import get_rate_limit, limiter
from eve_srp.schemas.auth import AdminLoginRequest, AdminLoginResponse, EveLoginRequest, EveLoginResponse
from eve_srp.services import credentials, identity
from eve_srp.utils.jwt_utils import create_admin_token
from eve_srp.utils.logger import logger

router = APIRouter(tags=["authentication"])


# ---------------------------------------------------------------------------
# POST /auth/eve
# ---------------------------------------------------------------------------

@router.post("/auth/eve", response_model=EveLoginResponse)
@limiter.limit(get_rate_limit("eve_login"))
def eve_login(
    request: Request,
    data: EveLoginRequest,
    eve_client=Depends(get_eve_client),
):
    """Exchange an EVE SSO authorization code for a player session token.

    Only members of the configured corporation get a token. The response is
    ``{charId, charName, token}``; use the token as ``Authorization: Bearer <token>``.
    Attempts are rate limited per client.
    """
    try:
        return identity.exchange_code(eve_client, data.code)
    except ForbiddenNotMember:
        record_auth_failure("not_member")
        raise
    except AuthExchangeFailed:
        record_auth_failure("sso")
        raise


# ---------------------------------------------------------------------------
# POST /admin/login
# ---------------------------------------------------------------------------

@router.post("/admin/login", response_model=AdminLoginResponse)
@limiter.limit(get_rate_limit("admin_login"))
def admin_login(
    request: Request,
    data: AdminLoginRequest,
    db: Session = Depends(get_db),
):
    """Exchange admin credentials for an admin session token.

    Wrong password and unknown username produce the same 401. Too many attempts
    from one client return 429 before credentials are checked.
    """
    principal = credentials.verify_admin(db, data.username, data.password)
    if principal is None:
        record_auth_failure("admin_login")
        logger.info(
            "Admin login failed",
            extra={"admin": data.username, "action": "login_admin", "client": request.client.host if request.client else "unknown"},
        )
        raise Unauthenticated("Invalid username or password")

    token = create_admin_token(principal.id, principal.username, principal.role)
    logger.info(
        f"Issued admin JWT for {principal.username} (role={principal.role})",
        extra={"admin": principal.username, "action": "login_admin"},
    )
    return {
        "token": token,
        "admin": {"id": principal.id, "username": principal.username, "role": principal.role},
    }
