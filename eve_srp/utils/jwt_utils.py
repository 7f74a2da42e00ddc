"""JWT utilities: session token signing and verification.

Two disjoint principal kinds share one signing secret and are told apart by the
``type`` claim:

* ``player``: ``sub``/``char_id``, ``char_name``, ``corp_id``
* ``admin``: ``sub``/``username``, ``admin_id``, ``role``

Callers that need a specific kind go through :func:`verify_token`, which
rejects a well-signed token of the other kind.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from eve_srp.config import settings
from eve_srp.errors import InvalidOrExpiredToken, Unauthenticated, WrongPrincipalKind
from eve_srp.utils.logger import logger

PLAYER = "player"
ADMIN = "admin"

_EXPIRY_SECONDS = {
    PLAYER: lambda: settings.JWT_PLAYER_EXPIRE_SECONDS,
    ADMIN: lambda: settings.JWT_ADMIN_EXPIRE_SECONDS,
}


def create_access_token(subject: str, token_type: str, extra_claims: Dict[str, Any]) -> str:
    """Sign and return a JWT access token.

    Args:
        subject:      Value for the 'sub' claim (character id or admin username).
        token_type:   'player' or 'admin', stored as 'type' claim and used
                      by deps.py to gate access.
        extra_claims: Additional identity claims to embed.

    Returns:
        Signed JWT string.
    """
    if token_type not in _EXPIRY_SECONDS:
        raise ValueError(f"Unknown token type: {token_type}")

    now = int(datetime.now(timezone.utc).timestamp())

    payload: Dict[str, Any] = {
        **extra_claims,
        "sub": subject,
        "iat": now,
        "exp": now + _EXPIRY_SECONDS[token_type](),
        "type": token_type,
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_player_token(char_id: int, char_name: str, corp_id: int) -> str:
    return create_access_token(
        subject=str(char_id),
        token_type=PLAYER,
        extra_claims={"char_id": char_id, "char_name": char_name, "corp_id": corp_id},
    )


def create_admin_token(admin_id: int, username: str, role: str) -> str:
    return create_access_token(
        subject=username,
        token_type=ADMIN,
        extra_claims={"admin_id": admin_id, "username": username, "role": role},
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry and return the payload.

    Raises:
        InvalidOrExpiredToken: on any verification failure.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug(f"JWT decode failed: {exc}")
        raise InvalidOrExpiredToken()

    if "exp" not in payload or "type" not in payload:
        raise InvalidOrExpiredToken()
    return payload


def verify_token(token: Optional[str], expected_type: str) -> Dict[str, Any]:
    """Return the claims of ``token`` if it is valid and of ``expected_type``.

    Raises:
        Unauthenticated:       no token supplied.
        InvalidOrExpiredToken: bad signature, expired, or malformed.
        WrongPrincipalKind:    valid token for the other principal kind.
    """
    if not token:
        raise Unauthenticated()

    payload = decode_access_token(token)
    if payload.get("type") != expected_type:
        logger.info(
            f"Token kind mismatch: expected {expected_type}",
            extra={"action": "verify_token"},
        )
        raise WrongPrincipalKind()
    return payload
