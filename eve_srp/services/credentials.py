"""Credential store: admin accounts and the environment superadmin.

Admin principals are a tagged union:

* ``PersistedAdmin``: a row in the ``admins`` table (role ``admin``)
* ``EnvSuperAdmin``: the single superadmin from ``SUPER_ADMIN_USERNAME`` /
  ``SUPER_ADMIN_PASSWORD``; id 0, never stored, never password-changeable
"""
import secrets
from typing import List, NamedTuple, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eve_srp.config import settings
from eve_srp.errors import ValidationFailed
from eve_srp.models.admin import Admin
from eve_srp.utils.auth import (
    burn_password_check,
    hash_password,
    is_valid_username,
    password_problems,
    verify_password,
)
from eve_srp.utils.logger import logger

SUPER_ADMIN_ID = 0
ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"


class PersistedAdmin(NamedTuple):
    id: int
    username: str
    role: str


class EnvSuperAdmin(NamedTuple):
    username: str
    id: int = SUPER_ADMIN_ID
    role: str = ROLE_SUPER_ADMIN


AdminPrincipal = Union[PersistedAdmin, EnvSuperAdmin]


def is_super_admin(admin_id: int, role: Optional[str] = None) -> bool:
    return admin_id == SUPER_ADMIN_ID or role == ROLE_SUPER_ADMIN


def verify_admin(db: Session, username: str, password: str) -> Optional[AdminPrincipal]:
    """Check a login attempt.

    The environment superadmin is tried first with a constant-time comparison
    against the configured secret; everything else falls back to the bcrypt
    hash in the ``admins`` table. A wrong superadmin password and an unknown
    username each still pay for one bcrypt check, so timing does not reveal
    which accounts exist.
    """
    if settings.super_admin_enabled and username == settings.SUPER_ADMIN_USERNAME:
        if secrets.compare_digest(password.encode("utf-8"), settings.SUPER_ADMIN_PASSWORD.encode("utf-8")):
            return EnvSuperAdmin(username=username)
        burn_password_check(password)
        return None

    admin = db.query(Admin).filter(Admin.username == username).first()
    if not admin:
        burn_password_check(password)
        return None

    if not verify_password(password, admin.password_hash):
        return None
    return PersistedAdmin(id=admin.id, username=admin.username, role=admin.role)


def list_admins(db: Session) -> List[dict]:
    """All admin accounts, the environment superadmin first when it is configured"""
    admins: List[dict] = []
    if settings.super_admin_enabled:
        admins.append({
            "id": SUPER_ADMIN_ID,
            "username": settings.SUPER_ADMIN_USERNAME,
            "role": ROLE_SUPER_ADMIN,
            "created_at": None,
        })
    for admin in db.query(Admin).order_by(Admin.id.asc()).all():
        admins.append({
            "id": admin.id,
            "username": admin.username,
            "role": admin.role,
            "created_at": admin.created_at,
        })
    return admins


def get_admin(db: Session, admin_id: int) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.id == admin_id).first()


def _check_new_password(password: str) -> None:
    problems = password_problems(password)
    if problems:
        raise ValidationFailed("Password does not meet requirements", details=problems)


def add_admin(db: Session, username: str, password: str) -> Admin:
    """Create an ``admin``-role account.

    Raises:
        ValidationFailed: bad username, weak password, or name already taken.
    """
    if not is_valid_username(username):
        raise ValidationFailed(
            "Invalid username",
            details=["Username must be 3-32 characters of letters, digits or underscore"],
        )
    _check_new_password(password)

    if username == settings.SUPER_ADMIN_USERNAME:
        raise ValidationFailed("Username already exists")

    admin = Admin(username=username, password_hash=hash_password(password), role=ROLE_ADMIN)
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailed("Username already exists")
    db.refresh(admin)
    return admin


def delete_admin(db: Session, admin_id: int) -> bool:
    """Delete a persisted admin. Returns False for the superadmin or an unknown id."""
    if admin_id == SUPER_ADMIN_ID:
        return False

    deleted = (
        db.query(Admin)
        .filter(Admin.id == admin_id, Admin.role != ROLE_SUPER_ADMIN)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def change_admin_password(db: Session, admin_id: int, new_password: str) -> bool:
    """Replace a persisted admin's password. Returns False for the superadmin or an unknown id.

    Raises:
        ValidationFailed: weak password.
    """
    if admin_id == SUPER_ADMIN_ID:
        return False
    _check_new_password(new_password)

    admin = get_admin(db, admin_id)
    if not admin or admin.role == ROLE_SUPER_ADMIN:
        return False

    admin.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Admin password changed", extra={"admin": admin.username, "action": "change_password"})
    return True
