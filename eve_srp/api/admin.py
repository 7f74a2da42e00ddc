"""Admin account management endpoints"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eve_srp.api.deps import AdminContext, require_admin, require_super_admin
from eve_srp.database import get_db
from eve_srp.errors import Forbidden, NotFound, ValidationFailed
from eve_srp.schemas.admin_user import AdminCreatedResponse, AdminUserCreate, AdminUserResponse, PasswordChange
from eve_srp.schemas.srp_request import SuccessResponse
from eve_srp.services import credentials
from eve_srp.utils.logger import logger

router = APIRouter(prefix="/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# Admin user CRUD (super-admin only)
# ---------------------------------------------------------------------------

@router.get("/admins", response_model=List[AdminUserResponse])
def list_admin_users(
    db: Session = Depends(get_db),
    _: AdminContext = Depends(require_super_admin),
):
    """List all admin accounts (super-admin only)."""
    return credentials.list_admins(db)


@router.post("/admins", response_model=AdminCreatedResponse)
def create_admin_user(
    data: AdminUserCreate,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_super_admin),
):
    """
    Create an admin account (super-admin only).

    The role is always ``admin``; a ``super_admin`` only exists through server
    configuration. Weak passwords return 400 with one ``details`` entry per
    unmet rule.
    """
    if data.role and data.role != credentials.ROLE_ADMIN:
        logger.info(
            f"Ignoring requested role '{data.role}' for new admin {data.username}",
            extra={"admin": ctx.username, "action": "create_admin"},
        )

    admin = credentials.add_admin(db, data.username, data.password)
    logger.info(f"Created admin user: {admin.username}", extra={"admin": ctx.username, "action": "create_admin"})
    return AdminCreatedResponse(id=admin.id)


@router.delete("/admins/{admin_id}", response_model=SuccessResponse)
def delete_admin_user(
    admin_id: int,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_super_admin),
):
    """Delete an admin account (super-admin only). The superadmin cannot be deleted."""
    if credentials.is_super_admin(admin_id):
        raise ValidationFailed("The super admin cannot be deleted")

    target = credentials.get_admin(db, admin_id)
    if not target:
        raise NotFound("Admin not found")

    if not credentials.delete_admin(db, admin_id):
        raise ValidationFailed("The super admin cannot be deleted")

    logger.info(f"Deleted admin user: {admin_id}", extra={"admin": ctx.username, "action": "delete_admin"})
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Own password
# ---------------------------------------------------------------------------

@router.post("/change-password", response_model=SuccessResponse)
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin),
):
    """Change the caller's password. The superadmin's password lives in server configuration."""
    if credentials.is_super_admin(ctx.admin_id, ctx.role):
        raise Forbidden("The super admin password is managed by server configuration")

    if not credentials.change_admin_password(db, ctx.admin_id, data.new_password):
        raise NotFound("Admin not found")
    return SuccessResponse()
