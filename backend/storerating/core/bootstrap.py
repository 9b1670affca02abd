# storerating/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating default admin user on first startup.
"""
import logging
from storerating.config import settings
from storerating.models.user import Role, User
from storerating.core.security import hash_password

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create a default admin based on environment variables.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_NAME     (default: "System Administrator")
      ADMIN_EMAIL    (default: "admin@storerating.com")
      ADMIN_ADDRESS  (default: "123 Admin Street, Admin City")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    # Check if any admin user already exists
    has_admin = await User.filter(role=Role.ADMIN).exists()
    if has_admin:
        return  # Skip creation if admin already exists

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    # Email is the login identifier; an existing non-admin account keeps it
    if await User.filter(email=settings.admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL %s belongs to a non-admin account -> skip creating default admin.",
                       settings.admin_email)
        return

    u = await User.create(
        name=settings.admin_name,
        email=settings.admin_email,
        password_hash=hash_password(settings.admin_password),  # Hash password before storing
        address=settings.admin_address,
        role=Role.ADMIN,
    )
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", u.email, u.id)
