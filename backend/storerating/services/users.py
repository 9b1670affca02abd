"""
User lookups and serialization shared by the auth and admin routers.
"""
from typing import Optional

from storerating.models.user import User


def user_to_dict(u: User, timestamps: bool = False) -> dict:
    """
    Convert a User into its public representation (never includes the hash).

    Args:
        u: User model instance
        timestamps: Include created_at / updated_at (admin views)
    """
    data = {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "address": u.address,
        "role": u.role.value,
    }
    if timestamps:
        data["created_at"] = u.created_at.isoformat() if u.created_at else None
        data["updated_at"] = u.updated_at.isoformat() if u.updated_at else None
    return data


async def email_taken(email: str, exclude_id: Optional[int] = None) -> bool:
    """True if another account already uses `email`."""
    qs = User.filter(email=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return await qs.exists()
