# storerating/models/user.py
"""
Database model for users.
Represents an account on the platform: credentials, profile information,
and the role that decides which endpoints the account may call.
"""
from enum import Enum

from tortoise import fields, models
from tortoise.validators import MinLengthValidator

from storerating.models.fields import CheckedCharEnumField, CheckedCharField, length_between


class Role(str, Enum):
    """Closed set of account roles."""
    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"


class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Stores as owner (via related_name="stores")
    - Has many Ratings (via related_name="ratings")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email must be unique across all users
    - Role determines access level (admin / user / store_owner)
    """
    id = fields.IntField(pk=True)  # Surrogate key
    name = CheckedCharField(max_length=60, check=length_between(3, 60), validators=[MinLengthValidator(3)])
    email = fields.CharField(max_length=255, unique=True, index=True)  # Login identifier (unique)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never plain text
    address = CheckedCharField(max_length=400, check=length_between(1, 400))
    role = CheckedCharEnumField(Role, max_length=20, default=Role.USER, index=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)  # Refreshed on every save

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"
