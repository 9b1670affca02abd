# storerating/schemas/admin.py
"""
Pydantic schemas for admin endpoints.
Defines request models for user and store management.
"""
from typing import Optional

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

from storerating.models.user import Role
from .fields import Address, Email, Name, Password


class AdminUserCreateIn(BaseModel):
    """
    Request model for admin-created accounts. Unlike public registration the
    admin chooses the role.
    """
    name: Name
    email: Email
    password: Password
    address: Address
    role: Role


class AdminUserUpdateIn(BaseModel):
    """
    Request model for updating user information.
    All fields are optional - only provided fields will be updated, but at
    least one must be present.
    """
    name: Optional[Name] = None
    email: Optional[Email] = None
    password: Optional[Password] = None  # Hashed before storage
    address: Optional[Address] = None
    role: Optional[Role] = None

    @model_validator(mode="after")
    def at_least_one_field(self) -> "AdminUserUpdateIn":
        if not self.changes():
            raise PydanticCustomError("custom", "At least one field must be provided for update")
        return self

    def changes(self) -> dict:
        """Fields the caller actually supplied (explicit nulls count as absent)."""
        return self.model_dump(exclude_none=True)


class StoreCreateIn(BaseModel):
    """
    Request model for creating a store. ownerEmail, when given, must belong
    to a store_owner account.
    """
    name: Name
    email: Email
    address: Address
    ownerEmail: Optional[Email] = None
