# storerating/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request/response models for registration, login and password change.
"""
from pydantic import BaseModel

from .fields import Address, CurrentPassword, Email, LoginPassword, Name, Password


class RegisterIn(BaseModel):
    """
    Request model for public registration.
    A "role" key in the body is ignored: public sign-ups are always "user".
    """
    name: Name
    email: Email
    password: Password
    address: Address


class LoginIn(BaseModel):
    """
    Request model for user login endpoint.
    """
    email: Email
    password: LoginPassword


class ChangePasswordIn(BaseModel):
    """
    Request model for changing the caller's own password.
    """
    currentPassword: CurrentPassword
    newPassword: Password


class UserOut(BaseModel):
    """
    User information returned by auth endpoints (never includes the hash).
    """
    id: int
    name: str
    email: str
    address: str
    role: str


class AuthOut(BaseModel):
    """
    Response model for successful registration or login.
    """
    message: str
    user: UserOut
    token: str  # JWT access token for API authentication
