# storerating/core/security.py
"""
Credentials and access tokens.
Passwords are stored as Argon2 hashes; sessions are stateless HS256 JWTs
carrying the user id, email and role.
"""
import os
import datetime as dt
from typing import Optional, TypedDict

import jwt  # PyJWT
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from dotenv import load_dotenv
from pathlib import Path

from storerating.models.user import Role

# Load environment variables from project root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# Password hashing context
# Argon2 is an adaptive, salted hash; passlib handles the salt and parameters
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))  # Default: 7 days
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)


class TokenClaims(TypedDict):
    """Identity carried by a verified access token."""
    id: int
    email: str
    role: Role


def hash_password(plain: str) -> str:
    """
    Argon2 hash of `plain`, salted per call.

    Args:
        plain: Password as typed by the user

    Returns:
        Encoded hash for the password_hash column
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Check `plain` against a stored hash.

    Args:
        plain: Plain text password to verify
        hashed: Hashed password from database

    Returns:
        True if password matches, False otherwise (including unrecognised hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (UnknownHashError, ValueError):
        return False


def create_access_token(user_id: int, email: str, role: Role | str) -> str:
    """
    Create a JWT access token for user authentication.

    The token carries id, email and role so route guards can authorize
    without an additional database query.

    Args:
        user_id: Integer user identifier
        email: User email at the time of login
        role: User role ("admin", "user" or "store_owner")

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID as string)
        - email: User email
        - role: User role for authorization
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": Role(role).value,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])


def verify_access_token(token: str) -> Optional[TokenClaims]:
    """
    Verify a token and return its claims, or None if it cannot be trusted.

    Any failure (bad signature, expiry, garbage input, claims that do not
    describe a known user/role) yields None; callers treat None as
    unauthenticated.
    """
    try:
        payload = decode_access_token(token)
        return TokenClaims(
            id=int(payload["sub"]),
            email=payload["email"],
            role=Role(payload["role"]),
        )
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        return None
