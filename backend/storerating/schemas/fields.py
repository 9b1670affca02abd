# storerating/schemas/fields.py
"""
Reusable constrained field types for request schemas.

Each rule raises a PydanticCustomError so the error code and message that
reach the client are exactly the ones listed here.
"""
import re
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 60
ADDRESS_MAX_LENGTH = 400
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
RATING_MIN = 1
RATING_MAX = 5

_UPPERCASE_RE = re.compile(r"[A-Z]")
_SPECIAL_RE = re.compile("[" + re.escape(PASSWORD_SPECIAL_CHARACTERS) + "]")


def _check_name(value: str) -> str:
    if len(value) < NAME_MIN_LENGTH:
        raise PydanticCustomError("too_small", "Name must be at least 3 characters")
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError("too_big", "Name must be at most 60 characters")
    return value


def _check_address(value: str) -> str:
    if len(value) > ADDRESS_MAX_LENGTH:
        raise PydanticCustomError("too_big", "Address must be at most 400 characters")
    if len(value) < 1:
        raise PydanticCustomError("too_small", "Address is required")
    return value


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_string", "Invalid email format")
    return value


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError("too_small", "Password must be at least 8 characters")
    if len(value) > PASSWORD_MAX_LENGTH:
        raise PydanticCustomError("too_big", "Password must be at most 16 characters")
    if not _UPPERCASE_RE.search(value):
        raise PydanticCustomError("invalid_string", "Password must contain at least one uppercase letter")
    if not _SPECIAL_RE.search(value):
        raise PydanticCustomError("invalid_string", "Password must contain at least one special character")
    return value


def _required(message: str):
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError("too_small", message)
        return value
    return check


def _check_store_id(value: int) -> int:
    if value <= 0:
        raise PydanticCustomError("too_small", "Store ID must be a positive number")
    return value


def _check_rating(value: int) -> int:
    if value < RATING_MIN:
        raise PydanticCustomError("too_small", "Rating must be at least 1")
    if value > RATING_MAX:
        raise PydanticCustomError("too_big", "Rating must be at most 5")
    return value


Name = Annotated[str, AfterValidator(_check_name)]
Address = Annotated[str, AfterValidator(_check_address)]
Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]
LoginPassword = Annotated[str, AfterValidator(_required("Password is required"))]
CurrentPassword = Annotated[str, AfterValidator(_required("Current password is required"))]
StoreId = Annotated[int, AfterValidator(_check_store_id)]
Stars = Annotated[int, AfterValidator(_check_rating)]
