"""
Unit tests for request schemas.
Checks the field rules and the exact messages clients receive.
"""
import pytest
from pydantic import ValidationError

from storerating.core.errors import format_validation_errors
from storerating.models.user import Role
from storerating.schemas.admin import AdminUserCreateIn, AdminUserUpdateIn, StoreCreateIn
from storerating.schemas.auth import ChangePasswordIn, LoginIn, RegisterIn
from storerating.schemas.rating import RatingIn

VALID_USER = {
    "name": "Jane Q Public",
    "email": "jane@x.com",
    "password": "Abcdef1!",
    "address": "1 Rd",
}


def _messages(exc: ValidationError) -> list[str]:
    return [item["message"] for item in format_validation_errors(exc.errors())]


class TestRegistration:
    def test_valid_payload(self):
        body = RegisterIn.model_validate(VALID_USER)
        assert body.email == "jane@x.com"

    def test_role_is_not_part_of_registration(self):
        body = RegisterIn.model_validate({**VALID_USER, "role": "admin"})
        assert not hasattr(body, "role")

    @pytest.mark.parametrize(
        "password, message",
        [
            ("Ab1!", "Password must be at least 8 characters"),
            ("Abcdefghijklmnop!", "Password must be at most 16 characters"),
            ("abcdefg1!", "Password must contain at least one uppercase letter"),
            ("Abcdefgh1", "Password must contain at least one special character"),
        ],
    )
    def test_password_policy(self, password, message):
        with pytest.raises(ValidationError) as exc:
            RegisterIn.model_validate({**VALID_USER, "password": password})
        assert _messages(exc.value) == [message]

    @pytest.mark.parametrize("password", ["Abcdefg!", "ZZZZZZZZ<", 'Pass"word', "Sixteen#Chars123"])
    def test_password_policy_accepts(self, password):
        assert RegisterIn.model_validate({**VALID_USER, "password": password}).password == password

    @pytest.mark.parametrize(
        "name, message",
        [("Jo", "Name must be at least 3 characters"), ("x" * 61, "Name must be at most 60 characters")],
    )
    def test_name_length(self, name, message):
        with pytest.raises(ValidationError) as exc:
            RegisterIn.model_validate({**VALID_USER, "name": name})
        assert _messages(exc.value) == [message]

    def test_address_rules(self):
        with pytest.raises(ValidationError) as exc:
            RegisterIn.model_validate({**VALID_USER, "address": ""})
        assert _messages(exc.value) == ["Address is required"]

        with pytest.raises(ValidationError) as exc:
            RegisterIn.model_validate({**VALID_USER, "address": "a" * 401})
        assert _messages(exc.value) == ["Address must be at most 400 characters"]

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            RegisterIn.model_validate({**VALID_USER, "email": "not-an-email"})
        errors = format_validation_errors(exc.value.errors())
        assert errors == [{"path": ["email"], "message": "Invalid email format", "code": "invalid_string"}]


class TestOtherSchemas:
    def test_login_requires_password(self):
        with pytest.raises(ValidationError) as exc:
            LoginIn.model_validate({"email": "jane@x.com", "password": ""})
        assert _messages(exc.value) == ["Password is required"]

    def test_change_password(self):
        with pytest.raises(ValidationError) as exc:
            ChangePasswordIn.model_validate({"currentPassword": "", "newPassword": "weak"})
        assert _messages(exc.value) == [
            "Current password is required",
            "Password must be at least 8 characters",
        ]

    def test_admin_create_requires_known_role(self):
        assert AdminUserCreateIn.model_validate({**VALID_USER, "role": "store_owner"}).role is Role.STORE_OWNER
        with pytest.raises(ValidationError):
            AdminUserCreateIn.model_validate({**VALID_USER, "role": "root"})

    def test_admin_update_needs_one_field(self):
        with pytest.raises(ValidationError) as exc:
            AdminUserUpdateIn.model_validate({})
        assert _messages(exc.value) == ["At least one field must be provided for update"]

    def test_admin_update_reports_only_supplied_fields(self):
        body = AdminUserUpdateIn.model_validate({"address": "2 Rd", "name": None})
        assert body.changes() == {"address": "2 Rd"}

    def test_store_owner_email_optional(self):
        body = StoreCreateIn.model_validate({"name": "Corner Shop", "email": "shop@x.com", "address": "3 Rd"})
        assert body.ownerEmail is None

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"storeId": 1, "rating": 0}, "Rating must be at least 1"),
            ({"storeId": 1, "rating": 6}, "Rating must be at most 5"),
            ({"storeId": 0, "rating": 3}, "Store ID must be a positive number"),
        ],
    )
    def test_rating_bounds(self, payload, message):
        with pytest.raises(ValidationError) as exc:
            RatingIn.model_validate(payload)
        assert _messages(exc.value) == [message]

    def test_rating_must_be_whole(self):
        with pytest.raises(ValidationError):
            RatingIn.model_validate({"storeId": 1, "rating": 3.5})
