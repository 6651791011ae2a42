"""
Validator tests - pure checks on name and email
"""

import pytest

from userapi.services.validation import (
    validate_user_request,
    is_valid_email,
    MISSING_FIELD_MESSAGE,
    NAME_LENGTH_MESSAGE,
    INVALID_EMAIL_MESSAGE,
)
from userapi.utils.exceptions import ValidationError


class TestValidateUserRequest:

    def test_valid_request_is_returned_untrimmed(self):
        assert validate_user_request("  John Doe ", "john@example.com") == ("  John Doe ", "john@example.com")

    @pytest.mark.parametrize("name,email", [
        (None, "john@example.com"),
        ("John", None),
        ("", "john@example.com"),
        ("John", ""),
        (None, None),
    ])
    def test_missing_field(self, name, email):
        with pytest.raises(ValidationError) as exc_info:
            validate_user_request(name, email)
        assert exc_info.value.message == MISSING_FIELD_MESSAGE

    @pytest.mark.parametrize("name", ["A", "   ", " B  ", "x" * 101])
    def test_name_length_out_of_bounds(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_user_request(name, "john@example.com")
        assert exc_info.value.message == NAME_LENGTH_MESSAGE

    @pytest.mark.parametrize("name", ["Al", "x" * 100, "  " + "x" * 100 + "  "])
    def test_name_length_bounds_are_inclusive_after_trim(self, name):
        assert validate_user_request(name, "al@example.com")[0] == name

    def test_name_checked_before_email(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_user_request("A", "not-an-email")
        assert exc_info.value.message == NAME_LENGTH_MESSAGE

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_user_request("John", "not-an-email")
        assert exc_info.value.message == INVALID_EMAIL_MESSAGE


class TestEmailPattern:

    @pytest.mark.parametrize("email", [
        "john@example.com",
        "a@b.c",
        "first.last+tag@sub.example.org",
    ])
    def test_accepts(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", [
        "not-an-email",
        "john@example",
        "john@@example.com",
        "jo hn@example.com",
        "@example.com",
        "john@.com",
        "john@example.com\n",
        "john@exa@mple.com",
    ])
    def test_rejects(self, email):
        assert not is_valid_email(email)
