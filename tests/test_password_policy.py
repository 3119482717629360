"""Tests for the password strength policy"""

import pytest

from tresor.core.auth import ValidationResult
from tresor.core.errors import PolicyViolationError

UPPER = "Password must contain at least one uppercase letter"
LOWER = "Password must contain at least one lowercase letter"
NUMBER = "Password must contain at least one number"
SPECIAL = "Password must contain at least one special character"
TOO_SHORT = "Password must be at least 8 characters long"
TOO_LONG = "Password cannot be longer than 128 characters"
NUL = "Password cannot contain null characters"


class TestValidate:
    """Test rule evaluation"""

    def test_strong_password_is_valid(self, password_policy):
        result = password_policy.validate("Abcdef1!")

        assert result == ValidationResult(True, [])

    @pytest.mark.parametrize("blank", [None, "", "    "])
    def test_blank_password_short_circuits(self, password_policy, blank):
        """A blank password reports only the empty violation"""
        result = password_policy.validate(blank)

        assert result.is_valid is False
        assert result.errors == ["Password cannot be empty"]

    def test_all_violations_reported_in_order(self, password_policy):
        result = password_policy.validate("abcdefgh")

        assert result.is_valid is False
        assert result.errors == [UPPER, NUMBER, SPECIAL]

    def test_short_password_with_every_class_missing(self, password_policy):
        result = password_policy.validate("~")

        assert result.errors == [TOO_SHORT, UPPER, LOWER, NUMBER, SPECIAL]

    def test_length_boundaries(self, password_policy):
        base = "Aa1!"

        assert password_policy.validate(base + "x" * 3).errors == [TOO_SHORT]
        assert password_policy.validate(base + "x" * 4).is_valid
        assert password_policy.validate(base + "x" * 124).is_valid
        assert password_policy.validate(base + "x" * 125).errors == [TOO_LONG]

    @pytest.mark.parametrize("special", list('!@#$%^&*(),.?":{}|<>'))
    def test_each_special_character_accepted(self, password_policy, special):
        assert password_policy.validate(f"Abcdef1{special}").is_valid

    @pytest.mark.parametrize("character", ["_", "-", "+", "=", "~", " ", "é"])
    def test_other_symbols_are_not_special(self, password_policy, character):
        result = password_policy.validate(f"Abcdef1{character}")
        assert result.errors == [SPECIAL]

    def test_non_ascii_letters_do_not_count_as_cases(self, password_policy):
        result = password_policy.validate("ÄÖÜäöü1!")
        assert result.errors == [UPPER, LOWER]

    def test_null_character_rejected(self, password_policy):
        assert password_policy.validate("Abcdef1!\x00x").errors == [NUL]

    def test_validation_is_stateless(self, password_policy):
        first = password_policy.validate("abcdefgh")
        password_policy.validate("Abcdef1!")
        second = password_policy.validate("abcdefgh")

        assert first == second


class TestEnforce:
    def test_valid_password_passes(self, password_policy):
        password_policy.enforce("Abcdef1!")

    def test_invalid_password_raises_with_all_errors(self, password_policy):
        with pytest.raises(PolicyViolationError) as exc_info:
            password_policy.enforce("abcdefgh")

        assert exc_info.value.errors == [UPPER, NUMBER, SPECIAL]
        assert exc_info.value.details == {"errors": [UPPER, NUMBER, SPECIAL]}
