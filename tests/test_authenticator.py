"""Tests for the login decision"""

import pytest

from tresor.core.errors import AuthenticationError, AuthFailureReason


@pytest.fixture
def stored_hash(password_hasher):
    return password_hasher.hash_password("Analyt1cal!")


class TestAuthenticate:
    def test_correct_password_returns_true(self, authenticator, stored_hash):
        assert authenticator.authenticate("ada@example.com", "Analyt1cal!", stored_hash) is True

    def test_wrong_password_raises_mismatch(self, authenticator, stored_hash):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate("ada@example.com", "wrong", stored_hash)

        assert exc_info.value.reason is AuthFailureReason.PASSWORD_MISMATCH
        assert exc_info.value.message == "Invalid username or password"

    @pytest.mark.parametrize(
        "identity, password, use_hash",
        [
            (None, "Analyt1cal!", True),
            ("ada@example.com", None, True),
            ("ada@example.com", "Analyt1cal!", False),
            (None, None, False),
        ],
    )
    def test_missing_input_raises_missing_credentials(
        self, authenticator, stored_hash, identity, password, use_hash
    ):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate(identity, password, stored_hash if use_hash else None)

        assert exc_info.value.reason is AuthFailureReason.MISSING_CREDENTIALS

    def test_malformed_hash_is_a_mismatch(self, authenticator):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate("ada@example.com", "Analyt1cal!", "garbage")

        assert exc_info.value.reason is AuthFailureReason.PASSWORD_MISMATCH

    def test_empty_password_is_a_mismatch(self, authenticator, stored_hash):
        """Present but empty is not missing"""
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate("ada@example.com", "", stored_hash)

        assert exc_info.value.reason is AuthFailureReason.PASSWORD_MISMATCH

    def test_failure_reason_in_details(self, authenticator, stored_hash):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate("ada@example.com", "wrong", stored_hash)

        assert exc_info.value.details == {"reason": "password_mismatch"}
