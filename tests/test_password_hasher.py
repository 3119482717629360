"""Tests for password hashing"""

import threading

import pytest

from tresor.core.auth import PasswordHasher
from tresor.core.errors import InvalidInputError


class TestHashPassword:
    """Test hash generation"""

    def test_hash_has_bcrypt_format(self, password_hasher):
        """Hash carries the 2b prefix and the configured cost"""
        hashed = password_hasher.hash_password("Analyt1cal!")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_default_cost_is_twelve(self):
        hasher = PasswordHasher()

        assert hasher.rounds == 12
        assert hasher.hash_password("Analyt1cal!").startswith("$2b$12$")

    def test_same_password_gets_distinct_salts(self, password_hasher):
        first = password_hasher.hash_password("Analyt1cal!")
        second = password_hasher.hash_password("Analyt1cal!")

        assert first != second
        assert password_hasher.verify_password("Analyt1cal!", first)
        assert password_hasher.verify_password("Analyt1cal!", second)

    def test_nul_character_rejected_as_invalid_input(self, password_hasher):
        """bcrypt cannot encode NUL; the failure stays inside the hasher contract"""
        with pytest.raises(InvalidInputError):
            password_hasher.hash_password("Abcdef1!\x00x")

    @pytest.mark.parametrize("blank", [None, "", "   ", "\t\n"])
    def test_blank_password_rejected(self, password_hasher, blank):
        with pytest.raises(InvalidInputError) as exc_info:
            password_hasher.hash_password(blank)

        assert exc_info.value.message == "Password cannot be null or empty"


class TestVerifyPassword:
    """Test verification"""

    def test_correct_password_matches(self, password_hasher):
        hashed = password_hasher.hash_password("Analyt1cal!")
        assert password_hasher.verify_password("Analyt1cal!", hashed) is True

    def test_wrong_password_does_not_match(self, password_hasher):
        hashed = password_hasher.hash_password("Analyt1cal!")

        assert password_hasher.verify_password("analyt1cal!", hashed) is False
        assert password_hasher.verify_password("Analyt1cal", hashed) is False

    @pytest.mark.parametrize(
        "stored",
        ["", "not-a-hash", "$2b$04$tooshort", "$1$saltsalt$abcdefghijklmnopqrstuv"],
    )
    def test_malformed_hash_does_not_match(self, password_hasher, stored):
        """Unreadable hashes are a mismatch, not an error"""
        assert password_hasher.verify_password("Analyt1cal!", stored) is False

    def test_missing_input_does_not_match(self, password_hasher):
        hashed = password_hasher.hash_password("Analyt1cal!")

        assert password_hasher.verify_password(None, hashed) is False
        assert password_hasher.verify_password("", hashed) is False
        assert password_hasher.verify_password("Analyt1cal!", None) is False

    def test_hash_from_other_cost_still_verifies(self, password_hasher):
        stronger = PasswordHasher(rounds=password_hasher.rounds + 1)
        hashed = stronger.hash_password("Analyt1cal!")

        assert password_hasher.verify_password("Analyt1cal!", hashed) is True

    def test_nul_in_candidate_does_not_match(self, password_hasher):
        hashed = password_hasher.hash_password("Abcdef1!")
        assert password_hasher.verify_password("Abcdef1!\x00", hashed) is False

    def test_only_first_72_bytes_are_significant(self, password_hasher):
        """bcrypt truncates; passwords sharing a 72-byte prefix verify alike"""
        prefix = "Aa1!" + "x" * 68
        hashed = password_hasher.hash_password(prefix + "first-tail")

        assert password_hasher.verify_password(prefix + "other-tail", hashed) is True
        assert password_hasher.verify_password(prefix[:-1], hashed) is False


class TestNeedsRehash:
    """Test cost upgrade detection"""

    def test_current_cost_needs_no_rehash(self, password_hasher):
        hashed = password_hasher.hash_password("Analyt1cal!")
        assert password_hasher.needs_rehash(hashed) is False

    def test_lower_cost_needs_rehash(self, password_hasher):
        stronger = PasswordHasher(rounds=password_hasher.rounds + 1)
        weaker_hash = password_hasher.hash_password("Analyt1cal!")

        assert stronger.needs_rehash(weaker_hash) is True

    def test_unreadable_hash_needs_rehash(self, password_hasher):
        assert password_hasher.needs_rehash("not-a-hash") is True


class TestConcurrentUse:
    """One hasher instance shared between threads"""

    def test_parallel_hash_and_verify(self, password_hasher):
        results = {}
        errors = []

        def worker(index: int):
            password = f"Passw0rd!{index}"
            try:
                hashed = password_hasher.hash_password(password)
                results[index] = (
                    password_hasher.verify_password(password, hashed),
                    password_hasher.verify_password(f"Passw0rd!{index + 1000}", hashed),
                )
            except Exception as e:  # pragma: no cover - reported below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 16
        assert all(match and not cross for match, cross in results.values())
