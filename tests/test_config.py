"""Tests for settings"""

import pytest
from pydantic import ValidationError

from tresor.core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.bcrypt_rounds == 12
        assert settings.api_port == 8080
        assert settings.cross_origin == "http://localhost:3000"
        assert settings.credential_timeout_seconds == 10.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BCRYPT_ROUNDS", "10")
        monkeypatch.setenv("CROSS_ORIGIN", "https://tresor.example.com")

        settings = Settings(_env_file=None)

        assert settings.bcrypt_rounds == 10
        assert settings.cross_origin == "https://tresor.example.com"

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_cost_outside_bcrypt_range_rejected(self, rounds):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, bcrypt_rounds=rounds)

    def test_production_forces_json_logs(self):
        settings = Settings(_env_file=None, environment="production", log_format="console")

        assert settings.is_production
        assert settings.log_format == "json"

    def test_worker_count_defaults_to_cpu_count(self, monkeypatch):
        monkeypatch.setattr("tresor.core.config.os.cpu_count", lambda: 6)

        assert Settings(_env_file=None).effective_credential_workers == 6
        assert Settings(_env_file=None, credential_workers=2).effective_credential_workers == 2

    def test_worker_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, credential_workers=0)
