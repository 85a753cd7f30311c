import pytest
from pydantic import ValidationError

from anonbattle.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APP_ENV", raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.app_env == "dev"

    def test_default_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log_level == "INFO"

    def test_default_strict_mode_off(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("STRICT_MODE", raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.strict_mode is False


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["true", "1", "yes"])
    def test_loads_strict_mode(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("STRICT_MODE", value)
        s = Settings()
        assert s.strict_mode is True


class TestSettingsValidation:
    def test_invalid_strict_mode_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STRICT_MODE", "sometimes")
        with pytest.raises(ValidationError):
            Settings()
