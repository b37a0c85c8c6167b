import pytest

from settings import DEFAULT_API_BASE_URL, Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ROMI_API_BASE_URL", "ROMI_API_TIMEOUT", "SPLASH_DELAY_SECONDS", "PATIENTS_DELAY_SECONDS",
                 "FORM_ERROR_SECONDS", "DISPLAY_TIMEZONE", "LOG_LEVEL", "MOCK_API_PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = Settings.from_env()
    assert s.api_base_url == DEFAULT_API_BASE_URL
    assert s.api_timeout is None
    assert (s.splash_delay, s.patients_delay, s.form_error_seconds) == (2.0, 1.5, 3.0)
    assert s.log_level == "INFO"


def test_overrides(clean_env):
    clean_env.setenv("ROMI_API_BASE_URL", "http://localhost:5000/")
    clean_env.setenv("ROMI_API_TIMEOUT", "10")
    clean_env.setenv("SPLASH_DELAY_SECONDS", "0")
    clean_env.setenv("LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.api_base_url == "http://localhost:5000"
    assert s.api_timeout == 10.0
    assert s.splash_delay == 0.0
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["abc", "-1"])
def test_invalid_number(clean_env, value):
    clean_env.setenv("PATIENTS_DELAY_SECONDS", value)
    with pytest.raises(ValueError):
        Settings.from_env()


def test_unknown_log_level(clean_env):
    clean_env.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        Settings.from_env()
