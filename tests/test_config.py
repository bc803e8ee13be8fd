import pytest

from core.config import get_settings, reload_settings
from core.exceptions import InvalidConfigException


def test_defaults():
    settings = get_settings()

    assert settings.FILE_CLEANER_MAX_TRIES == 10
    assert settings.FILE_CLEANER_SLEEP_PERIOD_MILLIS == 200
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FILE is None


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("FILE_CLEANER_MAX_TRIES", "3")

    assert get_settings() is first
    assert reload_settings().FILE_CLEANER_MAX_TRIES == 3


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FILE_CLEANER_MAX_TRIES", "4")
    monkeypatch.setenv("FILE_CLEANER_SLEEP_PERIOD_MILLIS", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.FILE_CLEANER_MAX_TRIES == 4
    assert settings.FILE_CLEANER_SLEEP_PERIOD_MILLIS == 0
    assert settings.LOG_LEVEL == "DEBUG"


def test_properties_file(tmp_path, monkeypatch):
    (tmp_path / "app.properties").write_text("FILE_CLEANER_MAX_TRIES=7\n")
    monkeypatch.chdir(tmp_path)

    assert get_settings().FILE_CLEANER_MAX_TRIES == 7


@pytest.mark.parametrize(
    "key, value",
    [
        ("FILE_CLEANER_MAX_TRIES", "0"),
        ("FILE_CLEANER_MAX_TRIES", "lots"),
        ("FILE_CLEANER_SLEEP_PERIOD_MILLIS", "-5"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_environment(monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(InvalidConfigException) as exc_info:
        get_settings()

    assert exc_info.value.key == key
