from pathlib import Path

import pytest

from savedata.core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("SAVEDATA_PORT", "SAVEDATA_FILE_PATH", "SAVEDATA_MEMORY_MAX_BYTES", "SAVEDATA_DB_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.port == 8080
    assert settings.file_storage_path == Path("data.txt")
    assert settings.memory_max_bytes == 0
    assert settings.db_port == 5432
    assert settings.db_name == "app_database"


def test_overrides(monkeypatch):
    monkeypatch.setenv("SAVEDATA_PORT", "9090")
    monkeypatch.setenv("SAVEDATA_CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("SAVEDATA_MEMORY_MAX_BYTES", "1024")
    monkeypatch.setenv("SAVEDATA_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.port == 9090
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.memory_max_bytes == 1024
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SAVEDATA_PORT", "70000")
    monkeypatch.setenv("SAVEDATA_DB_PORT", "abc")
    monkeypatch.setenv("SAVEDATA_MEMORY_MAX_BYTES", "-5")

    settings = get_settings()

    assert settings.port == 8080
    assert settings.db_port == 5432
    assert settings.memory_max_bytes == 0
