import pytest
from pydantic import ValidationError

from partsflow.core.config import Settings
from partsflow.storage import build_storage
from partsflow.storage.memory import MemStorage
from partsflow.storage.sql import SqlStorage


def test_cors_origins_accept_csv_and_json(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().cors_origins == ["http://a.test", "http://b.test"]

    monkeypatch.setenv("CORS_ORIGINS", '["http://c.test"]')
    assert Settings().cors_origins == ["http://c.test"]


def test_production_rejects_wildcard_cors():
    with pytest.raises(ValidationError):
        Settings(env="production", cors_origins=["*"])


def test_log_level_is_normalized_and_validated():
    assert Settings(log_level=" debug ").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_build_storage_selects_backend():
    assert isinstance(build_storage(Settings(storage_backend="memory")), MemStorage)

    sql = build_storage(Settings(storage_backend="sql", database_url="sqlite://"))
    assert isinstance(sql, SqlStorage)
    assert sql.get_parts() == []


def test_build_storage_rejects_unknown_backend():
    settings = Settings().model_copy(update={"storage_backend": "redis"})

    with pytest.raises(ValueError, match="Unknown storage backend"):
        build_storage(settings)


def test_storage_backend_must_be_supported():
    with pytest.raises(ValidationError):
        Settings(storage_backend="redis")
