"""
Tests for settings persistence and runtime construction.
"""
import json
from pathlib import Path

import pytest

from sql2dsql.core.runtime import BACKEND_URL_ENV, build_runtime
from sql2dsql.core.settings import (
    DEFAULT_BACKEND_URL, SETTINGS_FILE, Settings, load_settings, save_settings,
)
from sql2dsql.core.translator import TranslationClient


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path)
    assert settings == Settings()
    assert settings.backend_url == DEFAULT_BACKEND_URL
    assert settings.status_reset_seconds == 3.0


def test_saved_settings_load_back(tmp_path: Path):
    settings = Settings(backend_url="http://example.test/to_dsql", timeout=2.0)
    path = save_settings(tmp_path / "nested", settings)
    assert path.name == SETTINGS_FILE
    assert load_settings(tmp_path / "nested") == settings


def test_corrupt_file_gives_defaults(tmp_path: Path):
    (tmp_path / SETTINGS_FILE).write_text("{not json", encoding="utf-8")
    assert load_settings(tmp_path) == Settings()


def test_unknown_keys_are_ignored(tmp_path: Path):
    data = {"backend_url": "http://x.test/to_dsql", "timeout": "7", "colour": "blue"}
    (tmp_path / SETTINGS_FILE).write_text(json.dumps(data), encoding="utf-8")
    settings = load_settings(tmp_path)
    assert settings.backend_url == "http://x.test/to_dsql"
    assert settings.timeout == 7.0


def test_update_casts_values():
    settings = Settings()
    settings.update("timeout", "2.5")
    settings.update("retries", "4")
    settings.update("default_source", "SELECT 2;")
    assert settings.timeout == 2.5
    assert settings.retries == 4
    assert settings.default_source == "SELECT 2;"


@pytest.mark.parametrize("key, value, error", [
    ("nope", "1", KeyError),
    ("timeout", "soon", ValueError),
    ("timeout", "-1", ValueError),
    ("timeout", "0", ValueError),
    ("retries", "0", ValueError),
    ("backend_url", "localhost:3000", ValueError),
])
def test_update_rejects_bad_values(key, value, error):
    with pytest.raises(error):
        Settings().update(key, value)


def test_build_runtime_reads_settings_file(settings_dir: Path, monkeypatch):
    monkeypatch.delenv(BACKEND_URL_ENV, raising=False)
    save_settings(settings_dir, Settings(backend_url="http://file.test/to_dsql", default_source="SELECT 3;"))

    rt = build_runtime(settings_dir=settings_dir)

    assert isinstance(rt.client, TranslationClient)
    assert rt.client.backend_url == "http://file.test/to_dsql"
    assert rt.create_session().source == "SELECT 3;"


def test_backend_url_precedence(settings_dir: Path, monkeypatch):
    save_settings(settings_dir, Settings(backend_url="http://file.test/to_dsql"))
    monkeypatch.setenv(BACKEND_URL_ENV, "http://env.test/to_dsql")

    assert build_runtime(settings_dir=settings_dir).settings.backend_url == "http://env.test/to_dsql"
    rt = build_runtime(settings_dir=settings_dir, backend_url="http://cli.test/to_dsql")
    assert rt.settings.backend_url == "http://cli.test/to_dsql"


def test_runtime_save_settings_rebuilds_client(test_runtime, fake_client):
    test_runtime.settings.update("backend_url", "http://new.test/to_dsql")
    test_runtime.settings.update("default_source", "SELECT 4;")

    path = test_runtime.save_settings()

    assert path.exists()
    assert fake_client.closed
    assert test_runtime.client.backend_url == "http://new.test/to_dsql"
    assert test_runtime.create_session().source == "SELECT 4;"


def test_zero_timeout_in_file_falls_back_to_default(tmp_path: Path):
    data = {"timeout": 0, "retries": 2}
    (tmp_path / SETTINGS_FILE).write_text(json.dumps(data), encoding="utf-8")
    settings = load_settings(tmp_path)
    assert settings.timeout == Settings().timeout
    assert settings.retries == 2
    # a client can always be built from loaded settings
    assert TranslationClient.from_settings(settings).timeout > 0
