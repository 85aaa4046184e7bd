from pathlib import Path

import pytest

from visit_crm.config import Settings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # keep a developer's .env out of the assertions
    monkeypatch.chdir(tmp_path)
    for name in ("CRM_FRONTEND_ALLOWED_ORIGINS", "CRM_SUPABASE_URL", "CRM_SUPABASE_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_allowed_origins_from_comma_separated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRM_FRONTEND_ALLOWED_ORIGINS", "http://a.example, http://b.example")

    settings = Settings()

    assert settings.frontend_allowed_origins == ("http://a.example", "http://b.example")


def test_allowed_origins_from_json_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRM_FRONTEND_ALLOWED_ORIGINS", '["http://a.example", "http://b.example"]')

    settings = Settings()

    assert settings.frontend_allowed_origins == ("http://a.example", "http://b.example")


def test_allowed_origins_single_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRM_FRONTEND_ALLOWED_ORIGINS", "http://a.example")

    assert Settings().frontend_allowed_origins == ("http://a.example",)


def test_remote_configured_needs_url_and_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRM_SUPABASE_URL", "https://project.supabase.co")

    assert Settings().remote_configured is False

    monkeypatch.setenv("CRM_SUPABASE_KEY", "anon-key")

    assert Settings().remote_configured is True


def test_local_db_file_is_resolved(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CRM_LOCAL_DB_FILE", "store/crm.sqlite3")

    assert Settings().local_db_file == (tmp_path / "store" / "crm.sqlite3").resolve()
