"""Tests for database URL resolution in settings."""

from radio_calico.core.settings import Settings


def test_defaults_to_sqlite_file(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_BACKEND", raising=False)
    settings = Settings(_env_file=None, database_path="./radio.db")
    assert settings.effective_database_url == "sqlite:///./radio.db"


def test_postgres_url_is_assembled_from_parts(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_BACKEND", "postgres")
    monkeypatch.setenv("POSTGRES_PASSWORD", "s3cret")
    monkeypatch.setenv("POSTGRES_HOST", "db")

    settings = Settings(_env_file=None)

    assert settings.effective_database_url == (
        "postgresql+psycopg://radiocalico_user:s3cret@db:5432/radiocalico"
    )


def test_explicit_url_and_test_override() -> None:
    settings = Settings(
        _env_file=None,
        database_url="postgresql+asyncpg://u@h/db",
        test_database_url="sqlite://",
    )
    assert settings.effective_database_url == "postgresql+asyncpg://u@h/db"
    assert settings.database_url_sync == "postgresql+psycopg://u@h/db"

    settings = Settings(
        _env_file=None,
        database_url="postgresql+asyncpg://u@h/db",
        test_database_url="sqlite://",
        use_testing_database=True,
    )
    assert settings.effective_database_url == "sqlite://"
