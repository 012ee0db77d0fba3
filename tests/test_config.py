from app.core.config import Settings


def test_database_url_is_built_from_postgres_components(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = Settings(
        _env_file=None,
        POSTGRES_USER="registrar",
        POSTGRES_PASSWORD="s3cret",
        POSTGRES_HOST="db",
        POSTGRES_PORT="5433",
        POSTGRES_DB="students",
    )

    assert settings.DATABASE_URL == "postgresql://registrar:s3cret@db:5433/students"
    assert not settings.is_sqlite


def test_explicit_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./students.db")

    settings = Settings(_env_file=None)

    assert settings.DATABASE_URL == "sqlite:///./students.db"
    assert settings.is_sqlite
