"""Settings — verifies environment-driven configuration."""

from app.config import Settings


def test_mongo_uri_from_environment(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017/prod")
    assert Settings().mongo_uri == "mongodb://db.internal:27017/prod"


def test_mongo_uri_quotes_and_whitespace_stripped(monkeypatch):
    monkeypatch.setenv("MONGO_URI", ' "mongodb://localhost:27017/x" ')
    assert Settings().mongo_uri == "mongodb://localhost:27017/x"


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings()
    assert settings.port == 3000
    assert settings.mongo_db_name == "users_rest_api"
    assert settings.mongo_server_selection_timeout_ms == 5000
