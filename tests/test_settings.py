import pytest

from todo_api.settings import ConfigurationError, get_settings

_ENV_VARS = (
    "PORT",
    "HOST",
    "DATABASE_URL",
    "CORS_ALLOW_ORIGINS",
    "DB_POOL_MIN_SIZE",
    "DB_POOL_MAX_SIZE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = get_settings()
    assert s.port == 3000
    assert s.host == "0.0.0.0"
    assert s.database_url is None
    assert s.cors_allow_origins == ["http://localhost:5173", "http://127.0.0.1:5173"]
    assert (s.db_pool_min_size, s.db_pool_max_size) == (1, 10)
    assert s.log_level == "INFO"


def test_missing_database_url_fails_when_required():
    with pytest.raises(ConfigurationError, match="Missing env DATABASE_URL"):
        get_settings().require_database_url()


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/todos")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, ,http://b.test ")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = get_settings()
    assert s.port == 8080
    assert s.require_database_url() == "postgresql://localhost/todos"
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.db_pool_max_size == 4
    assert s.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("DATABASE_URL", "")
    s = get_settings()
    assert s.port == 3000
    assert s.database_url is None


@pytest.mark.parametrize(
    "name,value",
    [("PORT", "http"), ("PORT", "0"), ("DB_POOL_MIN_SIZE", "-1"), ("DB_POOL_MAX_SIZE", "0")],
)
def test_malformed_integers(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError, match=name):
        get_settings()


def test_pool_bounds_must_be_ordered(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "5")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")
    with pytest.raises(ConfigurationError):
        get_settings()
