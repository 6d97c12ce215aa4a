# =============================================================================
# Unit Tests: Settings
# =============================================================================

from __future__ import annotations

import pytest

from fibcalc.config import Settings


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestDatabaseUrl:
    """Postgres URL assembly."""

    def test_explicit_url_wins(self):
        """DATABASE_URL overrides the PG* parts."""
        s = _settings(database_url="postgresql+asyncpg://a:b@h:1/d", pg_host="ignored")
        assert s.resolved_database_url() == "postgresql+asyncpg://a:b@h:1/d"

    def test_built_from_parts(self):
        """Without DATABASE_URL the parts form an asyncpg URL."""
        s = _settings(
            database_url=None,
            pg_host="db",
            pg_port=5433,
            pg_database="fib",
            pg_user="app",
            pg_password="secret",
        )
        assert s.resolved_database_url() == "postgresql+asyncpg://app:secret@db:5433/fib"

    def test_pg_aliases_from_environment(self, monkeypatch):
        """PGHOST and PGPORT are read from the environment."""
        monkeypatch.setenv("PGHOST", "pg.internal")
        monkeypatch.setenv("PGPORT", "6543")
        s = Settings(_env_file=None)
        assert s.pg_host == "pg.internal"
        assert s.pg_port == 6543


class TestDatabaseSsl:
    """PGSSL and environment decide the asyncpg ssl argument."""

    def test_development_default_off(self):
        """Unset PGSSL outside production means no SSL."""
        assert _settings(environment="development", pg_ssl=None).database_connect_args() == {"ssl": False}

    def test_production_default_on(self):
        """Unset PGSSL in production requires SSL."""
        assert _settings(environment="production", pg_ssl=None).database_connect_args() == {"ssl": "require"}

    def test_explicit_disable_in_production(self):
        """PGSSL=disable wins over production."""
        s = _settings(environment="production", pg_ssl="disable")
        assert s.database_connect_args() == {"ssl": False}

    def test_explicit_require(self):
        """PGSSL=require forces SSL in development."""
        s = _settings(environment="development", pg_ssl="require")
        assert s.database_connect_args() == {"ssl": "require"}

    def test_mode_is_case_insensitive(self, monkeypatch):
        """PGSSL=DISABLE is read as disable."""
        monkeypatch.setenv("PGSSL", "DISABLE")
        monkeypatch.setenv("NODE_ENV", "production")
        s = Settings(_env_file=None)
        assert s.pg_ssl == "disable"
        assert s.database_connect_args() == {"ssl": False}

    @pytest.mark.parametrize("environment, expected", [("production", "require"), ("development", False)])
    def test_unknown_mode_falls_back_to_environment(self, monkeypatch, environment, expected):
        """An unrecognised PGSSL value is treated as unset."""
        monkeypatch.setenv("PGSSL", "prefer")
        monkeypatch.setenv("NODE_ENV", environment)
        s = Settings(_env_file=None)
        assert s.pg_ssl is None
        assert s.database_connect_args() == {"ssl": expected}


class TestRedisUrl:
    """Redis URL assembly."""

    def test_plain(self):
        """TLS off gives a redis:// URL."""
        s = _settings(redis_url=None, redis_host="cache", redis_port=6380, redis_tls=False)
        assert s.resolved_redis_url() == "redis://cache:6380/0"

    def test_tls(self):
        """TLS on gives a rediss:// URL."""
        s = _settings(redis_url=None, redis_host="cache", redis_port=6379, redis_tls=True)
        assert s.resolved_redis_url() == "rediss://cache:6379/0"

    def test_explicit_url_wins(self):
        """REDIS_URL overrides host, port and TLS."""
        assert _settings(redis_url="redis://x:1/2").resolved_redis_url() == "redis://x:1/2"

    def test_deployment_defaults(self, monkeypatch):
        """With nothing set, Redis is host "redis" over TLS."""
        for name in ("REDIS_HOST", "REDIS_PORT", "REDIS_TLS", "FIBCALC_REDIS_URL"):
            monkeypatch.delenv(name, raising=False)
        assert Settings(_env_file=None).resolved_redis_url() == "rediss://redis:6379/0"

    def test_local_override(self, monkeypatch):
        """REDIS_HOST and REDIS_TLS switch to a local plain-text server."""
        monkeypatch.setenv("REDIS_HOST", "localhost")
        monkeypatch.setenv("REDIS_TLS", "false")
        assert Settings(_env_file=None).resolved_redis_url() == "redis://localhost:6379/0"


class TestPipelineDefaults:
    """Pipeline constants."""

    def test_defaults(self):
        """Key, channel, placeholder, limit and retry count defaults."""
        s = Settings(
            _env_file=None,
            max_index=40,
        )
        assert s.max_index == 40
        assert s.values_key == "values"
        assert s.insert_channel == "insert"
        assert s.placeholder == "Nothing yet!"
        assert s.startup_max_retries == 5
