"""
Tests for database URL resolution from the environment.
"""
from sqlalchemy.engine import make_url

from database import build_database_url


def test_database_url_wins(monkeypatch):
     monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
     monkeypatch.setenv("DB_SERVER", "db.example.com")
     assert build_database_url() == "sqlite:///./other.db"


def test_mssql_credentials_are_escaped(monkeypatch):
     monkeypatch.delenv("DATABASE_URL", raising=False)
     monkeypatch.setenv("DB_SERVER", "db.example.com")
     monkeypatch.setenv("DB_USER", "admin@condoease")
     monkeypatch.setenv("DB_PASS", "p@ss/w:rd")
     monkeypatch.setenv("DB_NAME", "condoease")
     monkeypatch.delenv("DB_PORT", raising=False)

     url = make_url(build_database_url())
     assert url.drivername == "mssql+pymssql"
     assert url.host == "db.example.com"
     assert url.port == 1433
     assert url.database == "condoease"
     assert url.username == "admin@condoease"
     assert url.password == "p@ss/w:rd"


def test_sqlite_fallback(monkeypatch):
     monkeypatch.delenv("DATABASE_URL", raising=False)
     monkeypatch.delenv("DB_SERVER", raising=False)
     assert build_database_url() == "sqlite:///./condoease.db"
