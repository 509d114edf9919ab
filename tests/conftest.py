"""
Pytest configuration and fixtures
"""
import os

# Keep the application off the local SQLite file
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("INIT_DB", "false")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base


@pytest.fixture(scope="function")
def engine():
     """In-memory SQLite engine with foreign keys enforced and a fresh schema."""
     engine = create_engine(
          "sqlite://",
          connect_args={"check_same_thread": False},
          poolclass=StaticPool,
     )

     @event.listens_for(engine, "connect")
     def _enable_foreign_keys(dbapi_connection, connection_record):
          cursor = dbapi_connection.cursor()
          cursor.execute("PRAGMA foreign_keys=ON")
          cursor.close()

     Base.metadata.create_all(bind=engine)
     yield engine
     engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
     return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db(session_factory) -> Session:
     """Create a database session for testing"""
     session = session_factory()
     try:
          yield session
     finally:
          session.rollback()
          session.close()
