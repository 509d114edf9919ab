# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (DATABASE_URL, Azure SQL via DB_SERVER, or local SQLite)
- Session factory for dependency injection
- Connection utilities

A request's composed records (owner and dependent) are written through one
session, so they are committed or rolled back together.

Usage:
     from database import get_session, engine

     # In FastAPI routes:
     @app.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
"""
import logging
import os
from contextlib import contextmanager
from typing import Generator
from urllib.parse import quote_plus

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def build_database_url() -> str:
     """
     Resolve the database URL from the environment.

     DATABASE_URL wins; otherwise DB_SERVER/DB_USER/DB_PASS/DB_NAME build an
     MS SQL Server URL (pymssql); otherwise a local SQLite file is used.
     """
     url = os.getenv("DATABASE_URL")
     if url:
          return url
     server = os.getenv("DB_SERVER")
     if server:
          port = os.getenv("DB_PORT", "1433")
          # Credentials may contain '@' or '/'
          safe_user = quote_plus(os.getenv("DB_USER") or "")
          safe_pass = quote_plus(os.getenv("DB_PASS") or "")
          return (
               f"mssql+pymssql://{safe_user}:{safe_pass}"
               f"@{server}:{port}/{os.getenv('DB_NAME')}"
          )
     return "sqlite:///./condoease.db"


DATABASE_URL = build_database_url()

_engine_options = {
     "echo": os.getenv("SQL_ECHO", "false").lower() == "true",  # Log SQL if SQL_ECHO=true
}
if DATABASE_URL.startswith("sqlite"):
     _engine_options["connect_args"] = {"check_same_thread": False}
else:
     _engine_options.update(
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
     )

# Create SQLAlchemy engine
engine = create_engine(DATABASE_URL, **_engine_options)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
     """
     Context manager for database sessions (for use outside FastAPI routes).

     Usage:
          with get_session_context() as db:
               tenant.save(db)

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db() -> None:
     """
     Initialize database tables.

     Creates all tables defined in the models if they don't exist.
     For production, use Alembic migrations instead.
     """
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection() -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except SQLAlchemyError as e:
          logger.error("Database connection failed: %s", e)
          return False
