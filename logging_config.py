# logging_config.py
"""
Logging setup for the API.

Levels come from the environment:
     LOG_LEVEL=DEBUG                  root level (default INFO)
     LOG_SQLALCHEMY=true              include SQLAlchemy engine logging
"""
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
     level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
     logging.basicConfig(
          level=getattr(logging, level_name, logging.INFO),
          format=LOG_FORMAT,
          stream=sys.stdout,
          force=True,
     )
     sql_level = logging.INFO if os.getenv("LOG_SQLALCHEMY", "false").lower() == "true" else logging.WARNING
     logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
