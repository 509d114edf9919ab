# behaviors/lifecycle.py
"""
Lifecycle phases of an active record and the event passed to their handlers.
"""
import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session


class LifecyclePhase(str, enum.Enum):
     """Points of a record's lifecycle that handlers can be registered against."""
     LOAD = "load"              # before own rules run
     VALIDATE = "validate"      # after own rules ran
     SAVE = "save"              # before insert/update
     DELETE = "delete"          # before delete


@dataclass
class ModelEvent:
     """Passed to every lifecycle handler; a handler may veto by returning False."""
     sender: Any
     phase: LifecyclePhase
     session: Optional[Session] = None
     is_valid: bool = True


@dataclass(frozen=True)
class Handler:
     name: str
     callback: Callable[[ModelEvent], Any]
