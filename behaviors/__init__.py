# behaviors/__init__.py
from .exceptions import InvalidArgumentError, InvalidConfigError
from .lifecycle import LifecyclePhase, ModelEvent
from .inherit_model import InheritModel

__all__ = [
     "InheritModel",
     "InvalidArgumentError",
     "InvalidConfigError",
     "LifecyclePhase",
     "ModelEvent",
]
