# models/__init__.py
from .base import ActiveRecord, Base, LifecyclePhase, ModelEvent
from .user import User
from .tenant import Tenant
from .address import Address
from .property import Property

__all__ = [
     "ActiveRecord",
     "Base",
     "LifecyclePhase",
     "ModelEvent",
     "User",
     "Tenant",
     "Address",
     "Property",
]
