# schemas/__init__.py
from .tenant import (
     UserRules,
     TenantRules,
     UserResponse,
     TenantResponse,
     ValidationErrorResponse,
)
from .property import AddressRules, PropertyRules

__all__ = [
     "UserRules",
     "TenantRules",
     "UserResponse",
     "TenantResponse",
     "ValidationErrorResponse",
     "AddressRules",
     "PropertyRules",
]
