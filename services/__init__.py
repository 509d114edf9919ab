# services/__init__.py
from .tenant_service import TenantService

__all__ = [
     "TenantService",
]
