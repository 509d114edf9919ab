# routers/__init__.py
from .tenants import router as tenants_router

__all__ = [
     "tenants_router",
]
