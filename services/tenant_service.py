# services/tenant_service.py
"""
Tenant Service - business logic for tenants and their user accounts.

A tenant is registered from one request carrying the fields of both records:

     Tenant[contact_number]=0917...&User[email]=ana@example.com&User[first_name]=Ana

The user account is composed into the tenant (see Tenant.user), so it is
loaded, validated, saved and deleted through the tenant alone.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from models import Tenant
from utils.request import RequestData, bind_request

logger = logging.getLogger(__name__)


class TenantService:
     """Service class for tenant-related business logic."""

     @staticmethod
     def get_tenant(db: Session, tenant_id: int) -> Tenant:
          """
          Raises:
               ValueError: If the tenant doesn't exist
          """
          tenant = db.get(Tenant, tenant_id)
          if tenant is None:
               raise ValueError(f"Tenant with ID {tenant_id} not found")
          return tenant

     @staticmethod
     def save_from_request(
          db: Session,
          data: RequestData,
          tenant: Optional[Tenant] = None
     ) -> Tuple[Tenant, bool]:
          """
          Create or update a tenant and its user account from request data.

          Args:
               db: SQLAlchemy database session
               data: parsed request parameters
               tenant: existing tenant to update (a new one is created if None)

          Returns:
               (tenant, saved) - when saved is False, tenant.errors holds the
               field errors of both the tenant and its user account
          """
          tenant = tenant or Tenant()
          with bind_request(data):
               tenant.load(data.post() or data.get())
               saved = tenant.save(db)
          if saved:
               logger.info("Saved tenant %s with user %s", tenant.tenant_id, tenant.user_id)
          else:
               # Nothing from a rejected request may be committed
               db.rollback()
          return tenant, saved

     @staticmethod
     def remove(db: Session, tenant_id: int) -> bool:
          """Delete a tenant together with its user account."""
          tenant = TenantService.get_tenant(db, tenant_id)
          deleted = tenant.delete(db)
          if deleted:
               logger.info("Deleted tenant %s", tenant_id)
          return deleted
