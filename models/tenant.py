# models/tenant.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import ActiveRecord, Base
from .user import User
from behaviors import InheritModel
from schemas.tenant import TenantRules


class Tenant(ActiveRecord, Base):
     """
     Tenant model - profile of a user with role='tenant'.

     The user account is inherited: `tenant.user` proxies to the linked User,
     request fields under `User[...]` are loaded into it, its validation errors
     show up on the tenant, and it is deleted with the tenant.
     """
     __tablename__ = "tenants"
     __rules__ = TenantRules

     tenant_id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

     contact_number = Column(String(50), nullable=True)
     occupation_status = Column(String(100), nullable=True)

     # Emergency contact
     emergency_contact_name = Column(String(200), nullable=True)
     emergency_contact_number = Column(String(50), nullable=True)

     # Status
     status = Column(String(50), default="pending", nullable=False)  # pending, approved, denied

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     user_record = relationship("User")

     user = InheritModel(User, {"role": "tenant"}, relation="user_record")

     def __repr__(self):
          return f"<Tenant(tenant_id={self.tenant_id}, user_id={self.user_id})>"
