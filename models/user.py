# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from .base import ActiveRecord, Base
from schemas.tenant import UserRules


class User(ActiveRecord, Base):
     """
     User model - login account shared by every role.
     Composed into Tenant through InheritModel, so a tenant and its account
     are created, validated and removed as one record.
     """
     __tablename__ = "users"
     __rules__ = UserRules

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     role = Column(String(50), nullable=False, default="tenant")  # admin, manager, owner, tenant
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
