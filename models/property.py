# models/property.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import object_session
from .base import ActiveRecord, Base
from .address import Address
from behaviors import InheritModel
from schemas.property import PropertyRules

DEFAULT_PROVINCE = "Metro Manila"


def _default_address(address: Address) -> None:
     address.province = DEFAULT_PROVINCE


class Property(ActiveRecord, Base):
     """
     Property model - represents a condo/apartment building.

     Address fields are posted flat next to the property's own fields
     (street=...&city=...). Addresses may be shared, so they are kept when a
     property is deleted.
     """
     __tablename__ = "properties"
     __rules__ = PropertyRules

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_name = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     units = Column(Integer, default=0, nullable=False)
     address_id = Column(Integer, nullable=True, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     address = InheritModel(
          Address,
          _default_address,
          simple_request=True,
          delete_with_owner=False,
     )

     def get_address(self):
          """Stored address of this property, if any."""
          session = object_session(self)
          if session is None or self.address_id is None:
               return None
          return session.get(Address, self.address_id)

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.property_name}')>"
