# models/address.py
from sqlalchemy import Column, Integer, String
from .base import ActiveRecord, Base
from schemas.property import AddressRules


class Address(ActiveRecord, Base):
     """Street address, shared by properties."""
     __tablename__ = "addresses"
     __rules__ = AddressRules

     id = Column(Integer, primary_key=True, autoincrement=True)
     street = Column(String(255), nullable=True)
     barangay = Column(String(100), nullable=True)
     city = Column(String(100), nullable=False)
     province = Column(String(100), nullable=True)

     def __repr__(self):
          return f"<Address(id={self.id}, city='{self.city}')>"
