# schemas/property.py
"""
Validation rules for properties and their addresses.
"""
from typing import Optional
from pydantic import BaseModel, Field


class AddressRules(BaseModel):
     street: Optional[str] = Field(None, max_length=255)
     barangay: Optional[str] = Field(None, max_length=100)
     city: str = Field(..., min_length=1, max_length=100)
     province: Optional[str] = Field(None, max_length=100)


class PropertyRules(BaseModel):
     property_name: str = Field(..., min_length=1, max_length=255)
     units: int = Field(default=0, ge=0)
     description: Optional[str] = None
