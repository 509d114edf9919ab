# schemas/tenant.py
"""
Pydantic schemas for tenants and their user accounts.

The *Rules schemas validate model attributes (see ActiveRecord.__rules__);
the *Response schemas shape API output.
"""
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRules(BaseModel):
     """Validation rules for User attributes."""
     email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     role: str = Field(default="tenant", pattern=r"^(admin|manager|owner|tenant)$")


class TenantRules(BaseModel):
     """Validation rules for Tenant attributes."""
     contact_number: Optional[str] = Field(None, max_length=50)
     occupation_status: Optional[str] = Field(None, max_length=100)
     emergency_contact_name: Optional[str] = Field(None, max_length=200)
     emergency_contact_number: Optional[str] = Field(None, max_length=50)


class UserResponse(BaseModel):
     """User account as embedded in a tenant response."""
     id: int
     email: str
     first_name: str
     last_name: str
     role: str

     model_config = ConfigDict(from_attributes=True)


class TenantResponse(BaseModel):
     """Schema for tenant response, including the composed user account."""
     tenant_id: int
     user_id: int
     contact_number: Optional[str] = None
     occupation_status: Optional[str] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_number: Optional[str] = None
     status: str
     created_at: Optional[datetime] = None
     user: UserResponse

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "tenant_id": 1,
                    "user_id": 7,
                    "contact_number": "09171234567",
                    "occupation_status": "employed",
                    "status": "pending",
                    "user": {
                         "id": 7,
                         "email": "ana@example.com",
                         "first_name": "Ana",
                         "last_name": "Reyes",
                         "role": "tenant",
                    },
               }
          }
     )


class ValidationErrorResponse(BaseModel):
     """Field errors of a tenant and its user account."""
     errors: Dict[str, List[str]] = Field(..., description="Messages per attribute")
