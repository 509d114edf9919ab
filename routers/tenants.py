# routers/tenants.py
"""
Tenant API routes.

A tenant and its user account are submitted as one form (or JSON body):
- `Tenant[...]` fields go to the tenant profile
- `User[...]` fields go to the composed user account
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_session
from schemas.tenant import TenantResponse, ValidationErrorResponse
from services.tenant_service import TenantService
from utils.request import RequestData, get_request_data

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


def _invalid(errors) -> JSONResponse:
     return JSONResponse(
          status_code=422,
          content=ValidationErrorResponse(errors=errors).model_dump(),
     )


def _save(db: Session, data: RequestData, tenant=None):
     try:
          return TenantService.save_from_request(db, data, tenant)
     except IntegrityError:
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail="A user with this email already exists"
          )


def _get_or_404(db: Session, tenant_id: int):
     try:
          return TenantService.get_tenant(db, tenant_id)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     responses={422: {"model": ValidationErrorResponse}},
     summary="Register a tenant with its user account"
)
def create_tenant(
     data: RequestData = Depends(get_request_data),
     db: Session = Depends(get_session)
):
     tenant, saved = _save(db, data)
     if not saved:
          return _invalid(tenant.errors)
     return TenantResponse.model_validate(tenant)


@router.get(
     "/{tenant_id}",
     response_model=TenantResponse,
     summary="Get a tenant by ID"
)
def get_tenant(tenant_id: int, db: Session = Depends(get_session)):
     return TenantResponse.model_validate(_get_or_404(db, tenant_id))


@router.put(
     "/{tenant_id}",
     response_model=TenantResponse,
     responses={422: {"model": ValidationErrorResponse}},
     summary="Update a tenant and its user account"
)
def update_tenant(
     tenant_id: int,
     data: RequestData = Depends(get_request_data),
     db: Session = Depends(get_session)
):
     tenant = _get_or_404(db, tenant_id)
     tenant, saved = _save(db, data, tenant)
     if not saved:
          return _invalid(tenant.errors)
     return TenantResponse.model_validate(tenant)


@router.delete(
     "/{tenant_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete a tenant and its user account"
)
def delete_tenant(tenant_id: int, db: Session = Depends(get_session)):
     _get_or_404(db, tenant_id)
     if not TenantService.remove(db, tenant_id):
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail=f"Tenant with ID {tenant_id} could not be deleted"
          )
