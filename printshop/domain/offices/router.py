"""Office router - FastAPI endpoints for offices and addresses"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_permission
from ...database import get_db
from ...models import User
from ...schemas import AddressResponse
from .schemas import (
    AddressCreate,
    AddressUpdate,
    OfficeCreate,
    OfficeDetailResponse,
    OfficeResponse,
    OfficeUpdate,
)
from .service import AddressService, OfficeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/offices", tags=["Offices"])
addresses_router = APIRouter(prefix="/addresses", tags=["Addresses"])


def get_office_service(db: Session = Depends(get_db)) -> OfficeService:
    """Dependency injection for OfficeService"""
    return OfficeService(db)


def get_address_service(db: Session = Depends(get_db)) -> AddressService:
    """Dependency injection for AddressService"""
    return AddressService(db)


# ============================================================================
# OFFICES
# ============================================================================


@router.get("", response_model=list[OfficeResponse])
async def get_offices(
    current_user: User = Depends(require_permission("office_read")),
    service: OfficeService = Depends(get_office_service),
):
    """List all offices (Admin or office_read)"""
    return service.get_offices()


@router.get("/walk-in", response_model=OfficeResponse)
async def get_walk_in_office(
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    return service.get_walk_in_office()


@router.get("/company/{company_id}", response_model=list[OfficeResponse])
async def get_offices_by_company(
    company_id: int,
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    return service.get_offices_by_company(company_id)


@router.get("/{office_id}", response_model=OfficeDetailResponse)
async def get_office(
    office_id: int,
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    return service.get_office(office_id)


@router.post("", response_model=OfficeResponse, status_code=201)
async def create_office(
    data: OfficeCreate,
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    return service.create_office(data, current_user)


@router.put("/{office_id}", response_model=OfficeResponse)
async def update_office(
    office_id: int,
    data: OfficeUpdate,
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    """Update office fields; addresses with 'temp-' ids are created, others updated"""
    return service.update_office(office_id, data)


@router.delete("/{office_id}")
async def delete_office(
    office_id: int,
    current_user: User = Depends(get_current_user),
    service: OfficeService = Depends(get_office_service),
):
    return service.delete_office(office_id)


@router.delete("/addresses/{address_id}", response_model=AddressResponse)
async def delete_office_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    """Soft delete an address from an office"""
    return service.soft_delete_address(address_id)


# ============================================================================
# ADDRESSES
# ============================================================================


@addresses_router.get("", response_model=list[AddressResponse])
async def get_addresses(
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.get_addresses()


@addresses_router.get("/office/{office_id}", response_model=list[AddressResponse])
async def get_addresses_by_office(
    office_id: int,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.get_addresses_by_office(office_id)


@addresses_router.get("/{address_id}", response_model=AddressResponse)
async def get_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.get_address(address_id)


@addresses_router.post("", response_model=AddressResponse, status_code=201)
async def create_address(
    data: AddressCreate,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.create_address(data)


@addresses_router.put("/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: int,
    data: AddressUpdate,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.update_address(address_id, data)


@addresses_router.delete("/{address_id}")
async def delete_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return service.delete_address(address_id)
