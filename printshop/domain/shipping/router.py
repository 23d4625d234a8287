"""Shipping router - FastAPI endpoints for shipping info and pickups"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    ShippingInfoCreate,
    ShippingInfoResponse,
    ShippingInfoUpdate,
    ShippingPickupCreate,
    ShippingPickupInput,
    ShippingPickupResponse,
)
from .service import ShippingService

router = APIRouter(prefix="/shipping-info", tags=["Shipping"])
pickups_router = APIRouter(prefix="/shipping-pickups", tags=["Shipping"])


def get_shipping_service(db: Session = Depends(get_db)) -> ShippingService:
    """Dependency injection for ShippingService"""
    return ShippingService(db)


# ============================================================================
# SHIPPING INFO
# ============================================================================


@router.get("", response_model=list[ShippingInfoResponse])
async def get_all_shipping_info(
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.get_all_shipping_info()


@router.get("/{info_id}", response_model=ShippingInfoResponse)
async def get_shipping_info(
    info_id: int,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.get_shipping_info(info_id)


@router.post("", response_model=ShippingInfoResponse, status_code=201)
async def create_shipping_info(
    data: ShippingInfoCreate,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.create_shipping_info(data, current_user)


@router.put("/{info_id}", response_model=ShippingInfoResponse)
async def update_shipping_info(
    info_id: int,
    data: ShippingInfoUpdate,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.update_shipping_info(info_id, data)


@router.delete("/{info_id}")
async def delete_shipping_info(
    info_id: int,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.delete_shipping_info(info_id)


# ============================================================================
# PICKUPS
# ============================================================================


@pickups_router.get("", response_model=list[ShippingPickupResponse])
async def get_pickups(
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.get_pickups()


@pickups_router.get("/{pickup_id}", response_model=ShippingPickupResponse)
async def get_pickup(
    pickup_id: int,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.get_pickup(pickup_id)


@pickups_router.post("", response_model=ShippingPickupResponse, status_code=201)
async def create_pickup(
    data: ShippingPickupCreate,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    """Attach a pickup to shipping info, replacing any existing one"""
    return service.create_pickup(data, current_user)


@pickups_router.put("/{pickup_id}", response_model=ShippingPickupResponse)
async def update_pickup(
    pickup_id: int,
    data: ShippingPickupInput,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.update_pickup(pickup_id, data)


@pickups_router.delete("/{pickup_id}")
async def delete_pickup(
    pickup_id: int,
    current_user: User = Depends(get_current_user),
    service: ShippingService = Depends(get_shipping_service),
):
    return service.delete_pickup(pickup_id)
