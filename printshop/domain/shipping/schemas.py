"""Shipping schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...schemas import AddressResponse, ResponseModel
from ...statuses import ShippingMethod


class ShippingPickupInput(BaseModel):
    contactName: Optional[str] = None
    contactPhone: Optional[str] = None
    notes: Optional[str] = None
    pickupDate: Optional[datetime] = None
    pickupTime: Optional[str] = None


class ShippingPickupCreate(ShippingPickupInput):
    shippingInfoId: int


class ShippingInfoCreate(BaseModel):
    instructions: Optional[str] = None
    shippingOther: Optional[str] = None
    shippingDate: Optional[datetime] = None
    shippingMethod: ShippingMethod = ShippingMethod.OTHER
    shippingCost: Optional[float] = None
    shipToSameAsBillTo: bool = False
    addressId: Optional[int] = None
    officeId: Optional[int] = None
    trackingNumber: list[str] = []
    shippingNotes: Optional[str] = None
    pickup: Optional[ShippingPickupInput] = None


class ShippingInfoUpdate(BaseModel):
    instructions: Optional[str] = None
    shippingOther: Optional[str] = None
    shippingDate: Optional[datetime] = None
    shippingMethod: Optional[ShippingMethod] = None
    shippingCost: Optional[float] = None
    shipToSameAsBillTo: Optional[bool] = None
    addressId: Optional[int] = None
    officeId: Optional[int] = None
    trackingNumber: Optional[list[str]] = None
    shippingNotes: Optional[str] = None


class ShippingPickupResponse(ResponseModel):
    id: int
    shipping_info_id: int
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    pickup_date: Optional[datetime] = None
    pickup_time: Optional[str] = None


class ShippingInfoResponse(ResponseModel):
    id: int
    instructions: Optional[str] = None
    shipping_other: Optional[str] = None
    shipping_date: Optional[datetime] = None
    shipping_method: Optional[str] = None
    shipping_cost: Optional[float] = None
    ship_to_same_as_bill_to: bool = False
    address_id: Optional[int] = None
    office_id: Optional[int] = None
    tracking_number: Optional[list[str]] = None
    shipping_notes: Optional[str] = None
    address: Optional[AddressResponse] = None
    pickup: Optional[ShippingPickupResponse] = None
