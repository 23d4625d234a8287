"""Shipping service - Business logic for shipping info and pickups"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_work import ShippingInfo, ShippingPickup
from .schemas import (
    ShippingInfoCreate,
    ShippingInfoUpdate,
    ShippingPickupCreate,
    ShippingPickupInput,
)

logger = logging.getLogger(__name__)

SHIPPING_FIELDS = {
    "instructions": "instructions",
    "shippingOther": "shipping_other",
    "shippingDate": "shipping_date",
    "shippingMethod": "shipping_method",
    "shippingCost": "shipping_cost",
    "shipToSameAsBillTo": "ship_to_same_as_bill_to",
    "addressId": "address_id",
    "officeId": "office_id",
    "trackingNumber": "tracking_number",
    "shippingNotes": "shipping_notes",
}

PICKUP_FIELDS = {
    "contactName": "contact_name",
    "contactPhone": "contact_phone",
    "notes": "notes",
    "pickupDate": "pickup_date",
    "pickupTime": "pickup_time",
}


def apply_shipping_fields(info: ShippingInfo, values: dict) -> None:
    """Copy camelCase form values onto a ShippingInfo row"""
    for key, column in SHIPPING_FIELDS.items():
        if key in values:
            value = values[key]
            setattr(info, column, value.value if hasattr(value, "value") else value)


def replace_pickup(
    db: Session, info: ShippingInfo, pickup: Optional[ShippingPickupInput], user: Optional[User]
) -> None:
    """Swap the pickup for a new one, or drop it when none is given"""
    if info.pickup is not None:
        db.delete(info.pickup)
        info.pickup = None
        db.flush()
    if pickup is None:
        return
    info.pickup = ShippingPickup(
        created_by_id=user.id if user else None,
        **{column: getattr(pickup, key) for key, column in PICKUP_FIELDS.items()},
    )


class ShippingService:
    """Service layer for shipping info and pickups"""

    def __init__(self, db: Session):
        self.db = db

    def get_all_shipping_info(self) -> list[ShippingInfo]:
        return self.db.query(ShippingInfo).order_by(ShippingInfo.id.desc()).all()

    def get_shipping_info(self, info_id: int) -> ShippingInfo:
        info = self.db.query(ShippingInfo).filter(ShippingInfo.id == info_id).first()
        if not info:
            raise HTTPException(status_code=404, detail="Shipping info not found")
        return info

    def create_shipping_info(self, data: ShippingInfoCreate, user: User) -> ShippingInfo:
        info = ShippingInfo(created_by_id=user.id)
        apply_shipping_fields(info, data.model_dump(exclude={"pickup"}))
        self.db.add(info)
        self.db.flush()
        if data.pickup:
            replace_pickup(self.db, info, data.pickup, user)
        self.db.commit()
        self.db.refresh(info)
        logger.info(f"✅ Shipping info created: {info.id}")
        return info

    def update_shipping_info(self, info_id: int, data: ShippingInfoUpdate) -> ShippingInfo:
        info = self.get_shipping_info(info_id)
        apply_shipping_fields(info, data.model_dump(exclude_unset=True))
        self.db.commit()
        self.db.refresh(info)
        return info

    def delete_shipping_info(self, info_id: int) -> dict:
        info = self.get_shipping_info(info_id)
        self.db.delete(info)
        self.db.commit()
        return {"message": "Shipping info deleted"}

    def get_pickups(self) -> list[ShippingPickup]:
        return self.db.query(ShippingPickup).order_by(ShippingPickup.id.desc()).all()

    def get_pickup(self, pickup_id: int) -> ShippingPickup:
        pickup = self.db.query(ShippingPickup).filter(ShippingPickup.id == pickup_id).first()
        if not pickup:
            raise HTTPException(status_code=404, detail="Shipping pickup not found")
        return pickup

    def create_pickup(self, data: ShippingPickupCreate, user: User) -> ShippingPickup:
        info = self.get_shipping_info(data.shippingInfoId)
        replace_pickup(self.db, info, data, user)
        self.db.commit()
        self.db.refresh(info)
        return info.pickup

    def update_pickup(self, pickup_id: int, data: ShippingPickupInput) -> ShippingPickup:
        pickup = self.get_pickup(pickup_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(pickup, PICKUP_FIELDS[key], value)
        self.db.commit()
        self.db.refresh(pickup)
        return pickup

    def delete_pickup(self, pickup_id: int) -> dict:
        pickup = self.get_pickup(pickup_id)
        self.db.delete(pickup)
        self.db.commit()
        return {"message": "Shipping pickup deleted"}
