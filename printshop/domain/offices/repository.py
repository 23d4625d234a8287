"""Office repository - Database operations for offices and addresses"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Address, Office


def address_columns(data) -> dict:
    """Map an address form onto Address columns"""
    return {
        "name": data.name,
        "line1": data.line1,
        "line2": data.line2,
        "line3": data.line3,
        "line4": data.line4,
        "city": data.city,
        "state": data.state,
        "zipcode": data.zipcode,
        "country": data.country,
        "telephone_number": data.telephoneNumber,
        "address_type": data.addressType.value if data.addressType else None,
    }


class OfficeRepository:
    """Repository for office database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(Office).options(
            joinedload(Office.company),
            selectinload(Office.addresses),
            selectinload(Office.contacts),
        )

    @staticmethod
    def get_offices(db: Session) -> list[Office]:
        return (
            OfficeRepository._with_relations(db)
            .filter(Office.deleted.is_(False))
            .order_by(Office.name)
            .all()
        )

    @staticmethod
    def get_office_by_id(db: Session, office_id: int) -> Optional[Office]:
        return OfficeRepository._with_relations(db).filter(Office.id == office_id).first()

    @staticmethod
    def get_offices_by_company(db: Session, company_id: int) -> list[Office]:
        return (
            OfficeRepository._with_relations(db)
            .filter(Office.company_id == company_id, Office.deleted.is_(False))
            .order_by(Office.name)
            .all()
        )

    @staticmethod
    def get_walk_in_office(db: Session) -> Optional[Office]:
        return (
            OfficeRepository._with_relations(db)
            .filter(Office.is_walk_in_office.is_(True), Office.deleted.is_(False))
            .first()
        )

    @staticmethod
    def get_office_by_quickbooks_customer_id(db: Session, customer_id: str) -> Optional[Office]:
        return db.query(Office).filter(Office.quickbooks_customer_id == customer_id).first()


class AddressRepository:
    """Repository for address database operations"""

    @staticmethod
    def get_addresses(db: Session) -> list[Address]:
        return db.query(Address).filter(Address.deleted.is_(False)).order_by(Address.id).all()

    @staticmethod
    def get_address_by_id(db: Session, address_id: int) -> Optional[Address]:
        return db.query(Address).filter(Address.id == address_id).first()

    @staticmethod
    def get_addresses_by_office(db: Session, office_id: int) -> list[Address]:
        return (
            db.query(Address)
            .filter(Address.office_id == office_id, Address.deleted.is_(False))
            .order_by(Address.id)
            .all()
        )

    @staticmethod
    def create_address(db: Session, **address_data) -> Address:
        address = Address(**address_data)
        db.add(address)
        db.commit()
        db.refresh(address)
        return address

    @staticmethod
    def update_address(db: Session, address: Address, **updates) -> Address:
        for key, value in updates.items():
            if value is not None and hasattr(address, key):
                setattr(address, key, value)
        db.commit()
        db.refresh(address)
        return address
