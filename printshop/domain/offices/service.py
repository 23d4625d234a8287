"""Office service - Business logic for offices and addresses"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Address, Company, Office, User
from .repository import AddressRepository, OfficeRepository, address_columns
from .schemas import AddressCreate, AddressUpdate, OfficeCreate, OfficeUpdate

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"


class OfficeService:
    """Service layer for office business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OfficeRepository()

    def get_offices(self) -> list[Office]:
        return self.repo.get_offices(self.db)

    def get_office(self, office_id: int) -> Office:
        office = self.repo.get_office_by_id(self.db, office_id)
        if not office:
            raise HTTPException(status_code=404, detail="Office not found")
        return office

    def get_offices_by_company(self, company_id: int) -> list[Office]:
        return self.repo.get_offices_by_company(self.db, company_id)

    def get_walk_in_office(self) -> Office:
        office = self.repo.get_walk_in_office(self.db)
        if not office:
            raise HTTPException(
                status_code=404,
                detail="Walk-in office not found. Run the walk-in setup script to configure it.",
            )
        return office

    def create_office(self, data: OfficeCreate, user: User) -> Office:
        company = self.db.query(Company).filter(Company.id == data.companyId).first()
        if not company or company.deleted:
            raise HTTPException(status_code=404, detail="Company not found")

        logger.info(f"📥 Creating office '{data.name}' for company {company.id}")
        office = Office(name=data.name, company_id=company.id, created_by_id=user.id)
        self.db.add(office)
        self.db.flush()
        for address in data.addresses:
            self.db.add(Address(office_id=office.id, **address_columns(address)))
        self.db.commit()

        logger.info(f"✅ Office created: {office.id}")
        return self.get_office(office.id)

    def update_office(self, office_id: int, data: OfficeUpdate) -> Office:
        office = self.get_office(office_id)
        if data.name is not None:
            office.name = data.name
        if data.isActive is not None:
            office.is_active = data.isActive

        for address in data.addresses:
            columns = address_columns(address)
            if address.id is None or str(address.id).startswith(TEMP_ID_PREFIX):
                self.db.add(Address(office_id=office.id, **columns))
                continue
            existing = AddressRepository.get_address_by_id(self.db, int(address.id))
            if not existing or existing.office_id != office.id:
                raise HTTPException(status_code=404, detail=f"Address {address.id} not found")
            for key, value in columns.items():
                setattr(existing, key, value)

        self.db.commit()
        return self.get_office(office.id)

    def delete_office(self, office_id: int) -> dict:
        office = self.get_office(office_id)
        self.db.delete(office)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=409, detail="Office still has work orders or orders attached"
            ) from e
        logger.info(f"✅ Office {office_id} deleted")
        return {"message": "Office deleted"}


class AddressService:
    """Service layer for address business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepository()

    def get_addresses(self) -> list[Address]:
        return self.repo.get_addresses(self.db)

    def get_address(self, address_id: int) -> Address:
        address = self.repo.get_address_by_id(self.db, address_id)
        if not address:
            raise HTTPException(status_code=404, detail="Address not found")
        return address

    def get_addresses_by_office(self, office_id: int) -> list[Address]:
        return self.repo.get_addresses_by_office(self.db, office_id)

    def create_address(self, data: AddressCreate) -> Address:
        if not self.db.query(Office).filter(Office.id == data.officeId).first():
            raise HTTPException(status_code=404, detail="Office not found")
        return self.repo.create_address(self.db, office_id=data.officeId, **address_columns(data))

    def update_address(self, address_id: int, data: AddressUpdate) -> Address:
        address = self.get_address(address_id)
        return self.repo.update_address(self.db, address, **address_columns(data))

    def soft_delete_address(self, address_id: int) -> Address:
        """Addresses stay referenced by shipping history, so they are flagged instead of removed"""
        address = self.get_address(address_id)
        address.deleted = True
        self.db.commit()
        self.db.refresh(address)
        return address

    def delete_address(self, address_id: int) -> dict:
        address = self.get_address(address_id)
        self.db.delete(address)
        self.db.commit()
        return {"message": "Address deleted"}
