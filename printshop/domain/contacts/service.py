"""Contact service - Business logic for contacts and walk-in customers"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Office, User, WalkInCustomer
from .repository import ContactRepository, WalkInCustomerRepository
from .schemas import ContactCreate, WalkInCustomerCreate

logger = logging.getLogger(__name__)


class ContactService:
    """Service layer for office contacts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContactRepository()

    def create_contact(self, data: ContactCreate) -> User:
        """Find or create the user by email and attach them to the office once"""
        office = self.db.query(Office).filter(Office.id == data.officeId).first()
        if not office:
            raise HTTPException(status_code=404, detail="Office not found")

        user = self.repo.get_user_by_email(self.db, data.email)
        if user:
            if not user.name:
                user.name = data.name
        else:
            logger.info(f"🆕 Creating contact {data.email}")
            user = User(name=data.name, email=data.email)
            self.db.add(user)

        if office not in user.offices:
            user.offices.append(office)

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"✅ Contact {user.id} linked to office {office.id}")
        return user

    def get_contacts_by_office(self, office_id: int) -> list[User]:
        return self.repo.get_contacts_by_office(self.db, office_id)


class WalkInCustomerService:
    """Service layer for walk-in customers"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WalkInCustomerRepository()

    def create_customer(self, data: WalkInCustomerCreate) -> WalkInCustomer:
        return self.repo.create_customer(self.db, name=data.name, email=data.email, phone=data.phone)

    def get_customer(self, customer_id: int) -> WalkInCustomer:
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Walk-in customer not found")
        return customer

    def get_customers(self) -> list[WalkInCustomer]:
        return self.repo.get_customers(self.db)
