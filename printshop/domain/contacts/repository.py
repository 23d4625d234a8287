"""Contact repository - Database operations for contacts and walk-in customers"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Office, User, WalkInCustomer


class ContactRepository:
    """Repository for contact database operations"""

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_contacts_by_office(db: Session, office_id: int) -> list[User]:
        return (
            db.query(User)
            .join(User.offices)
            .filter(Office.id == office_id)
            .order_by(User.name)
            .all()
        )


class WalkInCustomerRepository:
    """Repository for walk-in customer database operations"""

    @staticmethod
    def get_customers(db: Session) -> list[WalkInCustomer]:
        return db.query(WalkInCustomer).order_by(WalkInCustomer.created_at.desc(), WalkInCustomer.id.desc()).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[WalkInCustomer]:
        return db.query(WalkInCustomer).filter(WalkInCustomer.id == customer_id).first()

    @staticmethod
    def create_customer(db: Session, **customer_data) -> WalkInCustomer:
        customer = WalkInCustomer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer
