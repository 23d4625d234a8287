"""
Walk-in counter setup
Usage: printshop-setup-walk-in

Ensures the "Walk-In Customers" company and its "Counter Service" office
exist. Safe to run repeatedly.
"""

import logging
import sys

from sqlalchemy.orm import Session

from ..database import Base, SessionLocal, engine
from ..models import Company, Office, Role, User
from ..statuses import RoleName

logger = logging.getLogger(__name__)

WALK_IN_COMPANY_NAME = "Walk-In Customers"
WALK_IN_COMPANY_QUICKBOOKS_ID = "WALK-IN-CUSTOMERS"
WALK_IN_OFFICE_NAME = "Counter Service"
WALK_IN_OFFICE_QUICKBOOKS_ID = "COUNTER-SERVICE"


class WalkInSetupError(Exception):
    pass


def find_admin_user(db: Session) -> User:
    admin = (
        db.query(User)
        .join(User.roles)
        .filter(Role.name == RoleName.ADMIN.value)
        .order_by(User.id)
        .first()
    )
    if admin is None:
        raise WalkInSetupError("No Admin user found. Create an Admin user before running this setup.")
    return admin


def setup_walk_in_office(db: Session) -> Office:
    admin = find_admin_user(db)

    company = db.query(Company).filter(Company.quickbooks_id == WALK_IN_COMPANY_QUICKBOOKS_ID).first()
    if company is None:
        company = Company(name=WALK_IN_COMPANY_NAME, quickbooks_id=WALK_IN_COMPANY_QUICKBOOKS_ID)
        db.add(company)
        db.flush()
        logger.info(f"🆕 Created company '{WALK_IN_COMPANY_NAME}'")

    office = db.query(Office).filter(Office.is_walk_in_office.is_(True)).first()
    if office is None:
        office = Office(
            name=WALK_IN_OFFICE_NAME,
            company_id=company.id,
            quickbooks_customer_id=WALK_IN_OFFICE_QUICKBOOKS_ID,
            is_walk_in_office=True,
            created_by_id=admin.id,
        )
        db.add(office)
        logger.info(f"🆕 Created office '{WALK_IN_OFFICE_NAME}'")
    else:
        logger.info(f"Walk-in office already configured: {office.name} ({office.id})")

    db.commit()
    db.refresh(office)
    return office


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        office = setup_walk_in_office(db)
    except WalkInSetupError as e:
        logger.error(f"❌ {e}")
        return 1
    finally:
        db.close()

    logger.info(f"✅ Walk-in office ready: {office.name} (id {office.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
