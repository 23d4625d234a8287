"""Company repository - Database operations for companies"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from ...models import Company, Office
from ...models_work import Order, OrderItem, WorkOrder, WorkOrderItem


class CompanyRepository:
    """Repository for company database operations"""

    @staticmethod
    def get_companies(db: Session) -> list[Company]:
        return (
            db.query(Company)
            .filter(Company.deleted.is_(False))
            .order_by(Company.name)
            .all()
        )

    @staticmethod
    def get_company_by_id(db: Session, company_id: int) -> Optional[Company]:
        return (
            db.query(Company)
            .options(selectinload(Company.offices).selectinload(Office.addresses))
            .filter(Company.id == company_id, Company.deleted.is_(False))
            .first()
        )

    @staticmethod
    def get_company_by_quickbooks_id(db: Session, quickbooks_id: str) -> Optional[Company]:
        return db.query(Company).filter(Company.quickbooks_id == quickbooks_id).first()

    @staticmethod
    def create_company(db: Session, **company_data) -> Company:
        company = Company(**company_data)
        db.add(company)
        db.commit()
        db.refresh(company)
        return company

    @staticmethod
    def update_company(db: Session, company: Company, **updates) -> Company:
        for key, value in updates.items():
            if value is not None and hasattr(company, key):
                setattr(company, key, value)
        db.commit()
        db.refresh(company)
        return company

    @staticmethod
    def search_companies(db: Session, term: str, limit: int = 10) -> list[Company]:
        return (
            db.query(Company)
            .filter(
                Company.name.ilike(f"%{term}%"),
                Company.is_active.is_(True),
                Company.deleted.is_(False),
            )
            .order_by(Company.name)
            .limit(limit)
            .all()
        )

    @staticmethod
    def work_order_amounts_by_company(db: Session, excluded_statuses: list[str]) -> dict[int, float]:
        """Sum of work order item amounts per company, skipping work orders in `excluded_statuses`"""
        rows = (
            db.query(Office.company_id, func.coalesce(func.sum(WorkOrderItem.amount), 0))
            .join(WorkOrder, WorkOrder.office_id == Office.id)
            .join(WorkOrderItem, WorkOrderItem.work_order_id == WorkOrder.id)
            .filter(WorkOrder.status.notin_(excluded_statuses))
            .group_by(Office.company_id)
            .all()
        )
        return {company_id: float(total) for company_id, total in rows}

    @staticmethod
    def order_amounts_by_company(
        db: Session, statuses: list[str], include: bool
    ) -> dict[int, float]:
        """Sum of order item amounts per company for orders in (or not in) `statuses`"""
        status_filter = Order.status.in_(statuses) if include else Order.status.notin_(statuses)
        rows = (
            db.query(Office.company_id, func.coalesce(func.sum(OrderItem.amount), 0))
            .join(Order, Order.office_id == Office.id)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .filter(status_filter)
            .group_by(Office.company_id)
            .all()
        )
        return {company_id: float(total) for company_id, total in rows}

    @staticmethod
    def get_work_orders_for_company(db: Session, company_id: int) -> list[WorkOrder]:
        return (
            db.query(WorkOrder)
            .join(Office, WorkOrder.office_id == Office.id)
            .options(selectinload(WorkOrder.items))
            .filter(Office.company_id == company_id)
            .order_by(WorkOrder.work_order_number.desc())
            .all()
        )

    @staticmethod
    def get_orders_for_company(db: Session, company_id: int) -> list[Order]:
        return (
            db.query(Order)
            .join(Office, Order.office_id == Office.id)
            .options(selectinload(Order.items))
            .filter(Office.company_id == company_id)
            .order_by(Order.order_number.desc())
            .all()
        )
