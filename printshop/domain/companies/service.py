"""Company service - Business logic for company operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Company
from ...statuses import OrderStatus, WorkOrderStatus
from .repository import CompanyRepository
from .schemas import CompanyCreate, CompanyUpdate

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 3


def _document_totals(document, number: int) -> dict:
    return {
        "id": document.id,
        "number": number,
        "status": document.status,
        "office_id": document.office_id,
        "total_amount": round(sum(item.amount or 0 for item in document.items), 2),
        "total_cost": round(sum(item.cost or 0 for item in document.items), 2),
        "created_at": document.created_at,
    }


class CompanyService:
    """Service layer for company business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CompanyRepository()

    def get_companies(self) -> list[Company]:
        return self.repo.get_companies(self.db)

    def get_company(self, company_id: int) -> Company:
        company = self.repo.get_company_by_id(self.db, company_id)
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")
        return company

    def _ensure_quickbooks_id_free(self, quickbooks_id: str, company_id: int = None) -> None:
        existing = self.repo.get_company_by_quickbooks_id(self.db, quickbooks_id)
        if existing and existing.id != company_id:
            logger.warning(f"⚠️ QuickBooks id {quickbooks_id} already used by company {existing.id}")
            raise HTTPException(
                status_code=409,
                detail=f"A company with QuickBooks ID {quickbooks_id} already exists",
            )

    def create_company(self, data: CompanyCreate) -> Company:
        logger.info(f"📥 Creating company: {data.name}")
        if data.quickbooksId:
            self._ensure_quickbooks_id_free(data.quickbooksId)

        try:
            company = self.repo.create_company(
                self.db, name=data.name, quickbooks_id=data.quickbooksId, is_active=data.isActive
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="Company already exists") from e

        logger.info(f"✅ Company created: {company.id}")
        return company

    def update_company(self, company_id: int, data: CompanyUpdate) -> Company:
        company = self.get_company(company_id)
        if data.quickbooksId:
            self._ensure_quickbooks_id_free(data.quickbooksId, company.id)

        updates = {
            "name": data.name,
            "quickbooks_id": data.quickbooksId,
            "is_active": data.isActive,
        }
        return self.repo.update_company(self.db, company, **updates)

    def toggle_active(self, company_id: int) -> Company:
        company = self.get_company(company_id)
        company.is_active = not company.is_active
        self.db.commit()
        self.db.refresh(company)
        logger.info(f"✅ Company {company.id} active={company.is_active}")
        return company

    def delete_company(self, company_id: int) -> dict:
        """Soft delete: the company disappears from listings but keeps its history"""
        company = self.get_company(company_id)
        company.deleted = True
        company.is_active = False
        self.db.commit()
        logger.info(f"✅ Company {company.id} deleted")
        return {"message": "Company deleted"}

    def dashboard(self) -> list[dict]:
        """Per-company pending and completed amounts"""
        work_order_pending = self.repo.work_order_amounts_by_company(
            self.db, [WorkOrderStatus.APPROVED.value, WorkOrderStatus.CANCELLED.value]
        )
        closed = [OrderStatus.PAYMENT_RECEIVED.value, OrderStatus.COMPLETED.value]
        order_pending = self.repo.order_amounts_by_company(
            self.db, closed + [OrderStatus.CANCELLED.value], include=False
        )
        order_completed = self.repo.order_amounts_by_company(self.db, closed, include=True)

        return [
            {
                "id": company.id,
                "name": company.name,
                "quickbooks_id": company.quickbooks_id,
                "sync_token": company.sync_token or "0",
                "is_active": company.is_active,
                "work_order_total_pending": round(work_order_pending.get(company.id, 0), 2),
                "order_total_pending": round(order_pending.get(company.id, 0), 2),
                "order_total_completed": round(order_completed.get(company.id, 0), 2),
            }
            for company in self.repo.get_companies(self.db)
        ]

    def get_company_with_financials(self, company_id: int) -> dict:
        company = self.get_company(company_id)
        work_orders = self.repo.get_work_orders_for_company(self.db, company.id)
        orders = self.repo.get_orders_for_company(self.db, company.id)
        return {
            "id": company.id,
            "name": company.name,
            "quickbooks_id": company.quickbooks_id,
            "sync_token": company.sync_token,
            "is_active": company.is_active,
            "deleted": company.deleted,
            "created_at": company.created_at,
            "updated_at": company.updated_at,
            "offices": company.offices,
            "work_orders": [_document_totals(wo, wo.work_order_number) for wo in work_orders],
            "orders": [_document_totals(o, o.order_number) for o in orders],
        }

    def search(self, term: str) -> list[Company]:
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            return []
        return self.repo.search_companies(self.db, term)
