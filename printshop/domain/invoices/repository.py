"""Invoice repository - Database operations for invoices"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Office
from ...models_invoice import Invoice
from ...models_work import Order, OrderItem


class InvoiceRepository:
    """Repository for invoice database operations"""

    @staticmethod
    def _query(db: Session):
        return db.query(Invoice).options(
            joinedload(Invoice.order).joinedload(Order.office).joinedload(Office.company),
            selectinload(Invoice.items),
            selectinload(Invoice.payments),
        )

    @classmethod
    def get_invoices(cls, db: Session) -> list[Invoice]:
        return cls._query(db).order_by(Invoice.date_issued.desc(), Invoice.id.desc()).all()

    @classmethod
    def get_invoice_by_id(cls, db: Session, invoice_id: int) -> Optional[Invoice]:
        return cls._query(db).filter(Invoice.id == invoice_id).first()

    @classmethod
    def get_invoices_for_office(cls, db: Session, office_id: int) -> list[Invoice]:
        return (
            cls._query(db)
            .join(Invoice.order)
            .filter(Order.office_id == office_id)
            .order_by(Invoice.id)
            .all()
        )

    @staticmethod
    def get_order_for_invoicing(db: Session, order_id: int) -> Optional[Order]:
        return (
            db.query(Order)
            .options(
                joinedload(Order.office).joinedload(Office.company),
                selectinload(Order.payments),
                selectinload(Order.items).selectinload(OrderItem.stocks),
                selectinload(Order.items).selectinload(OrderItem.processing_options),
                selectinload(Order.items).selectinload(OrderItem.typesettings),
            )
            .filter(Order.id == order_id)
            .first()
        )
