"""Order repository - Database operations for orders and their children"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Office
from ...models_work import (
    Order,
    OrderItem,
    OrderItemStock,
    OrderNote,
    OrderPayment,
    ShippingInfo,
    Typesetting,
    TypesettingProof,
)


def _item_options(path):
    """Loader options for everything hanging off an order item"""
    return [
        path.selectinload(OrderItem.artwork),
        path.selectinload(OrderItem.stocks).joinedload(OrderItemStock.paper_product),
        path.selectinload(OrderItem.processing_options),
        path.selectinload(OrderItem.typesettings).selectinload(Typesetting.options),
        path.selectinload(OrderItem.typesettings)
        .selectinload(Typesetting.proofs)
        .selectinload(TypesettingProof.artwork),
    ]


def _header_options():
    return [
        joinedload(Order.office).joinedload(Office.company),
        joinedload(Order.contact_person),
        joinedload(Order.walk_in_customer),
    ]


class OrderRepository:
    """Repository for order database operations"""

    @staticmethod
    def get_orders(db: Session) -> list[Order]:
        return (
            db.query(Order)
            .options(*_header_options(), selectinload(Order.items), selectinload(Order.payments))
            .order_by(Order.order_number.desc())
            .all()
        )

    @staticmethod
    def get_order_by_id(db: Session, order_id: int) -> Optional[Order]:
        return (
            db.query(Order)
            .options(
                *_header_options(),
                joinedload(Order.shipping_info).joinedload(ShippingInfo.pickup),
                selectinload(Order.order_notes).joinedload(OrderNote.created_by),
                selectinload(Order.payments),
                *_item_options(selectinload(Order.items)),
            )
            .filter(Order.id == order_id)
            .first()
        )

    @staticmethod
    def get_open_orders(db: Session, excluded_statuses: list[str]) -> list[Order]:
        return (
            db.query(Order)
            .options(*_header_options(), selectinload(Order.items))
            .filter(Order.status.notin_(excluded_statuses))
            .order_by(Order.order_number)
            .all()
        )


class OrderItemRepository:
    """Repository for order item database operations"""

    @staticmethod
    def _query(db: Session):
        return db.query(OrderItem).options(
            selectinload(OrderItem.artwork),
            selectinload(OrderItem.stocks).joinedload(OrderItemStock.paper_product),
            selectinload(OrderItem.processing_options),
            selectinload(OrderItem.typesettings).selectinload(Typesetting.options),
            selectinload(OrderItem.typesettings)
            .selectinload(Typesetting.proofs)
            .selectinload(TypesettingProof.artwork),
        )

    @classmethod
    def get_items(cls, db: Session) -> list[OrderItem]:
        return cls._query(db).order_by(OrderItem.id.desc()).all()

    @classmethod
    def get_item_by_id(cls, db: Session, item_id: int) -> Optional[OrderItem]:
        return cls._query(db).filter(OrderItem.id == item_id).first()

    @classmethod
    def get_items_by_order(cls, db: Session, order_id: int) -> list[OrderItem]:
        return cls._query(db).filter(OrderItem.order_id == order_id).order_by(OrderItem.id).all()

    @staticmethod
    def get_open_items(db: Session, excluded_statuses: list[str]) -> list[OrderItem]:
        return (
            db.query(OrderItem)
            .options(
                joinedload(OrderItem.order).joinedload(Order.office).joinedload(Office.company),
                joinedload(OrderItem.order).selectinload(Order.items),
            )
            .filter(OrderItem.status.notin_(excluded_statuses))
            .order_by(OrderItem.expected_date.is_(None), OrderItem.expected_date, OrderItem.id)
            .all()
        )


class OrderNoteRepository:
    """Repository for order notes"""

    @staticmethod
    def get_note_by_id(db: Session, note_id: int) -> Optional[OrderNote]:
        return (
            db.query(OrderNote)
            .options(joinedload(OrderNote.created_by))
            .filter(OrderNote.id == note_id)
            .first()
        )

    @staticmethod
    def get_notes_by_order(db: Session, order_id: int) -> list[OrderNote]:
        return (
            db.query(OrderNote)
            .options(joinedload(OrderNote.created_by))
            .filter(OrderNote.order_id == order_id)
            .order_by(OrderNote.created_at, OrderNote.id)
            .all()
        )


class OrderPaymentRepository:
    """Repository for order payments"""

    @staticmethod
    def get_payments_by_order(db: Session, order_id: int) -> list[OrderPayment]:
        return (
            db.query(OrderPayment)
            .filter(OrderPayment.order_id == order_id)
            .order_by(OrderPayment.payment_date, OrderPayment.id)
            .all()
        )
