"""Work order repository - Database operations for work orders, items and notes"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Office
from ...models_work import (
    ShippingInfo,
    Typesetting,
    TypesettingProof,
    WorkOrder,
    WorkOrderItem,
    WorkOrderItemStock,
    WorkOrderNote,
)


def _item_loader(path):
    return [
        path.selectinload(WorkOrderItem.artwork),
        path.selectinload(WorkOrderItem.stocks).joinedload(WorkOrderItemStock.paper_product),
        path.selectinload(WorkOrderItem.processing_options),
        path.selectinload(WorkOrderItem.typesettings).selectinload(Typesetting.options),
        path.selectinload(WorkOrderItem.typesettings)
        .selectinload(Typesetting.proofs)
        .selectinload(TypesettingProof.artwork),
    ]


class WorkOrderRepository:
    """Repository for work order database operations"""

    @staticmethod
    def get_work_orders(db: Session) -> list[WorkOrder]:
        return (
            db.query(WorkOrder)
            .options(
                joinedload(WorkOrder.office).joinedload(Office.company),
                joinedload(WorkOrder.contact_person),
            )
            .order_by(WorkOrder.work_order_number.desc())
            .all()
        )

    @staticmethod
    def get_work_order_by_id(db: Session, work_order_id: int) -> Optional[WorkOrder]:
        return (
            db.query(WorkOrder)
            .options(
                joinedload(WorkOrder.office).joinedload(Office.company),
                joinedload(WorkOrder.contact_person),
                joinedload(WorkOrder.shipping_info).joinedload(ShippingInfo.pickup),
                selectinload(WorkOrder.notes).joinedload(WorkOrderNote.created_by),
                *_item_loader(selectinload(WorkOrder.items)),
            )
            .filter(WorkOrder.id == work_order_id)
            .first()
        )

    @staticmethod
    def get_open_work_orders(db: Session, excluded_statuses: list[str]) -> list[WorkOrder]:
        return (
            db.query(WorkOrder)
            .options(
                joinedload(WorkOrder.office).joinedload(Office.company),
                selectinload(WorkOrder.items),
            )
            .filter(WorkOrder.status.notin_(excluded_statuses))
            .order_by(WorkOrder.expected_date.is_(None), WorkOrder.expected_date, WorkOrder.id)
            .all()
        )


class WorkOrderItemRepository:
    """Repository for work order item database operations"""

    @staticmethod
    def _query(db: Session):
        query = db.query(WorkOrderItem)
        return query.options(
            selectinload(WorkOrderItem.artwork),
            selectinload(WorkOrderItem.stocks).joinedload(WorkOrderItemStock.paper_product),
            selectinload(WorkOrderItem.processing_options),
            selectinload(WorkOrderItem.typesettings).selectinload(Typesetting.options),
            selectinload(WorkOrderItem.typesettings)
            .selectinload(Typesetting.proofs)
            .selectinload(TypesettingProof.artwork),
        )

    @classmethod
    def get_items(cls, db: Session) -> list[WorkOrderItem]:
        return cls._query(db).order_by(WorkOrderItem.id.desc()).all()

    @classmethod
    def get_item_by_id(cls, db: Session, item_id: int) -> Optional[WorkOrderItem]:
        return cls._query(db).filter(WorkOrderItem.id == item_id).first()

    @classmethod
    def get_items_by_work_order(cls, db: Session, work_order_id: int) -> list[WorkOrderItem]:
        return (
            cls._query(db)
            .filter(WorkOrderItem.work_order_id == work_order_id)
            .order_by(WorkOrderItem.created_at.desc(), WorkOrderItem.id.desc())
            .all()
        )


class WorkOrderNoteRepository:
    """Repository for work order notes"""

    @staticmethod
    def get_note_by_id(db: Session, note_id: int) -> Optional[WorkOrderNote]:
        return (
            db.query(WorkOrderNote)
            .options(joinedload(WorkOrderNote.created_by))
            .filter(WorkOrderNote.id == note_id)
            .first()
        )

    @staticmethod
    def get_notes_by_work_order(db: Session, work_order_id: int) -> list[WorkOrderNote]:
        return (
            db.query(WorkOrderNote)
            .options(joinedload(WorkOrderNote.created_by))
            .filter(WorkOrderNote.work_order_id == work_order_id)
            .order_by(WorkOrderNote.created_at, WorkOrderNote.id)
            .all()
        )
