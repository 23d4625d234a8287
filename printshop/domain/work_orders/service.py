"""Work order service - Business logic for work orders, items, notes and conversion"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import ORDER_NUMBER_START, WORK_ORDER_NUMBER_START
from ...models import Office, User
from ...models_work import (
    Order,
    OrderItem,
    OrderItemArtwork,
    OrderItemStock,
    WorkOrder,
    WorkOrderItem,
    WorkOrderItemArtwork,
    WorkOrderNote,
)
from ...services.copying import copy_artwork, copy_processing_options, copy_stocks, item_fields
from ...services.numbering import next_sequence_number
from ...services.status_transitions import apply_status_change
from ...statuses import OrderItemStatus, OrderStatus, WorkOrderStatus
from .repository import WorkOrderItemRepository, WorkOrderNoteRepository, WorkOrderRepository
from .schemas import (
    ArtworkUpdate,
    LineItemFields,
    LineItemUpdate,
    NoteUpdate,
    WorkOrderCreate,
    WorkOrderItemCreate,
    WorkOrderItemStatusUpdate,
    WorkOrderNoteCreate,
    WorkOrderStatusUpdate,
    WorkOrderUpdate,
)

logger = logging.getLogger(__name__)

LINE_ITEM_FIELDS = {
    "productTypeId": "product_type_id",
    "description": "description",
    "quantity": "quantity",
    "cost": "cost",
    "amount": "amount",
    "shippingAmount": "shipping_amount",
    "ink": "ink",
    "size": "size",
    "other": "other",
    "specialInstructions": "special_instructions",
    "expectedDate": "expected_date",
}

HEADER_FIELDS = {
    "contactPersonId": "contact_person_id",
    "purchaseOrderNumber": "purchase_order_number",
    "deposit": "deposit",
    "description": "description",
    "expectedDate": "expected_date",
    "specialInstructions": "special_instructions",
    "totalCost": "total_cost",
    "shippingInfoId": "shipping_info_id",
}

# Work orders that no longer need attention on the dashboard
CLOSED_WORK_ORDER_STATUSES = [WorkOrderStatus.APPROVED.value, WorkOrderStatus.CANCELLED.value]


def line_item_columns(values: dict) -> dict:
    """Map camelCase line item values to column names, ignoring other keys"""
    return {column: values[key] for key, column in LINE_ITEM_FIELDS.items() if key in values}


class WorkOrderService:
    """Service layer for work order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkOrderRepository()

    def get_work_orders(self) -> list[WorkOrder]:
        return self.repo.get_work_orders(self.db)

    def get_work_order(self, work_order_id: int) -> WorkOrder:
        work_order = self.repo.get_work_order_by_id(self.db, work_order_id)
        if not work_order:
            raise HTTPException(status_code=404, detail="Work order not found")
        return work_order

    def _get_office(self, office_id: int) -> Office:
        office = (
            self.db.query(Office).filter(Office.id == office_id, Office.deleted.is_(False)).first()
        )
        if not office:
            raise HTTPException(status_code=404, detail="Office not found")
        return office

    def create_work_order(self, data: WorkOrderCreate, user: User) -> WorkOrder:
        logger.info(f"📥 Creating work order for office {data.officeId}")
        self._get_office(data.officeId)

        work_order = WorkOrder(
            work_order_number=next_sequence_number(
                self.db, WorkOrder.work_order_number, WORK_ORDER_NUMBER_START
            ),
            office_id=data.officeId,
            status=data.status.value,
            version=1,
            created_by_id=user.id,
            **{column: getattr(data, key) for key, column in HEADER_FIELDS.items()},
        )
        work_order.items = [self._new_item(item, user) for item in data.items]
        self.db.add(work_order)
        self.db.commit()

        logger.info(f"✅ Work order {work_order.work_order_number} created ({len(data.items)} items)")
        return self.get_work_order(work_order.id)

    @staticmethod
    def _new_item(item: LineItemFields, user: User) -> WorkOrderItem:
        return WorkOrderItem(created_by_id=user.id, **line_item_columns(item.model_dump()))

    def update_work_order(self, work_order_id: int, data: WorkOrderUpdate) -> WorkOrder:
        work_order = self.get_work_order(work_order_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(work_order, HEADER_FIELDS[key], value)
        self.db.commit()
        return self.get_work_order(work_order.id)

    def update_status(self, work_order_id: int, data: WorkOrderStatusUpdate, user: User) -> WorkOrder:
        work_order = self.get_work_order(work_order_id)
        apply_status_change(self.db, work_order, "WorkOrder", data.status, user, override=data.override)
        self.db.commit()
        return self.get_work_order(work_order.id)

    def dashboard(self) -> list[dict]:
        """Open work orders (not approved, not cancelled) with their item amount"""
        rows = []
        for work_order in self.repo.get_open_work_orders(self.db, CLOSED_WORK_ORDER_STATUSES):
            office = work_order.office
            rows.append(
                {
                    "id": work_order.id,
                    "work_order_number": work_order.work_order_number,
                    "status": work_order.status,
                    "company_name": office.company.name if office and office.company else None,
                    "office_name": office.name if office else None,
                    "description": work_order.description,
                    "purchase_order_number": work_order.purchase_order_number,
                    "expected_date": work_order.expected_date,
                    "total_amount": round(sum(i.amount or 0 for i in work_order.items), 2),
                    "created_at": work_order.created_at,
                }
            )
        return rows

    def convert_to_order(
        self, work_order_id: int, user: User, office_id: Optional[int] = None
    ) -> Order:
        """
        Turn a work order into an order in one transaction.

        Items are copied as Pending order items with their processing
        options, stock and artwork. Typesetting moves to the new order item.
        """
        work_order = self.get_work_order(work_order_id)
        if work_order.order_id is not None:
            raise HTTPException(
                status_code=409,
                detail=f"Work order {work_order.work_order_number} was already converted to an order",
            )
        if office_id is not None:
            self._get_office(office_id)

        logger.info(f"🔄 Converting work order {work_order.work_order_number} to an order")
        order = Order(
            order_number=next_sequence_number(self.db, Order.order_number, ORDER_NUMBER_START),
            office_id=office_id or work_order.office_id,
            contact_person_id=work_order.contact_person_id,
            work_order_id=work_order.id,
            status=OrderStatus.PENDING.value,
            version=1,
            purchase_order_number=work_order.purchase_order_number,
            deposit=work_order.deposit,
            description=work_order.description,
            expected_date=work_order.expected_date,
            special_instructions=work_order.special_instructions,
            total_cost=work_order.total_cost,
            shipping_info_id=work_order.shipping_info_id,
            created_by_id=work_order.created_by_id or user.id,
        )
        self.db.add(order)

        for source in work_order.items:
            order_item = OrderItem(
                status=OrderItemStatus.PENDING.value,
                created_by_id=user.id,
                artwork=copy_artwork(source.artwork, OrderItemArtwork),
                stocks=copy_stocks(source.stocks, OrderItemStock, user.id),
                processing_options=copy_processing_options(source.processing_options, user.id),
                **item_fields(source),
            )
            order.items.append(order_item)
            for typesetting in list(source.typesettings):
                typesetting.work_order_item = None
                typesetting.order_item = order_item

        work_order.order = order
        self.db.commit()

        logger.info(
            f"✅ Work order {work_order.work_order_number} converted to order {order.order_number}"
        )
        return order


class WorkOrderItemService:
    """Service layer for work order items"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkOrderItemRepository()

    def get_items(self) -> list[WorkOrderItem]:
        return self.repo.get_items(self.db)

    def get_item(self, item_id: int) -> WorkOrderItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Work order item not found")
        return item

    def get_items_by_work_order(self, work_order_id: int) -> list[WorkOrderItem]:
        return self.repo.get_items_by_work_order(self.db, work_order_id)

    def create_item(self, data: WorkOrderItemCreate, user: User) -> WorkOrderItem:
        work_order = self.db.query(WorkOrder).filter(WorkOrder.id == data.workOrderId).first()
        if not work_order:
            raise HTTPException(status_code=404, detail="Work order not found")

        item = WorkOrderItem(
            work_order_id=work_order.id,
            status=data.status.value,
            created_by_id=user.id,
            **line_item_columns(data.model_dump()),
        )
        self.db.add(item)
        self.db.commit()
        logger.info(f"✅ Work order item {item.id} added to work order {work_order.id}")
        return self.get_item(item.id)

    def update_item(self, item_id: int, data: LineItemUpdate) -> WorkOrderItem:
        item = self.get_item(item_id)
        for column, value in line_item_columns(data.model_dump(exclude_unset=True)).items():
            setattr(item, column, value)
        self.db.commit()
        return self.get_item(item.id)

    def update_status(
        self, item_id: int, data: WorkOrderItemStatusUpdate, user: User
    ) -> WorkOrderItem:
        item = self.get_item(item_id)
        apply_status_change(self.db, item, "WorkOrderItem", data.status, user, override=data.override)
        self.db.commit()
        return self.get_item(item.id)

    def update_artwork(self, item_id: int, data: ArtworkUpdate) -> WorkOrderItem:
        """Replace the item's artwork set"""
        item = self.get_item(item_id)
        item.artwork = [
            WorkOrderItemArtwork(file_url=art.fileUrl, description=art.description)
            for art in data.artwork
        ]
        self.db.commit()
        return self.get_item(item.id)

    def delete_artwork(self, artwork_id: int) -> dict:
        artwork = (
            self.db.query(WorkOrderItemArtwork).filter(WorkOrderItemArtwork.id == artwork_id).first()
        )
        if not artwork:
            raise HTTPException(status_code=404, detail="Artwork not found")
        self.db.delete(artwork)
        self.db.commit()
        return {"message": "Artwork deleted"}


class WorkOrderNoteService:
    """Service layer for work order notes"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkOrderNoteRepository()

    def get_note(self, note_id: int) -> WorkOrderNote:
        note = self.repo.get_note_by_id(self.db, note_id)
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        return note

    def get_notes(self, work_order_id: int) -> list[WorkOrderNote]:
        return self.repo.get_notes_by_work_order(self.db, work_order_id)

    def create_note(self, data: WorkOrderNoteCreate, user: User) -> WorkOrderNote:
        if not self.db.query(WorkOrder.id).filter(WorkOrder.id == data.workOrderId).first():
            raise HTTPException(status_code=404, detail="Work order not found")
        note = WorkOrderNote(work_order_id=data.workOrderId, note=data.note, created_by_id=user.id)
        self.db.add(note)
        self.db.commit()
        return self.get_note(note.id)

    def update_note(self, note_id: int, data: NoteUpdate) -> WorkOrderNote:
        note = self.get_note(note_id)
        note.note = data.note
        self.db.commit()
        return self.get_note(note.id)

    def delete_note(self, note_id: int) -> dict:
        self.db.delete(self.get_note(note_id))
        self.db.commit()
        return {"message": "Note deleted"}
