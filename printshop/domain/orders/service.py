"""Order service - Business logic for orders, order items, notes and payments"""

import logging
from typing import Optional

from fastapi import HTTPException
from pydantic.alias_generators import to_snake
from sqlalchemy.orm import Session

from ...config import ORDER_NUMBER_START
from ...email_service import (
    EmailDeliveryError,
    send_job_status_email,
    send_order_email,
    send_order_status_email,
)
from ...models import Company, Office, User
from ...models_work import (
    Order,
    OrderItem,
    OrderItemArtwork,
    OrderItemStock,
    OrderNote,
    OrderPayment,
    ShippingInfo,
)
from ...services.copying import (
    copy_artwork,
    copy_processing_options,
    copy_stocks,
    copy_typesetting,
    item_fields,
)
from ...services.numbering import next_sequence_number
from ...services.order_totals import calculate_order_totals
from ...services.pdf_generator import OrderPDFGenerator
from ...services.status_transitions import apply_status_change
from ...statuses import OrderItemStatus, OrderStatus
from ..shipping.schemas import ShippingInfoCreate
from ..shipping.service import apply_shipping_fields, replace_pickup
from ..work_orders.schemas import ArtworkUpdate, LineItemUpdate, NoteUpdate
from ..work_orders.service import line_item_columns
from .repository import (
    OrderItemRepository,
    OrderNoteRepository,
    OrderPaymentRepository,
    OrderRepository,
)
from .schemas import (
    ContactPersonUpdate,
    DepositUpdate,
    DescriptionUpdate,
    NotesUpdate,
    OrderCreate,
    OrderDetailResponse,
    OrderItemCreate,
    OrderItemStatusUpdate,
    OrderNoteCreate,
    OrderPaymentCreate,
    OrderResponse,
    OrderStatusUpdate,
    OrderUpdate,
    SendOrderEmailRequest,
    SpecialInstructionsUpdate,
    TransferOwnershipRequest,
)

logger = logging.getLogger(__name__)

# Order statuses that push the same status onto every item
CASCADED_STATUSES = {
    OrderStatus.CANCELLED.value: OrderItemStatus.CANCELLED.value,
    OrderStatus.COMPLETED.value: OrderItemStatus.COMPLETED.value,
    OrderStatus.INVOICED.value: OrderItemStatus.INVOICED.value,
}

CLOSED_ORDER_STATUSES = [
    OrderStatus.CANCELLED.value,
    OrderStatus.INVOICED.value,
    OrderStatus.PAYMENT_RECEIVED.value,
    OrderStatus.COMPLETED.value,
]

CLOSED_ITEM_STATUSES = [OrderItemStatus.CANCELLED.value, OrderItemStatus.INVOICED.value]

ITEM_STATUS_ORDER = [status.value for status in OrderItemStatus]


def with_totals(order: Order, schema=OrderDetailResponse) -> dict:
    """Serialize an order with its derived money totals"""
    data = schema.model_validate(order).model_dump()
    data.update({to_snake(key): value for key, value in calculate_order_totals(order).items()})
    return data


def summarize_item_status(items) -> Optional[str]:
    """The status all live items share, or else the earliest one in production order"""
    statuses = {item.status for item in items if item.status != OrderItemStatus.CANCELLED.value}
    if not statuses:
        return None
    if len(statuses) == 1:
        return statuses.pop()
    return min(
        statuses,
        key=lambda s: ITEM_STATUS_ORDER.index(s) if s in ITEM_STATUS_ORDER else len(ITEM_STATUS_ORDER),
    )


def notification_recipient(order: Order, override: Optional[str]) -> Optional[str]:
    if override:
        return override
    if order.contact_person and order.contact_person.email:
        return order.contact_person.email
    if order.walk_in_customer and order.walk_in_customer.email:
        return order.walk_in_customer.email
    return None


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepository()

    def get_order(self, order_id: int) -> Order:
        order = self.repo.get_order_by_id(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    def get_order_with_totals(self, order_id: int) -> dict:
        return with_totals(self.get_order(order_id))

    def get_orders(self) -> list[dict]:
        return [with_totals(order, OrderResponse) for order in self.repo.get_orders(self.db)]

    def _get_office(self, office_id: int) -> Office:
        office = (
            self.db.query(Office).filter(Office.id == office_id, Office.deleted.is_(False)).first()
        )
        if not office:
            raise HTTPException(status_code=404, detail="Office not found")
        return office

    def _next_order_number(self) -> int:
        return next_sequence_number(self.db, Order.order_number, ORDER_NUMBER_START)

    def create_order(self, data: OrderCreate, user: User) -> dict:
        logger.info(f"📥 Creating order for office {data.officeId}")
        self._get_office(data.officeId)

        order = Order(
            order_number=self._next_order_number(),
            office_id=data.officeId,
            contact_person_id=data.contactPersonId,
            walk_in_customer_id=data.walkInCustomerId,
            status=OrderStatus.PENDING.value,
            version=1,
            purchase_order_number=data.purchaseOrderNumber,
            deposit=data.deposit,
            description=data.description,
            expected_date=data.expectedDate,
            special_instructions=data.specialInstructions,
            notes=data.notes,
            total_cost=data.totalCost,
            shipping_info_id=data.shippingInfoId,
            created_by_id=user.id,
        )
        order.items = [
            OrderItem(created_by_id=user.id, **line_item_columns(item.model_dump()))
            for item in data.items
        ]
        self.db.add(order)
        self.db.commit()

        logger.info(f"✅ Order {order.order_number} created")
        return self.get_order_with_totals(order.id)

    def update_order(self, order_id: int, data: OrderUpdate) -> dict:
        order = self.get_order(order_id)
        columns = {
            "purchaseOrderNumber": "purchase_order_number",
            "description": "description",
            "expectedDate": "expected_date",
            "specialInstructions": "special_instructions",
            "totalCost": "total_cost",
        }
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(order, columns[key], value)
        self.db.commit()
        return self.get_order_with_totals(order.id)

    def dashboard(self) -> list[dict]:
        """Open orders with their summarized item status and in-hands date"""
        rows = []
        for order in self.repo.get_open_orders(self.db, CLOSED_ORDER_STATUSES):
            office = order.office
            expected_dates = [i.expected_date for i in order.items if i.expected_date]
            rows.append(
                {
                    "id": order.id,
                    "order_number": order.order_number,
                    "status": order.status,
                    "company_name": office.company.name if office and office.company else None,
                    "office_name": office.name if office else None,
                    "walk_in_customer_name": (
                        order.walk_in_customer.name if order.walk_in_customer else None
                    ),
                    "purchase_order_number": order.purchase_order_number,
                    "description": order.description,
                    "order_item_status": summarize_item_status(order.items),
                    "in_hands_date": min(expected_dates) if expected_dates else None,
                    "total_amount": calculate_order_totals(order)["totalAmount"],
                    "created_at": order.created_at,
                }
            )
        return rows

    def duplicate_order(self, order_id: int, user: User) -> dict:
        """
        Copy an order and its items into a new Pending order.

        Items keep their field values, artwork, stock and processing options.
        Typesetting is copied back to InProgress with every approval cleared.
        """
        source = self.get_order(order_id)
        logger.info(f"🔄 Duplicating order {source.order_number}")

        order = Order(
            order_number=self._next_order_number(),
            office_id=source.office_id,
            contact_person_id=source.contact_person_id,
            walk_in_customer_id=source.walk_in_customer_id,
            work_order_id=source.work_order_id,
            shipping_info_id=source.shipping_info_id,
            status=OrderStatus.PENDING.value,
            version=1,
            deposit=0,
            purchase_order_number=source.purchase_order_number,
            description=source.description,
            expected_date=source.expected_date,
            special_instructions=source.special_instructions,
            notes=source.notes,
            total_cost=source.total_cost,
            created_by_id=user.id,
        )
        for item in source.items:
            order.items.append(
                OrderItem(
                    status=OrderItemStatus.PENDING.value,
                    created_by_id=user.id,
                    artwork=copy_artwork(item.artwork, OrderItemArtwork),
                    stocks=copy_stocks(item.stocks, OrderItemStock, user.id),
                    processing_options=copy_processing_options(item.processing_options, user.id),
                    typesettings=[copy_typesetting(ts, user.id) for ts in item.typesettings],
                    **item_fields(item),
                )
            )

        self.db.add(order)
        self.db.commit()
        logger.info(f"✅ Order {source.order_number} duplicated as {order.order_number}")
        return self.get_order_with_totals(order.id)

    async def update_status(
        self, order_id: int, data: OrderStatusUpdate, user: User
    ) -> dict:
        order = self.get_order(order_id)
        target = data.status.value
        apply_status_change(self.db, order, "Order", target, user, override=data.override)

        item_status = CASCADED_STATUSES.get(target)
        if item_status:
            for item in order.items:
                apply_status_change(
                    self.db, item, "OrderItem", item_status, user, enforce=False, cascaded=True
                )

        if data.shippingDetails:
            info = self._ensure_shipping_info(order, user)
            info.tracking_number = list(data.shippingDetails.trackingNumber)
            if data.shippingDetails.shippingMethod:
                info.shipping_method = data.shippingDetails.shippingMethod.value

        self.db.commit()

        if data.sendEmail:
            await self._send_status_email(order_id, data.emailOverride)
        return self.get_order_with_totals(order_id)

    def _ensure_shipping_info(self, order: Order, user: User) -> ShippingInfo:
        if order.shipping_info is None:
            order.shipping_info = ShippingInfo(
                office_id=order.office_id, created_by_id=user.id, tracking_number=[]
            )
            self.db.flush()
        return order.shipping_info

    async def _send_status_email(self, order_id: int, override: Optional[str]) -> None:
        order = self.get_order(order_id)
        recipient = notification_recipient(order, override)
        if not recipient:
            logger.warning(f"⚠️ Order {order.order_number} has no contact email, skipping notification")
            return

        info = order.shipping_info
        try:
            await send_order_status_email(
                to=recipient,
                order_number=order.order_number,
                status=order.status,
                tracking_numbers=info.tracking_number if info else None,
                shipping_method=info.shipping_method if info else None,
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Status email for order {order.order_number} failed: {e}")

    def transfer_ownership(
        self, order_id: int, data: TransferOwnershipRequest
    ) -> dict:
        order = self.get_order(order_id)
        company = self.db.query(Company).filter(Company.id == data.companyId).first()
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")
        office = self._get_office(data.officeId)
        if office.company_id != company.id:
            raise HTTPException(
                status_code=400, detail="Office does not belong to the selected company"
            )

        order.office_id = office.id
        order.contact_person_id = data.contactPersonId
        self.db.commit()
        logger.info(f"✅ Order {order.order_number} transferred to office {office.id}")
        return self.get_order_with_totals(order.id)

    def update_deposit(self, order_id: int, data: DepositUpdate) -> dict:
        order = self.get_order(order_id)
        order.deposit = data.deposit
        self.db.commit()
        return self.get_order_with_totals(order.id)

    def update_contact_person(self, order_id: int, data: ContactPersonUpdate) -> dict:
        order = self.get_order(order_id)
        if data.contactPersonId is not None:
            if not self.db.query(User.id).filter(User.id == data.contactPersonId).first():
                raise HTTPException(status_code=404, detail="Contact person not found")
        order.contact_person_id = data.contactPersonId
        self.db.commit()
        return self.get_order_with_totals(order.id)

    def update_notes(self, order_id: int, data: NotesUpdate) -> dict:
        order = self.get_order(order_id)
        order.notes = data.notes
        self.db.commit()
        return self.get_order_with_totals(order.id)

    def update_shipping_info(
        self, order_id: int, data: ShippingInfoCreate, user: User
    ) -> dict:
        """Upsert the order's shipping info; the pickup is replaced, or removed when absent"""
        order = self.get_order(order_id)
        info = self._ensure_shipping_info(order, user)
        apply_shipping_fields(info, data.model_dump(exclude={"pickup"}))
        replace_pickup(self.db, info, data.pickup, user)
        self.db.commit()
        return self.get_order_with_totals(order.id)

    def generate_pdf(self, order_id: int) -> tuple[str, bytes]:
        order = self.get_order(order_id)
        return f"order-{order.order_number}.pdf", OrderPDFGenerator(order).generate()

    async def send_order_email(self, order_id: int, data: SendOrderEmailRequest) -> dict:
        order = self.get_order(order_id)
        pdf = data.pdfContent or OrderPDFGenerator(order).generate()
        office = order.office

        try:
            await send_order_email(
                to=data.recipientEmail,
                order_number=order.order_number,
                company_name=office.company.name if office and office.company else "",
                office_name=office.name if office else "",
                pdf=pdf,
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Order email for {order.order_number} failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to send order email") from e

        logger.info(f"📧 Order {order.order_number} emailed to {data.recipientEmail}")
        return {"message": "Order email sent"}


class OrderItemService:
    """Service layer for order items"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderItemRepository()

    def get_items(self) -> list[OrderItem]:
        return self.repo.get_items(self.db)

    def get_item(self, item_id: int) -> OrderItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Order item not found")
        return item

    def get_items_by_order(self, order_id: int) -> list[OrderItem]:
        return self.repo.get_items_by_order(self.db, order_id)

    def create_item(self, data: OrderItemCreate, user: User) -> OrderItem:
        if not self.db.query(Order.id).filter(Order.id == data.orderId).first():
            raise HTTPException(status_code=404, detail="Order not found")
        item = OrderItem(
            order_id=data.orderId,
            status=data.status.value,
            created_by_id=user.id,
            **line_item_columns(data.model_dump()),
        )
        self.db.add(item)
        self.db.commit()
        return self.get_item(item.id)

    def update_item(self, item_id: int, data: LineItemUpdate) -> OrderItem:
        item = self.get_item(item_id)
        for column, value in line_item_columns(data.model_dump(exclude_unset=True)).items():
            setattr(item, column, value)
        self.db.commit()
        return self.get_item(item.id)

    def update_description(self, item_id: int, data: DescriptionUpdate) -> OrderItem:
        item = self.get_item(item_id)
        item.description = data.description
        self.db.commit()
        return self.get_item(item.id)

    def update_special_instructions(self, item_id: int, data: SpecialInstructionsUpdate) -> OrderItem:
        item = self.get_item(item_id)
        item.special_instructions = data.specialInstructions
        self.db.commit()
        return self.get_item(item.id)

    async def update_status(self, item_id: int, data: OrderItemStatusUpdate, user: User) -> OrderItem:
        item = self.get_item(item_id)
        apply_status_change(self.db, item, "OrderItem", data.status, user, override=data.override)
        self.db.commit()

        if data.sendEmail:
            order = OrderService(self.db).get_order(item.order_id)
            recipient = notification_recipient(order, data.emailOverride)
            if recipient:
                try:
                    await send_job_status_email(
                        to=recipient,
                        order_number=order.order_number,
                        description=item.description,
                        status=item.status,
                    )
                except EmailDeliveryError as e:
                    logger.error(f"❌ Job status email for item {item.id} failed: {e}")
            else:
                logger.warning(f"⚠️ Order {order.order_number} has no contact email, skipping notification")

        return self.get_item(item.id)

    def update_artwork(self, item_id: int, data: ArtworkUpdate) -> OrderItem:
        """Replace the item's artwork set"""
        item = self.get_item(item_id)
        item.artwork = [
            OrderItemArtwork(file_url=art.fileUrl, description=art.description)
            for art in data.artwork
        ]
        self.db.commit()
        return self.get_item(item.id)

    def dashboard(self) -> list[dict]:
        """Live items with their position inside the parent order"""
        rows = []
        for item in self.repo.get_open_items(self.db, CLOSED_ITEM_STATUSES):
            order = item.order
            siblings = sorted(order.items, key=lambda i: i.id)
            office = order.office
            rows.append(
                {
                    "id": item.id,
                    "order_id": order.id,
                    "order_number": order.order_number,
                    "order_status": order.status,
                    "company_name": office.company.name if office and office.company else None,
                    "description": item.description,
                    "quantity": item.quantity,
                    "status": item.status,
                    "expected_date": item.expected_date,
                    "position": [i.id for i in siblings].index(item.id) + 1,
                    "total_items": len(siblings),
                }
            )
        return rows


class OrderNoteService:
    """Service layer for order notes"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderNoteRepository()

    def get_note(self, note_id: int) -> OrderNote:
        note = self.repo.get_note_by_id(self.db, note_id)
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        return note

    def get_notes(self, order_id: int) -> list[OrderNote]:
        return self.repo.get_notes_by_order(self.db, order_id)

    def create_note(self, data: OrderNoteCreate, user: User) -> OrderNote:
        if not self.db.query(Order.id).filter(Order.id == data.orderId).first():
            raise HTTPException(status_code=404, detail="Order not found")
        note = OrderNote(order_id=data.orderId, note=data.note, created_by_id=user.id)
        self.db.add(note)
        self.db.commit()
        return self.get_note(note.id)

    def update_note(self, note_id: int, data: NoteUpdate) -> OrderNote:
        note = self.get_note(note_id)
        note.note = data.note
        self.db.commit()
        return self.get_note(note.id)

    def delete_note(self, note_id: int) -> dict:
        self.db.delete(self.get_note(note_id))
        self.db.commit()
        return {"message": "Note deleted"}


class OrderPaymentService:
    """Service layer for payments taken against an order"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderPaymentRepository()

    def create_payment(self, data: OrderPaymentCreate, user: User) -> OrderPayment:
        if not self.db.query(Order.id).filter(Order.id == data.orderId).first():
            raise HTTPException(status_code=404, detail="Order not found")
        payment = OrderPayment(
            order_id=data.orderId,
            amount=data.amount,
            payment_date=data.paymentDate,
            payment_method=data.paymentMethod.value,
            created_by_id=user.id,
        )
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        logger.info(f"💰 Payment {payment.id} of {payment.amount:.2f} recorded on order {data.orderId}")
        return payment

    def get_payments(self, order_id: int) -> list[OrderPayment]:
        return self.repo.get_payments_by_order(self.db, order_id)
