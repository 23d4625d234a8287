"""Order router - FastAPI endpoints for orders, order items, notes and payments"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...schemas import MessageResponse
from ..shipping.schemas import ShippingInfoCreate
from ..work_orders.schemas import ArtworkUpdate, LineItemUpdate, NoteUpdate
from .schemas import (
    ContactPersonUpdate,
    DepositUpdate,
    DescriptionUpdate,
    NotesUpdate,
    OrderCreate,
    OrderDashboardRow,
    OrderDetailResponse,
    OrderItemCreate,
    OrderItemDashboardRow,
    OrderItemResponse,
    OrderItemStatusUpdate,
    OrderNoteCreate,
    OrderNoteResponse,
    OrderPaymentCreate,
    OrderPaymentResponse,
    OrderResponse,
    OrderStatusUpdate,
    OrderUpdate,
    SendOrderEmailRequest,
    SpecialInstructionsUpdate,
    TransferOwnershipRequest,
)
from .service import OrderItemService, OrderNoteService, OrderPaymentService, OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])
items_router = APIRouter(prefix="/order-items", tags=["Order Items"])
notes_router = APIRouter(prefix="/order-notes", tags=["Order Notes"])
payments_router = APIRouter(prefix="/order-payments", tags=["Order Payments"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency injection for OrderService"""
    return OrderService(db)


def get_order_item_service(db: Session = Depends(get_db)) -> OrderItemService:
    """Dependency injection for OrderItemService"""
    return OrderItemService(db)


def get_order_note_service(db: Session = Depends(get_db)) -> OrderNoteService:
    return OrderNoteService(db)


def get_order_payment_service(db: Session = Depends(get_db)) -> OrderPaymentService:
    return OrderPaymentService(db)


# ============================================================================
# ORDERS
# ============================================================================


@router.get("", response_model=list[OrderResponse])
async def get_orders(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Get all orders with derived totals"""
    return service.get_orders()


@router.get("/dashboard", response_model=list[OrderDashboardRow])
async def order_dashboard(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Open orders with summarized item status and in-hands date"""
    return service.dashboard()


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.get_order_with_totals(order_id)


@router.get("/{order_id}/pdf")
async def get_order_pdf(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Render the order document as a PDF"""
    filename, pdf_bytes = service.generate_pdf(order_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.post("", response_model=OrderDetailResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.create_order(data, current_user)


@router.put("/{order_id}", response_model=OrderDetailResponse)
async def update_order(
    order_id: int,
    data: OrderUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_order(order_id, data)


@router.post("/{order_id}/duplicate", response_model=OrderDetailResponse, status_code=201)
async def duplicate_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Copy an order, its items and their production details into a new Pending order"""
    return service.duplicate_order(order_id, current_user)


@router.patch("/{order_id}/status", response_model=OrderDetailResponse)
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """
    Move an order to a new status.

    Cancelled, Completed and Invoiced are pushed onto every item. When
    sendEmail is set the contact (or emailOverride) gets a status email.
    """
    return await service.update_status(order_id, data, current_user)


@router.put("/{order_id}/transfer", response_model=OrderDetailResponse)
async def transfer_order_ownership(
    order_id: int,
    data: TransferOwnershipRequest,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.transfer_ownership(order_id, data)


@router.patch("/{order_id}/deposit", response_model=OrderDetailResponse)
async def update_order_deposit(
    order_id: int,
    data: DepositUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_deposit(order_id, data)


@router.patch("/{order_id}/contact-person", response_model=OrderDetailResponse)
async def update_order_contact_person(
    order_id: int,
    data: ContactPersonUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_contact_person(order_id, data)


@router.patch("/{order_id}/notes", response_model=OrderDetailResponse)
async def update_order_notes(
    order_id: int,
    data: NotesUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_notes(order_id, data)


@router.put("/{order_id}/shipping", response_model=OrderDetailResponse)
async def update_order_shipping(
    order_id: int,
    data: ShippingInfoCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_shipping_info(order_id, data, current_user)


@router.post("/{order_id}/email", response_model=MessageResponse)
async def send_order_email(
    order_id: int,
    data: SendOrderEmailRequest,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Email the order PDF (given as base64, or rendered here)"""
    return await service.send_order_email(order_id, data)


# ============================================================================
# ORDER ITEMS
# ============================================================================


@items_router.get("", response_model=list[OrderItemResponse])
async def get_order_items(
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.get_items()


@items_router.get("/dashboard", response_model=list[OrderItemDashboardRow])
async def order_item_dashboard(
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.dashboard()


@items_router.get("/order/{order_id}", response_model=list[OrderItemResponse])
async def get_order_items_by_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.get_items_by_order(order_id)


@items_router.get("/{item_id}", response_model=OrderItemResponse)
async def get_order_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.get_item(item_id)


@items_router.post("", response_model=OrderItemResponse, status_code=201)
async def create_order_item(
    data: OrderItemCreate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.create_item(data, current_user)


@items_router.put("/{item_id}", response_model=OrderItemResponse)
async def update_order_item(
    item_id: int,
    data: LineItemUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.update_item(item_id, data)


@items_router.patch("/{item_id}/description", response_model=OrderItemResponse)
async def update_order_item_description(
    item_id: int,
    data: DescriptionUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.update_description(item_id, data)


@items_router.patch("/{item_id}/special-instructions", response_model=OrderItemResponse)
async def update_order_item_special_instructions(
    item_id: int,
    data: SpecialInstructionsUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.update_special_instructions(item_id, data)


@items_router.patch("/{item_id}/status", response_model=OrderItemResponse)
async def update_order_item_status(
    item_id: int,
    data: OrderItemStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    """Move a job to a new status, optionally emailing the contact"""
    return await service.update_status(item_id, data, current_user)


@items_router.put("/{item_id}/artwork", response_model=OrderItemResponse)
async def update_order_item_artwork(
    item_id: int,
    data: ArtworkUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderItemService = Depends(get_order_item_service),
):
    return service.update_artwork(item_id, data)


# ============================================================================
# NOTES
# ============================================================================


@notes_router.get("/order/{order_id}", response_model=list[OrderNoteResponse])
async def get_order_notes(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderNoteService = Depends(get_order_note_service),
):
    return service.get_notes(order_id)


@notes_router.get("/{note_id}", response_model=OrderNoteResponse)
async def get_order_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderNoteService = Depends(get_order_note_service),
):
    return service.get_note(note_id)


@notes_router.post("", response_model=OrderNoteResponse, status_code=201)
async def create_order_note(
    data: OrderNoteCreate,
    current_user: User = Depends(get_current_user),
    service: OrderNoteService = Depends(get_order_note_service),
):
    return service.create_note(data, current_user)


@notes_router.put("/{note_id}", response_model=OrderNoteResponse)
async def update_order_note(
    note_id: int,
    data: NoteUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderNoteService = Depends(get_order_note_service),
):
    return service.update_note(note_id, data)


@notes_router.delete("/{note_id}")
async def delete_order_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderNoteService = Depends(get_order_note_service),
):
    return service.delete_note(note_id)


# ============================================================================
# PAYMENTS
# ============================================================================


@payments_router.post("", response_model=OrderPaymentResponse, status_code=201)
async def create_order_payment(
    data: OrderPaymentCreate,
    current_user: User = Depends(get_current_user),
    service: OrderPaymentService = Depends(get_order_payment_service),
):
    return service.create_payment(data, current_user)


@payments_router.get("/order/{order_id}", response_model=list[OrderPaymentResponse])
async def get_order_payments(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderPaymentService = Depends(get_order_payment_service),
):
    return service.get_payments(order_id)
