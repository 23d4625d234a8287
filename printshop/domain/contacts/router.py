"""Contact router - FastAPI endpoints for contacts and walk-in customers"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ContactCreate, ContactResponse, WalkInCustomerCreate, WalkInCustomerResponse
from .service import ContactService, WalkInCustomerService

router = APIRouter(prefix="/contacts", tags=["Contacts"])
walk_in_router = APIRouter(prefix="/walk-in-customers", tags=["Walk-in Customers"])


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(db)


def get_walk_in_service(db: Session = Depends(get_db)) -> WalkInCustomerService:
    return WalkInCustomerService(db)


@router.post("", response_model=ContactResponse, status_code=201)
async def create_contact(
    data: ContactCreate,
    current_user: User = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    """Create (or reuse) a contact by email and link it to an office"""
    return service.create_contact(data)


@router.get("/office/{office_id}", response_model=list[ContactResponse])
async def get_contacts_by_office(
    office_id: int,
    current_user: User = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return service.get_contacts_by_office(office_id)


@walk_in_router.get("", response_model=list[WalkInCustomerResponse])
async def get_walk_in_customers(
    current_user: User = Depends(get_current_user),
    service: WalkInCustomerService = Depends(get_walk_in_service),
):
    return service.get_customers()


@walk_in_router.get("/{customer_id}", response_model=WalkInCustomerResponse)
async def get_walk_in_customer(
    customer_id: int,
    current_user: User = Depends(get_current_user),
    service: WalkInCustomerService = Depends(get_walk_in_service),
):
    return service.get_customer(customer_id)


@walk_in_router.post("", response_model=WalkInCustomerResponse, status_code=201)
async def create_walk_in_customer(
    data: WalkInCustomerCreate,
    current_user: User = Depends(get_current_user),
    service: WalkInCustomerService = Depends(get_walk_in_service),
):
    return service.create_customer(data)
