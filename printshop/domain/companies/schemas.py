"""Company domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import AddressResponse, ResponseModel


class CompanyCreate(BaseModel):
    """Schema for creating a new company"""

    name: str
    quickbooksId: Optional[str] = None
    isActive: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Company name is required")
        return v.strip()


class CompanyUpdate(BaseModel):
    """Schema for updating an existing company"""

    name: Optional[str] = None
    quickbooksId: Optional[str] = None
    isActive: Optional[bool] = None


class CompanyOffice(ResponseModel):
    id: int
    name: str
    is_active: bool
    is_walk_in_office: bool
    quickbooks_customer_id: Optional[str] = None
    addresses: list[AddressResponse] = []


class CompanyResponse(ResponseModel):
    id: int
    name: str
    quickbooks_id: Optional[str] = None
    sync_token: Optional[str] = None
    is_active: bool
    deleted: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CompanyDetailResponse(CompanyResponse):
    offices: list[CompanyOffice] = []


class CompanyDashboardRow(ResponseModel):
    id: int
    name: str
    quickbooks_id: Optional[str] = None
    sync_token: str = "0"
    is_active: bool
    work_order_total_pending: float = 0
    order_total_pending: float = 0
    order_total_completed: float = 0


class DocumentTotals(ResponseModel):
    id: int
    number: int
    status: str
    office_id: int
    total_amount: float = 0
    total_cost: float = 0
    created_at: Optional[datetime] = None


class CompanyFinancialsResponse(CompanyDetailResponse):
    work_orders: list[DocumentTotals] = []
    orders: list[DocumentTotals] = []
