"""QuickBooks integration schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field

from ....schemas import ResponseModel
from ...companies.schemas import CompanyResponse
from ...offices.schemas import OfficeResponse


class OAuthCallbackRequest(BaseModel):
    code: str
    realmId: str
    state: str


class QuickBooksAddress(BaseModel):
    line1: str
    line2: Optional[str] = None
    city: str
    country: str
    countrySubDivisionCode: str
    postalCode: str


class CustomerCreate(BaseModel):
    companyName: str = Field(..., min_length=1)
    officeName: str = Field(..., min_length=1)
    billAddr: QuickBooksAddress
    notes: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class CustomerUpdate(BaseModel):
    displayName: str = Field(..., min_length=1)
    billAddr: QuickBooksAddress
    shipAddr: Optional[QuickBooksAddress] = None
    officeName: Optional[str] = None
    notes: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class CustomerImportRequest(BaseModel):
    lastSyncTime: Optional[datetime] = None
    pageSize: int = Field(100, ge=1, le=1000)


class CustomerSyncResponse(ResponseModel):
    company: CompanyResponse
    office: Optional[OfficeResponse] = None


class CompanyInfoResponse(BaseModel):
    companyInfo: Optional[dict[str, Any]] = None
    time: Optional[str] = None


class InvoiceSyncResponse(ResponseModel):
    id: int
    invoice_id: int
    state: str
    attempts: int
    last_error: Optional[str] = None
    quickbooks_invoice_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SyncLogResponse(ResponseModel):
    id: int
    user_id: Optional[int] = None
    sync_type: str
    entity_type: str
    entity_id: Optional[int] = None
    quickbooks_id: Optional[str] = None
    status: str
    error_message: Optional[str] = None
    sync_data: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
