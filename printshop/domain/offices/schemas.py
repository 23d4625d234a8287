"""Office domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

from ...schemas import AddressResponse, ResponseModel, UserSummary
from ...statuses import AddressType


class AddressFields(BaseModel):
    name: Optional[str] = None
    line1: str
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    city: str
    state: str
    zipcode: str
    country: Optional[str] = "USA"
    telephoneNumber: Optional[str] = None
    addressType: AddressType = AddressType.BILLING


class OfficeAddressInput(AddressFields):
    """Address inside an office form; ids starting with 'temp-' are new rows"""

    id: Optional[Union[int, str]] = None


class AddressCreate(AddressFields):
    officeId: int


class AddressUpdate(BaseModel):
    name: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None
    telephoneNumber: Optional[str] = None
    addressType: Optional[AddressType] = None


class OfficeCreate(BaseModel):
    name: str
    companyId: int
    addresses: list[AddressFields] = []


class OfficeUpdate(BaseModel):
    name: Optional[str] = None
    isActive: Optional[bool] = None
    addresses: list[OfficeAddressInput] = []


class CompanyRef(ResponseModel):
    id: int
    name: str


class OfficeResponse(ResponseModel):
    id: int
    name: str
    company_id: int
    is_active: bool
    is_walk_in_office: bool
    quickbooks_customer_id: Optional[str] = None
    created_by_id: Optional[int] = None
    created_at: Optional[datetime] = None
    company: Optional[CompanyRef] = None
    addresses: list[AddressResponse] = []


class OfficeDetailResponse(OfficeResponse):
    contacts: list[UserSummary] = []
