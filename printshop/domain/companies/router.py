"""Company router - FastAPI endpoints for company operations"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    CompanyCreate,
    CompanyDashboardRow,
    CompanyDetailResponse,
    CompanyFinancialsResponse,
    CompanyResponse,
    CompanyUpdate,
)
from .service import CompanyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


def get_company_service(db: Session = Depends(get_db)) -> CompanyService:
    """Dependency injection for CompanyService"""
    return CompanyService(db)


@router.get("", response_model=list[CompanyResponse])
async def get_companies(
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Get all non-deleted companies"""
    return service.get_companies()


@router.get("/dashboard", response_model=list[CompanyDashboardRow])
async def company_dashboard(
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Pending work order, pending order and completed order totals per company"""
    return service.dashboard()


@router.get("/search", response_model=list[CompanyResponse])
async def search_companies(
    searchTerm: str = Query(""),
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Name search over active companies (at least 3 characters)"""
    return service.search(searchTerm)


@router.get("/{company_id}", response_model=CompanyDetailResponse)
async def get_company(
    company_id: int,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return service.get_company(company_id)


@router.get("/{company_id}/financials", response_model=CompanyFinancialsResponse)
async def get_company_with_financials(
    company_id: int,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Company with per work order and per order amount and cost totals"""
    return service.get_company_with_financials(company_id)


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    data: CompanyCreate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return service.create_company(data)


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: int,
    data: CompanyUpdate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return service.update_company(company_id, data)


@router.post("/{company_id}/toggle-active", response_model=CompanyResponse)
async def toggle_company_active(
    company_id: int,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return service.toggle_active(company_id)


@router.delete("/{company_id}")
async def delete_company(
    company_id: int,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return service.delete_company(company_id)
