"""QuickBooks router - OAuth connection, customer sync and invoice sync endpoints"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ....auth import get_current_user, require_permission
from ....config import FRONTEND_URL
from ....database import get_db
from ....models import User
from ....services.quickbooks_tokens import QuickBooksTokenManager, get_token_manager
from .auth_service import QuickBooksAuthService
from .customer_service import QuickBooksCustomerService
from .invoice_service import QuickBooksInvoiceService
from .schemas import (
    CompanyInfoResponse,
    CustomerCreate,
    CustomerImportRequest,
    CustomerSyncResponse,
    CustomerUpdate,
    InvoiceSyncResponse,
    OAuthCallbackRequest,
    SyncLogResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quickbooks", tags=["QuickBooks"])


def get_auth_service(
    db: Session = Depends(get_db), tokens: QuickBooksTokenManager = Depends(get_token_manager)
) -> QuickBooksAuthService:
    """Dependency injection for QuickBooksAuthService"""
    return QuickBooksAuthService(db, tokens)


def get_customer_service(
    db: Session = Depends(get_db), tokens: QuickBooksTokenManager = Depends(get_token_manager)
) -> QuickBooksCustomerService:
    """Dependency injection for QuickBooksCustomerService"""
    return QuickBooksCustomerService(db, tokens)


def get_invoice_service(
    db: Session = Depends(get_db), tokens: QuickBooksTokenManager = Depends(get_token_manager)
) -> QuickBooksInvoiceService:
    """Dependency injection for QuickBooksInvoiceService"""
    return QuickBooksInvoiceService(db, tokens)


# ============================================
# OAuth connection
# ============================================


@router.get("/callback")
async def oauth_redirect(
    code: Optional[str] = None,
    realmId: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
):
    """
    Intuit redirect target.
    Hands the authorization parameters to the frontend, which completes the
    exchange through POST /quickbooks/auth/callback with the user's session.
    """
    target = f"{FRONTEND_URL}/quickbooks/callback"
    if error:
        logger.warning(f"⚠️ QuickBooks authorization returned error: {error}")
        return RedirectResponse(f"{target}?{urlencode({'error': error})}")
    if not code or not realmId or not state:
        return RedirectResponse(f"{target}?{urlencode({'error': 'missing_parameters'})}")
    return RedirectResponse(f"{target}?{urlencode({'code': code, 'realmId': realmId, 'state': state})}")


@router.post("/auth/initiate")
async def initiate_auth(
    current_user: User = Depends(get_current_user),
    service: QuickBooksAuthService = Depends(get_auth_service),
):
    """Return the Intuit authorization URL"""
    return service.initialize_auth(current_user)


@router.post("/auth/callback")
async def complete_auth(
    data: OAuthCallbackRequest,
    current_user: User = Depends(get_current_user),
    service: QuickBooksAuthService = Depends(get_auth_service),
):
    """Exchange the authorization code and store the credentials"""
    return await service.handle_callback(current_user, data.code, data.realmId, data.state)


@router.post("/auth/refresh")
async def refresh_token(
    current_user: User = Depends(get_current_user),
    service: QuickBooksAuthService = Depends(get_auth_service),
):
    return await service.refresh_token(current_user)


@router.get("/auth/status")
async def auth_status(current_user: User = Depends(get_current_user)):
    return QuickBooksAuthService.auth_status(current_user)


@router.post("/auth/revoke")
async def revoke_token(
    current_user: User = Depends(get_current_user),
    service: QuickBooksAuthService = Depends(get_auth_service),
):
    """Revoke the QuickBooks grant and forget the stored credentials"""
    return await service.revoke_token(current_user)


@router.get("/company-info", response_model=CompanyInfoResponse)
async def company_info(
    current_user: User = Depends(get_current_user),
    service: QuickBooksAuthService = Depends(get_auth_service),
):
    return await service.get_company_info(current_user)


# ============================================
# Customers
# ============================================


@router.post("/customers", response_model=CustomerSyncResponse)
async def create_customer(
    data: CustomerCreate,
    current_user: User = Depends(require_permission("company_create")),
    service: QuickBooksCustomerService = Depends(get_customer_service),
):
    """Create a QuickBooks customer and the matching company and office"""
    return await service.create_customer(data, current_user)


@router.put("/customers/{company_id}", response_model=CustomerSyncResponse)
async def update_customer(
    company_id: int,
    data: CustomerUpdate,
    current_user: User = Depends(require_permission("company_update")),
    service: QuickBooksCustomerService = Depends(get_customer_service),
):
    return await service.update_customer(company_id, data, current_user)


@router.post("/customers/{company_id}/sync", response_model=CustomerSyncResponse)
async def sync_company(
    company_id: int,
    current_user: User = Depends(require_permission("company_update")),
    service: QuickBooksCustomerService = Depends(get_customer_service),
):
    """Push a local company to QuickBooks"""
    return await service.sync_company(company_id, current_user)


@router.post("/customers/import")
async def import_customers(
    data: CustomerImportRequest,
    current_user: User = Depends(require_permission("company_create")),
    service: QuickBooksCustomerService = Depends(get_customer_service),
):
    """Import QuickBooks customers, optionally only those changed since `lastSyncTime`"""
    return await service.import_customers(data, current_user)


# ============================================
# Invoices
# ============================================


@router.get("/invoices")
async def get_quickbooks_invoices(
    current_user: User = Depends(require_permission("invoice_read")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    return await service.get_invoices(current_user)


@router.post("/invoices/from-order/{order_id}", response_model=InvoiceSyncResponse)
async def create_invoice_from_order(
    order_id: int,
    current_user: User = Depends(require_permission("invoice_create")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    """Invoice an order locally and push the invoice to QuickBooks"""
    return await service.create_from_order(order_id, current_user)


@router.post("/invoices/from-invoice/{invoice_id}", response_model=InvoiceSyncResponse)
async def create_invoice_from_invoice(
    invoice_id: int,
    current_user: User = Depends(require_permission("invoice_create")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    return await service.create_from_invoice(invoice_id, current_user)


@router.post("/invoices/sync-office/{office_id}")
async def sync_office_invoices(
    office_id: int,
    current_user: User = Depends(require_permission("invoice_create")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    """Push every unsynced invoice of an office's orders"""
    return await service.sync_office(office_id, current_user)


@router.post("/invoices/reconcile")
async def reconcile_invoice_syncs(
    current_user: User = Depends(require_permission("invoice_create")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    """Retry failed and interrupted invoice syncs"""
    return await service.reconcile(current_user)


@router.get("/sync-logs", response_model=list[SyncLogResponse])
async def get_sync_logs(
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(require_permission("invoice_read")),
    service: QuickBooksInvoiceService = Depends(get_invoice_service),
):
    return service.get_sync_logs(limit)
