"""
QuickBooks invoice sync

Each local invoice is pushed through a small saga recorded in InvoiceSync:

    local_committed -> remote_created -> synced

The local invoice and the order status change commit first. The remote
invoice is created next and its id is committed on the saga row before the
local link is written, so a failed link can always find the remote invoice
to delete again (compensated). A failed remote create leaves the saga in
`failed` for the reconciliation job to retry; a saga left in `remote_created`
is picked up by the same job, which only repeats the link.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import httpx
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ....config import SALES_TAX_RATE
from ....models import User
from ....models_invoice import Invoice
from ....models_quickbooks import InvoiceSync, QuickBooksSyncLog
from ....services.order_totals import calculate_order_totals
from ....services.quickbooks_tokens import QuickBooksTokenManager, token_manager
from ....statuses import InvoiceSyncState
from ...invoices.repository import InvoiceRepository
from ...invoices.schemas import InvoiceCreate
from ...invoices.service import InvoiceService
from ...offices.repository import OfficeRepository
from .client import QuickBooksAPIError, QuickBooksClient, log_sync

logger = logging.getLogger(__name__)

INVOICE_DUE_DAYS = 30
RETRYABLE_STATES = (
    InvoiceSyncState.FAILED.value,
    InvoiceSyncState.LOCAL_COMMITTED.value,
    InvoiceSyncState.REMOTE_CREATED.value,
)


class InvoiceSyncFailed(Exception):
    """The saga stopped short of `synced`"""


def customer_ref(invoice: Invoice) -> Optional[str]:
    office = invoice.order.office if invoice.order else None
    return office.quickbooks_customer_id if office else None


def invoice_payload(invoice: Invoice) -> dict:
    """QuickBooks Invoice body: one SalesItemLine per invoice item"""
    payload = {
        "CustomerRef": {"value": customer_ref(invoice)},
        "DocNumber": invoice.invoice_number,
        "Line": [
            {
                "Amount": item.total,
                "DetailType": "SalesItemLineDetail",
                "Description": item.description,
                "SalesItemLineDetail": {"Qty": item.quantity, "UnitPrice": item.unit_price},
            }
            for item in invoice.items
        ],
    }
    if invoice.date_issued:
        payload["TxnDate"] = invoice.date_issued.strftime("%Y-%m-%d")
    if invoice.date_due:
        payload["DueDate"] = invoice.date_due.strftime("%Y-%m-%d")
    return payload


class QuickBooksInvoiceService:
    """Service layer for pushing invoices to QuickBooks"""

    def __init__(self, db: Session, tokens: QuickBooksTokenManager = token_manager):
        self.db = db
        self.tokens = tokens
        self.invoices = InvoiceService(db)
        self.repo = InvoiceRepository()

    def _client(self, user: User) -> QuickBooksClient:
        return QuickBooksClient(self.db, user, self.tokens)

    async def get_invoices(self, user: User) -> dict:
        try:
            return await self._client(user).query("SELECT * FROM Invoice")
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            raise HTTPException(
                status_code=500, detail="Failed to get invoices from QuickBooks"
            ) from e

    def get_sync(self, invoice: Invoice) -> InvoiceSync:
        sync = self.db.query(InvoiceSync).filter(InvoiceSync.invoice_id == invoice.id).first()
        if sync is None:
            sync = InvoiceSync(invoice=invoice, state=InvoiceSyncState.LOCAL_COMMITTED.value, attempts=0)
            self.db.add(sync)
            self.db.commit()
        return sync

    def get_sync_logs(self, limit: int = 100) -> list[QuickBooksSyncLog]:
        return (
            self.db.query(QuickBooksSyncLog)
            .order_by(QuickBooksSyncLog.created_at.desc(), QuickBooksSyncLog.id.desc())
            .limit(limit)
            .all()
        )

    # ============================================
    # Entry points
    # ============================================

    async def create_from_order(self, order_id: int, user: User) -> InvoiceSync:
        """Invoice the order locally, then push the invoice"""
        order = self.invoices.get_order(order_id)
        if not order.office or not order.office.quickbooks_customer_id:
            raise HTTPException(status_code=400, detail="Office is not linked to a QuickBooks customer")

        totals = calculate_order_totals(order)
        now = datetime.utcnow()
        data = InvoiceCreate(
            orderId=order.id,
            dateIssued=now,
            dateDue=now + timedelta(days=INVOICE_DUE_DAYS),
            subtotal=totals["calculatedSubTotal"],
            taxRate=SALES_TAX_RATE,
            taxAmount=totals["calculatedSalesTax"],
            total=totals["totalAmount"],
        )
        invoice = self.invoices.build_invoice(order, data, user)
        sync = InvoiceSync(invoice=invoice, state=InvoiceSyncState.LOCAL_COMMITTED.value, attempts=0)
        self.db.add(sync)
        self.db.commit()
        logger.info(f"✅ Invoice {invoice.invoice_number} committed for order {order.order_number}")

        return await self._run_or_raise(sync, user)

    async def create_from_invoice(self, invoice_id: int, user: User) -> InvoiceSync:
        invoice = self.invoices.get_invoice(invoice_id)
        if not customer_ref(invoice):
            raise HTTPException(status_code=400, detail="Office is not linked to a QuickBooks customer")

        sync = self.get_sync(invoice)
        if sync.state == InvoiceSyncState.SYNCED.value:
            logger.info(f"Invoice {invoice.invoice_number} already synced as {sync.quickbooks_invoice_id}")
            return sync
        return await self._run_or_raise(sync, user)

    async def sync_office(self, office_id: int, user: User) -> dict:
        office = OfficeRepository.get_office_by_id(self.db, office_id)
        if not office:
            raise HTTPException(status_code=404, detail="Office not found")
        if not office.quickbooks_customer_id:
            raise HTTPException(status_code=400, detail="Office is not linked to a QuickBooks customer")

        counts = {"synced": 0, "failed": 0, "skipped": 0}
        for invoice in self.repo.get_invoices_for_office(self.db, office.id):
            sync = self.get_sync(invoice)
            if invoice.quickbooks_id or sync.state == InvoiceSyncState.SYNCED.value:
                counts["skipped"] += 1
                continue
            try:
                await self.run_saga(sync, user)
                counts["synced"] += 1
            except InvoiceSyncFailed:
                counts["failed"] += 1

        logger.info(f"🔄 Office {office.id} invoice sync: {counts}")
        return counts

    async def reconcile(self, user: User) -> dict:
        """Retry every saga that stopped short of `synced` or `compensated`

        Sagas left in `remote_created` only repeat the link step.
        """
        pending = (
            self.db.query(InvoiceSync)
            .filter(InvoiceSync.state.in_(RETRYABLE_STATES))
            .order_by(InvoiceSync.id)
            .all()
        )
        counts = {"retried": len(pending), "synced": 0, "failed": 0}
        for sync in pending:
            try:
                await self.run_saga(sync, user)
                counts["synced"] += 1
            except InvoiceSyncFailed:
                counts["failed"] += 1

        logger.info(f"🔄 Invoice sync reconciliation: {counts}")
        return counts

    # ============================================
    # Saga
    # ============================================

    async def _run_or_raise(self, sync: InvoiceSync, user: User) -> InvoiceSync:
        try:
            return await self.run_saga(sync, user)
        except InvoiceSyncFailed as e:
            raise HTTPException(status_code=500, detail=str(e)) from e

    async def run_saga(self, sync: InvoiceSync, user: User) -> InvoiceSync:
        invoice = sync.invoice
        client = self._client(user)

        if sync.state != InvoiceSyncState.REMOTE_CREATED.value:
            await self._create_remote(sync, invoice, client, user)

        try:
            invoice.quickbooks_id = sync.quickbooks_invoice_id
            invoice.order.quickbooks_invoice_id = sync.quickbooks_invoice_id
            sync.state = InvoiceSyncState.SYNCED.value
            sync.last_error = None
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            await self._compensate(sync, client, user, str(e))
            raise InvoiceSyncFailed(
                f"QuickBooks invoice sync failed for {invoice.invoice_number}"
            ) from e

        logger.info(f"✅ Invoice {invoice.invoice_number} synced as QuickBooks invoice {sync.quickbooks_invoice_id}")
        return sync

    async def _create_remote(self, sync: InvoiceSync, invoice: Invoice, client: QuickBooksClient, user: User) -> None:
        sync.attempts = (sync.attempts or 0) + 1
        payload = invoice_payload(invoice)

        try:
            if not payload["CustomerRef"]["value"]:
                raise QuickBooksAPIError("Office is not linked to a QuickBooks customer")
            data = await client.post_json("invoice", payload)
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            sync.state = InvoiceSyncState.FAILED.value
            sync.last_error = str(e)
            log_sync(
                self.db, user, "invoice", "Invoice", invoice.id, "failed",
                error_message=str(e), sync_data={"invoice_data": payload},
            )
            self.db.commit()
            logger.error(f"❌ QuickBooks invoice create failed for {invoice.invoice_number}: {e}")
            raise InvoiceSyncFailed(
                f"QuickBooks invoice sync failed for {invoice.invoice_number}"
            ) from e

        remote = data.get("Invoice", {})
        sync.quickbooks_invoice_id = str(remote.get("Id"))
        sync.sync_token = remote.get("SyncToken")
        sync.state = InvoiceSyncState.REMOTE_CREATED.value
        log_sync(
            self.db, user, "invoice", "Invoice", invoice.id, "success",
            quickbooks_id=sync.quickbooks_invoice_id, sync_data={"invoice_data": payload},
        )
        self.db.commit()

    async def _compensate(self, sync: InvoiceSync, client: QuickBooksClient, user: User, reason: str) -> None:
        """Delete the remote invoice whose local link could not be written"""
        payload = {"Id": sync.quickbooks_invoice_id, "SyncToken": sync.sync_token or "0"}
        try:
            await client.post_json("invoice", payload, params={"operation": "delete"})
        except (QuickBooksAPIError, httpx.HTTPError) as e:
            # Stays remote_created so a retry only repeats the link step
            sync.last_error = f"{reason}; compensation failed: {e}"
            log_sync(
                self.db, user, "invoice_delete", "Invoice", sync.invoice_id, "failed",
                quickbooks_id=sync.quickbooks_invoice_id, error_message=str(e),
            )
            self.db.commit()
            logger.error(f"❌ Could not delete QuickBooks invoice {sync.quickbooks_invoice_id}: {e}")
            return

        sync.state = InvoiceSyncState.COMPENSATED.value
        sync.last_error = reason
        log_sync(
            self.db, user, "invoice_delete", "Invoice", sync.invoice_id, "success",
            quickbooks_id=sync.quickbooks_invoice_id,
        )
        self.db.commit()
        logger.warning(f"⚠️ QuickBooks invoice {sync.quickbooks_invoice_id} deleted after failed link")
