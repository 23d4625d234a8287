"""
QuickBooks Integration Models
Sync audit log and the per-invoice sync saga record
"""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class QuickBooksSyncLog(Base):
    """Track QuickBooks sync operations"""
    __tablename__ = "quickbooks_sync_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    sync_type = Column(String(50), nullable=False)  # customer, invoice, customer_import
    entity_type = Column(String(50), nullable=False)  # Company, Office, Invoice
    entity_id = Column(Integer, nullable=True)

    quickbooks_id = Column(String(255), nullable=True)  # QuickBooks entity ID

    status = Column(String(50), nullable=False)  # success, failed
    error_message = Column(Text, nullable=True)

    sync_data = Column(JSON, nullable=True)  # Store sync details

    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User")


class InvoiceSync(Base):
    """
    Saga record for pushing a local invoice to QuickBooks.

    pending -> local_committed -> remote_created -> synced
    Failures land in `failed` (retried by reconciliation) or `compensated`
    when the remote invoice had to be deleted again.
    """
    __tablename__ = "invoice_syncs"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(
        Integer, ForeignKey("invoices.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    state = Column(String(30), default="pending", nullable=False, index=True)
    attempts = Column(Integer, default=0, nullable=False)
    last_error = Column(Text, nullable=True)
    quickbooks_invoice_id = Column(String(255), nullable=True)
    sync_token = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    invoice = relationship("Invoice")
