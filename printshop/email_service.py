"""
Email Service using Resend
Compiles MJML templates to HTML and delivers them with optional PDF attachments
"""

import base64
import logging
from typing import Optional, Union

import resend
from mjml import mjml2html

from .config import EMAIL_FROM_ADDRESS, RESEND_API_KEY
from .email_templates import (
    invoice_email_template,
    job_status_template,
    order_email_template,
    order_status_template,
)

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailDeliveryError(Exception):
    """Raised when the provider rejects or fails to deliver a message"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml2html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e

    # mjml-python returns an object with .html and .errors
    errors = getattr(result, "errors", None)
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return getattr(result, "html", None) or str(result)


def pdf_attachment(filename: str, pdf: Union[bytes, str]) -> dict:
    """Build an attachment entry from raw PDF bytes or an already base64-encoded string"""
    content = pdf if isinstance(pdf, str) else base64.b64encode(pdf).decode()
    return {"filename": filename, "content": content}


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
    attachments: Optional[list[dict]] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address
        attachments: Optional list of {"filename", "content"} with base64 content

    Returns:
        Send response dict
    """
    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    email_data = {
        "from": from_address or EMAIL_FROM_ADDRESS,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if attachments:
        email_data["attachments"] = attachments

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(email_data)
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e

    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


# ============================================
# Pre-built emails for order and invoice events
# ============================================


async def send_order_email(
    to: str,
    order_number: int,
    company_name: str,
    office_name: str,
    pdf: Union[bytes, str],
) -> dict:
    """Send the order document with its PDF attached"""
    return await send_email(
        to=to,
        subject=f"Order {order_number} from {company_name}",
        mjml_content=order_email_template(order_number, company_name, office_name),
        attachments=[pdf_attachment(f"order-{order_number}.pdf", pdf)],
    )


async def send_order_status_email(
    to: str,
    order_number: int,
    status: str,
    tracking_numbers: Optional[list[str]] = None,
    shipping_method: Optional[str] = None,
) -> dict:
    """Notify the contact that an order changed status"""
    return await send_email(
        to=to,
        subject=f"Order {order_number} Status Update",
        mjml_content=order_status_template(order_number, status, tracking_numbers, shipping_method),
    )


async def send_job_status_email(
    to: str, order_number: Optional[int], description: Optional[str], status: str
) -> dict:
    """Notify the contact that a single job (order item) changed status"""
    return await send_email(
        to=to,
        subject="Job Status Update",
        mjml_content=job_status_template(order_number, description, status),
    )


async def send_invoice_email(
    to: str,
    invoice_number: str,
    company_name: str,
    total: float,
    balance_due: float,
    due_date: str,
    pdf: bytes,
) -> dict:
    """Send an invoice with its PDF attached"""
    return await send_email(
        to=to,
        subject=f"Invoice {invoice_number} from {company_name}",
        mjml_content=invoice_email_template(invoice_number, company_name, total, balance_due, due_date),
        attachments=[pdf_attachment(f"{invoice_number}.pdf", pdf)],
    )
