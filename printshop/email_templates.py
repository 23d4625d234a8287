"""
MJML Email Templates
Customer-facing order, job status and invoice emails
"""

from typing import Optional

# Print shop theme colors - Indigo/Slate
THEME = {
    "primary": "#4f46e5",
    "primary_light": "#e0e7ff",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}

SHOP_NAME = "Print Shop"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button href="{cta_url}" background-color="{THEME['primary']}" color="#ffffff"
              font-weight="600" border-radius="8px" padding="18px 40px" font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 24px 0" />
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              {SHOP_NAME} - If you have any questions, please contact us.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def order_email_template(order_number: int, company_name: str, office_name: str) -> str:
    """Order document email; the order PDF travels as an attachment"""
    content = f"""
    <mj-text>
      Please find attached the order for your recent order with {SHOP_NAME}.
    </mj-text>

    <mj-text font-size="14px" color="{THEME['text_muted']}">
      Order: {order_number}<br/>
      Company: {company_name}<br/>
      Office: {office_name}
    </mj-text>
    """

    return get_base_template(
        title=f"Order {order_number}",
        preview_text=f"Order {order_number} from {company_name}",
        content_sections=content,
    )


def order_status_template(
    order_number: int,
    status: str,
    tracking_numbers: Optional[list[str]] = None,
    shipping_method: Optional[str] = None,
) -> str:
    """Order status change notification, with shipping details when present"""
    shipping_section = ""
    if tracking_numbers:
        tracking_lines = "<br/>".join(f"• {number}" for number in tracking_numbers)
        shipping_section += f"""
    <mj-text font-size="14px" color="{THEME['text_muted']}">
      <strong>Tracking Number(s):</strong><br/>
      {tracking_lines}
    </mj-text>
        """
    if shipping_method:
        shipping_section += f"""
    <mj-text font-size="14px" color="{THEME['text_muted']}">
      <strong>Shipping Method:</strong> {shipping_method}
    </mj-text>
        """

    content = f"""
    <mj-text>
      The status of your order <strong>{order_number}</strong> has been updated.
    </mj-text>

    <mj-text align="center" font-size="22px" font-weight="700" color="{THEME['primary']}" padding="16px 0">
      {status}
    </mj-text>
    {shipping_section}
    """

    return get_base_template(
        title=f"Order {order_number} Status Update",
        preview_text=f"Your order is now {status}",
        content_sections=content,
    )


def job_status_template(order_number: Optional[int], description: Optional[str], status: str) -> str:
    """Order item (job) status change notification"""
    order_line = f"Order: {order_number}<br/>" if order_number else ""
    content = f"""
    <mj-text>
      Your order item status has been updated to: <strong>{status}</strong>
    </mj-text>

    <mj-text font-size="14px" color="{THEME['text_muted']}">
      {order_line}Description: {description or ''}
    </mj-text>
    """

    return get_base_template(
        title="Order Item Status Update",
        preview_text=f"Job status: {status}",
        content_sections=content,
    )


def invoice_email_template(
    invoice_number: str,
    company_name: str,
    total: float,
    balance_due: float,
    due_date: str = "",
) -> str:
    """Invoice email; the invoice PDF travels as an attachment"""
    due_date_section = f"<br/>Due Date: {due_date}" if due_date else ""

    content = f"""
    <mj-text>
      Hello {company_name},
    </mj-text>

    <mj-text>
      Please find attached invoice <strong>{invoice_number}</strong> from {SHOP_NAME}.
    </mj-text>

    <mj-text align="center" font-size="32px" font-weight="700" color="{THEME['text_primary']}" padding="20px 0">
      ${total:,.2f}
    </mj-text>

    <mj-text font-size="14px" color="{THEME['text_muted']}">
      Invoice: {invoice_number}{due_date_section}<br/>
      Balance Due: ${balance_due:,.2f}
    </mj-text>
    """

    return get_base_template(
        title=f"Invoice {invoice_number}",
        preview_text=f"Invoice {invoice_number} from {SHOP_NAME}",
        content_sections=content,
    )
