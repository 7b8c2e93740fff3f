"""
Email templates for OTP and invoice messages.

Every template returns a RenderedEmail with a subject, a plain-text body
and an HTML body. Invoice templates are keyed by payment status; unknown
statuses are rendered with the "full" template.
"""

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Callable
from ..core.config import settings
from ..models.bill import BillRequest, OrderDetails


@dataclass
class RenderedEmail:
    subject: str
    text: str
    html: str


def _signature() -> str:
    return f"{settings.brand_name} - {settings.brand_tagline}"


# ---------------------------------------------------------------------------
# OTP
# ---------------------------------------------------------------------------

def render_otp_email(otp: str, email: str) -> RenderedEmail:
    minutes = settings.otp_validity_minutes
    subject = "Your verification code"
    text = f"""Hi,

Enter this code to continue logging in without a password:

{otp}

This code is valid for {minutes} minutes and can only be used once. By entering this code, you will also confirm the email address associated with your account.

If you didn't attempt to log in, you can safely ignore this email.

Best regards,
{_signature()}"""

    html = f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; max-width: 560px; margin: 0 auto; padding: 20px; color: #333;">
        <p style="margin-bottom: 24px; font-size: 16px; line-height: 1.5;">Hi,</p>
        <p style="margin-bottom: 24px; font-size: 16px; line-height: 1.5;">Enter this code to continue logging in without a password:</p>
        <div style="background-color: #f5f5f5; border-radius: 12px; padding: 24px; margin-bottom: 24px; text-align: center;">
            <span style="font-size: 40px; font-weight: 600; letter-spacing: 8px; color: #1a1a1a; font-family: 'Courier New', monospace;">{otp}</span>
        </div>
        <p style="margin-bottom: 24px; font-size: 16px; line-height: 1.5; color: #666;">
            This code is valid for <strong>{minutes} minutes</strong> and can only be used once. By entering this code, you will also confirm the email address associated with your account.
        </p>
        <p style="margin-bottom: 24px; font-size: 16px; line-height: 1.5; color: #666;">
            If you didn't attempt to log in, you can safely ignore this email.
        </p>
        <p style="margin-bottom: 8px; font-size: 16px; line-height: 1.5;">Best regards,</p>
        <p style="margin-top: 0; font-size: 16px; line-height: 1.5; font-weight: 500;">{escape(_signature())}</p>
        <hr style="border: 0; border-top: 1px solid #eaeaea; margin: 32px 0 24px;">
        <p style="font-size: 14px; color: #999; line-height: 1.5;">
            This email was sent to {escape(email)}. If you didn't request this code, please ignore this email.
        </p>
    </div>
    """
    return RenderedEmail(subject=subject, text=text, html=html)


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

FULL_MARKER = "FULLY PAID"
DUE_MARKER = "PAYMENT DUE"
PARTIAL_MARKER = "PARTIALLY PAID"


def _invoice_html(
    customer_name: str,
    invoice_number: str,
    badge: str,
    badge_color: str,
    intro: str,
    rows: list[tuple[str, str]],
    closing: str,
) -> str:
    row_html = "".join(
        f"""
            <tr>
                <td style="padding: 8px 0; color: #666;">{escape(label)}</td>
                <td style="padding: 8px 0; text-align: right; font-weight: 600;">{escape(value)}</td>
            </tr>"""
        for label, value in rows
    )
    return f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; max-width: 560px; margin: 0 auto; padding: 20px; color: #333;">
        <p style="font-size: 16px; line-height: 1.5;">Hi {escape(customer_name)},</p>
        <div style="display: inline-block; background-color: {badge_color}; color: #fff; border-radius: 999px; padding: 6px 14px; font-size: 13px; font-weight: 700; letter-spacing: 1px;">{badge}</div>
        <p style="font-size: 16px; line-height: 1.5;">{escape(intro)}</p>
        <table style="width: 100%; border-collapse: collapse; border-top: 1px solid #eaeaea; border-bottom: 1px solid #eaeaea; margin: 16px 0;">
            <tr>
                <td style="padding: 8px 0; color: #666;">Invoice Number</td>
                <td style="padding: 8px 0; text-align: right; font-weight: 600;">#{escape(invoice_number)}</td>
            </tr>{row_html}
        </table>
        <p style="font-size: 16px; line-height: 1.5; color: #666;">{escape(closing)}</p>
        <p style="margin-bottom: 8px; font-size: 16px;">Best regards,</p>
        <p style="margin-top: 0; font-size: 16px; font-weight: 500;">{escape(_signature())}</p>
    </div>
    """


def _invoice_text(
    customer_name: str,
    invoice_number: str,
    badge: str,
    intro: str,
    rows: list[tuple[str, str]],
    closing: str,
) -> str:
    lines = [f"Hi {customer_name},", "", f"[{badge}]", "", intro, "", f"Invoice Number: #{invoice_number}"]
    lines += [f"{label}: {value}" for label, value in rows]
    lines += ["", closing, "", "Best regards,", _signature()]
    return "\n".join(lines)


def render_full_payment_email(
    customer_name: str, invoice_number: str, details: OrderDetails, today: date | None = None
) -> RenderedEmail:
    """Green "FULLY PAID" receipt-style invoice"""
    symbol = settings.currency_symbol
    rows = [
        ("Total Amount", details.resolve_total(symbol)),
        ("Payment Method", details.resolve_payment_method()),
        ("Status", "Paid in full"),
    ]
    intro = "Thank you for your payment! Your invoice has been paid in full."
    closing = "Your invoice is attached to this email for your records."
    return RenderedEmail(
        subject=f"Invoice #{invoice_number} - {FULL_MARKER} | {settings.brand_name}",
        text=_invoice_text(customer_name, invoice_number, FULL_MARKER, intro, rows, closing),
        html=_invoice_html(customer_name, invoice_number, FULL_MARKER, "#16a34a", intro, rows, closing),
    )


def render_payment_due_email(
    customer_name: str, invoice_number: str, details: OrderDetails, today: date | None = None
) -> RenderedEmail:
    """Amber "PAYMENT DUE" reminder; due amount falls back to the total"""
    symbol = settings.currency_symbol
    due_date = details.resolve_due_date(settings.due_date_offset_days, today=today)
    rows = [
        ("Total Amount", details.resolve_total(symbol)),
        ("Amount Due", details.resolve_due_amount(symbol, fallback_to_total=True)),
        ("Due Date", due_date),
    ]
    intro = "This is a friendly reminder that payment for your invoice is due."
    closing = f"Please complete the payment by {due_date}. Your invoice is attached to this email."
    return RenderedEmail(
        subject=f"Invoice #{invoice_number} - {DUE_MARKER} | {settings.brand_name}",
        text=_invoice_text(customer_name, invoice_number, DUE_MARKER, intro, rows, closing),
        html=_invoice_html(customer_name, invoice_number, DUE_MARKER, "#f59e0b", intro, rows, closing),
    )


def render_partial_payment_email(
    customer_name: str, invoice_number: str, details: OrderDetails, today: date | None = None
) -> RenderedEmail:
    """Blue "PARTIALLY PAID" statement with paid and outstanding amounts"""
    symbol = settings.currency_symbol
    rows = [
        ("Total Amount", details.resolve_total(symbol)),
        ("Amount Paid", details.resolve_paid_amount(symbol)),
        ("Balance Due", details.resolve_due_amount(symbol)),
        ("Payment Method", details.resolve_payment_method()),
    ]
    intro = "Thank you for your partial payment. A balance remains on your invoice."
    closing = "Please pay the remaining balance at your earliest convenience. Your invoice is attached to this email."
    return RenderedEmail(
        subject=f"Invoice #{invoice_number} - {PARTIAL_MARKER} | {settings.brand_name}",
        text=_invoice_text(customer_name, invoice_number, PARTIAL_MARKER, intro, rows, closing),
        html=_invoice_html(customer_name, invoice_number, PARTIAL_MARKER, "#2563eb", intro, rows, closing),
    )


InvoiceTemplate = Callable[..., RenderedEmail]

INVOICE_TEMPLATES: dict[str, InvoiceTemplate] = {
    "full": render_full_payment_email,
    "due": render_payment_due_email,
    "partial": render_partial_payment_email,
}


def select_invoice_template(payment_status: str | None) -> InvoiceTemplate:
    """Exact match on status; anything unrecognised gets the "full" template"""
    return INVOICE_TEMPLATES.get(payment_status or "", render_full_payment_email)


def render_invoice_email(req: BillRequest, today: date | None = None) -> RenderedEmail:
    template = select_invoice_template(req.payment_status)
    return template(
        req.resolve_customer_name(),
        req.invoice_number or "",
        req.resolved_order_details(),
        today=today,
    )


def render_generic_invoice_email() -> RenderedEmail:
    """Message used for the minimal {to, pdfUrl} form"""
    subject = f"Your Invoice from {settings.brand_name}"
    text = f"""Hello,

Please find your invoice attached to this email.

If you have any questions about this invoice, simply reply to this email.

Thank you for your business!

Best regards,
{_signature()}"""
    html = f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; max-width: 560px; margin: 0 auto; padding: 20px; color: #333;">
        <p style="font-size: 16px; line-height: 1.5;">Hello,</p>
        <p style="font-size: 16px; line-height: 1.5;">Please find your invoice attached to this email.</p>
        <p style="font-size: 16px; line-height: 1.5; color: #666;">If you have any questions about this invoice, simply reply to this email.</p>
        <p style="font-size: 16px; line-height: 1.5;">Thank you for your business!</p>
        <p style="margin-bottom: 8px; font-size: 16px;">Best regards,</p>
        <p style="margin-top: 0; font-size: 16px; font-weight: 500;">{escape(_signature())}</p>
    </div>
    """
    return RenderedEmail(subject=subject, text=text, html=html)
