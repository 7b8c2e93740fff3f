"""
Request and result models for the invoice email endpoint.

Order details arrive as a loose bag of optional fields. Each field has a
resolver that turns whatever was sent (or nothing) into display text, so
rendering a template never fails on missing data.
"""

import math
from datetime import date, timedelta
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "N/A"
DEFAULT_CUSTOMER_NAME = "Customer"
DUE_DATE_FORMAT = "%d %b %Y"

BillForm = Literal["rich", "minimal"]


def format_amount(value: float | int | str | None, currency_symbol: str) -> str:
    """
    Render an amount for display.

    Numbers and numeric strings get the currency symbol and two decimals
    ("₹1,250.00"). Other non-empty strings, including "nan", "inf" and
    underscore-grouped digits, are shown as sent. Missing values become "N/A".
    """
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return NOT_AVAILABLE
        if "_" in text:
            return text
        try:
            value = float(text.replace(",", ""))
        except ValueError:
            return text
        if not math.isfinite(value):
            return text
    elif not math.isfinite(float(value)):
        return str(value)
    return f"{currency_symbol}{float(value):,.2f}"


def _text_or_default(value: str | None, default: str) -> str:
    if value is None or not str(value).strip():
        return default
    return str(value).strip()


class OrderDetails(BaseModel):
    """Optional payment figures attached to an invoice email"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    total: float | str | None = Field(default=None)
    paid_amount: float | str | None = Field(default=None, alias="paidAmount")
    due_amount: float | str | None = Field(default=None, alias="dueAmount")
    due_date: str | None = Field(default=None, alias="dueDate")
    payment_method: str | None = Field(default=None, alias="paymentMethod")

    def resolve_total(self, currency_symbol: str) -> str:
        return format_amount(self.total, currency_symbol)

    def resolve_paid_amount(self, currency_symbol: str) -> str:
        return format_amount(self.paid_amount, currency_symbol)

    def resolve_due_amount(self, currency_symbol: str, fallback_to_total: bool = False) -> str:
        """Due amount, optionally falling back to the invoice total when not sent"""
        due = format_amount(self.due_amount, currency_symbol)
        if due == NOT_AVAILABLE and fallback_to_total:
            return self.resolve_total(currency_symbol)
        return due

    def resolve_due_date(self, offset_days: int = 7, today: date | None = None) -> str:
        """Due date as sent, or `offset_days` from today"""
        if self.due_date and self.due_date.strip():
            return self.due_date.strip()
        base = today or date.today()
        return (base + timedelta(days=offset_days)).strftime(DUE_DATE_FORMAT)

    def resolve_payment_method(self) -> str:
        return _text_or_default(self.payment_method, NOT_AVAILABLE)


class BillRequest(BaseModel):
    """
    Body of the bill endpoint.

    Rich form: to, customerName, invoiceNumber, cloudinaryUrl, paymentStatus, orderDetails.
    Minimal form: to, pdfUrl.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    to: str | None = Field(default=None)
    customer_name: str | None = Field(default=None, alias="customerName")
    invoice_number: str | None = Field(default=None, alias="invoiceNumber")
    cloudinary_url: str | None = Field(default=None, alias="cloudinaryUrl")
    pdf_url: str | None = Field(default=None, alias="pdfUrl")
    payment_status: str | None = Field(default=None, alias="paymentStatus")
    order_details: OrderDetails | None = Field(default=None, alias="orderDetails")

    def detect_form(self) -> BillForm:
        """Rich when any rich-only field is present, minimal when only pdfUrl is"""
        if self.cloudinary_url or self.invoice_number or self.payment_status:
            return "rich"
        if self.pdf_url:
            return "minimal"
        return "rich"

    def resolve_customer_name(self) -> str:
        return _text_or_default(self.customer_name, DEFAULT_CUSTOMER_NAME)

    def resolved_order_details(self) -> OrderDetails:
        return self.order_details or OrderDetails()


class BillDispatchResult(BaseModel):
    email: str
    form: BillForm
    invoice_number: str | None = None
    payment_status: str | None = None
