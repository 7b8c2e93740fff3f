"""
Unit tests for the invoice templates and order-detail fallbacks.
"""

from datetime import date
import pytest
from mybiz_mailer.core.config import settings
from mybiz_mailer.models.bill import BillRequest, OrderDetails, format_amount
from mybiz_mailer.services.email_templates import (
    INVOICE_TEMPLATES,
    render_full_payment_email,
    render_generic_invoice_email,
    render_invoice_email,
    render_otp_email,
    render_partial_payment_email,
    render_payment_due_email,
    select_invoice_template,
)


@pytest.fixture(autouse=True)
def rupee_currency(monkeypatch):
    monkeypatch.setattr(settings, "currency_symbol", "₹")
    monkeypatch.setattr(settings, "due_date_offset_days", 7)


class TestFormatAmount:
    def test_number(self):
        assert format_amount(1500, "₹") == "₹1,500.00"

    def test_numeric_string(self):
        assert format_amount("1,250.5", "$") == "$1,250.50"

    def test_missing(self):
        assert format_amount(None, "₹") == "N/A"
        assert format_amount("  ", "₹") == "N/A"

    def test_free_text_is_kept(self):
        assert format_amount("on request", "₹") == "on request"

    @pytest.mark.parametrize("text", ["nan", "inf", "Infinity", "1_000"])
    def test_non_finite_or_underscored_text_is_kept(self, text):
        assert format_amount(text, "₹") == text

    def test_non_finite_number_is_not_formatted(self):
        assert format_amount(float("inf"), "₹") == "inf"


class TestLooseOrderDetails:
    def test_numeric_text_fields_are_coerced(self):
        details = OrderDetails.model_validate({"dueDate": 20250101, "paymentMethod": 3})
        assert details.resolve_due_date() == "20250101"
        assert details.resolve_payment_method() == "3"


class TestOrderDetails:
    def test_camel_case_aliases(self):
        details = OrderDetails.model_validate(
            {"total": 100, "paidAmount": 40, "dueAmount": 60, "dueDate": "2025-12-01", "paymentMethod": "Card"}
        )
        assert details.resolve_paid_amount("₹") == "₹40.00"
        assert details.resolve_due_amount("₹") == "₹60.00"
        assert details.resolve_due_date() == "2025-12-01"
        assert details.resolve_payment_method() == "Card"

    def test_all_fields_fall_back(self):
        details = OrderDetails()
        assert details.resolve_total("₹") == "N/A"
        assert details.resolve_paid_amount("₹") == "N/A"
        assert details.resolve_due_amount("₹") == "N/A"
        assert details.resolve_payment_method() == "N/A"
        assert details.resolve_due_date(7, today=date(2025, 1, 1)) == "08 Jan 2025"

    def test_due_amount_falls_back_to_total(self):
        details = OrderDetails(total=900)
        assert details.resolve_due_amount("₹", fallback_to_total=True) == "₹900.00"
        assert details.resolve_due_amount("₹") == "N/A"


class TestTemplateSelection:
    def test_known_statuses(self):
        assert select_invoice_template("full") is render_full_payment_email
        assert select_invoice_template("due") is render_payment_due_email
        assert select_invoice_template("partial") is render_partial_payment_email
        assert set(INVOICE_TEMPLATES) == {"full", "due", "partial"}

    @pytest.mark.parametrize("status", ["refunded", "FULL", "", None])
    def test_unknown_status_falls_back_to_full(self, status):
        assert select_invoice_template(status) is render_full_payment_email


class TestInvoiceTemplates:
    def test_full_payment(self):
        email = render_full_payment_email("Asha", "INV-1", OrderDetails(total=1500, payment_method="UPI"))
        assert "FULLY PAID" in email.subject
        assert "INV-1" in email.subject
        assert "Total Amount: ₹1,500.00" in email.text
        assert "Payment Method: UPI" in email.text
        assert "#16a34a" in email.html

    def test_payment_due_defaults(self):
        email = render_payment_due_email("Asha", "INV-2", OrderDetails(total=800), today=date(2025, 3, 28))
        assert "PAYMENT DUE" in email.subject
        assert "Amount Due: ₹800.00" in email.text
        assert "Due Date: 04 Apr 2025" in email.text
        assert "#f59e0b" in email.html

    def test_partial_payment(self):
        details = OrderDetails(total=1500, paid_amount=500, due_amount=1000, payment_method="Cash")
        email = render_partial_payment_email("Asha", "INV-3", details)
        assert "PARTIALLY PAID" in email.subject
        assert "Amount Paid: ₹500.00" in email.text
        assert "Balance Due: ₹1,000.00" in email.text
        assert "#2563eb" in email.html

    @pytest.mark.parametrize("render", [render_full_payment_email, render_payment_due_email, render_partial_payment_email])
    def test_missing_total_renders_placeholder(self, render):
        email = render("Asha", "INV-4", OrderDetails())
        assert "Total Amount: N/A" in email.text
        assert "N/A" in email.html

    def test_html_escapes_customer_name(self):
        email = render_full_payment_email("<b>Eve</b>", "INV-5", OrderDetails())
        assert "<b>Eve</b>" not in email.html
        assert "&lt;b&gt;Eve&lt;/b&gt;" in email.html

    def test_render_invoice_email_from_request(self):
        req = BillRequest.model_validate(
            {"to": "a@b.com", "invoiceNumber": "INV-6", "paymentStatus": "due", "cloudinaryUrl": "https://x/y.pdf"}
        )
        email = render_invoice_email(req, today=date(2025, 1, 1))
        assert "PAYMENT DUE" in email.subject
        assert "Hi Customer," in email.text
        assert "Amount Due: N/A" in email.text
        assert "08 Jan 2025" in email.text


def test_generic_invoice_email():
    email = render_generic_invoice_email()
    assert settings.brand_name in email.subject
    assert "attached" in email.text
    assert email.html


def test_otp_email_mentions_code_and_recipient():
    email = render_otp_email("123456", "a@b.com")
    assert email.subject == "Your verification code"
    assert "123456" in email.text
    assert "123456" in email.html
    assert "This email was sent to a@b.com" in email.html
