"""
Invoice email dispatch.

Downloads the invoice PDF from its hosted URL, picks a template by payment
status and sends it as an attachment. One implementation serves both body
shapes the bill endpoint accepts:

- rich:    to, customerName, invoiceNumber, cloudinaryUrl, paymentStatus, orderDetails
- minimal: to, pdfUrl
"""

from datetime import date
from typing import Literal
from loguru import logger
from .document_fetcher import DocumentFetcher
from .email_templates import render_generic_invoice_email, render_invoice_email
from .mail_transport import MailTransport
from ..core.exceptions import DispatchError, ValidationError
from ..models.bill import BillDispatchResult, BillForm, BillRequest
from ..models.email import Attachment

PDF_CONTENT_TYPE = "application/pdf"
MINIMAL_ATTACHMENT_NAME = "invoice.pdf"

RICH_REQUIRED_FIELDS = {
    "to": "to",
    "cloudinaryUrl": "cloudinary_url",
    "invoiceNumber": "invoice_number",
    "paymentStatus": "payment_status",
}
MINIMAL_REQUIRED_FIELDS = {
    "to": "to",
    "pdfUrl": "pdf_url",
}


def attachment_filename(invoice_number: str) -> str:
    return f"invoice_{invoice_number}.pdf"


def _missing_fields(req: BillRequest, required: dict[str, str]) -> list[str]:
    missing = []
    for public_name, attr in required.items():
        value = getattr(req, attr)
        if value is None or not str(value).strip():
            missing.append(public_name)
    return missing


class InvoiceDispatcher:
    def __init__(
        self,
        transport: MailTransport,
        fetcher: DocumentFetcher,
        form: Literal["auto", "rich", "minimal"] = "auto",
    ):
        self.transport = transport
        self.fetcher = fetcher
        self.form = form

    def resolve_form(self, req: BillRequest) -> BillForm:
        if self.form == "auto":
            return req.detect_form()
        return self.form

    async def dispatch(self, req: BillRequest, today: date | None = None) -> BillDispatchResult:
        form = self.resolve_form(req)
        if form == "minimal":
            return await self._dispatch_minimal(req)
        return await self._dispatch_rich(req, today=today)

    async def _dispatch_rich(self, req: BillRequest, today: date | None = None) -> BillDispatchResult:
        missing = _missing_fields(req, RICH_REQUIRED_FIELDS)
        if missing:
            logger.warning("Invoice request rejected", missing=missing)
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        logger.info(
            "Sending invoice email",
            to=req.to,
            invoice_number=req.invoice_number,
            payment_status=req.payment_status,
        )
        pdf_bytes = await self.fetcher.fetch(req.cloudinary_url)
        rendered = render_invoice_email(req, today=today)
        attachment = Attachment(
            filename=attachment_filename(req.invoice_number),
            content=pdf_bytes,
            content_type=PDF_CONTENT_TYPE,
        )

        sent = await self.transport.send(req.to, rendered.subject, rendered.text, rendered.html, [attachment])
        if not sent:
            logger.error("Invoice email not sent", to=req.to, invoice_number=req.invoice_number)
            raise DispatchError("Failed to send email")

        logger.info("Invoice email sent", to=req.to, invoice_number=req.invoice_number)
        return BillDispatchResult(
            email=req.to,
            form="rich",
            invoice_number=req.invoice_number,
            payment_status=req.payment_status,
        )

    async def _dispatch_minimal(self, req: BillRequest) -> BillDispatchResult:
        missing = _missing_fields(req, MINIMAL_REQUIRED_FIELDS)
        if missing:
            logger.warning("Invoice request rejected", missing=missing)
            raise ValidationError("Recipient email and PDF URL are required")

        logger.info("Sending invoice email", to=req.to, pdf_url=req.pdf_url)
        pdf_bytes = await self.fetcher.fetch(req.pdf_url)
        rendered = render_generic_invoice_email()
        attachment = Attachment(filename=MINIMAL_ATTACHMENT_NAME, content=pdf_bytes, content_type=PDF_CONTENT_TYPE)

        sent = await self.transport.send(req.to, rendered.subject, rendered.text, rendered.html, [attachment])
        if not sent:
            logger.error("Invoice email not sent", to=req.to)
            raise DispatchError("Failed to send email")

        return BillDispatchResult(email=req.to, form="minimal")
