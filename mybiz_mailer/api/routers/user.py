from fastapi import APIRouter, Depends
from loguru import logger
from ..deps import get_invoice_dispatcher, get_otp_dispatcher
from ...core.config import settings
from ...core.exceptions import MailerError, UnhandledError
from ...models.bill import BillRequest
from ...models.otp import OtpRequest
from ...services.invoice_dispatcher import InvoiceDispatcher
from ...services.otp_dispatcher import OtpDispatcher

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.post(f"/{settings.otp_path}")
async def send_otp(req: OtpRequest, dispatcher: OtpDispatcher = Depends(get_otp_dispatcher)):
    """
    Email a 6-digit login code.

    Example request:
    {"email": "a@b.com"}

    Example response:
    {"success": true, "message": "Verification code sent successfully", "email": "a@b.com", "otp": "482913"}

    `otp` is omitted when EXPOSE_OTP_IN_RESPONSE is off (the production default).
    """
    try:
        result = await dispatcher.dispatch(req.email)
    except MailerError:
        raise
    except Exception as e:
        logger.exception("Error in send_otp: {error}", error=str(e))
        raise UnhandledError("Server error. Please try again.")

    body = {
        "success": True,
        "message": "Verification code sent successfully",
        "email": result.email,
    }
    if result.otp is not None:
        body["otp"] = result.otp
    return body


@router.post(f"/{settings.bill_path}")
async def send_bill(req: BillRequest, dispatcher: InvoiceDispatcher = Depends(get_invoice_dispatcher)):
    """
    Email an invoice PDF fetched from a URL.

    Rich form:
    {
        "to": "a@b.com",
        "customerName": "Asha",
        "invoiceNumber": "INV-1001",
        "cloudinaryUrl": "https://res.cloudinary.com/.../invoice.pdf",
        "paymentStatus": "partial",
        "orderDetails": {"total": 1500, "paidAmount": 500, "dueAmount": 1000, "paymentMethod": "UPI"}
    }

    Minimal form:
    {"to": "a@b.com", "pdfUrl": "https://x/y.pdf"}
    """
    try:
        result = await dispatcher.dispatch(req)
    except MailerError:
        raise
    except Exception as e:
        logger.exception("Error in send_bill: {error}", error=str(e))
        raise UnhandledError(str(e) or "Failed to send invoice email", error=str(e))

    if result.form == "minimal":
        return {"success": True, "message": "Email sent successfully"}

    return {
        "success": True,
        "message": "Invoice email sent successfully",
        "email": result.email,
        "invoiceNumber": result.invoice_number,
        "paymentStatus": result.payment_status,
    }
