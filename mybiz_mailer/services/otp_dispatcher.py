import secrets
from loguru import logger
from .email_templates import render_otp_email
from .mail_transport import MailTransport
from ..core.exceptions import DispatchError, ValidationError
from ..models.otp import OtpDispatchResult

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp() -> str:
    """Uniformly random code in [100000, 999999]; always six digits"""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OtpDispatcher:
    """
    Generates a login code and emails it.

    The code is not stored or verified anywhere in this service. Whether it
    is echoed back to the caller is controlled by `expose_otp`.
    """

    def __init__(self, transport: MailTransport, expose_otp: bool = False):
        self.transport = transport
        self.expose_otp = expose_otp

    async def dispatch(self, email: str | None) -> OtpDispatchResult:
        if not email or not email.strip():
            raise ValidationError("Email is required")
        email = email.strip()

        otp = generate_otp()
        logger.info("Sending OTP", email=email)
        logger.debug("Generated OTP {otp}", otp=otp, email=email)

        rendered = render_otp_email(otp, email)
        sent = await self.transport.send(email, rendered.subject, rendered.text, rendered.html)
        if not sent:
            logger.error("OTP email not sent", email=email)
            raise DispatchError("Failed to send OTP email")

        logger.info("OTP sent successfully", email=email)
        return OtpDispatchResult(email=email, otp=otp if self.expose_otp else None)
