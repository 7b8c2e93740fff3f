"""
Mail transports.

A transport takes a rendered message and reports whether it was delivered.
It never raises: every failure is logged and collapses to False, and the
caller turns that into a service-level error.

Implementations:
- SmtpMailTransport: real delivery through an SMTP account (Gmail by default)
- InMemoryMailTransport: keeps messages in an outbox (tests, local development)
"""

import asyncio
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage as MimeMessage
from email.utils import formataddr, make_msgid
from loguru import logger
from ..core.config import Settings, settings as default_settings
from ..models.email import Attachment, EmailMessage


class MailTransport(ABC):
    """Interface every transport implements"""

    async def send(
        self,
        to: str,
        subject: str,
        text: str,
        html: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> bool:
        """
        Send one email.

        Returns:
            True if the message was accepted for delivery, False otherwise
        """
        message = EmailMessage(
            to=to, subject=subject, text=text, html=html, attachments=list(attachments or [])
        )
        try:
            return await self.deliver(message)
        except Exception as e:
            logger.error("Error sending email: {error}", to=to, error=str(e))
            return False

    @abstractmethod
    async def deliver(self, message: EmailMessage) -> bool:
        pass


class SmtpMailTransport(MailTransport):
    def __init__(self, config: Settings | None = None):
        self.config = config or default_settings

    @property
    def from_address(self) -> str:
        return formataddr((self.config.mail_from_name, self.config.user_email or ""))

    def build_mime(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["From"] = self.from_address
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        mime.set_content(message.text)
        if message.html:
            mime.add_alternative(message.html, subtype="html")
        for attachment in message.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            mime.add_attachment(
                attachment.content,
                maintype=maintype or "application",
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return mime

    def _send_blocking(self, mime: MimeMessage) -> None:
        cfg = self.config
        context = ssl.create_default_context()
        if cfg.smtp_use_ssl:
            server = smtplib.SMTP_SSL(cfg.smtp_host, cfg.smtp_port, context=context, timeout=cfg.smtp_timeout)
        else:
            server = smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout)
        with server:
            if not cfg.smtp_use_ssl:
                server.starttls(context=context)
            server.login(cfg.user_email, cfg.user_email_pass)
            server.send_message(mime)

    async def deliver(self, message: EmailMessage) -> bool:
        if not (self.config.user_email and self.config.user_email_pass):
            logger.error("Mail account not configured - set USER_EMAIL and USER_EMAIL_PASS")
            return False

        mime = self.build_mime(message)
        await asyncio.to_thread(self._send_blocking, mime)
        logger.info(
            "Email sent successfully",
            message_id=mime["Message-ID"],
            to=message.to,
            attachments=len(message.attachments),
        )
        return True


class InMemoryMailTransport(MailTransport):
    """
    Records messages instead of sending them. Set `fail = True` to simulate a broken transport.

    Only the newest `max_messages` are kept so a long-running dev server
    does not hold every attachment in memory.
    """

    def __init__(self, fail: bool = False, max_messages: int = 100):
        self.outbox: list[EmailMessage] = []
        self.fail = fail
        self.max_messages = max_messages

    async def deliver(self, message: EmailMessage) -> bool:
        if self.fail:
            logger.warning("In-memory transport configured to fail", to=message.to)
            return False
        self.outbox.append(message)
        if len(self.outbox) > self.max_messages:
            del self.outbox[: len(self.outbox) - self.max_messages]
        logger.info(f"[MEMORY EMAIL] To: {message.to}, Subject: {message.subject}")
        return True

    def clear(self) -> None:
        self.outbox.clear()


def create_mail_transport(config: Settings | None = None) -> MailTransport:
    cfg = config or default_settings
    if cfg.mail_transport == "memory":
        return InMemoryMailTransport()
    return SmtpMailTransport(cfg)
