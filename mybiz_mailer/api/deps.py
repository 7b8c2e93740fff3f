from functools import lru_cache
from fastapi import Depends
from ..core.config import settings
from ..services.document_fetcher import DocumentFetcher
from ..services.invoice_dispatcher import InvoiceDispatcher
from ..services.mail_transport import MailTransport, create_mail_transport
from ..services.otp_dispatcher import OtpDispatcher


# Built once per process from the startup configuration; tests swap it with
# app.dependency_overrides[get_mail_transport].
@lru_cache(maxsize=1)
def get_mail_transport() -> MailTransport:
    return create_mail_transport(settings)


def get_document_fetcher() -> DocumentFetcher:
    return DocumentFetcher()


def get_otp_dispatcher(transport: MailTransport = Depends(get_mail_transport)) -> OtpDispatcher:
    return OtpDispatcher(transport, expose_otp=settings.otp_exposed)


def get_invoice_dispatcher(
    transport: MailTransport = Depends(get_mail_transport),
    fetcher: DocumentFetcher = Depends(get_document_fetcher),
) -> InvoiceDispatcher:
    return InvoiceDispatcher(transport, fetcher, form=settings.bill_request_form)
