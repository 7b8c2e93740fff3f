"""
Service-level errors.

Every error raised by a dispatcher carries the HTTP status it maps to, so
the API layer converts it to a `{success: false, message}` body in one place.
"""


class MailerError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code: int = 500

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(MailerError):
    """A required request field is missing"""

    status_code = 400


class FetchError(MailerError):
    """The invoice document could not be downloaded"""

    status_code = 500


class DispatchError(MailerError):
    """The mail transport reported a failed send"""

    status_code = 500


class UnhandledError(MailerError):
    """Any other failure caught at the request boundary"""

    status_code = 500
