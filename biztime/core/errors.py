"""
Error types raised by the service layer.

Each error carries the HTTP status it maps to; the handlers registered in
biztime.core.error_handlers turn them into JSON responses.
"""


class BizTimeError(Exception):
    http_status = 500

    def __init__(self, message: str, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": {"message": self.message, "status": self.http_status}}


class InvalidInputError(BizTimeError):
    http_status = 400


class NotFoundError(BizTimeError):
    """Requested entity does not exist, or a reference to one is dangling."""

    http_status = 404


class ConflictError(BizTimeError):
    """A uniqueness constraint rejected the write."""

    http_status = 409


class StorageError(BizTimeError):
    """Any other failure reported by the database."""

    http_status = 500


def company_not_found(code: str) -> str:
    return f"Company '{code}' not found."


def industry_not_found(code: str) -> str:
    return f"Industry '{code}' not found."


def invoice_not_found(invoice_id: int) -> str:
    return f"Invoice {invoice_id} not found."
