from typing import Any


class StockLedgerError(Exception):
    """Base for failures the API turns into a client-facing status code."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(StockLedgerError):
    """Malformed input, or a referenced product/branch/supplier does not exist."""

    status_code = 400


class NotFoundError(StockLedgerError):
    status_code = 404


class InvariantViolationError(StockLedgerError):
    """The change would drive a stock quantity below zero."""

    status_code = 400
