"""Ledger error taxonomy shared by services and routes."""


class LedgerError(Exception):
    """Base class for errors raised by the ledger services."""


class ValidationError(LedgerError):
    """A required field is missing or malformed."""


class NotFoundError(LedgerError):
    """A lookup by id did not resolve to a row."""


class OverpaymentError(LedgerError):
    """Applying a payment would push amount_received past total_amount."""


class StoreError(LedgerError):
    """The underlying store rejected a read or write."""
