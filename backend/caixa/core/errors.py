"""Ledger error taxonomy.

Services raise these; routers translate them into HTTP responses.
"""


class LedgerError(Exception):
    """Base class for every ledger failure surfaced to callers."""


class ValidationError(LedgerError, ValueError):
    """Input rejected before any write was attempted."""


class NotFoundError(LedgerError, LookupError):
    """A payment, installment or directory reference does not resolve."""


class ConsistencyViolation(LedgerError):
    """A computed installment plan no longer adds up to its payment total."""


class PersistenceFailure(LedgerError):
    """The storage layer could not commit; nothing was persisted. Safe to retry."""
