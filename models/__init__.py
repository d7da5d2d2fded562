"""
Data models for the transactions lookup: query payloads, table model and wizard state.
"""
from .errors import FetchError, InvalidTransitionError, ValidationError
from .schemas import (
    STATUS_OPTIONS,
    ColumnSpec,
    MasterObjectResult,
    Notification,
    ResultSet,
    TransactionQuery,
    TransactionType,
    WizardState,
)

__all__ = [
    "STATUS_OPTIONS",
    "ColumnSpec",
    "FetchError",
    "InvalidTransitionError",
    "MasterObjectResult",
    "Notification",
    "ResultSet",
    "TransactionQuery",
    "TransactionType",
    "ValidationError",
    "WizardState",
]
