"""
Shared enumerations.

Batch corrections report a status per item, and failed
items carry a machine-readable reason.
"""

import enum


class CorrectionStatus(str, enum.Enum):
    """Outcome of one item in a correction batch."""
    OK = "OK"
    ERROR = "ERROR"


class CorrectionErrorReason(str, enum.Enum):
    """Why a correction item was not committed."""
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_AMOUNT = "INVALID_AMOUNT"
