from enum import Enum
from typing import List


class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidChartInputError(KundaliError):
    """
    Raised when a provider chart payload is structurally malformed
    (for example the ascendant block is missing entirely).
    """
    pass


class InvalidOutlineError(KundaliError):
    """
    Raised when a structured outline is missing required fields.
    """
    pass


class ValidationMismatchError(KundaliError):
    """
    Raised when an outline disagrees with the canonical facts and
    must not be released downstream.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        self.code = DiagnosticCode.VALIDATION_MISMATCH
        super().__init__(
            f"Outline failed validation with {len(self.errors)} mismatch(es): "
            + "; ".join(self.errors)
        )


# ─────────────────────────────────────────────
# Non-fatal diagnostics
# ─────────────────────────────────────────────

class DiagnosticCode(str, Enum):
    MISSING_REQUIRED_PLANET = "MissingRequiredPlanet"
    INVALID_SIGN_OR_HOUSE = "InvalidSignOrHouse"
    AMBIGUOUS_PROVIDER_HOUSE = "AmbiguousProviderHouse"
    UNKNOWN_NAME = "UnknownName"
    DUPLICATE_PLANET = "DuplicatePlanet"
    MISSING_DASHA_PLANET = "MissingDashaPlanet"
    VALIDATION_MISMATCH = "ValidationMismatch"
