"""Domain errors."""


class LedgerValidationError(ValueError):
    """Raised when a log entry fails validation on write."""


class SettingsValidationError(ValueError):
    """Raised when settings fail validation on save."""


class LogNotFoundError(LookupError):
    """Raised when a log id does not exist in the ledger."""
