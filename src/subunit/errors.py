"""
Subunit error types.

Callers that only care about "conversion failed" can catch SubunitError;
the subclasses tell an unsupported currency apart from an amount the
integer form cannot hold.
"""


class SubunitError(Exception):
    """Base error for all subunit operations."""
    pass


class UnknownCurrencyError(SubunitError):
    """Currency has no registered subunit factor."""
    def __init__(self, currency, code: str):
        self.currency = currency
        self.code = code
        super().__init__(f"Currency not found in subunit map: {code!r}")


class AmountOverflowError(SubunitError):
    """Converted amount does not fit the lowest-subunit range."""
    def __init__(self, value, limit: int):
        self.value = value
        self.limit = limit
        super().__init__(f"{value} exceeds the supported maximum of {limit} subunits")


class RecordError(SubunitError, ValueError):
    """A money record could not be decoded."""
    pass
