"""
Subunit — convert money between lowest-subunit integers and highest-unit decimals.

    >>> from subunit import Currency, LowestSubunit
    >>> LowestSubunit(150, Currency.INR).convert()
    HighestUnit(amount=Decimal('1.50'), currency=<Currency.INR: 'INR'>)
"""

__version__ = "0.1.0"

from .errors import AmountOverflowError, RecordError, SubunitError, UnknownCurrencyError
from .factor import (
    Currency,
    HasCurrencyCode,
    currency_code,
    get_exponent,
    get_factor,
    is_supported,
    supported_currencies,
)
from .money import (
    DEFAULT_ROUNDING,
    MAX_SUBUNITS,
    HighestUnit,
    LowestSubunit,
    format_amount,
    to_highest_unit,
    to_lowest_subunit,
)
from .record import MoneyRecord, decode_record, loads_record

__all__ = [
    "LowestSubunit", "HighestUnit", "to_highest_unit", "to_lowest_subunit", "format_amount",
    "DEFAULT_ROUNDING", "MAX_SUBUNITS",
    "Currency", "HasCurrencyCode", "currency_code", "get_factor", "get_exponent",
    "is_supported", "supported_currencies",
    "MoneyRecord", "decode_record", "loads_record",
    "SubunitError", "UnknownCurrencyError", "AmountOverflowError", "RecordError",
]
