"""
Currency factor lookup.

Maps ISO 4217 codes to the number of subunits in one highest unit. The
table is static: a code missing from it is a configuration problem, and
every lookup of it raises UnknownCurrencyError.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Protocol, Union, runtime_checkable

from .errors import UnknownCurrencyError


logger = logging.getLogger(__name__)

ZERO_DECIMAL_CURRENCIES = frozenset({
    "BIF", "CLP", "DJF", "GNF", "JPY", "KMF", "KRW", "MGA", "PYG", "RWF", "UGX", "VND", "VUV",
    "XAF", "XOF", "XPF",
})

TWO_DECIMAL_CURRENCIES = frozenset({
    "AED", "ALL", "AMD", "ANG", "ARS", "AUD", "AWG", "AZN", "BBD", "BDT", "BMD", "BND", "BOB",
    "BRL", "BSD", "BWP", "BZD", "CAD", "CHF", "CNY", "COP", "CRC", "CUP", "CZK", "DKK", "DOP",
    "DZD", "EGP", "ETB", "EUR", "FJD", "GBP", "GHS", "GIP", "GMD", "GTQ", "GYD", "HKD", "HNL",
    "HRK", "HTG", "HUF", "IDR", "ILS", "INR", "JMD", "KES", "KGS", "KHR", "KYD", "KZT", "LAK",
    "LBP", "LKR", "LRD", "LSL", "MAD", "MDL", "MKD", "MMK", "MNT", "MOP", "MUR", "MVR", "MWK",
    "MXN", "MYR", "NAD", "NGN", "NIO", "NOK", "NPR", "NZD", "PEN", "PGK", "PHP", "PKR", "PLN",
    "QAR", "RUB", "SAR", "SCR", "SEK", "SGD", "SLL", "SOS", "SSP", "SVC", "SZL", "THB", "TTD",
    "TWD", "TZS", "USD", "UYU", "UZS", "YER", "ZAR",
})

THREE_DECIMAL_CURRENCIES = frozenset({"BHD", "JOD", "KWD", "OMR", "TND"})


def _build_exponents() -> dict[str, int]:
    exponents: dict[str, int] = {}
    for exponent, codes in (
        (0, ZERO_DECIMAL_CURRENCIES),
        (2, TWO_DECIMAL_CURRENCIES),
        (3, THREE_DECIMAL_CURRENCIES),
    ):
        for code in codes:
            exponents[code] = exponent
    return exponents


SUBUNIT_EXPONENTS = MappingProxyType(_build_exponents())
SUBUNIT_FACTORS = MappingProxyType({code: 10 ** exp for code, exp in SUBUNIT_EXPONENTS.items()})


@runtime_checkable
class HasCurrencyCode(Protocol):
    """Anything that can name its ISO 4217 currency code.

    Callers bring their own enumerations (with whatever member names their
    wire format uses) and implement ``currency()`` to map onto a code.
    """

    def currency(self) -> str:
        ...


CurrencyLike = Union[HasCurrencyCode, str]


class _CurrencyBase(str, Enum):
    def currency(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


# One member per supported code, e.g. Currency.INR == "INR".
Currency = _CurrencyBase(
    "Currency",
    [(code, code) for code in sorted(SUBUNIT_FACTORS)],
    module=__name__,
    qualname="Currency",
)


def currency_code(currency: CurrencyLike) -> str:
    """Resolve a currency capability or code string to an upper-case code."""
    getter = getattr(currency, "currency", None)
    code = getter() if callable(getter) else currency
    if not isinstance(code, str):
        raise TypeError(f"Currency code must be a string, got {type(code).__name__}")
    return code.strip().upper()


def get_factor(currency: CurrencyLike) -> int:
    """Return the number of subunits in one highest unit of ``currency``."""
    code = currency_code(currency)
    factor = SUBUNIT_FACTORS.get(code)
    if factor is None:
        logger.warning("No subunit factor registered for currency %s", code)
        raise UnknownCurrencyError(currency, code)
    return factor


def get_exponent(currency: CurrencyLike) -> int:
    """Return the decimal places of the highest unit (0, 2 or 3)."""
    code = currency_code(currency)
    exponent = SUBUNIT_EXPONENTS.get(code)
    if exponent is None:
        logger.warning("No subunit factor registered for currency %s", code)
        raise UnknownCurrencyError(currency, code)
    return exponent


def is_supported(currency: CurrencyLike) -> bool:
    return currency_code(currency) in SUBUNIT_FACTORS


def supported_currencies() -> frozenset[str]:
    return frozenset(SUBUNIT_FACTORS)
