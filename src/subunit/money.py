"""Money conversion between lowest-subunit integers and highest-unit decimals.

Two distinct types keep the representations apart: ``LowestSubunit`` holds
an integer count of subunits (cents, paise), ``HighestUnit`` holds a
``Decimal`` in display units (dollars, rupees). Converting never mutates;
it returns the other type paired with the same currency.

Subunit -> unit is exact. Unit -> subunit is the only lossy step and rounds
half-up unless the caller passes another ``decimal`` rounding mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Mapping, Union

from .errors import AmountOverflowError
from .factor import CurrencyLike, currency_code, get_exponent, get_factor


logger = logging.getLogger(__name__)

MAX_SUBUNITS = 2**31 - 1
DEFAULT_ROUNDING = ROUND_HALF_UP
_ONE = Decimal(1)


def _check_subunits(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Subunit amount must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Subunit amount must be non-negative, got {value}")
    if value > MAX_SUBUNITS:
        raise AmountOverflowError(value, MAX_SUBUNITS)
    return value


def _normalize_currency(currency: Any) -> Any:
    # Plain code strings compare by their normalized code; enum members are kept.
    if isinstance(currency, str) and not isinstance(currency, Enum):
        return currency_code(currency)
    return currency


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("Unit amount must be numeric, got bool")
    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, (int, float, str)):
        try:
            dec = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Unit amount is not a number: {value!r}") from None
    else:
        raise TypeError(f"Unit amount must be numeric, got {type(value).__name__}")
    if not dec.is_finite():
        raise ValueError(f"Unit amount must be finite, got {value}")
    if dec < 0:
        raise ValueError(f"Unit amount must be non-negative, got {value}")
    return dec


@dataclass(frozen=True)
class LowestSubunit:
    """An integer count of subunits, e.g. 150 paise."""

    amount: int
    currency: CurrencyLike

    def __post_init__(self):
        _check_subunits(self.amount)
        object.__setattr__(self, "currency", _normalize_currency(self.currency))

    @property
    def code(self) -> str:
        return currency_code(self.currency)

    def convert(self) -> HighestUnit:
        return to_highest_unit(self)

    def to_dict(self) -> dict:
        return {"amount": self.amount, "currency": self.code}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> LowestSubunit:
        return cls(amount=d["amount"], currency=d["currency"])


@dataclass(frozen=True)
class HighestUnit:
    """A decimal amount in whole units, e.g. Decimal("1.50") rupees."""

    amount: Decimal
    currency: CurrencyLike

    def __post_init__(self):
        object.__setattr__(self, "amount", _to_decimal(self.amount))
        object.__setattr__(self, "currency", _normalize_currency(self.currency))

    @property
    def code(self) -> str:
        return currency_code(self.currency)

    def convert(self, rounding: str = DEFAULT_ROUNDING) -> LowestSubunit:
        return to_lowest_subunit(self, rounding=rounding)

    def to_dict(self) -> dict:
        return {"amount": str(self.amount), "currency": self.code}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> HighestUnit:
        return cls(amount=d["amount"], currency=d["currency"])


Amount = Union[LowestSubunit, HighestUnit]


def _places(exponent: int) -> Decimal:
    return _ONE.scaleb(-exponent)


def to_highest_unit(amount: LowestSubunit) -> HighestUnit:
    """Divide subunits by the currency factor; exact, quantized to the currency's places."""
    if not isinstance(amount, LowestSubunit):
        raise TypeError(f"Expected LowestSubunit, got {type(amount).__name__}")
    factor = get_factor(amount.currency)
    value = (Decimal(amount.amount) / factor).quantize(_places(get_exponent(amount.currency)))
    logger.debug("Converted %d subunits of %s to %s", amount.amount, amount.code, value)
    return HighestUnit(value, amount.currency)


def to_lowest_subunit(amount: HighestUnit, rounding: str = DEFAULT_ROUNDING) -> LowestSubunit:
    """Round units once to the currency's places, then shift to whole subunits."""
    if not isinstance(amount, HighestUnit):
        raise TypeError(f"Expected HighestUnit, got {type(amount).__name__}")
    factor = get_factor(amount.currency)
    exponent = get_exponent(amount.currency)
    # Comparison is exact; anything at or past the bound cannot round below it.
    if amount.amount >= Decimal(MAX_SUBUNITS + 1) / factor:
        raise AmountOverflowError(amount.amount, MAX_SUBUNITS)
    rounded = amount.amount.quantize(_places(exponent), rounding=rounding)
    subunits = int(rounded.scaleb(exponent))
    if subunits > MAX_SUBUNITS:
        raise AmountOverflowError(subunits, MAX_SUBUNITS)
    logger.debug("Converted %s %s to %d subunits", amount.amount, amount.code, subunits)
    return LowestSubunit(subunits, amount.currency)


def format_amount(amount: Amount) -> str:
    """Format an amount for display in highest units, e.g. "1.50 INR"."""
    if isinstance(amount, LowestSubunit):
        amount = to_highest_unit(amount)
    exponent = get_exponent(amount.currency)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.amount.adjusted() + exponent + 2)
        text = amount.amount.quantize(_places(exponent), rounding=DEFAULT_ROUNDING)
    return f"{text} {amount.code}"
