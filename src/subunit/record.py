"""
Money records: ``{"amount": ..., "currency": ..., <sibling fields>}``.

Decoding pairs the amount with a currency member looked up by name on the
caller's currency enumeration. Sibling fields such as ``id`` are opaque and
carried through untouched. Currency support is not checked here; an
unsupported member decodes fine and fails later, at conversion.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import RecordError
from .factor import Currency, currency_code
from .money import Amount, HighestUnit, LowestSubunit


logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("amount", "currency")


@dataclass(frozen=True)
class MoneyRecord:
    """A decoded amount plus the record's passthrough fields."""

    money: Amount
    extra: dict[str, Any] = field(default_factory=dict)

    def convert(self) -> MoneyRecord:
        """Return the same record with its amount in the other representation."""
        return replace(self, money=self.money.convert())

    def to_dict(self) -> dict:
        currency = self.money.currency
        return {
            "amount": self.money.amount,
            "currency": currency.name if isinstance(currency, Enum) else currency_code(currency),
            **self.extra,
        }

    def dumps(self, **kwargs: Any) -> str:
        """Encode as JSON; unit amounts are written as exact decimal strings."""
        kwargs.setdefault("default", str)
        return json.dumps(self.to_dict(), **kwargs)


def _resolve_currency(value: Any, currency_type: Optional[type]) -> Any:
    if not isinstance(value, str):
        raise RecordError(f"Record currency must be a string, got {type(value).__name__}")
    if currency_type is None:
        return currency_code(value)
    if isinstance(currency_type, type) and issubclass(currency_type, Enum):
        # Built-in members are named by ISO code, so "Inr" and "inr" resolve too.
        name = currency_code(value) if currency_type is Currency else value
        try:
            return currency_type[name]
        except KeyError:
            raise RecordError(
                f"Unknown {currency_type.__name__} variant: {value!r}"
            ) from None
    try:
        return currency_type(value)
    except (TypeError, ValueError) as e:
        raise RecordError(f"Invalid currency {value!r}: {e}") from e


def decode_record(
    data: Mapping[str, Any],
    currency_type: Optional[type] = Currency,
    unit: type = LowestSubunit,
) -> MoneyRecord:
    """Decode a mapping into a MoneyRecord.

    ``currency_type`` is an Enum whose member names match the wire values
    (members should implement ``currency()``), any other callable taking the
    wire string, or None to keep the upper-cased code string. ``unit`` picks
    the representation the amount is read as.
    """
    if not isinstance(data, Mapping):
        raise RecordError(f"Record must be an object, got {type(data).__name__}")
    missing = [name for name in _MONEY_FIELDS if name not in data]
    if missing:
        raise RecordError(f"Record missing field(s): {', '.join(missing)}")
    if unit not in (LowestSubunit, HighestUnit):
        raise TypeError(f"unit must be LowestSubunit or HighestUnit, got {unit!r}")

    currency = _resolve_currency(data["currency"], currency_type)
    amount = data["amount"]
    if unit is LowestSubunit and isinstance(amount, (float, Decimal)):
        raise RecordError(f"Subunit amount must be an integer, got {amount}")
    try:
        money = unit(amount, currency)
    except (TypeError, ValueError) as e:
        raise RecordError(f"Invalid amount {amount!r}: {e}") from e

    extra = {k: v for k, v in data.items() if k not in _MONEY_FIELDS}
    logger.debug("Decoded %s record with %d passthrough field(s)", unit.__name__, len(extra))
    return MoneyRecord(money=money, extra=extra)


def loads_record(
    text: str | bytes,
    currency_type: Optional[type] = Currency,
    unit: type = LowestSubunit,
) -> MoneyRecord:
    """Decode a JSON document into a MoneyRecord. Floats parse as Decimal."""
    try:
        data = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise RecordError(f"Malformed JSON record: {e}") from e
    return decode_record(data, currency_type=currency_type, unit=unit)
