from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..core.constants import DEFAULT_CURRENCY_PLACES
from ..core.exceptions import ValidationError

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """Convert driver/JSON values to Decimal without passing through float."""
    if isinstance(value, float):
        value = repr(value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a valid decimal: {value!r}")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number: {value!r}")
    return result


def round_money(value: Decimal, places: int = DEFAULT_CURRENCY_PLACES) -> Decimal:
    quant = Decimal(1).scaleb(-places)
    return value.quantize(quant, rounding=ROUND_HALF_UP)


def percent_of(base: Decimal, rate: Decimal, places: int = DEFAULT_CURRENCY_PLACES) -> Decimal:
    return round_money(base * rate / HUNDRED, places)

