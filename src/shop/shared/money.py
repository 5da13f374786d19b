"""Fixed-point money helpers.

Amounts are computed with ``Decimal`` and persisted as strings with exactly
two fraction digits, e.g. ``"90.00"``. Rounding is half-up and is applied once
per line subtotal and once per cart total.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value, field: str = "amount") -> Decimal:
    """Parse an int, string or Decimal amount into a finite ``Decimal``."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError({field: [f"Invalid decimal amount: {value!r}"]}) from None

    if not amount.is_finite():
        raise ValidationError({field: [f"Invalid decimal amount: {value!r}"]})

    return amount


def round2(value, field: str = "amount") -> Decimal:
    """Round to 2 fraction digits, half-up."""
    try:
        return to_decimal(value, field=field).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Result needs more digits than the decimal context carries
        raise ValidationError({field: [f"Amount out of range: {value!r}"]}) from None


def is_whole_cents(value, field: str = "amount") -> bool:
    """True when the amount has no significant digits below the cent."""
    amount = to_decimal(value, field=field)
    return amount == round2(amount, field=field)


def format_money(value) -> str:
    """Render an amount as a decimal string with exactly 2 fraction digits."""
    return str(round2(value))


def sum_money(amounts) -> str:
    """Add up already-rounded amounts and round the result once."""
    return format_money(sum((to_decimal(amount) for amount in amounts), ZERO))
