from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def parse_money(value: str) -> Decimal:
    """Parse a user-entered money string such as ``"$1,234.50"`` or ``"(12.00)"``."""
    if value is None:
        raise ValueError("missing money value")

    normalized = value.strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(
            CENT,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return -amount if is_negative else amount


def to_money(value) -> Decimal:
    """Convert a number read from storage or JSON into a cent-quantized Decimal.

    Floats go through ``str`` so ``39.9`` becomes ``39.90`` and not its
    binary expansion.
    """
    if value is None:
        raise ValueError("missing money value")
    if isinstance(value, str):
        return parse_money(value)
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc


def as_decimal(value) -> Decimal:
    """Exact Decimal for arithmetic, without rounding.

    Floats go through ``str`` like in ``to_money``.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return parse_money(value)
    return Decimal(value)
