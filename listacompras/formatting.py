"""Locale-aware parsing and display of quantities and prices (pt-BR)."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .config import LocaleConfig
from .models import MONEY_CONTEXT, ValidationError

_CENTS = Decimal("0.01")

# Bounds for anything typed into a numeric field
MAX_INTEGER_DIGITS = 13
MAX_FRACTION_DIGITS = 6
_FRACTION_STEP = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)

# Anything that is not a digit or a decimal separator
_NON_NUMERIC = re.compile(r"[^\d.,]")

# Leading numeric prefix, read the way parseFloat reads it
_LEADING_NUMBER = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def normalize_price_text(text: str) -> str:
    """Strip everything but digits, '.' and ',' and turn the first ',' into '.'.

    >>> normalize_price_text("R$ 3,50")
    '3.50'
    """
    return _NON_NUMERIC.sub("", text).replace(",", ".", 1)


def _parse_number(text: str) -> Decimal:
    m = _LEADING_NUMBER.match(text)
    if m is None:
        raise ValidationError(f"Número inválido: {text!r}")
    try:
        value = Decimal(m.group(1))
    except InvalidOperation:
        raise ValidationError(f"Número inválido: {text!r}")
    if not value.is_finite():
        raise ValidationError(f"Número inválido: {text!r}")
    if value.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValidationError(f"Número grande demais: {text!r}")
    if value != value.quantize(_FRACTION_STEP, context=MONEY_CONTEXT):
        raise ValidationError(f"Casas decimais demais: {text!r}")
    return value


def parse_quantity(text: str) -> Decimal:
    """Parse a quantity field such as "2", "2.5" or "3 un".

    Raises:
        ValidationError: If no positive number can be read.
    """
    value = _parse_number(text)
    if value <= 0:
        raise ValidationError(f"Quantidade deve ser positiva: {text!r}")
    return value


def parse_price(text: str) -> Decimal:
    """Parse a price field such as "3,50" or "R$ 1234.5".

    Raises:
        ValidationError: If no number remains after normalization.
    """
    return _parse_number(normalize_price_text(text))


def _round_cents(value: Decimal | float | int) -> Decimal:
    return Decimal(str(value)).quantize(
        _CENTS, rounding=ROUND_HALF_UP, context=MONEY_CONTEXT
    )


def format_price_input(value: Decimal | float | int) -> str:
    """Render a price for the input field: two decimals, comma separator."""
    return f"{_round_cents(value):f}".replace(".", ",")


def format_quantity(value: Decimal | float | int) -> str:
    d = Decimal(str(value))
    if d == d.to_integral_value():
        return f"{d.to_integral_value():f}"
    return f"{d.normalize():f}"


def format_currency(
    value: Decimal | float | int,
    locale: LocaleConfig | None = None,
) -> str:
    """Render a monetary value for display, e.g. "R$ 1.234,56".

    Presentation only; the result is never parsed back into an item.
    """
    locale = locale or LocaleConfig()
    amount = _round_cents(value)
    sign = "-" if amount < 0 else ""
    # Format with placeholder separators, then swap in the locale's symbols
    digits = f"{amount.copy_abs():,.2f}"
    digits = (
        digits.replace(",", "\0")
        .replace(".", locale.decimal_separator)
        .replace("\0", locale.thousands_separator)
    )
    return f"{sign}{locale.currency_symbol} {digits}"
