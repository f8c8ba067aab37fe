"""Money parsing and formatting helpers (pt-BR conventions)."""
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

CENTS = Decimal("0.01")


def to_decimal(v: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Convert numeric/string to Decimal. Returns default for None or garbage."""
    if v is None or isinstance(v, bool):
        return default
    try:
        # str(...) avoids binary float artifacts
        d = Decimal(str(v))
    except InvalidOperation:
        return default
    return d if d.is_finite() else default


def parse_br_amount(raw: Any) -> Decimal:
    """
    Parse a statement amount keeping its sign.

    Comma is the decimal separator; dots before it are thousands
    separators. Plain dot-decimal values are accepted as well.

    Examples:
        >>> parse_br_amount('-150,50')
        Decimal('-150.50')
        >>> parse_br_amount('1.234,56')
        Decimal('1234.56')

    Raises:
        ValueError: If the cell is empty or not a number
    """
    if raw is None:
        raise ValueError("Empty amount")

    s = str(raw).strip().replace("−", "-").replace("R$", "").replace(" ", "")
    if not s:
        raise ValueError("Empty amount")

    if "," in s:
        s = s.replace(".", "").replace(",", ".")

    try:
        amount = Decimal(s)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {raw!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")
    return amount


def quantize_cents(amount: Decimal) -> Decimal:
    """Round to 2 places; context precision grows with the amount."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS)


def canonical_amount(amount: Decimal) -> str:
    """
    Exact amount as plain text without trailing zeros.

    Examples:
        >>> canonical_amount(Decimal("100.00"))
        '100'
        >>> canonical_amount(Decimal("100.004"))
        '100.004'
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits))
        return format(amount.normalize(), "f")


def format_brl(amount: Decimal) -> str:
    """
    Render an amount as Brazilian currency.

    Examples:
        >>> format_brl(Decimal('3800'))
        'R$ 3.800,00'
        >>> format_brl(Decimal('-1234.5'))
        'R$ -1.234,50'
    """
    text = f"{quantize_cents(amount):,.2f}"
    # 1,234.50 -> 1.234,50
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")
