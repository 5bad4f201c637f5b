"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses integers. Decimal here is only for formatting and
convenience (tests, logs, display).
"""

from decimal import Decimal, localcontext

from .constants import Q96, PRICE_PRECISION


def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000E+0'   (places=6)
      Decimal('123456')   -> '1.234560E+5'   (places=6)
    """
    return format(x, f".{places}E")


def price_x96_to_decimal(price_x96: int) -> Decimal:
    """Convert a Q96 price to a Decimal ratio (token1 per token0)."""
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return Decimal(price_x96) / Decimal(Q96)


def fmt_price(price_x96: int, places: int = 6) -> str:
    return fmt_dec(price_x96_to_decimal(price_x96), places=places)


__all__ = ["fmt_dec", "price_x96_to_decimal", "fmt_price"]
