"""
Boundary math: integer boundary index <-> Q96 fixed-point price.

- price_at_boundary(b) = floor(1.0001^b * 2^96), evaluated in a private Decimal
  context with PRICE_PRECISION digits so results never depend on the caller's
  global Decimal settings.
- boundary_at_price(p) is the largest boundary whose price is <= p; it agrees
  with price_at_boundary at every grid point.
- Boundary-lowers are floors to a multiple of the resolution (Python floor
  division, so negative boundaries round toward -inf).
"""

from __future__ import annotations

from decimal import Decimal, ROUND_FLOOR, localcontext

from .constants import (
    MIN_BOUNDARY,
    MAX_BOUNDARY,
    Q96,
    BOUNDARY_BASE,
    PRICE_PRECISION,
)
from .exc import OutOfRangeError, InvalidResolutionError


# ----------------------------
# Domain checks
# ----------------------------

def is_in_range(boundary: int) -> bool:
    return MIN_BOUNDARY <= boundary <= MAX_BOUNDARY


def _check_resolution(resolution: int) -> None:
    if resolution <= 0:
        raise InvalidResolutionError(None, resolution, reason=f"resolution must be > 0, got {resolution}")


# ----------------------------
# boundary <-> price
# ----------------------------

def _price_at_boundary_unchecked(boundary: int) -> int:
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        ratio = BOUNDARY_BASE ** boundary
        return int((ratio * Q96).to_integral_value(rounding=ROUND_FLOOR))


def price_at_boundary(boundary: int) -> int:
    """Return the Q96 price at `boundary` (strictly increasing in boundary)."""
    if not is_in_range(boundary):
        raise OutOfRangeError(boundary, MIN_BOUNDARY, MAX_BOUNDARY, what="boundary")
    return _price_at_boundary_unchecked(boundary)


MIN_PRICE_X96: int = _price_at_boundary_unchecked(MIN_BOUNDARY)
MAX_PRICE_X96: int = _price_at_boundary_unchecked(MAX_BOUNDARY)


def is_price_in_range(price_x96: int) -> bool:
    return MIN_PRICE_X96 <= price_x96 <= MAX_PRICE_X96


def boundary_at_price(price_x96: int) -> int:
    """Return the largest boundary b with price_at_boundary(b) <= price_x96."""
    if not is_price_in_range(price_x96):
        raise OutOfRangeError(price_x96, MIN_PRICE_X96, MAX_PRICE_X96, what="price")

    # Logarithmic estimate, then settle on the exact floor against the grid.
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        estimate = (Decimal(price_x96) / Q96).ln() / BOUNDARY_BASE.ln()
        boundary = int(estimate.to_integral_value(rounding=ROUND_FLOOR))
    boundary = max(MIN_BOUNDARY, min(MAX_BOUNDARY, boundary))

    while boundary > MIN_BOUNDARY and _price_at_boundary_unchecked(boundary) > price_x96:
        boundary -= 1
    while boundary < MAX_BOUNDARY and _price_at_boundary_unchecked(boundary + 1) <= price_x96:
        boundary += 1
    return boundary


# ----------------------------
# Resolution-aware helpers
# ----------------------------

def boundary_lower(boundary: int, resolution: int) -> int:
    """Round `boundary` down to the nearest multiple of `resolution`."""
    _check_resolution(resolution)
    return (boundary // resolution) * resolution


def rewrite_to_valid_boundary_lower(boundary_lower_: int, resolution: int) -> int:
    """Clamp a boundary-lower so that its whole cell lies inside the domain.

    A cell starting below MIN_BOUNDARY moves up one resolution step; a cell whose
    top exceeds MAX_BOUNDARY moves down one step.
    """
    _check_resolution(resolution)
    if boundary_lower_ < MIN_BOUNDARY:
        return boundary_lower_ + resolution
    if boundary_lower_ + resolution > MAX_BOUNDARY:
        return boundary_lower_ - resolution
    return boundary_lower_


def boundary_lower_ahead(price_x96: int, boundary: int, resolution: int, *, upward: bool) -> int:
    """Boundary-lower of the first cell a move from (price_x96, boundary) enters.

    Upward, that is the cell containing the price. Downward, it is the containing
    cell unless the price sits exactly on that cell's lower edge, in which case
    nothing of it lies below the price and the move starts in the cell beneath.
    """
    lower = boundary_lower(boundary, resolution)
    if upward:
        return lower
    if boundary == lower and price_x96 == price_at_boundary(lower):
        return lower - resolution
    return lower


__all__ = [
    "MIN_PRICE_X96",
    "MAX_PRICE_X96",
    "is_in_range",
    "is_price_in_range",
    "price_at_boundary",
    "boundary_at_price",
    "boundary_lower",
    "rewrite_to_valid_boundary_lower",
    "boundary_lower_ahead",
]
