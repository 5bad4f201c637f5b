"""
In-memory grid ledger (one pair, one resolution).

This is the reference `Ledger` used by tests, the demo and callers that want
to quote against a local book. It keeps resting maker amounts per
(side, boundary-lower), the two side bitmaps and the current slot0.

Swap model (see `swap_math.compute_swap_step`):
- zero_for_one=True: taker pays token0, receives token1; consumes token1
  makers (`zero=False`) and moves the price down.
- zero_for_one=False: taker pays token1, receives token0; consumes token0
  makers (`zero=True`) and moves the price up.
- Empty cells are skipped via the bitmap. Entering a cell sets the price to
  its entry edge if the current price lies before it.
- A cell whose remaining amount reaches zero has its bit cleared.

NOTE:
- `swap` is all-or-nothing: if the exact amount cannot be met it raises
  `InsufficientLiquidityError` and leaves the grid untouched.
- `simulate_swap` runs `swap` on a clone (shadow state) and discards it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .core.address import to_address
from .core.bitmap import BoundaryBitmap, BoundaryBitmapIndex, compress
from .core.boundary_math import (
    MIN_PRICE_X96,
    MAX_PRICE_X96,
    boundary_at_price,
    boundary_lower_ahead,
    is_price_in_range,
    price_at_boundary,
)
from .core.constants import MIN_BOUNDARY, MAX_BOUNDARY, MAX_UINT128
from .core.datatypes import Slot0, SwapResult
from .core.exc import (
    AmountDomainError,
    InsufficientLiquidityError,
    InvariantViolation,
    OutOfRangeError,
)
from .core.fmt import fmt_price
from .ledger import Ledger
from .swap_math import compute_swap_step

logger = logging.getLogger(__name__)


def _check_amount(amount: int, what: str = "amount") -> None:
    if amount <= 0 or amount > MAX_UINT128:
        raise AmountDomainError(f"{what} must be in (0, 2**128 - 1], got {amount}")


class Grid(Ledger):
    """Resting maker orders of one pair at one resolution."""

    def __init__(self, token0: str, token1: str, resolution: int, price_x96: int) -> None:
        token0, token1 = to_address(token0), to_address(token1)
        if token0 >= token1:
            raise ValueError(f"tokens must be sorted: token0={token0} token1={token1}")
        if not is_price_in_range(price_x96):
            raise OutOfRangeError(price_x96, MIN_PRICE_X96, MAX_PRICE_X96, what="price")
        self.token0 = token0
        self.token1 = token1
        self.resolution = resolution
        self._bitmaps = BoundaryBitmapIndex()
        # Validates the resolution.
        self._bitmaps.bitmap(resolution, True)
        self._price_x96 = price_x96
        self._boundary = boundary_at_price(price_x96)
        self._makers: Dict[Tuple[bool, int], int] = {}
        logger.info(
            "grid created pair=(%s, %s) resolution=%d price=%s boundary=%d",
            token0, token1, resolution, fmt_price(price_x96), self._boundary,
        )

    # ------------------------------------------------------------------
    # Ledger views
    # ------------------------------------------------------------------

    def slot0(self) -> Slot0:
        return Slot0(price_x96=self._price_x96, boundary=self._boundary)

    def boundary_bitmap(self, zero: bool) -> BoundaryBitmap:
        return self._bitmaps.bitmap(self.resolution, zero)

    def maker_amount_remaining(self, zero: bool, boundary_lower: int) -> int:
        compress(boundary_lower, self.resolution)
        return self._makers.get((bool(zero), boundary_lower), 0)

    # ------------------------------------------------------------------
    # Maker side
    # ------------------------------------------------------------------

    def place_maker_order(self, zero: bool, boundary_lower: int, amount: int) -> int:
        """Add `amount` to the cell at `boundary_lower`; return its new remaining."""
        compress(boundary_lower, self.resolution)
        if boundary_lower < MIN_BOUNDARY or boundary_lower + self.resolution > MAX_BOUNDARY:
            raise OutOfRangeError(boundary_lower, MIN_BOUNDARY, MAX_BOUNDARY - self.resolution)
        _check_amount(amount)

        key = (bool(zero), boundary_lower)
        before = self._makers.get(key, 0)
        after = before + amount
        if after > MAX_UINT128:
            raise AmountDomainError(f"cell remaining would exceed 2**128 - 1: {after}")
        if before == 0:
            self.boundary_bitmap(zero).flip(boundary_lower)
        self._makers[key] = after
        logger.debug("maker order zero=%s lower=%d +%d -> %d", zero, boundary_lower, amount, after)
        return after

    # ------------------------------------------------------------------
    # Taker side
    # ------------------------------------------------------------------

    def swap(self, zero_for_one: bool, amount_specified: int, exact_input: bool = True) -> SwapResult:
        """Execute a swap against resting orders (mutating)."""
        _check_amount(amount_specified, "amount_specified")

        res = self.resolution
        upward = not zero_for_one
        zero_side = upward
        bitmap = self.boundary_bitmap(zero_side)

        price = self._price_x96
        remaining = amount_specified
        total_in = 0
        total_out = 0
        fills: List[Tuple[int, int]] = []

        cursor = boundary_lower_ahead(price, self._boundary, res, upward=upward)
        while remaining > 0:
            lower = bitmap.next_initialized(cursor, upward)
            if lower is None:
                break
            price_lo = price_at_boundary(lower)
            price_hi = price_at_boundary(lower + res)
            if upward:
                start, edge = max(price, price_lo), price_hi
            else:
                start, edge = min(price, price_hi), price_lo

            maker = self._makers.get((zero_side, lower), 0)
            if maker == 0:
                raise InvariantViolation(f"bit set for empty cell zero={zero_side} lower={lower}")

            step = compute_swap_step(start, edge, maker, remaining, exact_input)
            total_in += step.amount_in
            total_out += step.amount_out
            remaining -= step.amount_in if exact_input else step.amount_out
            price = step.price_next_x96
            fills.append((lower, step.amount_out))
            logger.debug(
                "step lower=%d in=%d out=%d price_x96=%d remaining=%d",
                lower, step.amount_in, step.amount_out, price, remaining,
            )
            if step.amount_out < maker:
                break
            cursor = lower + res if upward else lower - res

        if remaining > 0:
            raise InsufficientLiquidityError(
                amount_specified, amount_specified - remaining, exact_input=exact_input
            )

        for lower, taken in fills:
            key = (zero_side, lower)
            left = self._makers[key] - taken
            if left == 0:
                del self._makers[key]
                bitmap.flip(lower)
            else:
                self._makers[key] = left

        price_before, boundary_before = self._price_x96, self._boundary
        self._price_x96 = price
        self._boundary = boundary_at_price(price)
        return SwapResult(
            zero_for_one=zero_for_one,
            amount_in=total_in,
            amount_out=total_out,
            price_before=price_before,
            boundary_before=boundary_before,
            price_after=self._price_x96,
            boundary_after=self._boundary,
        )

    def simulate_swap(self, zero_for_one: bool, amount_specified: int, exact_input: bool = True) -> SwapResult:
        shadow = self.clone()
        return shadow.swap(zero_for_one, amount_specified, exact_input)

    def clone(self) -> "Grid":
        out = Grid.__new__(Grid)
        out.token0 = self.token0
        out.token1 = self.token1
        out.resolution = self.resolution
        out._bitmaps = self._bitmaps.clone()
        out._price_x96 = self._price_x96
        out._boundary = self._boundary
        out._makers = dict(self._makers)
        return out

    def __repr__(self) -> str:
        return (
            f"Grid(token0={self.token0}, token1={self.token1}, resolution={self.resolution}, "
            f"boundary={self._boundary}, cells={len(self._makers)})"
        )


__all__ = ["Grid"]
