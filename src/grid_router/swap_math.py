"""
Single-cell swap step (integer domain).

Within one cell the price moves linearly from its current value to the cell's
far edge as the remaining maker amount `R` is consumed: taking `x` of `R`
moves the price by `x / R` of the distance. The taker pays the average of the
start and end price (trapezoid rule).

Direction follows the edge: `price_edge_x96 > price_x96` is an upward move
that consumes token0 makers (IN token1, OUT token0); otherwise the move is
downward and consumes token1 makers (IN token0, OUT token1).

Rounding:
- IN is always rounded up, OUT is always rounded down;
- on a partial exact-input step the taker's whole remaining IN is charged.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isqrt

from .core.constants import Q96
from .core.exc import AmountDomainError


def ceil_div(a: int, b: int) -> int:
    """Ceiling division for positive integers."""
    if b <= 0:
        raise ZeroDivisionError("ceil_div by non-positive denominator")
    return -((-a) // b)


@dataclass(frozen=True)
class SwapStep:
    price_next_x96: int
    amount_in: int
    amount_out: int

    @property
    def is_empty(self) -> bool:
        return self.amount_in == 0 and self.amount_out == 0


def full_cell_cost(price_x96: int, price_edge_x96: int, maker_remaining: int) -> int:
    """IN needed to take all of `maker_remaining` between the two prices."""
    if price_edge_x96 > price_x96:
        return ceil_div(maker_remaining * (price_x96 + price_edge_x96), 2 * Q96)
    return ceil_div(2 * Q96 * maker_remaining, price_x96 + price_edge_x96)


def _price_after_out(price_x96: int, price_edge_x96: int, maker_remaining: int, out: int) -> int:
    if price_edge_x96 > price_x96:
        return price_x96 + (price_edge_x96 - price_x96) * out // maker_remaining
    return price_x96 - (price_x96 - price_edge_x96) * out // maker_remaining


def _in_for_out(price_x96: int, price_next_x96: int, out: int, upward: bool) -> int:
    if upward:
        return ceil_div(out * (price_x96 + price_next_x96), 2 * Q96)
    return ceil_div(2 * Q96 * out, price_x96 + price_next_x96)


def _out_for_in(price_x96: int, price_edge_x96: int, maker_remaining: int, amount_in: int) -> int:
    """Largest OUT whose trapezoid cost does not exceed `amount_in`."""
    if price_edge_x96 > price_x96:
        d = price_edge_x96 - price_x96
        pr = price_x96 * maker_remaining
        # d/R * x^2 + 2P * x - 2*Q96*I = 0
        return (isqrt(pr * pr + 2 * d * Q96 * amount_in * maker_remaining) - pr) // d
    d = price_x96 - price_edge_x96
    # 2*Q96*x*R = I * (2*P*R - d*x)
    return (2 * amount_in * price_x96 * maker_remaining) // (2 * Q96 * maker_remaining + amount_in * d)


def compute_swap_step(
    price_x96: int,
    price_edge_x96: int,
    maker_remaining: int,
    amount_remaining: int,
    exact_input: bool,
) -> SwapStep:
    """Take as much of one cell as `amount_remaining` allows.

    `amount_remaining` is the taker's unspent IN (exact input) or unfilled OUT
    (exact output). Returns the price reached and the IN/OUT of this step.
    """
    if maker_remaining < 0 or amount_remaining < 0:
        raise AmountDomainError("swap step amounts must be non-negative")
    if price_edge_x96 == price_x96:
        raise ValueError("swap step needs a cell of non-zero width")
    if maker_remaining == 0 or amount_remaining == 0:
        return SwapStep(price_x96, 0, 0)

    upward = price_edge_x96 > price_x96

    if exact_input:
        cost = full_cell_cost(price_x96, price_edge_x96, maker_remaining)
        if amount_remaining >= cost:
            return SwapStep(price_edge_x96, cost, maker_remaining)
        out = min(_out_for_in(price_x96, price_edge_x96, maker_remaining, amount_remaining), maker_remaining)
        price_next = _price_after_out(price_x96, price_edge_x96, maker_remaining, out)
        return SwapStep(price_next, amount_remaining, out)

    out = min(amount_remaining, maker_remaining)
    if out == maker_remaining:
        return SwapStep(price_edge_x96, full_cell_cost(price_x96, price_edge_x96, maker_remaining), out)
    price_next = _price_after_out(price_x96, price_edge_x96, maker_remaining, out)
    return SwapStep(price_next, _in_for_out(price_x96, price_next, out, upward), out)


__all__ = ["ceil_div", "SwapStep", "full_cell_cost", "compute_swap_step"]
