"""
Ledger contract and registry.

The quoting core never owns order books. It talks to a `Ledger` (one pair at
one resolution) through the read-only accessors and the non-mutating
`simulate_swap` below, and finds ledgers for path hops through a
`GridRegistry`.

NOTE:
- `zero=True` always means the side of makers selling token0 (consumed by
  upward, one-for-zero swaps); `zero=False` the side selling token1.
- `simulate_swap` must leave the ledger exactly as it found it.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from .core.address import AddressLike, to_address
from .core.bitmap import BitmapView
from .core.constants import PROTOCOL_GRID, RESOLUTION_TIERS
from .core.datatypes import Slot0, SwapResult
from .core.exc import GridNotFoundError, InvalidResolutionError

logger = logging.getLogger(__name__)


def sort_tokens(token_a: AddressLike, token_b: AddressLike) -> Tuple[str, str]:
    """Return the pair as (token0, token1), token0 being the lower address."""
    a, b = to_address(token_a), to_address(token_b)
    if a == b:
        raise ValueError(f"identical tokens: {a}")
    return (a, b) if a < b else (b, a)


class Ledger:
    """Abstract ledger interface consumed by the quoter and the query helpers."""

    token0: str
    token1: str
    resolution: int

    def slot0(self) -> Slot0:
        raise NotImplementedError

    def boundary_bitmap(self, zero: bool) -> BitmapView:
        raise NotImplementedError

    def maker_amount_remaining(self, zero: bool, boundary_lower: int) -> int:
        raise NotImplementedError

    def simulate_swap(self, zero_for_one: bool, amount_specified: int, exact_input: bool = True) -> SwapResult:
        raise NotImplementedError


class GridRegistry:
    """(protocol, token0, token1, resolution) -> Ledger."""

    def __init__(self) -> None:
        self._ledgers: Dict[Tuple[int, str, str, int], Ledger] = {}

    def __len__(self) -> int:
        return len(self._ledgers)

    def register(self, ledger: Ledger, protocol: int = PROTOCOL_GRID) -> Ledger:
        key = (protocol, ledger.token0, ledger.token1, ledger.resolution)
        if key in self._ledgers:
            raise ValueError(f"ledger already registered for {key}")
        self._ledgers[key] = ledger
        logger.info(
            "registered ledger protocol=%d pair=(%s, %s) resolution=%d",
            protocol, ledger.token0, ledger.token1, ledger.resolution,
        )
        return ledger

    def create_grid(
        self,
        token_a: AddressLike,
        token_b: AddressLike,
        resolution: int,
        price_x96: int,
    ):
        """Create, register and return an in-memory grid at `price_x96`."""
        from .grid import Grid

        if resolution not in RESOLUTION_TIERS:
            raise InvalidResolutionError(
                None, resolution, reason=f"resolution {resolution} is not one of {RESOLUTION_TIERS}"
            )
        token0, token1 = sort_tokens(token_a, token_b)
        grid = Grid(token0, token1, resolution, price_x96)
        return self.register(grid, protocol=PROTOCOL_GRID)

    def get(self, protocol: int, token_a: AddressLike, token_b: AddressLike, resolution: int) -> Ledger:
        token0, token1 = sort_tokens(token_a, token_b)
        ledger = self._ledgers.get((protocol, token0, token1, resolution))
        if ledger is None:
            raise GridNotFoundError(protocol, token0, token1, resolution)
        return ledger


__all__ = ["Ledger", "GridRegistry", "sort_tokens"]
