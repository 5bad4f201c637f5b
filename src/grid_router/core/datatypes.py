"""
Core datatypes shared by the ledger, the path codec and the quoter.

These datatypes are immutable so that quoting stays deterministic and
testable. All prices are Q96 integers and all amounts are raw integer token
units; Decimal views belong to `fmt.py`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Hop:
    """One token -> token leg of an encoded path.

    Fields:
    - token_in / token_out: normalised "0x" addresses, in encoded order.
    - protocol: 1-byte venue tag (PROTOCOL_GRID for grid hops).
    - resolution: resolution of the grid the hop targets.
    """

    token_in: str
    token_out: str
    protocol: int
    resolution: int


# ---------------------------------------------------------------------------
# Ledger views
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Slot0:
    """Current price state of a ledger."""

    price_x96: int
    boundary: int


@dataclass(frozen=True)
class SwapResult:
    """Outcome of one (real or simulated) single-ledger swap.

    `amount_in` is what the taker pays, `amount_out` what it receives. The
    before/after fields are the ledger's slot0 around the swap.
    """

    zero_for_one: bool
    amount_in: int
    amount_out: int
    price_before: int
    boundary_before: int
    price_after: int
    boundary_after: int


@dataclass(frozen=True)
class MakerBook:
    """Remaining maker amount resting in one cell."""

    boundary_lower: int
    maker_amount_remaining: int


# ---------------------------------------------------------------------------
# Quotes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HopQuote:
    """Simulated result of one hop, including the crossing diagnostic."""

    hop: Hop
    amount_in: int
    amount_out: int
    price_before: int
    price_after: int
    boundary_after: int
    initialized_boundaries_crossed: int


@dataclass(frozen=True)
class Quote:
    """Multi-hop quote.

    `amount` is the total OUT for exact-input quotes and the total IN for
    exact-output quotes. `hops` follows the encoded order of the path.
    """

    amount: int
    hops: List[HopQuote] = field(default_factory=list)

    @property
    def price_after_list(self) -> List[int]:
        return [h.price_after for h in self.hops]

    @property
    def initialized_boundaries_crossed_list(self) -> List[int]:
        return [h.initialized_boundaries_crossed for h in self.hops]


__all__ = [
    "Hop",
    "Slot0",
    "SwapResult",
    "MakerBook",
    "HopQuote",
    "Quote",
]
