"""
Read-only maker-book query.

Walks a ledger's side outward from the current price in the direction that
side is consumed (token0 makers upward from the current cell, token1 makers
downward from the first cell below the price) and reports the remaining maker
amount of each initialised cell.
"""

from __future__ import annotations

from typing import List

from .core.boundary_math import boundary_lower_ahead
from .core.datatypes import MakerBook
from .ledger import Ledger


def maker_books(ledger: Ledger, zero: bool, count: int) -> List[MakerBook]:
    """Return up to `count` non-empty cells of side `zero`, nearest first."""
    if count <= 0:
        return []
    slot = ledger.slot0()
    res = ledger.resolution
    bitmap = ledger.boundary_bitmap(zero)
    upward = bool(zero)

    books: List[MakerBook] = []
    cursor = boundary_lower_ahead(slot.price_x96, slot.boundary, res, upward=upward)
    while len(books) < count:
        lower = bitmap.next_initialized(cursor, upward)
        if lower is None:
            break
        remaining = ledger.maker_amount_remaining(zero, lower)
        if remaining > 0:
            books.append(MakerBook(boundary_lower=lower, maker_amount_remaining=remaining))
        cursor = lower + res if upward else lower - res
    return books


__all__ = ["maker_books"]
