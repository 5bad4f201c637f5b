"""
Initialised-boundary crossing counter.

Given one directional price move on one side of a ledger, report how many
initialised boundaries (cells holding resting orders) the move touched.

Scan
----
The two boundary-lowers are the inclusive ends of a word-paged scan over the
side's bitmap. Words are visited in the direction of travel; the two end
words are masked and everything in between is counted with a full popcount.

Endpoints
---------
A cell at either end only counts if the move actually traversed part of it:
- the start cell is dropped when the move begins exactly on its exit edge
  (upward: lower + resolution; downward: lower);
- the end cell is dropped when the move stops exactly on its entry edge
  (upward: lower; downward: lower + resolution).
"Exactly on" means the boundary equals the edge and the price equals the edge
price. When both ends share a cell the answer is 1 if that cell is
initialised, else 0.
"""

from __future__ import annotations

from typing import Iterator

from .core.constants import WORD_MASK
from .core.bitmap import BitmapView, compress
from .core.boundary_math import is_in_range, price_at_boundary


def _sits_on(price_x96: int, boundary: int, edge: int) -> bool:
    return boundary == edge and is_in_range(edge) and price_x96 == price_at_boundary(edge)


def _masked_words(bitmap: BitmapView, lo: int, hi: int, upward: bool) -> Iterator[int]:
    """Yield the words covering compressed positions [lo, hi] in travel order."""
    lo_word, lo_bit = lo >> 8, lo & 0xFF
    hi_word, hi_bit = hi >> 8, hi & 0xFF
    indices = range(lo_word, hi_word + 1) if upward else range(hi_word, lo_word - 1, -1)
    for word_index in indices:
        mask = WORD_MASK
        if word_index == lo_word:
            mask &= WORD_MASK ^ ((1 << lo_bit) - 1)
        if word_index == hi_word:
            mask &= (1 << (hi_bit + 1)) - 1
        yield bitmap.word_at(word_index) & mask


def count_in_range(bitmap: BitmapView, lower_a: int, lower_b: int, upward: bool = True) -> int:
    """Population count over the inclusive cell range between two boundary-lowers."""
    res = bitmap.resolution
    a, b = compress(lower_a, res), compress(lower_b, res)
    lo, hi = min(a, b), max(a, b)
    return sum(word.bit_count() for word in _masked_words(bitmap, lo, hi, upward))


def count_initialized_boundaries_crossed(
    bitmap: BitmapView,
    zero_for_one: bool,
    price_before: int,
    boundary_before: int,
    boundary_lower_before: int,
    price_after: int,
    boundary_after: int,
    boundary_lower_after: int,
) -> int:
    """Count initialised boundaries touched by a move on `bitmap`.

    `bitmap` is the side consumed by the move: token0 makers for an upward
    (zero_for_one=False) move, token1 makers for a downward one. Boundary-lowers
    must be aligned to the bitmap's resolution.
    """
    res = bitmap.resolution
    compress(boundary_lower_before, res)
    compress(boundary_lower_after, res)

    if boundary_lower_before == boundary_lower_after:
        return 1 if bitmap.is_initialized(boundary_lower_before) else 0

    upward = not zero_for_one
    count = count_in_range(bitmap, boundary_lower_before, boundary_lower_after, upward)

    start_exit = boundary_lower_before + res if upward else boundary_lower_before
    end_entry = boundary_lower_after if upward else boundary_lower_after + res

    if _sits_on(price_before, boundary_before, start_exit) and bitmap.is_initialized(boundary_lower_before):
        count -= 1
    if _sits_on(price_after, boundary_after, end_entry) and bitmap.is_initialized(boundary_lower_after):
        count -= 1
    return count


__all__ = ["count_initialized_boundaries_crossed", "count_in_range"]
