"""
Boundary bitmaps: sparse 256-bit words flagging initialised boundaries.

Layout
------
For a resolution `r`, an aligned boundary `b` is compressed to `c = b // r` and
addressed as word `c >> 8`, bit `c & 0xFF`. Words are stored sparsely in a
`{word_index: int}` mapping; missing words read as zero.

Ownership
---------
Only the ledger mutates a bitmap (`flip` when a cell's remaining amount moves
to or from zero, `set_word` for mock books). Everything else sees it through
`BitmapView`, the read-only capability the crossing counter and the quoter
consume.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from .constants import MIN_BOUNDARY, MAX_BOUNDARY, WORD_BITS, WORD_MASK
from .exc import InvalidResolutionError


# ----------------------------
# Addressing
# ----------------------------

def compress(boundary: int, resolution: int) -> int:
    """Return boundary / resolution; the boundary must be aligned."""
    if resolution <= 0:
        raise InvalidResolutionError(boundary, resolution, reason=f"resolution must be > 0, got {resolution}")
    if boundary % resolution != 0:
        raise InvalidResolutionError(boundary, resolution)
    return boundary // resolution


def position(boundary: int, resolution: int) -> Tuple[int, int]:
    """Return (word_index, bit) of an aligned boundary."""
    compressed = compress(boundary, resolution)
    return compressed >> 8, compressed & 0xFF


def boundary_at_position(word_index: int, bit: int, resolution: int) -> int:
    return ((word_index << 8) + bit) * resolution


def _msb(x: int) -> int:
    return x.bit_length() - 1


def _lsb(x: int) -> int:
    return (x & -x).bit_length() - 1


# ----------------------------
# Read-only capability
# ----------------------------

class BitmapView:
    """Read-only view of one (resolution, side) bitmap."""

    @property
    def resolution(self) -> int:
        raise NotImplementedError

    def word_at(self, word_index: int) -> int:
        raise NotImplementedError

    def is_initialized(self, boundary: int) -> bool:
        word_index, bit = position(boundary, self.resolution)
        return (self.word_at(word_index) >> bit) & 1 == 1

    def next_initialized(self, boundary_lower: int, upward: bool) -> Optional[int]:
        """Return the first initialised boundary at or beyond `boundary_lower`.

        The search includes `boundary_lower` itself and pages word by word in
        the given direction, stopping at the protocol domain. None when nothing
        is set.
        """
        res = self.resolution
        word_index, bit = position(boundary_lower, res)
        if upward:
            last_word = (MAX_BOUNDARY // res) >> 8
            word = self.word_at(word_index) & (WORD_MASK ^ ((1 << bit) - 1))
            while not word:
                word_index += 1
                if word_index > last_word:
                    return None
                word = self.word_at(word_index)
            found = boundary_at_position(word_index, _lsb(word), res)
            return found if found <= MAX_BOUNDARY else None

        first_word = (MIN_BOUNDARY // res) >> 8
        word = self.word_at(word_index) & ((1 << (bit + 1)) - 1)
        while not word:
            word_index -= 1
            if word_index < first_word:
                return None
            word = self.word_at(word_index)
        found = boundary_at_position(word_index, _msb(word), res)
        return found if found >= MIN_BOUNDARY else None


# ----------------------------
# Mutable bitmap (ledger-owned)
# ----------------------------

class BoundaryBitmap(BitmapView):
    """Sparse bitmap for one (resolution, side)."""

    def __init__(self, resolution: int, words: Optional[Dict[int, int]] = None) -> None:
        if resolution <= 0:
            raise InvalidResolutionError(None, resolution, reason=f"resolution must be > 0, got {resolution}")
        self._resolution = resolution
        self._words: Dict[int, int] = {}
        for word_index, word in (words or {}).items():
            self.set_word(word_index, word)

    @property
    def resolution(self) -> int:
        return self._resolution

    def word_at(self, word_index: int) -> int:
        return self._words.get(word_index, 0)

    def words(self) -> Iterator[Tuple[int, int]]:
        """Yield (word_index, word) for non-zero words in index order."""
        for word_index in sorted(self._words):
            yield word_index, self._words[word_index]

    # --- mutation ---

    def flip(self, boundary: int) -> bool:
        """Toggle the bit of `boundary`; return the new state."""
        word_index, bit = position(boundary, self._resolution)
        self.set_word(word_index, self.word_at(word_index) ^ (1 << bit))
        return self.is_initialized(boundary)

    def set_word(self, word_index: int, word: int) -> None:
        if word < 0 or word > WORD_MASK:
            raise ValueError(f"word must fit in {WORD_BITS} bits, got {word}")
        if word:
            self._words[word_index] = word
        else:
            self._words.pop(word_index, None)

    def clone(self) -> "BoundaryBitmap":
        out = BoundaryBitmap(self._resolution)
        out._words = dict(self._words)
        return out

    def __repr__(self) -> str:
        return f"BoundaryBitmap(resolution={self._resolution}, words={len(self._words)})"


# ----------------------------
# Index over (resolution, side)
# ----------------------------

class BoundaryBitmapIndex:
    """All bitmaps of a ledger, keyed by (resolution, zero).

    `zero=True` is the side of makers selling token0, `zero=False` the side of
    makers selling token1.
    """

    def __init__(self) -> None:
        self._bitmaps: Dict[Tuple[int, bool], BoundaryBitmap] = {}

    def bitmap(self, resolution: int, zero: bool) -> BoundaryBitmap:
        key = (resolution, bool(zero))
        bm = self._bitmaps.get(key)
        if bm is None:
            bm = BoundaryBitmap(resolution)
            self._bitmaps[key] = bm
        return bm

    def is_initialized(self, resolution: int, zero: bool, boundary: int) -> bool:
        return self.bitmap(resolution, zero).is_initialized(boundary)

    def word_at(self, resolution: int, zero: bool, word_index: int) -> int:
        return self.bitmap(resolution, zero).word_at(word_index)

    def clone(self) -> "BoundaryBitmapIndex":
        out = BoundaryBitmapIndex()
        out._bitmaps = {k: bm.clone() for k, bm in self._bitmaps.items()}
        return out


__all__ = [
    "compress",
    "position",
    "boundary_at_position",
    "BitmapView",
    "BoundaryBitmap",
    "BoundaryBitmapIndex",
]
