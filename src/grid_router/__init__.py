# Top-level API for grid_router (integer-domain).
"""
Top-level API for grid_router (integer-domain).

This module exposes the stable interface of the grid exchange quoting core:
  - path codec: encode/decode multi-hop routes
  - crossing counter: initialised boundaries touched by a price move
  - Quoter: simulated multi-hop quotes over a GridRegistry
  - Grid: in-memory reference ledger

Prices are Q96 integers, boundaries are plain ints and amounts are raw token
units; see `grid_router.core`.
"""

# NOTE:
#   Ledgers own their order books and bitmaps. Everything quoted through
#   `Quoter` runs on shadow copies, so quoting never mutates a ledger.

from __future__ import annotations

from .core import (
    Hop,
    Slot0,
    SwapResult,
    MakerBook,
    HopQuote,
    Quote,
    BitmapView,
    BoundaryBitmap,
    BoundaryBitmapIndex,
    price_at_boundary,
    boundary_at_price,
    boundary_lower,
)
from .crossing import count_initialized_boundaries_crossed
from .path import (
    encode_path,
    decode_path,
    decode_hops,
    decode_first_hop,
    first_hop_path,
    drop_first_token,
    has_multiple_hops,
    num_hops,
)
from .ledger import Ledger, GridRegistry, sort_tokens
from .grid import Grid
from .quoter import Quoter
from .query import maker_books

__all__ = [
    # datatypes
    "Hop",
    "Slot0",
    "SwapResult",
    "MakerBook",
    "HopQuote",
    "Quote",
    # bitmaps and boundary math
    "BitmapView",
    "BoundaryBitmap",
    "BoundaryBitmapIndex",
    "price_at_boundary",
    "boundary_at_price",
    "boundary_lower",
    # crossing counter
    "count_initialized_boundaries_crossed",
    # path codec
    "encode_path",
    "decode_path",
    "decode_hops",
    "decode_first_hop",
    "first_hop_path",
    "drop_first_token",
    "has_multiple_hops",
    "num_hops",
    # ledgers and quoting
    "Ledger",
    "GridRegistry",
    "sort_tokens",
    "Grid",
    "Quoter",
    "maker_books",
]
