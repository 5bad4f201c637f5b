"""
Grid Router Core
================

Unified exports for the integer-domain primitives of the grid exchange:
boundary <-> Q96 price math, boundary bitmaps, address normalisation and the
immutable datatypes shared by the ledger and the quoter.
Decimal helpers are provided *only* for I/O formatting.
"""

# NOTE:
#   Everything in `core` is pure or owned by a single ledger instance. Prices
#   are Q96 integers, boundaries are plain ints, amounts are raw token units.

# Integer-domain constants
from .constants import (
    MIN_BOUNDARY,
    MAX_BOUNDARY,
    Q96,
    RESOLUTION_LOW,
    RESOLUTION_MEDIUM,
    RESOLUTION_HIGH,
    RESOLUTION_TIERS,
    MAX_RESOLUTION,
    WORD_BITS,
    PROTOCOL_GRID,
    MAX_UINT128,
)

# Boundary <-> price
from .boundary_math import (
    MIN_PRICE_X96,
    MAX_PRICE_X96,
    is_in_range,
    is_price_in_range,
    price_at_boundary,
    boundary_at_price,
    boundary_lower,
    rewrite_to_valid_boundary_lower,
    boundary_lower_ahead,
)

# Bitmaps
from .bitmap import (
    position,
    BitmapView,
    BoundaryBitmap,
    BoundaryBitmapIndex,
)

# Addresses
from .address import to_address, address_bytes

# Datatypes
from .datatypes import (
    Hop,
    Slot0,
    SwapResult,
    MakerBook,
    HopQuote,
    Quote,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import fmt_dec, price_x96_to_decimal, fmt_price

# Exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    OutOfRangeError,
    InvalidResolutionError,
    MalformedPathError,
    InsufficientLiquidityError,
    GridNotFoundError,
)

__all__ = [
    # constants
    "MIN_BOUNDARY",
    "MAX_BOUNDARY",
    "Q96",
    "RESOLUTION_LOW",
    "RESOLUTION_MEDIUM",
    "RESOLUTION_HIGH",
    "RESOLUTION_TIERS",
    "MAX_RESOLUTION",
    "WORD_BITS",
    "PROTOCOL_GRID",
    "MAX_UINT128",
    # boundary math
    "MIN_PRICE_X96",
    "MAX_PRICE_X96",
    "is_in_range",
    "is_price_in_range",
    "price_at_boundary",
    "boundary_at_price",
    "boundary_lower",
    "rewrite_to_valid_boundary_lower",
    "boundary_lower_ahead",
    # bitmaps
    "position",
    "BitmapView",
    "BoundaryBitmap",
    "BoundaryBitmapIndex",
    # addresses
    "to_address",
    "address_bytes",
    # datatypes
    "Hop",
    "Slot0",
    "SwapResult",
    "MakerBook",
    "HopQuote",
    "Quote",
    # formatting
    "fmt_dec",
    "price_x96_to_decimal",
    "fmt_price",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "OutOfRangeError",
    "InvalidResolutionError",
    "MalformedPathError",
    "InsufficientLiquidityError",
    "GridNotFoundError",
]
