"""
Grid Router Core Constants (integer domain)
===========================================

Protocol-wide integer constants for boundaries, Q96 prices, bitmap paging and
the multi-hop path wire format. Decimal is used only for the boundary base and
the precision of the price context in `boundary_math.py`.
"""

# NOTE: Boundary bounds are protocol-wide; every resolution shares them.

from decimal import Decimal

# ---------------------------------------------------------------------------
# Boundary domain and Q96 prices
# ---------------------------------------------------------------------------

#: Lowest and highest addressable boundary (inclusive).
MIN_BOUNDARY: int = -527400
MAX_BOUNDARY: int = 443635

#: Fixed-point scale of prices: price = 1.0001^boundary * 2^96.
Q96: int = 1 << 96

#: Price ratio between two adjacent boundaries.
BOUNDARY_BASE: Decimal = Decimal("1.0001")

#: Significant digits used for boundary <-> price conversion. MAX price has
#: 49 integer digits; the remainder keeps floors exact at grid points.
PRICE_PRECISION: int = 80


# ---------------------------------------------------------------------------
# Resolutions
# ---------------------------------------------------------------------------

RESOLUTION_LOW: int = 1
RESOLUTION_MEDIUM: int = 5
RESOLUTION_HIGH: int = 30

#: Resolutions a registry accepts when creating grids.
RESOLUTION_TIERS: tuple = (RESOLUTION_LOW, RESOLUTION_MEDIUM, RESOLUTION_HIGH)

#: Resolution is encoded on 3 bytes in the path wire format.
MAX_RESOLUTION: int = (1 << 24) - 1


# ---------------------------------------------------------------------------
# Bitmap paging
# ---------------------------------------------------------------------------

WORD_BITS: int = 256
WORD_MASK: int = (1 << WORD_BITS) - 1


# ---------------------------------------------------------------------------
# Path wire format
# ---------------------------------------------------------------------------

ADDR_SIZE: int = 20
PROTOCOL_SIZE: int = 1
RESOLUTION_SIZE: int = 3

#: token || protocol || resolution
HOP_SIZE: int = ADDR_SIZE + PROTOCOL_SIZE + RESOLUTION_SIZE
SINGLE_HOP_PATH_SIZE: int = HOP_SIZE + ADDR_SIZE
MULTIPLE_HOPS_MIN_SIZE: int = 2 * HOP_SIZE + ADDR_SIZE

#: Protocol tag of grid-exchange hops.
PROTOCOL_GRID: int = 1
MAX_PROTOCOL: int = (1 << (8 * PROTOCOL_SIZE)) - 1


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

MAX_UINT128: int = (1 << 128) - 1


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "MIN_BOUNDARY",
    "MAX_BOUNDARY",
    "Q96",
    "BOUNDARY_BASE",
    "PRICE_PRECISION",
    "RESOLUTION_LOW",
    "RESOLUTION_MEDIUM",
    "RESOLUTION_HIGH",
    "RESOLUTION_TIERS",
    "MAX_RESOLUTION",
    "WORD_BITS",
    "WORD_MASK",
    "ADDR_SIZE",
    "PROTOCOL_SIZE",
    "RESOLUTION_SIZE",
    "HOP_SIZE",
    "SINGLE_HOP_PATH_SIZE",
    "MULTIPLE_HOPS_MIN_SIZE",
    "PROTOCOL_GRID",
    "MAX_PROTOCOL",
    "MAX_UINT128",
]
