"""
Core exception types for grid_router.core.

These are dependency-free and may be imported by all core modules.
"""

__all__ = [
    "AmountDomainError",
    "InvariantViolation",
    "OutOfRangeError",
    "InvalidResolutionError",
    "MalformedPathError",
    "InsufficientLiquidityError",
    "GridNotFoundError",
]


class AmountDomainError(Exception):
    """Raised when amounts violate the positive uint128 domain."""
    pass


class InvariantViolation(Exception):
    """Raised when ledger bookkeeping would break core invariants."""
    pass


class OutOfRangeError(Exception):
    """Raised when a boundary or price lies outside the protocol domain.

    Attributes
    ----------
    value : int
        The offending boundary or Q96 price.
    lower, upper : int
        Inclusive domain bounds the value was checked against.
    what : str
        "boundary" or "price".
    """

    def __init__(self, value, lower, upper, *, what="boundary"):
        super().__init__(f"{what}={value} outside [{lower}, {upper}]")
        self.value = value
        self.lower = lower
        self.upper = upper
        self.what = what


class InvalidResolutionError(Exception):
    """Raised when a boundary is not aligned to its resolution, or the resolution itself is invalid."""

    def __init__(self, boundary, resolution, reason=None):
        msg = reason or f"boundary={boundary} is not a multiple of resolution={resolution}"
        super().__init__(msg)
        self.boundary = boundary
        self.resolution = resolution


class MalformedPathError(Exception):
    """Raised when an encoded path violates the wire format.

    Attributes
    ----------
    length : int | None
        Byte length of the offending path (None when it could not be read).
    """

    def __init__(self, reason, *, length=None):
        super().__init__(reason if length is None else f"{reason} (length={length})")
        self.reason = reason
        self.length = length


class InsufficientLiquidityError(Exception):
    """Raised when resting orders cannot satisfy a hop's exact amount.

    Attributes
    ----------
    requested : int
        The exact amount asked for (IN for exact-input, OUT for exact-output).
    filled : int
        The part of `requested` that resting orders could cover.
    exact_input : bool
        Which side `requested` refers to.
    """

    def __init__(self, requested, filled, *, exact_input):
        side = "in" if exact_input else "out"
        super().__init__(
            f"Requested {side}={requested} exceeds available liquidity={filled}"
        )
        self.requested = requested
        self.filled = filled
        self.exact_input = exact_input


class GridNotFoundError(Exception):
    """Raised when no ledger is registered for a hop."""

    def __init__(self, protocol, token0, token1, resolution):
        super().__init__(
            f"no grid for protocol={protocol} pair=({token0}, {token1}) resolution={resolution}"
        )
        self.protocol = protocol
        self.token0 = token0
        self.token1 = token1
        self.resolution = resolution
