"""
Multi-hop path codec.

Wire format (big-endian)::

    token(20) | protocol(1) | resolution(3) | token(20) | protocol(1) | ... | token(20)

Every hop but the last contributes a 24-byte unit; the final token closes the
path, so a well-formed path is `24 * hops + 20` bytes long. A bare 20-byte
token (zero hops) is well-formed but carries no hop; it is what dropping the
first token of a single-hop path leaves behind.

Paths may be passed as bytes, bytearray or a "0x" hex string; every function
returns bytes.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

from .core.constants import (
    ADDR_SIZE,
    PROTOCOL_SIZE,
    RESOLUTION_SIZE,
    HOP_SIZE,
    SINGLE_HOP_PATH_SIZE,
    MULTIPLE_HOPS_MIN_SIZE,
    MAX_RESOLUTION,
    MAX_PROTOCOL,
)
from .core.address import AddressLike, address_bytes, to_address
from .core.datatypes import Hop
from .core.exc import MalformedPathError, InvalidResolutionError

PathLike = Union[bytes, bytearray, str]


# ----------------------------
# Input handling
# ----------------------------

def as_bytes(path: PathLike) -> bytes:
    """Return `path` as bytes and check its length is `24 * n + 20`."""
    if isinstance(path, str):
        text = path[2:] if path[:2].lower() == "0x" else path
        try:
            raw = bytes.fromhex(text)
        except ValueError:
            raise MalformedPathError("path is not valid hex") from None
    elif isinstance(path, (bytes, bytearray)):
        raw = bytes(path)
    else:
        raise TypeError(f"unsupported path type: {type(path).__name__}")
    if len(raw) < ADDR_SIZE or (len(raw) - ADDR_SIZE) % HOP_SIZE != 0:
        raise MalformedPathError("path length is not 24 * hops + 20", length=len(raw))
    return raw


def to_hex(path: PathLike) -> str:
    return "0x" + as_bytes(path).hex()


def _require_hop(raw: bytes) -> None:
    if len(raw) < SINGLE_HOP_PATH_SIZE:
        raise MalformedPathError("path holds no hop", length=len(raw))


# ----------------------------
# Encoding / decoding
# ----------------------------

def encode_path(
    tokens: Sequence[AddressLike],
    resolutions: Sequence[int],
    protocols: Sequence[int],
) -> bytes:
    """Encode `tokens[i] -> tokens[i+1]` hops with their resolution and protocol tag."""
    if len(tokens) != len(resolutions) + 1 or len(protocols) != len(resolutions):
        raise MalformedPathError(
            f"expected len(tokens) == len(resolutions) + 1 == len(protocols) + 1, "
            f"got {len(tokens)}/{len(resolutions)}/{len(protocols)}"
        )
    if not resolutions:
        raise MalformedPathError("a path needs at least one hop")

    out = bytearray()
    for token, resolution, protocol in zip(tokens, resolutions, protocols):
        if not 0 < resolution <= MAX_RESOLUTION:
            raise InvalidResolutionError(None, resolution, reason=f"resolution must be in (0, {MAX_RESOLUTION}], got {resolution}")
        if not 0 <= protocol <= MAX_PROTOCOL:
            raise MalformedPathError(f"protocol tag must fit in one byte, got {protocol}")
        out += address_bytes(token)
        out += protocol.to_bytes(PROTOCOL_SIZE, "big")
        out += resolution.to_bytes(RESOLUTION_SIZE, "big")
    out += address_bytes(tokens[-1])
    return bytes(out)


def num_hops(path: PathLike) -> int:
    return (len(as_bytes(path)) - ADDR_SIZE) // HOP_SIZE


def has_multiple_hops(path: PathLike) -> bool:
    return len(as_bytes(path)) >= MULTIPLE_HOPS_MIN_SIZE


def decode_first_hop(path: PathLike) -> Hop:
    raw = as_bytes(path)
    _require_hop(raw)
    token_in = to_address(raw[:ADDR_SIZE])
    protocol = int.from_bytes(raw[ADDR_SIZE:ADDR_SIZE + PROTOCOL_SIZE], "big")
    resolution = int.from_bytes(raw[ADDR_SIZE + PROTOCOL_SIZE:HOP_SIZE], "big")
    token_out = to_address(raw[HOP_SIZE:SINGLE_HOP_PATH_SIZE])
    return Hop(token_in=token_in, token_out=token_out, protocol=protocol, resolution=resolution)


def first_hop_path(path: PathLike) -> bytes:
    """Return the encoded single-hop prefix of `path`."""
    raw = as_bytes(path)
    _require_hop(raw)
    return raw[:SINGLE_HOP_PATH_SIZE]


def drop_first_token(path: PathLike) -> bytes:
    """Return `path` without its leading hop unit.

    For a single-hop path this is the trailing 20-byte token.
    """
    raw = as_bytes(path)
    _require_hop(raw)
    return raw[HOP_SIZE:]


def decode_hops(path: PathLike) -> List[Hop]:
    """Decode every hop of `path`, in encoded order."""
    raw = as_bytes(path)
    _require_hop(raw)
    hops = []
    while True:
        hops.append(decode_first_hop(raw))
        if not has_multiple_hops(raw):
            return hops
        raw = drop_first_token(raw)


def decode_path(path: PathLike) -> Tuple[List[str], List[int], List[int]]:
    """Return (tokens, protocols, resolutions) of `path`."""
    hops = decode_hops(path)
    tokens = [h.token_in for h in hops] + [hops[-1].token_out]
    return tokens, [h.protocol for h in hops], [h.resolution for h in hops]


__all__ = [
    "PathLike",
    "as_bytes",
    "to_hex",
    "encode_path",
    "num_hops",
    "has_multiple_hops",
    "decode_first_hop",
    "first_hop_path",
    "drop_first_token",
    "decode_hops",
    "decode_path",
]
