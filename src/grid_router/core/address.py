"""
Token address normalisation.

Addresses are carried as "0x" + 40 lower-case hex characters so that equality
and ordering are plain string operations. Ordering matches the numeric order
of the 20-byte values.
"""

from __future__ import annotations

from typing import Union

from .constants import ADDR_SIZE

AddressLike = Union[str, bytes, bytearray]


def to_address(value: AddressLike) -> str:
    """Return the normalised form of a 20-byte address."""
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        text = value[2:] if value[:2].lower() == "0x" else value
        try:
            raw = bytes.fromhex(text)
        except ValueError:
            raise ValueError(f"address is not hex: {value!r}") from None
    else:
        raise TypeError(f"unsupported address type: {type(value).__name__}")
    if len(raw) != ADDR_SIZE:
        raise ValueError(f"address must be {ADDR_SIZE} bytes, got {len(raw)}")
    return "0x" + raw.hex()


def address_bytes(value: AddressLike) -> bytes:
    return bytes.fromhex(to_address(value)[2:])


__all__ = ["AddressLike", "to_address", "address_bytes"]
