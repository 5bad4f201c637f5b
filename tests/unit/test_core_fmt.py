from decimal import Decimal

import pytest

from grid_router.core.constants import Q96
from grid_router.core.boundary_math import price_at_boundary
from grid_router.core.address import to_address, address_bytes
from grid_router.core.fmt import fmt_dec, fmt_price, price_x96_to_decimal


# -----------------------------
# Prices
# -----------------------------

def test_price_x96_to_decimal_basic():
    print("[price_x96_to_decimal] Q96 -> 1, Q96/2 -> 0.5")
    assert price_x96_to_decimal(Q96) == Decimal(1)
    assert price_x96_to_decimal(Q96 // 2) == Decimal("0.5")


def test_fmt_price_one_boundary_up():
    print("[fmt_price] boundary 1 -> expect 1.0001 at 6 places")
    s = fmt_price(price_at_boundary(1))
    print("fmt_price(P(1)) ->", s)
    assert s == "1.000100E+0"


# -----------------------------
# fmt_dec stability
# -----------------------------

def test_fmt_dec_scientific_formatting():
    print("[fmt_dec] check scientific formatting stability")
    s1 = fmt_dec(Decimal("1"))
    s2 = fmt_dec(Decimal("123456"))
    print("fmt_dec(1) ->", s1)
    print("fmt_dec(123456) ->", s2)
    assert s1 == "1.000000000000000000E+0"
    assert s2 == "1.234560000000000000E+5"
    assert fmt_dec(Decimal("0.5"), places=2) == "5.00E-1"


# -----------------------------
# Addresses
# -----------------------------

def test_to_address_normalises_forms():
    print("[to_address] upper-case, no prefix, bytes -> expect one lower-case form")
    raw = bytes(range(20))
    expected = "0x" + raw.hex()
    assert to_address(expected.upper()) == expected
    assert to_address(raw.hex()) == expected
    assert to_address(raw) == expected
    assert to_address(bytearray(raw)) == expected
    assert address_bytes(expected) == raw


@pytest.mark.parametrize("bad", ["0x1234", "0x" + "zz" * 20, b"\x00" * 21])
def test_to_address_rejects_malformed(bad):
    print(f"[to_address] {bad!r} -> expect ValueError")
    with pytest.raises(ValueError):
        to_address(bad)


def test_to_address_rejects_other_types():
    print("[to_address] int -> expect TypeError")
    with pytest.raises(TypeError):
        to_address(123)  # type: ignore[arg-type]
