from decimal import localcontext

import pytest

from grid_router.core.constants import MIN_BOUNDARY, MAX_BOUNDARY, Q96
from grid_router.core.boundary_math import (
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
from grid_router.core.exc import OutOfRangeError, InvalidResolutionError

SAMPLE_BOUNDARIES = [MIN_BOUNDARY, MIN_BOUNDARY + 1, -220000, -30, -1, 0, 1, 5, 30, 220000, MAX_BOUNDARY - 1, MAX_BOUNDARY]


def _close(a: int, b: int, rel: int = 10_000) -> bool:
    # |a - b| / b <= 1 / rel
    return abs(a - b) * rel <= b


# -----------------------------
# Domain
# -----------------------------

def test_domain_bounds():
    print("[domain] MIN/MAX boundary in range, one past each end out of range")
    assert is_in_range(MIN_BOUNDARY)
    assert is_in_range(MAX_BOUNDARY)
    assert not is_in_range(MIN_BOUNDARY - 1)
    assert not is_in_range(MAX_BOUNDARY + 1)


def test_price_at_zero_is_q96():
    print("[price] boundary 0 -> expect exactly 2**96")
    assert price_at_boundary(0) == Q96


def test_extreme_prices_match_reference_ratios():
    print("[price] MIN/MAX prices -> expect ~989314 and ~1.4613e48")
    print("MIN_PRICE_X96 ->", MIN_PRICE_X96, "MAX_PRICE_X96 ->", MAX_PRICE_X96)
    assert _close(MIN_PRICE_X96, 989314)
    assert _close(MAX_PRICE_X96, 1461300573427867316570072651998408279850435624081)
    assert is_price_in_range(MIN_PRICE_X96)
    assert is_price_in_range(MAX_PRICE_X96)
    assert not is_price_in_range(MIN_PRICE_X96 - 1)
    assert not is_price_in_range(MAX_PRICE_X96 + 1)


@pytest.mark.parametrize("b", [MIN_BOUNDARY - 1, MAX_BOUNDARY + 1, -10**7, 10**7])
def test_price_at_boundary_out_of_range_raises(b):
    print(f"[price] boundary={b} -> expect OutOfRangeError")
    with pytest.raises(OutOfRangeError) as ei:
        price_at_boundary(b)
    assert ei.value.value == b
    assert ei.value.what == "boundary"


@pytest.mark.parametrize("p", [0, MIN_PRICE_X96 - 1, MAX_PRICE_X96 + 1])
def test_boundary_at_price_out_of_range_raises(p):
    print(f"[boundary] price={p} -> expect OutOfRangeError")
    with pytest.raises(OutOfRangeError):
        boundary_at_price(p)


# -----------------------------
# Monotonicity and inverse
# -----------------------------

def test_price_strictly_increasing_on_samples():
    print("[monotonic] sampled boundaries across the domain -> expect strictly increasing prices")
    prices = [price_at_boundary(b) for b in SAMPLE_BOUNDARIES]
    assert all(a < b for a, b in zip(prices, prices[1:]))


def test_price_strictly_increasing_on_adjacent_boundaries():
    print("[monotonic] every boundary in [-300, 300] -> expect price(b) < price(b+1)")
    prev = price_at_boundary(-300)
    for b in range(-299, 301):
        cur = price_at_boundary(b)
        assert prev < cur
        prev = cur


@pytest.mark.parametrize("b", SAMPLE_BOUNDARIES)
def test_boundary_at_price_inverts_grid_points(b):
    print(f"[inverse] boundary_at_price(price_at_boundary({b})) -> expect {b}")
    assert boundary_at_price(price_at_boundary(b)) == b


@pytest.mark.parametrize("b", [-220000, -7, -1, 0, 1, 7, 220000])
def test_boundary_at_price_floors_between_grid_points(b):
    print(f"[inverse] prices strictly inside ({b}, {b + 1}) -> expect {b}")
    lo, hi = price_at_boundary(b), price_at_boundary(b + 1)
    assert boundary_at_price(lo + 1) == b
    assert boundary_at_price(hi - 1) == b
    assert boundary_at_price((lo + hi) // 2) == b


def test_price_independent_of_caller_decimal_context():
    print("[determinism] caller sets Decimal prec=5 -> expect identical prices")
    expected = price_at_boundary(12345)
    with localcontext() as ctx:
        ctx.prec = 5
        assert price_at_boundary(12345) == expected
        assert boundary_at_price(expected) == 12345


# -----------------------------
# Resolution helpers
# -----------------------------

@pytest.mark.parametrize(
    "boundary,resolution,expected",
    [
        (0, 5, 0),
        (7, 5, 5),
        (-1, 5, -5),
        (-5, 5, -5),
        (29, 30, 0),
        (-31, 30, -60),
        (-527400, 30, -527400),
        (13, 1, 13),
    ],
)
def test_boundary_lower_floors_to_multiple(boundary, resolution, expected):
    print(f"[lower] boundary={boundary} res={resolution} -> expect {expected}")
    got = boundary_lower(boundary, resolution)
    assert got == expected
    assert got % resolution == 0


@pytest.mark.parametrize("resolution", [0, -5])
def test_boundary_lower_rejects_non_positive_resolution(resolution):
    print(f"[lower] res={resolution} -> expect InvalidResolutionError")
    with pytest.raises(InvalidResolutionError):
        boundary_lower(10, resolution)


@pytest.mark.parametrize(
    "lower,resolution,expected",
    [
        (0, 5, 0),
        (MIN_BOUNDARY - 5, 5, MIN_BOUNDARY),
        (MIN_BOUNDARY, 30, MIN_BOUNDARY),
        (MAX_BOUNDARY, 5, MAX_BOUNDARY - 5),
        (443580, 30, 443580),
        (443640, 30, 443610),
    ],
)
def test_rewrite_to_valid_boundary_lower(lower, resolution, expected):
    print(f"[rewrite] lower={lower} res={resolution} -> expect {expected}")
    assert rewrite_to_valid_boundary_lower(lower, resolution) == expected


def test_boundary_lower_ahead_upward_is_containing_cell():
    print("[ahead] price on a cell edge, upward -> expect that cell")
    assert boundary_lower_ahead(Q96, 0, 5, upward=True) == 0
    p = price_at_boundary(7)
    assert boundary_lower_ahead(p, 7, 5, upward=True) == 5


def test_boundary_lower_ahead_downward_from_lower_edge_is_cell_below():
    print("[ahead] price exactly on lower edge, downward -> expect cell below")
    assert boundary_lower_ahead(Q96, 0, 5, upward=False) == -5


def test_boundary_lower_ahead_downward_inside_cell_is_containing_cell():
    print("[ahead] price strictly inside cell, downward -> expect containing cell")
    assert boundary_lower_ahead(Q96 + 1, 0, 5, upward=False) == 0
    p = price_at_boundary(-3)
    assert boundary_lower_ahead(p, -3, 5, upward=False) == -5
