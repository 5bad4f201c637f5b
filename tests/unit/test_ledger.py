import pytest

from grid_router import Grid, GridRegistry, Ledger, sort_tokens
from grid_router.core.constants import Q96, PROTOCOL_GRID, RESOLUTION_LOW, RESOLUTION_MEDIUM
from grid_router.core.exc import GridNotFoundError, InvalidResolutionError


def test_sort_tokens_orders_and_normalises(tokens):
    print("[sort_tokens] (B, A) upper-case -> expect (a, b) lower-case")
    t0, t1, _ = tokens
    assert sort_tokens(t1.upper(), t0) == (t0, t1)
    assert sort_tokens(t0, t1) == (t0, t1)


def test_sort_tokens_rejects_identical(tokens):
    print("[sort_tokens] same token twice -> expect ValueError")
    with pytest.raises(ValueError):
        sort_tokens(tokens[0], tokens[0].upper())


def test_create_grid_sorts_pair(tokens):
    print("[registry] create with (token1, token0) -> expect grid keyed by sorted pair")
    t0, t1, _ = tokens
    reg = GridRegistry()
    g = reg.create_grid(t1, t0, RESOLUTION_LOW, Q96)
    assert (g.token0, g.token1) == (t0, t1)
    assert reg.get(PROTOCOL_GRID, t0, t1, RESOLUTION_LOW) is g
    assert reg.get(PROTOCOL_GRID, t1, t0, RESOLUTION_LOW) is g
    assert len(reg) == 1


@pytest.mark.parametrize("resolution", [0, 2, 60])
def test_create_grid_rejects_unknown_tier(tokens, resolution):
    print(f"[registry] resolution={resolution} -> expect InvalidResolutionError")
    with pytest.raises(InvalidResolutionError):
        GridRegistry().create_grid(tokens[0], tokens[1], resolution, Q96)


def test_same_pair_at_two_resolutions(registry, tokens):
    print("[registry] pair 0/1 at LOW next to MEDIUM -> expect two distinct grids")
    t0, t1, _ = tokens
    low = registry.create_grid(t0, t1, RESOLUTION_LOW, Q96)
    assert registry.get(PROTOCOL_GRID, t0, t1, RESOLUTION_MEDIUM) is not low
    assert len(registry) == 3


def test_duplicate_registration_rejected(registry, grid01):
    print("[registry] register same key twice -> expect ValueError")
    with pytest.raises(ValueError):
        registry.register(grid01.clone())


def test_register_custom_protocol(tokens):
    print("[registry] register under protocol 7 -> expect lookup only under 7")
    t0, t1, _ = tokens
    reg = GridRegistry()
    g = Grid(t0, t1, RESOLUTION_MEDIUM, Q96)
    reg.register(g, protocol=7)
    assert reg.get(7, t0, t1, RESOLUTION_MEDIUM) is g
    with pytest.raises(GridNotFoundError) as ei:
        reg.get(PROTOCOL_GRID, t0, t1, RESOLUTION_MEDIUM)
    assert ei.value.protocol == PROTOCOL_GRID
    assert (ei.value.token0, ei.value.token1) == (t0, t1)


def test_abstract_ledger_methods_raise():
    print("[ledger] bare Ledger -> expect NotImplementedError")
    ledger = Ledger()
    with pytest.raises(NotImplementedError):
        ledger.slot0()
    with pytest.raises(NotImplementedError):
        ledger.simulate_swap(True, 1)
