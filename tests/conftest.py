from __future__ import annotations

from typing import List

import pytest

# Import project primitives
from grid_router import Grid, GridRegistry, Quoter, decode_hops
from grid_router.core import Q96, RESOLUTION_MEDIUM, PROTOCOL_GRID, SwapResult


# -----------------------------
# Test constants
# -----------------------------

# Sorted: TOKEN_0 < TOKEN_1 < TOKEN_2
TOKEN_0 = "0x5fc8d32690cc91d4c39d9d3abcbd16989f875707"
TOKEN_1 = "0xcf7ed3acca5a467e9e704c703e8d87f634fb0fc9"
TOKEN_2 = "0xdc64a140aa3e981100a9beca4e685f962f0cf6c9"

ORDER_AMOUNT = 1000
ORDER_LOWERS = [-2 * RESOLUTION_MEDIUM, -RESOLUTION_MEDIUM, 0, RESOLUTION_MEDIUM, 2 * RESOLUTION_MEDIUM]


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def seed_grid(grid: Grid, lowers=ORDER_LOWERS, amount: int = ORDER_AMOUNT) -> Grid:
    """Place `amount` on both sides of every cell in `lowers`."""
    for lower in lowers:
        grid.place_maker_order(False, lower, amount)
        grid.place_maker_order(True, lower, amount)
    return grid


def _execute_path(registry: GridRegistry, path, amount: int, exact_input: bool) -> List[SwapResult]:
    """Perform the real (mutating) swaps a quote simulates, hop by hop in encoded order."""
    results = []
    for hop in decode_hops(path):
        token_in, token_out = (hop.token_in, hop.token_out) if exact_input else (hop.token_out, hop.token_in)
        grid = registry.get(hop.protocol, token_in, token_out, hop.resolution)
        result = grid.swap(token_in < token_out, amount, exact_input)
        results.append(result)
        amount = result.amount_out if exact_input else result.amount_in
    return results


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def tokens() -> List[str]:
    return [TOKEN_0, TOKEN_1, TOKEN_2]


@pytest.fixture()
def registry() -> GridRegistry:
    """Two MEDIUM grids (0/1 and 1/2) at price 1, 1000 per cell on both sides of -10..10."""
    reg = GridRegistry()
    seed_grid(reg.create_grid(TOKEN_0, TOKEN_1, RESOLUTION_MEDIUM, Q96))
    seed_grid(reg.create_grid(TOKEN_1, TOKEN_2, RESOLUTION_MEDIUM, Q96))
    return reg


@pytest.fixture()
def grid01(registry: GridRegistry) -> Grid:
    return registry.get(PROTOCOL_GRID, TOKEN_0, TOKEN_1, RESOLUTION_MEDIUM)


@pytest.fixture()
def grid12(registry: GridRegistry) -> Grid:
    return registry.get(PROTOCOL_GRID, TOKEN_1, TOKEN_2, RESOLUTION_MEDIUM)


@pytest.fixture()
def quoter(registry: GridRegistry) -> Quoter:
    return Quoter(registry)


@pytest.fixture()
def execute_path(registry: GridRegistry):
    """Real (mutating) execution of a path on the fixture registry."""
    def run(path, amount: int, exact_input: bool) -> List[SwapResult]:
        return _execute_path(registry, path, amount, exact_input)
    return run
