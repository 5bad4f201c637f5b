"""Demo: multi-hop quotes on two in-memory grids, checked against real execution.

Scenarios covered:
S1) exact input  0 -> 1        (single hop, price moves down on grid01)
S2) exact input  0 -> 1 -> 2   (two hops)
S3) exact output 0 -> 1 -> 2   (path encoded output token first)
S4) maker books on grid01 after the quotes (unchanged by quoting)

Every quote is compared with the amount realised by swapping on a clone of the
grids, hop by hop.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from grid_router import GridRegistry, Quoter, Quote, encode_path, decode_hops, maker_books
from grid_router.core import Q96, RESOLUTION_MEDIUM, PROTOCOL_GRID, fmt_price

TOKENS = [
    "0x5fc8d32690cc91d4c39d9d3abcbd16989f875707",
    "0xcf7ed3acca5a467e9e704c703e8d87f634fb0fc9",
    "0xdc64a140aa3e981100a9beca4e685f962f0cf6c9",
]


# ---------- setup ----------

def build_registry(order_amount: int, levels: int) -> GridRegistry:
    registry = GridRegistry()
    for a, b in ((TOKENS[0], TOKENS[1]), (TOKENS[1], TOKENS[2])):
        grid = registry.create_grid(a, b, RESOLUTION_MEDIUM, Q96)
        for i in range(-levels, levels + 1):
            lower = i * RESOLUTION_MEDIUM
            grid.place_maker_order(True, lower, order_amount)
            grid.place_maker_order(False, lower, order_amount)
    return registry


def execute(registry: GridRegistry, path, amount: int, exact_input: bool) -> int:
    """Swap for real on clones of the grids along `path`; return the realised total."""
    for hop in decode_hops(path):
        token_in, token_out = (hop.token_in, hop.token_out) if exact_input else (hop.token_out, hop.token_in)
        grid = registry.get(PROTOCOL_GRID, token_in, token_out, hop.resolution).clone()
        result = grid.swap(token_in < token_out, amount, exact_input)
        amount = result.amount_out if exact_input else result.amount_in
    return amount


# ---------- pretty printers ----------

def print_quote(title: str, quote: Quote, realised: int, exact_input: bool) -> None:
    label = "amount_out" if exact_input else "amount_in"
    print(f"\n=== {title} ===")
    for i, hq in enumerate(quote.hops, start=1):
        print(
            f"  • hop{i}: {hq.hop.token_in[:8]}→{hq.hop.token_out[:8]} in={hq.amount_in} out={hq.amount_out} "
            f"price {fmt_price(hq.price_before)} → {fmt_price(hq.price_after)} "
            f"crossed={hq.initialized_boundaries_crossed}"
        )
    status = "OK" if quote.amount == realised else "MISMATCH"
    print(f"- quoted {label}={quote.amount}, realised={realised} [{status}]")


def run(amount: int, order_amount: int, levels: int) -> int:
    registry = build_registry(order_amount, levels)
    quoter = Quoter(registry)
    mismatches = 0

    scenarios: List[tuple] = [
        ("S1 exact input 0 -> 1", encode_path(TOKENS[:2], [RESOLUTION_MEDIUM], [PROTOCOL_GRID]), True),
        ("S2 exact input 0 -> 1 -> 2", encode_path(TOKENS, [RESOLUTION_MEDIUM] * 2, [PROTOCOL_GRID] * 2), True),
        ("S3 exact output 0 -> 1 -> 2", encode_path(TOKENS[::-1], [RESOLUTION_MEDIUM] * 2, [PROTOCOL_GRID] * 2), False),
    ]
    for title, path, exact_input in scenarios:
        if exact_input:
            quote = quoter.quote_exact_input(path, amount)
        else:
            quote = quoter.quote_exact_output(path, amount)
        realised = execute(registry, path, amount, exact_input)
        print_quote(title, quote, realised, exact_input)
        mismatches += quote.amount != realised

    grid01 = registry.get(PROTOCOL_GRID, TOKENS[0], TOKENS[1], RESOLUTION_MEDIUM)
    print("\n=== S4 maker books on grid01 ===")
    for zero in (True, False):
        books = maker_books(grid01, zero, levels * 2 + 1)
        cells = ", ".join(f"{b.boundary_lower}:{b.maker_amount_remaining}" for b in books)
        print(f"  • zero={zero}: {cells or '(empty)'}")
    return 1 if mismatches else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Grid exchange multi-hop quoting demo")
    parser.add_argument("--amount", type=int, default=1500, help="Exact amount to quote (raw token units)")
    parser.add_argument("--order-amount", type=int, default=1000, help="Maker amount resting in each cell")
    parser.add_argument("--levels", type=int, default=2, help="Cells placed on each side of the start price")
    parser.add_argument("--verbose", action="store_true", help="Log per-hop and per-step details")
    args = parser.parse_args(sys.argv[1:])
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s %(levelname)s %(message)s")
    sys.exit(run(args.amount, args.order_amount, args.levels))
