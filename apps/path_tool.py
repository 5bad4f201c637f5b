#!/usr/bin/env python3
"""Encode or decode multi-hop paths from the command line.

Examples:
  python apps/path_tool.py encode 0xaaaa... 0xbbbb... 0xcccc... --resolutions 1 5
  python apps/path_tool.py decode 0x<hex path>
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from grid_router.core import PROTOCOL_GRID
from grid_router.core.exc import MalformedPathError, InvalidResolutionError
from grid_router.path import decode_hops, encode_path, to_hex


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid path codec tool.")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Encode tokens, resolutions and protocol tags")
    enc.add_argument("tokens", nargs="+", help="Token addresses in path order")
    enc.add_argument("--resolutions", type=int, nargs="+", required=True, help="One resolution per hop")
    enc.add_argument("--protocols", type=int, nargs="+", default=None, help="One protocol tag per hop (default: grid)")

    dec = sub.add_parser("decode", help="Decode a hex path into its hops")
    dec.add_argument("path", help="0x-prefixed hex path")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        if args.command == "encode":
            protocols = args.protocols or [PROTOCOL_GRID] * len(args.resolutions)
            print(to_hex(encode_path(args.tokens, args.resolutions, protocols)))
        else:
            for i, hop in enumerate(decode_hops(args.path), start=1):
                print(f"hop{i}: {hop.token_in} -> {hop.token_out} protocol={hop.protocol} resolution={hop.resolution}")
    except (MalformedPathError, InvalidResolutionError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
