"""
Multi-hop quoter.

Quotes simulate every hop against its ledger with `Ledger.simulate_swap`, so
nothing is mutated. Per hop the quoter records amounts, the resulting price
and the number of initialised boundaries the move crossed on the consumed
side.

Path conventions
----------------
- Exact input: the path is encoded input token first; hops run in encoded
  order and each hop's OUT is the next hop's IN.
- Exact output: the path is encoded output token first; hops run in encoded
  order and each hop's required IN is the previous (upstream) hop's OUT.

In both modes `Quote.hops` follows the encoded order of the path. `HopQuote.hop`
is always oriented in trade direction (token_in is what the taker pays).

Any ledger failure (missing grid, insufficient liquidity, amount domain)
aborts the whole quote; no partial route is returned.
"""

from __future__ import annotations

import logging
from typing import List

from .core.address import AddressLike, to_address
from .core.boundary_math import boundary_lower
from .core.constants import PROTOCOL_GRID
from .core.datatypes import Hop, HopQuote, Quote
from .crossing import count_initialized_boundaries_crossed
from .ledger import GridRegistry
from .path import PathLike, decode_hops

logger = logging.getLogger(__name__)


class Quoter:
    """Simulated quotes over ledgers looked up in a `GridRegistry`."""

    def __init__(self, registry: GridRegistry) -> None:
        self.registry = registry

    # ------------------------------------------------------------------
    # Single hop
    # ------------------------------------------------------------------

    def _quote_hop(self, hop: Hop, amount: int, exact_input: bool) -> HopQuote:
        ledger = self.registry.get(hop.protocol, hop.token_in, hop.token_out, hop.resolution)
        res = ledger.resolution
        zero_for_one = to_address(hop.token_in) < to_address(hop.token_out)

        result = ledger.simulate_swap(zero_for_one, amount, exact_input)
        crossed = count_initialized_boundaries_crossed(
            ledger.boundary_bitmap(not zero_for_one),
            zero_for_one,
            result.price_before,
            result.boundary_before,
            boundary_lower(result.boundary_before, res),
            result.price_after,
            result.boundary_after,
            boundary_lower(result.boundary_after, res),
        )
        logger.debug(
            "hop %s -> %s res=%d exact_input=%s in=%d out=%d boundary %d -> %d crossed=%d",
            hop.token_in, hop.token_out, res, exact_input,
            result.amount_in, result.amount_out,
            result.boundary_before, result.boundary_after, crossed,
        )
        return HopQuote(
            hop=hop,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            price_before=result.price_before,
            price_after=result.price_after,
            boundary_after=result.boundary_after,
            initialized_boundaries_crossed=crossed,
        )

    def quote_exact_input_single(
        self,
        token_in: AddressLike,
        token_out: AddressLike,
        resolution: int,
        amount_in: int,
        protocol: int = PROTOCOL_GRID,
    ) -> HopQuote:
        hop = Hop(to_address(token_in), to_address(token_out), protocol, resolution)
        return self._quote_hop(hop, amount_in, exact_input=True)

    def quote_exact_output_single(
        self,
        token_in: AddressLike,
        token_out: AddressLike,
        resolution: int,
        amount_out: int,
        protocol: int = PROTOCOL_GRID,
    ) -> HopQuote:
        hop = Hop(to_address(token_in), to_address(token_out), protocol, resolution)
        return self._quote_hop(hop, amount_out, exact_input=False)

    # ------------------------------------------------------------------
    # Multi hop
    # ------------------------------------------------------------------

    def quote_exact_input(self, path: PathLike, amount_in: int) -> Quote:
        """Return total OUT for spending `amount_in` along `path`."""
        amount = amount_in
        quotes: List[HopQuote] = []
        for hop in decode_hops(path):
            hq = self._quote_hop(hop, amount, exact_input=True)
            quotes.append(hq)
            amount = hq.amount_out
        return Quote(amount=amount, hops=quotes)

    def quote_exact_output(self, path: PathLike, amount_out: int) -> Quote:
        """Return total IN needed to receive `amount_out` along an output-first `path`."""
        amount = amount_out
        quotes: List[HopQuote] = []
        for encoded in decode_hops(path):
            hop = Hop(encoded.token_out, encoded.token_in, encoded.protocol, encoded.resolution)
            hq = self._quote_hop(hop, amount, exact_input=False)
            quotes.append(hq)
            amount = hq.amount_in
        return Quote(amount=amount, hops=quotes)


__all__ = ["Quoter"]
