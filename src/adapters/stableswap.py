"""
Stable-swap farm APR from the growth of the pool's virtual price.

Stable pools trade pegged assets, so reserve/volume ratios say little about
LP returns. Instead the one-day growth of the pool's virtual price is
compounded over a year.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from decimal import Decimal, localcontext
from typing import Optional, Sequence

from src.adapters.base import AprAdapter, AprMap, SubgraphClient, round_apr, to_finite_decimal
from src.adapters.blocks import BlockResolver
from src.farms.models import FarmConfig

logger = logging.getLogger(__name__)

STABLE_APR_DECIMALS = 5
DAYS_IN_A_YEAR = 365

# Enough digits to keep the 365th power exact well past STABLE_APR_DECIMALS
STABLE_APR_PRECISION = 60

VIRTUAL_PRICE_QUERY = """
query virtualPriceStableSwap($stableSwapAddress: String, $blockDayAgo: Int!) {
  virtualPriceAtLatestBlock: pairs(where: { id: $stableSwapAddress }) {
    virtualPrice
  }
  virtualPriceOneDayAgo: pairs(where: { id: $stableSwapAddress }, block: { number: $blockDayAgo }) {
    virtualPrice
  }
}
"""


def calculate_stable_apr(virtual_price: Decimal, pre_virtual_price: Decimal) -> Decimal:
    """Compound one day of virtual price growth over a year: (p1 / p0) ** 365 - 1."""
    with localcontext() as ctx:
        ctx.prec = STABLE_APR_PRECISION
        return (virtual_price / pre_virtual_price) ** DAYS_IN_A_YEAR - 1


class StableSwapAprAdapter(AprAdapter):
    """Computes APRs for stable-swap farms from the stable-swap subgraph"""

    def __init__(
        self,
        chain_id: int,
        client: SubgraphClient,
        url: Optional[str],
        block_resolver: BlockResolver,
    ):
        super().__init__(chain_id, client, url)
        self.block_resolver = block_resolver

    def get_aprs(self, farms: Sequence[FarmConfig], now: Optional[datetime] = None) -> AprMap:
        """
        Look up every stable farm concurrently.

        Keys are the configured LP addresses, values rounded to
        ``STABLE_APR_DECIMALS``.
        """
        if not farms:
            return {}
        # One worker per farm
        with ThreadPoolExecutor(max_workers=len(farms)) as executor:
            stable_aprs = list(executor.map(lambda f: self.get_apr_for_stable_farm(f, now), farms))
        return {
            farm.lp_address: round_apr(apr, STABLE_APR_DECIMALS)
            for farm, apr in zip(farms, stable_aprs)
        }

    def get_apr_for_stable_farm(self, stable_farm: FarmConfig, now: Optional[datetime] = None) -> Decimal:
        """
        Compute the APR of one stable farm.

        Errors are logged and reported as an APR of 0 so that one broken pool
        does not hide the others.
        """
        # Subgraph entity ids are lower-case hex
        stable_swap_address = stable_farm.stable_swap_address.lower()
        try:
            if not self.url:
                raise ValueError(f"missing stable swap client for chainId {self.chain_id}")

            block_day_ago = self.block_resolver.get_block_ago(timedelta(days=1), now)
            data = self.client.request(
                self.url,
                VIRTUAL_PRICE_QUERY,
                {"stableSwapAddress": stable_swap_address, "blockDayAgo": block_day_ago},
            )

            latest = data.get("virtualPriceAtLatestBlock") or []
            day_ago = data.get("virtualPriceOneDayAgo") or []
            if not latest or not day_ago:
                raise ValueError(f"missing virtual price for {stable_swap_address}")

            current = to_finite_decimal(latest[0]["virtualPrice"])
            prev = to_finite_decimal(day_ago[0]["virtualPrice"])
            if prev == 0:
                raise ValueError(f"zero virtual price one day ago for {stable_swap_address}")

            return calculate_stable_apr(current, prev)
        except Exception as e:
            logger.error(
                "[LP APR Update] getAprsForStableFarm error for %s: %s",
                stable_farm.lp_symbol,
                e,
                exc_info=True,
            )

        return Decimal(0)
