"""
Trading-fee APR for normal (constant product) farms.

APR is estimated from the trailing week of volume recorded by the pairs
subgraph: the difference between the cumulative ``volumeUSD`` now and one week
ago gives the 7-day volume, of which ``LP_HOLDERS_FEE`` goes to liquidity
providers. Annualizing those fees and dividing by the current ``reserveUSD``
gives the APR in percent.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, List, Optional, Sequence

from src.adapters.base import (
    AprAdapter,
    AprMap,
    SubgraphClient,
    SubgraphError,
    round_apr,
    to_finite_decimal,
)
from src.adapters.blocks import BlockResolver
from src.farms.models import FarmConfig

logger = logging.getLogger(__name__)

LP_HOLDERS_FEE = Decimal("0.0025")
WEEKS_IN_A_YEAR = Decimal("52.1429")

# Upper bound of ids per pairs query; larger lists time out at the gateway
FARMS_PER_REQUEST = 30

LP_APR_DECIMALS = 2

FARMS_BULK_QUERY = """
query farmsBulk($addresses: [String]!, $blockWeekAgo: Int!) {
  farmsAtLatestBlock: pairs(first: 30, where: { id_in: $addresses }) {
    id
    volumeUSD
    reserveUSD
  }
  farmsOneWeekAgo: pairs(first: 30, where: { id_in: $addresses }, block: { number: $blockWeekAgo }) {
    id
    volumeUSD
    reserveUSD
  }
}
"""


def chunk(items: Sequence, size: int) -> Iterator[List]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def calculate_lp_apr(farm: Dict, farm_week_ago: Optional[Dict]) -> Decimal:
    """
    Compute the LP fee APR for one pair.

    Args:
        farm: Snapshot at the latest block (``volumeUSD``, ``reserveUSD``)
        farm_week_ago: Snapshot one week ago, or None if the pair is too new

    Returns:
        APR in percent, rounded to ``LP_APR_DECIMALS``
    """
    lp_apr = Decimal(0)
    # Pair too new to estimate (not returned in the week-ago query)
    if farm_week_ago:
        volume_7d = (
            to_finite_decimal(farm["volumeUSD"]) - to_finite_decimal(farm_week_ago["volumeUSD"])
        )
        lp_fees_7d = volume_7d * LP_HOLDERS_FEE
        lp_fees_in_a_year = lp_fees_7d * WEEKS_IN_A_YEAR
        # Untracked pairs report 0 volume
        if lp_fees_in_a_year > 0:
            liquidity = to_finite_decimal(farm["reserveUSD"])
            if liquidity > 0:
                lp_apr = lp_fees_in_a_year * 100 / liquidity
    return round_apr(lp_apr, LP_APR_DECIMALS)


class PairAprAdapter(AprAdapter):
    """Computes APRs for normal farms from the chain's pairs subgraph"""

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
        """Resolve the week-ago block once and compute APRs for all farms."""
        addresses = [farm.lp_address.lower() for farm in farms]
        logger.info("Fetching farm data for %d addresses", len(addresses))
        if not addresses:
            return {}
        block_week_ago = self.block_resolver.get_block_ago(timedelta(weeks=1), now)
        return self.get_aprs_for_addresses(addresses, block_week_ago)

    def get_aprs_for_addresses(self, addresses: Sequence[str], block_week_ago: int) -> AprMap:
        """
        Compute APRs for any number of addresses.

        Groups of ``FARMS_PER_REQUEST`` are fetched one after another so the
        subgraph gateway only ever sees one request from this chain.
        """
        all_aprs: AprMap = {}
        for group_of_addresses in chunk(addresses, FARMS_PER_REQUEST):
            all_aprs.update(self.get_aprs_for_farm_group(group_of_addresses, block_week_ago))
        return all_aprs

    def get_aprs_for_farm_group(self, addresses: Sequence[str], block_week_ago: int) -> AprMap:
        """
        Fetch latest and week-ago snapshots for up to 30 pairs and compute
        their APRs.

        Raises:
            ValueError: if more than ``FARMS_PER_REQUEST`` addresses are given
            SubgraphError: if the subgraph request fails
        """
        if len(addresses) > FARMS_PER_REQUEST:
            raise ValueError(
                f"At most {FARMS_PER_REQUEST} addresses per request, got {len(addresses)}"
            )
        if not self.url:
            raise SubgraphError(f"Failed to fetch LP APR data: no pairs subgraph for chainId {self.chain_id}")

        try:
            data = self.client.request(
                self.url,
                FARMS_BULK_QUERY,
                {"addresses": list(addresses), "blockWeekAgo": block_week_ago},
            )
        except SubgraphError as e:
            raise SubgraphError(f"Failed to fetch LP APR data: {e}") from e

        farms_at_latest_block = data.get("farmsAtLatestBlock") or []
        farms_one_week_ago = {farm["id"]: farm for farm in data.get("farmsOneWeekAgo") or []}

        aprs: AprMap = {}
        for farm in farms_at_latest_block:
            try:
                aprs[farm["id"]] = calculate_lp_apr(farm, farms_one_week_ago.get(farm["id"]))
            except (InvalidOperation, KeyError, TypeError) as e:
                logger.warning("Unusable subgraph data for pair %s: %s", farm.get("id"), e)
                if "id" in farm:
                    aprs[farm["id"]] = round_apr(Decimal(0), LP_APR_DECIMALS)
        return aprs
