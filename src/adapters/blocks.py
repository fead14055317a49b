"""Block resolution through a block-indexing subgraph"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.adapters.base import BlockResolutionError, SubgraphClient, SubgraphError

logger = logging.getLogger(__name__)

# Width of the timestamp window searched for a block, in seconds
BLOCK_TIMESTAMP_WINDOW = 600

BLOCK_QUERY = """
query getBlock($timestampGreater: Int!, $timestampLess: Int!) {
  blocks(first: 1, where: { timestamp_gt: $timestampGreater, timestamp_lt: $timestampLess }) {
    number
  }
}
"""


class BlockResolver:
    """Translates UNIX timestamps into block numbers for one chain"""

    def __init__(self, chain_id: int, client: SubgraphClient, url: Optional[str]):
        self.chain_id = chain_id
        self.client = client
        self.url = url

    def get_block_at_timestamp(self, timestamp: int) -> int:
        """
        Get the first block mined within ``BLOCK_TIMESTAMP_WINDOW`` seconds
        after ``timestamp``.

        Raises:
            BlockResolutionError: if the chain has no block subgraph, the
                request fails or no block falls in the window
        """
        try:
            if not self.url:
                raise ValueError(f"missing block client for chainId {self.chain_id}")
            data = self.client.request(
                self.url,
                BLOCK_QUERY,
                {
                    "timestampGreater": timestamp,
                    "timestampLess": timestamp + BLOCK_TIMESTAMP_WINDOW,
                },
            )
            blocks = data.get("blocks") or []
            if not blocks:
                raise ValueError("no block found in window")
            block = int(blocks[0]["number"])
        except (SubgraphError, ValueError, KeyError, TypeError) as e:
            raise BlockResolutionError(f"Failed to fetch block number for {timestamp}\n{e}") from e

        logger.debug("Chain %s: timestamp %s -> block %s", self.chain_id, timestamp, block)
        return block

    def get_block_ago(self, delta: timedelta, now: Optional[datetime] = None) -> int:
        """Resolve the block produced ``delta`` before ``now`` (UTC)."""
        if now is None:
            now = datetime.now(timezone.utc)
        timestamp = int((now - delta).timestamp())
        return self.get_block_at_timestamp(timestamp)
