"""Collects LP APRs for every configured chain and writes them to disk"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional

from src.adapters.base import AprMap, SubgraphClient
from src.adapters.blocks import BlockResolver
from src.adapters.pairs import PairAprAdapter
from src.adapters.stableswap import StableSwapAprAdapter
from src.collectors.chain_registry import ChainRegistry
from src.farms.registry import get_farm_config, split_normal_and_stable_farms
from src.storage.apr_file import output_path_for, write_apr_file

logger = logging.getLogger(__name__)


class LpAprCollector:
    """Runs the APR pipeline: farm config -> subgraph APRs -> JSON file"""

    def __init__(self, registry: Optional[ChainRegistry] = None, output_dir: Optional[Path] = None):
        self.registry = registry or ChainRegistry()
        self.output_dir = Path(output_dir) if output_dir is not None else self.registry.output_dir

    def _build_adapters(self, chain_id: int):
        chain = self.registry.get_chain(chain_id)
        client = SubgraphClient(timeout=chain.timeout)
        block_resolver = BlockResolver(chain_id, client, chain.blocks_subgraph)
        pair_adapter = PairAprAdapter(chain_id, client, chain.info_subgraph, block_resolver)
        stable_adapter = StableSwapAprAdapter(chain_id, client, chain.stable_swap_subgraph, block_resolver)
        return pair_adapter, stable_adapter

    def collect_chain(self, chain_id: int, now: Optional[datetime] = None) -> AprMap:
        """
        Compute the APR map of one chain.

        Raises:
            SubgraphError: if the week-ago block or a normal farm batch cannot
                be fetched
        """
        farms_config = get_farm_config(chain_id)
        normal_farms, stable_farms = split_normal_and_stable_farms(farms_config)
        pair_adapter, stable_adapter = self._build_adapters(chain_id)

        all_aprs: AprMap = pair_adapter.get_aprs(normal_farms, now)

        try:
            if stable_farms:
                all_aprs.update(stable_adapter.get_aprs(stable_farms, now))
        except Exception as e:
            logger.error("[LP APR Update] getAprsForStableFarm error on chain %s: %s", chain_id, e, exc_info=True)

        return all_aprs

    def update_chain(self, chain_id: int, now: Optional[datetime] = None) -> Path:
        """Compute and persist the APR file for one chain."""
        aprs = self.collect_chain(chain_id, now)
        return write_apr_file(output_path_for(chain_id, self.output_dir), aprs)

    def update_all(self, chain_ids: Optional[Iterable[int]] = None, now: Optional[datetime] = None) -> Dict[int, bool]:
        """
        Update every chain concurrently and wait for all of them.

        Returns:
            Dict mapping chain ID -> whether its file was written
        """
        if chain_ids is None:
            chain_ids = self.registry.get_all_active_chains()
        chain_ids = list(chain_ids)
        if not chain_ids:
            logger.warning("No chains enabled for LP APR update")
            return {}

        results: Dict[int, bool] = {}
        with ThreadPoolExecutor(max_workers=len(chain_ids)) as executor:
            futures = {
                chain_id: executor.submit(self.update_chain, chain_id, now)
                for chain_id in chain_ids
            }
            for chain_id, future in futures.items():
                try:
                    path = future.result()
                    logger.info("Chain %s: lpAprs written to %s", chain_id, path)
                    results[chain_id] = True
                except Exception as e:
                    logger.error("LP APR update failed for chain %s: %s", chain_id, e, exc_info=True)
                    results[chain_id] = False
        return results
