"""Static registry of per-chain farm configuration"""
import logging
from typing import Callable, Dict, Iterable, List, NamedTuple

from src.farms.chains import ChainId
from src.farms.constants import core
from src.farms.models import FarmConfig

logger = logging.getLogger(__name__)

# Chain ID -> farm list provider
FARM_CONFIG_PROVIDERS: Dict[int, Callable[[], List[FarmConfig]]] = {
    ChainId.CORE: core.get_farms,
    # Add more chains here as their farm lists are published
}

_logged = False


class SplitFarmResult(NamedTuple):
    normal_farms: List[FarmConfig]
    stable_farms: List[FarmConfig]


def get_farm_config(chain_id: int) -> List[FarmConfig]:
    """
    Load the farm list for a chain, excluding farms without a pid.

    A chain without a registered provider, or whose provider fails, yields an
    empty list. The failure is only logged the first time it happens in the
    process.
    """
    global _logged
    try:
        provider = FARM_CONFIG_PROVIDERS[chain_id]
        return [farm for farm in provider() if farm.pid is not None]
    except Exception as e:
        if not _logged:
            logger.error("Cannot get farm config for chain %s: %s", chain_id, e)
            _logged = True
        return []


def split_normal_and_stable_farms(farms: Iterable[FarmConfig]) -> SplitFarmResult:
    """Partition farms into normal AMM farms and stable-swap farms, keeping order."""
    result = SplitFarmResult([], [])
    for farm in farms:
        if farm.is_stable:
            result.stable_farms.append(farm)
        else:
            result.normal_farms.append(farm)
    return result
