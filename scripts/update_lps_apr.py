#!/usr/bin/env python3
"""
LP APR Update Script

Computes trading-fee APRs for every farm of the enabled chains from their
subgraphs and writes them to `data/lpAprs/<chainId>.json`, which the web
front-end serves as static data. Each file is fully overwritten.

Designed to be run daily via cron.

Cron example (00:30 server time):
    30 0 * * * cd /opt/lp-apr-updater && /opt/lp-apr-updater/venv/bin/python scripts/update_lps_apr.py >> logs/lp_apr_update.log 2>&1
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.collectors.chain_registry import ChainRegistry
from src.collectors.lp_apr_collector import LpAprCollector

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def fetch_and_update_lps_apr() -> int:
    """Update the APR files of all enabled chains."""
    logger.info("=" * 60)
    logger.info("Starting LP APR update")
    logger.info("Timestamp: %s", datetime.now(timezone.utc).isoformat())
    logger.info("=" * 60)

    try:
        registry = ChainRegistry()
        collector = LpAprCollector(registry)
        results = collector.update_all()
    except Exception as exc:
        logger.error("LP APR update failed: %s", exc, exc_info=True)
        return 1

    failed = [chain_id for chain_id, ok in results.items() if not ok]
    if failed:
        logger.error("LP APR update failed for chains: %s", failed)
        return 1

    logger.info("LP APR update complete. Chains updated: %s", list(results))
    return 0


def main():
    exit_code = fetch_and_update_lps_apr()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
