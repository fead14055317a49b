"""Chain configuration and APR collection"""
from src.collectors.chain_registry import ChainConfig, ChainRegistry
from src.collectors.lp_apr_collector import LpAprCollector

__all__ = ['ChainConfig', 'ChainRegistry', 'LpAprCollector']
