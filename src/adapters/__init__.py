"""Subgraph adapters for LP APR computation"""
from src.adapters.base import AprAdapter, BlockResolutionError, SubgraphClient, SubgraphError
from src.adapters.blocks import BlockResolver
from src.adapters.pairs import PairAprAdapter
from src.adapters.stableswap import StableSwapAprAdapter

__all__ = [
    'AprAdapter',
    'BlockResolutionError',
    'BlockResolver',
    'PairAprAdapter',
    'StableSwapAprAdapter',
    'SubgraphClient',
    'SubgraphError',
]
