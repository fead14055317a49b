"""Supported chains and their native currencies"""
from enum import IntEnum
from typing import Dict

from src.farms.models import Token


class ChainId(IntEnum):
    BITGERT = 32520
    DOGE = 2000
    DOKEN = 61916
    FUSE = 122
    XDC = 50
    BSC = 56
    CORE = 1116


# Native currency metadata per chain
NATIVE: Dict[int, Dict] = {
    ChainId.BITGERT: {'name': 'Brise', 'symbol': 'BRISE', 'decimals': 18},
    ChainId.DOGE: {'name': 'Doge', 'symbol': 'DOGE', 'decimals': 18},
    ChainId.DOKEN: {'name': 'DoKEN', 'symbol': 'DKN', 'decimals': 18},
    ChainId.FUSE: {'name': 'Fuse', 'symbol': 'FUSE', 'decimals': 18},
    ChainId.XDC: {'name': 'XDC', 'symbol': 'XDC', 'decimals': 18},
    ChainId.BSC: {'name': 'Binance Coin', 'symbol': 'BNB', 'decimals': 18},
    ChainId.CORE: {'name': 'CORE', 'symbol': 'CORE', 'decimals': 18},
}

# Wrapped native tokens
WNATIVE: Dict[int, Token] = {
    ChainId.BITGERT: Token(ChainId.BITGERT, '0x0eb9036cbE0f052386f36170c6b07eF0a0E3f710', 18, 'WBRISE', 'Wrapped Brise'),
    ChainId.DOGE: Token(ChainId.DOGE, '0xB7ddC6414bf4F5515b52D8BdD69973Ae205ff101', 18, 'WDOGE', 'Wrapped Doge'),
    ChainId.DOKEN: Token(ChainId.DOKEN, '0x27b45bCC26e01Ed50B4080A405D1c492FEe89d63', 18, 'WDKN', 'Wrapped DoKEN'),
    ChainId.FUSE: Token(ChainId.FUSE, '0x0BE9e53fd7EDaC9F859882AfdDa116645287C629', 18, 'WFUSE', 'Wrapped Fuse'),
    ChainId.XDC: Token(ChainId.XDC, '0x951857744785E80e2De051c32EE7b25f9c458C42', 18, 'WXDC', 'Wrapped XDC'),
    ChainId.BSC: Token(ChainId.BSC, '0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c', 18, 'WBNB', 'Wrapped BNB'),
    ChainId.CORE: Token(ChainId.CORE, '0x40375C92d9FAf44d2f9db9Bd9ba41a3317a2404f', 18, 'WCORE', 'Wrapped CORE'),
}
