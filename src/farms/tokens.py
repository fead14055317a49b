"""Token tables referenced by the farm lists"""
from src.farms.chains import ChainId, WNATIVE
from src.farms.models import Token


class CoreTokens:
    """Tokens on CORE"""
    wcore = WNATIVE[ChainId.CORE]
    ice = Token(ChainId.CORE, '0xc0E49f8C615d3d4c245970F6Dc528E4A47d69a44', 18, 'ICE', 'IceCream')
    usdt = Token(ChainId.CORE, '0x900101d06A7426441Ae63e9AB3B9b0F63Be145F1', 6, 'USDT', 'Tether USD')


core_tokens = CoreTokens()
