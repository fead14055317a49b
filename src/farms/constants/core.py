"""Farm list for CORE (chain 1116)"""
from typing import List

from src.farms.models import FarmConfig
from src.farms.tokens import core_tokens

FARMS: List[FarmConfig] = [
    FarmConfig(
        pid=0,
        lp_symbol='ICE-USDT LP',
        lp_address='0xf1a996efba43dcbd7945d2b91fa78420d9c23bf0',
        token=core_tokens.ice,
        quote_token=core_tokens.usdt,
    ),
    FarmConfig(
        pid=1,
        lp_symbol='WCORE-USDT LP',
        lp_address='0x5ebAE3A840fF34B107D637c8Ed07C3D1D2017178',
        token=core_tokens.wcore,
        quote_token=core_tokens.usdt,
    ),
]


def get_farms() -> List[FarmConfig]:
    return list(FARMS)
