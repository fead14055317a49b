"""Farm and token models for LP APR tracking"""
from dataclasses import dataclass
from typing import Optional

from eth_utils import is_hex_address


@dataclass(frozen=True)
class Token:
    """ERC20 token metadata as stored in the farm configuration"""
    chain_id: int
    address: str
    decimals: int
    symbol: str
    name: str = ""


@dataclass(frozen=True)
class FarmConfig:
    """Static configuration of a single farm.

    Farms with ``pid`` set to ``None`` are listed for display only and are
    skipped when computing APRs. A farm with a ``stable_swap_address`` is
    backed by a stable-swap pool.
    """
    pid: Optional[int]
    lp_symbol: str
    lp_address: str
    token: Token
    quote_token: Token
    stable_swap_address: Optional[str] = None

    def __post_init__(self):
        if not is_hex_address(self.lp_address):
            raise ValueError(f"Invalid LP address for {self.lp_symbol}: {self.lp_address}")
        if self.stable_swap_address and not is_hex_address(self.stable_swap_address):
            raise ValueError(
                f"Invalid stable swap address for {self.lp_symbol}: {self.stable_swap_address}"
            )

    @property
    def is_stable(self) -> bool:
        return bool(self.stable_swap_address)
