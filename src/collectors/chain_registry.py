"""Chain registry for subgraph endpoints and output settings"""
import yaml
from dataclasses import dataclass
from typing import Dict, List, Optional
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_OUTPUT_DIR = "data/lpAprs"


@dataclass(frozen=True)
class ChainConfig:
    """Subgraph endpoints for one chain"""
    name: str
    chain_id: int
    enabled: bool = False
    blocks_subgraph: Optional[str] = None
    info_subgraph: Optional[str] = None
    stable_swap_subgraph: Optional[str] = None
    timeout: float = 30


class ChainRegistry:
    """Registry of chains configured for LP APR updates"""

    def __init__(self, config_path: Optional[str] = None):
        if config_path is None:
            config_path = PROJECT_ROOT / "config" / "chains.yaml"
        self.config_path = Path(config_path)
        self.chains: Dict[int, ChainConfig] = {}
        self.load_config()

    def load_config(self):
        """Load chain configuration from YAML file"""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Chain config not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        self.output_config = config.get('output', {})
        self.chains = {}
        for name, chain_config in (config.get('chains') or {}).items():
            chain = ChainConfig(
                name=name,
                chain_id=int(chain_config['chain_id']),
                enabled=bool(chain_config.get('enabled', False)),
                blocks_subgraph=chain_config.get('blocks_subgraph'),
                info_subgraph=chain_config.get('info_subgraph'),
                stable_swap_subgraph=chain_config.get('stable_swap_subgraph'),
                timeout=chain_config.get('timeout', 30),
            )
            self.chains[chain.chain_id] = chain

    def get_chain(self, chain_id: int) -> ChainConfig:
        """Get a chain's configuration by chain ID"""
        chain = self.chains.get(int(chain_id))
        if chain is None:
            raise ValueError(f"Chain {chain_id} not found in config")
        return chain

    def get_all_active_chains(self) -> List[int]:
        """Get list of all enabled chain IDs"""
        return [
            chain_id for chain_id, chain in self.chains.items()
            if chain.enabled
        ]

    @property
    def output_dir(self) -> Path:
        """Directory where the per-chain APR files are written"""
        output_dir = Path(self.output_config.get('directory', DEFAULT_OUTPUT_DIR))
        if not output_dir.is_absolute():
            output_dir = PROJECT_ROOT / output_dir
        return output_dir
