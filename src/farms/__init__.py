"""Farm configuration for LP APR tracking"""
from src.farms.models import FarmConfig, Token
from src.farms.registry import get_farm_config, split_normal_and_stable_farms

__all__ = ["FarmConfig", "Token", "get_farm_config", "split_normal_and_stable_farms"]
