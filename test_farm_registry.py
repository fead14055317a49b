#!/usr/bin/env python3
"""Tests for farm configuration loading and partitioning"""
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from src.farms import registry
from src.farms.chains import NATIVE, WNATIVE, ChainId
from src.farms.models import FarmConfig
from src.farms.registry import (
    FARM_CONFIG_PROVIDERS,
    get_farm_config,
    split_normal_and_stable_farms,
)
from src.farms.tokens import core_tokens


def farm(pid, index, stable_swap_address=None):
    return FarmConfig(
        pid=pid,
        lp_symbol=f"LP{index}",
        lp_address="0x%040x" % index,
        token=core_tokens.ice,
        quote_token=core_tokens.usdt,
        stable_swap_address=stable_swap_address,
    )


class TestSplitFarms(unittest.TestCase):

    def test_every_farm_lands_in_exactly_one_group(self):
        farms = [
            farm(0, 1),
            farm(1, 2, stable_swap_address="0x" + "5" * 40),
            farm(2, 3),
            farm(3, 4, stable_swap_address="0x" + "6" * 40),
            farm(4, 5),
        ]
        normal_farms, stable_farms = split_normal_and_stable_farms(farms)

        self.assertEqual([f.pid for f in normal_farms], [0, 2, 4])
        self.assertEqual([f.pid for f in stable_farms], [1, 3])
        self.assertTrue(all(f.is_stable for f in stable_farms))
        self.assertFalse(any(f.is_stable for f in normal_farms))
        self.assertEqual(len(normal_farms) + len(stable_farms), len(farms))
        self.assertFalse(set(map(id, normal_farms)) & set(map(id, stable_farms)))

    def test_empty_stable_swap_address_is_normal(self):
        result = split_normal_and_stable_farms([farm(0, 1, stable_swap_address="")])
        self.assertEqual(len(result.normal_farms), 1)
        self.assertEqual(result.stable_farms, [])

    def test_empty_list(self):
        self.assertEqual(split_normal_and_stable_farms([]), ([], []))


class TestGetFarmConfig(unittest.TestCase):

    def setUp(self):
        registry._logged = False

    def tearDown(self):
        registry._logged = False

    def test_core_farms_are_registered(self):
        farms = get_farm_config(ChainId.CORE)
        self.assertEqual([f.lp_symbol for f in farms], ["ICE-USDT LP", "WCORE-USDT LP"])

    def test_farms_without_pid_are_excluded(self):
        farms = [farm(0, 1), farm(None, 2), farm(2, 3)]
        with patch.dict(FARM_CONFIG_PROVIDERS, {9999: lambda: farms}):
            self.assertEqual([f.pid for f in get_farm_config(9999)], [0, 2])

    def test_unknown_chain_returns_empty_and_logs_once(self):
        with patch("src.farms.registry.logger") as mock_logger:
            self.assertEqual(get_farm_config(424242), [])
            self.assertEqual(get_farm_config(424242), [])
        self.assertEqual(mock_logger.error.call_count, 1)

    def test_failing_provider_returns_empty(self):
        def broken():
            raise RuntimeError("farm list unavailable")

        with patch.dict(FARM_CONFIG_PROVIDERS, {9999: broken}), \
                patch("src.farms.registry.logger") as mock_logger:
            self.assertEqual(get_farm_config(9999), [])
        mock_logger.error.assert_called_once()


class TestFarmConfig(unittest.TestCase):

    def test_invalid_lp_address(self):
        with self.assertRaises(ValueError):
            FarmConfig(0, "BAD LP", "0x1234", core_tokens.ice, core_tokens.usdt)

    def test_invalid_stable_swap_address(self):
        with self.assertRaises(ValueError):
            FarmConfig(0, "BAD LP", "0x" + "1" * 40, core_tokens.ice, core_tokens.usdt, "pool")

    def test_is_stable(self):
        self.assertTrue(farm(0, 1, stable_swap_address="0x" + "5" * 40).is_stable)
        self.assertFalse(farm(0, 1).is_stable)


class TestChains(unittest.TestCase):

    def test_every_chain_has_native_and_wrapped_tokens(self):
        for chain_id in ChainId:
            self.assertIn(chain_id, NATIVE)
            self.assertEqual(WNATIVE[chain_id].chain_id, chain_id)
            self.assertEqual(WNATIVE[chain_id].symbol, "W" + NATIVE[chain_id]["symbol"])

    def test_core_farm_tokens(self):
        self.assertIs(core_tokens.wcore, WNATIVE[ChainId.CORE])
        self.assertEqual(ChainId(1116), ChainId.CORE)


if __name__ == "__main__":
    unittest.main()
