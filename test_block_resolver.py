#!/usr/bin/env python3
"""Tests for block resolution and the subgraph client"""
import sys
import threading
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import requests

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from src.adapters.base import BlockResolutionError, SubgraphClient, SubgraphError
from src.adapters.blocks import BLOCK_TIMESTAMP_WINDOW, BlockResolver


def make_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = text
    return resp


class TestSubgraphClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.client = SubgraphClient(timeout=5, session=self.session)

    def test_returns_data_and_posts_payload(self):
        self.session.post.return_value = make_response(payload={"data": {"blocks": []}})
        data = self.client.request("https://blocks", "query { blocks { number } }", {"a": 1})

        self.assertEqual(data, {"blocks": []})
        self.session.post.assert_called_once_with(
            "https://blocks",
            json={"query": "query { blocks { number } }", "variables": {"a": 1}},
            timeout=5,
        )

    def test_http_error(self):
        self.session.post.return_value = make_response(status_code=502, text="Bad Gateway")
        with self.assertRaises(SubgraphError):
            self.client.request("https://blocks", "query")

    def test_graphql_errors(self):
        self.session.post.return_value = make_response(payload={"errors": [{"message": "boom"}]})
        with self.assertRaises(SubgraphError) as ctx:
            self.client.request("https://blocks", "query")
        self.assertIn("boom", str(ctx.exception))

    def test_transport_error(self):
        self.session.post.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(SubgraphError):
            self.client.request("https://blocks", "query")

    def test_invalid_json(self):
        resp = make_response()
        resp.json.side_effect = ValueError("Expecting value")
        self.session.post.return_value = resp
        with self.assertRaises(SubgraphError):
            self.client.request("https://blocks", "query")

    def test_default_session_is_per_thread(self):
        client = SubgraphClient(timeout=5)
        sessions = {}

        def grab(name):
            sessions[name] = (client.session, client.session)

        threads = [threading.Thread(target=grab, args=(name,)) for name in ("a", "b")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        first_a, second_a = sessions["a"]
        first_b, _ = sessions["b"]
        self.assertIs(first_a, second_a)
        self.assertIsNot(first_a, first_b)
        self.assertIsInstance(first_a, requests.Session)
        self.assertEqual(first_a.headers["User-Agent"], SubgraphClient.HEADERS["User-Agent"])

    def test_explicit_session_is_shared(self):
        seen = []
        thread = threading.Thread(target=lambda: seen.append(self.client.session))
        thread.start()
        thread.join()
        self.assertIs(seen[0], self.session)
        self.assertIs(self.client.session, self.session)


class TestBlockResolver(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.resolver = BlockResolver(1116, self.client, "https://blocks")

    def test_block_at_timestamp(self):
        self.client.request.return_value = {"blocks": [{"number": "1234567"}]}
        self.assertEqual(self.resolver.get_block_at_timestamp(1704067200), 1234567)

        _, _, variables = self.client.request.call_args[0]
        self.assertEqual(variables, {
            "timestampGreater": 1704067200,
            "timestampLess": 1704067200 + BLOCK_TIMESTAMP_WINDOW,
        })

    def test_no_block_in_window(self):
        self.client.request.return_value = {"blocks": []}
        with self.assertRaises(BlockResolutionError) as ctx:
            self.resolver.get_block_at_timestamp(1704067200)
        self.assertIn("1704067200", str(ctx.exception))

    def test_request_failure(self):
        self.client.request.side_effect = SubgraphError("Subgraph error 500")
        with self.assertRaises(BlockResolutionError) as ctx:
            self.resolver.get_block_at_timestamp(1704067200)
        self.assertIn("Failed to fetch block number for 1704067200", str(ctx.exception))

    def test_missing_block_endpoint(self):
        resolver = BlockResolver(32520, self.client, None)
        with self.assertRaises(BlockResolutionError) as ctx:
            resolver.get_block_at_timestamp(1704067200)
        self.assertIn("32520", str(ctx.exception))
        self.client.request.assert_not_called()

    def test_block_week_ago(self):
        self.client.request.return_value = {"blocks": [{"number": "99"}]}
        now = datetime(2024, 1, 8, tzinfo=timezone.utc)

        self.assertEqual(self.resolver.get_block_ago(timedelta(weeks=1), now), 99)
        _, _, variables = self.client.request.call_args[0]
        # 2024-01-01T00:00:00Z
        self.assertEqual(variables["timestampGreater"], 1704067200)


if __name__ == "__main__":
    unittest.main()
