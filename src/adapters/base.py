"""Base classes for subgraph access and LP APR adapters"""
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Dict, Optional, Sequence
import logging
import threading

import requests

from src.farms.models import FarmConfig

logger = logging.getLogger(__name__)

AprMap = Dict[str, Decimal]


class SubgraphError(RuntimeError):
    """Raised when a subgraph request fails or returns GraphQL errors"""


class BlockResolutionError(SubgraphError):
    """Raised when a timestamp cannot be translated into a block number"""


def to_finite_decimal(value) -> Decimal:
    """
    Parse a subgraph decimal string.

    Raises:
        InvalidOperation: for unparseable values and for NaN or Infinity
    """
    result = Decimal(value)
    if not result.is_finite():
        raise InvalidOperation(f"non-finite value {value!r}")
    return result


def round_apr(value: Decimal, places: int) -> Decimal:
    """Round half-up to a fixed number of decimal places."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the fraction
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class SubgraphClient:
    """Thin GraphQL-over-HTTP client shared by the adapters of one chain"""

    HEADERS = {
        "User-Agent": "lp-apr-updater/1.0",
        "Content-Type": "application/json",
    }

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        self.timeout = timeout
        # An explicit session is shared by every caller; otherwise one per thread
        self._shared_session = session
        if session is not None:
            session.headers.update(self.HEADERS)
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.HEADERS)
            self._local.session = session
        return session

    def request(self, url: str, query: str, variables: Optional[Dict] = None) -> Dict:
        """
        Execute a single GraphQL request.

        Args:
            url: Subgraph endpoint
            query: GraphQL document
            variables: Query variables

        Returns:
            The ``data`` object of the response

        Raises:
            SubgraphError: on transport errors, HTTP errors or GraphQL errors
        """
        payload = {"query": query, "variables": variables or {}}
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SubgraphError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise SubgraphError(f"Subgraph error {resp.status_code}: {resp.text[:500]}")

        try:
            result = resp.json()
        except ValueError as exc:
            raise SubgraphError(f"Invalid JSON from {url}: {exc}") from exc

        if result.get("errors"):
            raise SubgraphError(f"GraphQL errors: {result['errors']}")

        data = result.get("data")
        if data is None:
            raise SubgraphError(f"Empty response from {url}")
        logger.debug("Subgraph %s returned keys %s", url, list(data))
        return data


class AprAdapter(ABC):
    """Base class for adapters that turn subgraph data into LP APRs"""

    def __init__(self, chain_id: int, client: SubgraphClient, url: Optional[str]):
        self.chain_id = chain_id
        self.client = client
        self.url = url

    @abstractmethod
    def get_aprs(self, farms: Sequence[FarmConfig], now: Optional[datetime] = None) -> AprMap:
        """
        Compute APRs for a set of farms.

        Args:
            farms: Farms handled by this adapter
            now: Reference time for historical lookups (defaults to current UTC time)

        Returns:
            Dict mapping LP address -> APR percentage (rounded Decimal)
        """
        pass
