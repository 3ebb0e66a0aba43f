"""Population REST API client.

Handles all HTTP requests to the population statistics endpoint and shapes
the responses into plain dicts:

- locations:  {"value", "label", "slug"}
- population: {"id", "year", "population"}
"""

from __future__ import annotations
import requests
from typing import Any, Dict, List
import time
import logging
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_random_exponential

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://datausa.io/api/data"
NATION = "Nation"
LATEST = "latest"


class RateLimited(requests.RequestException):
    """HTTP 429 from the API; retried after the advertised delay."""


def build_population_params(geography: str, year: str) -> Dict[str, Any]:
    """Build query parameters for a population request.

    ``Geography`` is omitted for the nation-level query and ``year`` is
    omitted for the latest year.

    Args:
        geography: "Nation" or a state geography ID
        year: Year as string, or "latest"

    Returns:
        Query parameter dict
    """
    params: Dict[str, Any] = {}
    if geography != NATION:
        params["Geography"] = geography
    params["drilldowns"] = NATION if geography == NATION else "State"
    params["measure"] = "Population"
    if str(year) != LATEST:
        params["year"] = str(year)
    return params


def parse_locations(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {
            "value": item.get("ID State"),
            "label": item.get("State"),
            "slug": item.get("Slug State"),
        }
        for item in (payload or {}).get("data") or []
    ]


def parse_population(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    records = []
    for item in (payload or {}).get("data") or []:
        record_id = item.get("ID Nation")
        if record_id is None:
            record_id = item.get("Geography")
        records.append({
            "id": record_id,
            "population": item.get("Population"),
            "year": item.get("Year"),
        })
    return records


class DataUSAClient:
    """Client for the population statistics endpoint.

    Example:
        client = DataUSAClient()
        states = client.fetch_locations()
        records = client.fetch_population("04000US06", "2020")
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 30, retries: int = 5):
        """Initialize client.

        Args:
            base_url: Endpoint URL (all queries go to this single URL)
            timeout: Request timeout in seconds
            retries: Attempts per request before giving up
        """
        self.base_url = base_url
        self.timeout = timeout
        self.retries = max(1, int(retries))

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Execute GET request with retry logic and rate limit handling.

        Args:
            params: Query parameters

        Returns:
            JSON response as dict

        Raises:
            requests.RequestException: After the last failed attempt
        """
        fetch = retry(
            stop=stop_after_attempt(self.retries),
            wait=wait_random_exponential(multiplier=1, max=30),
            retry=retry_if_exception_type((RateLimited, requests.ConnectionError, requests.Timeout)),
            reraise=True,
        )(self._get_once)
        return fetch(params)

    def _get_once(self, params: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"GET {self.base_url} params={params}")
        r = requests.get(self.base_url, params=params, timeout=self.timeout)
        if r.status_code == 429:
            ra = int(r.headers.get("Retry-After", "1"))
            time.sleep(ra)
            raise RateLimited("rate limit retry")
        r.raise_for_status()
        return r.json()

    def fetch_locations(self) -> List[Dict[str, Any]]:
        """Fetch the list of states as {value, label, slug} options."""
        payload = self._get({"drilldowns": "State", "measures": "Population", "year": LATEST})
        locations = parse_locations(payload)
        logger.info(f"Fetched {len(locations)} locations")
        return locations

    def fetch_population(self, geography: str = NATION, year: str = LATEST) -> List[Dict[str, Any]]:
        """Fetch population records for a geography and year.

        Args:
            geography: "Nation" or a state geography ID
            year: Year or "latest"

        Returns:
            List of {"id", "year", "population"} dicts
        """
        payload = self._get(build_population_params(geography, year))
        records = parse_population(payload)
        logger.info(f"Fetched {len(records)} population records (geography={geography}, year={year})")
        return records


__all__ = [
    "DataUSAClient",
    "RateLimited",
    "build_population_params",
    "parse_locations",
    "parse_population",
    "NATION",
    "LATEST",
]
