"""DataUSA population provider package.

- client.py: REST client, query-parameter rules and response parsing
"""

from .client import DataUSAClient, RateLimited, build_population_params, parse_locations, parse_population

__all__ = [
    "DataUSAClient",
    "RateLimited",
    "build_population_params",
    "parse_locations",
    "parse_population",
]
