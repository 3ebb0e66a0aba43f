"""Population data providers.

Only the DataUSA endpoint is implemented. ``build_client`` creates it from
the ``api`` configuration section.
"""
from __future__ import annotations
from typing import Any, Dict

from .datausa import DataUSAClient
from .datausa.client import DEFAULT_BASE_URL


def build_client(cfg: Dict[str, Any]) -> DataUSAClient:
    """Create a client from a full configuration dict.

    Args:
        cfg: Configuration dictionary (uses the ``api`` section)

    Returns:
        DataUSAClient instance
    """
    api = cfg.get('api', {})
    return DataUSAClient(
        base_url=api.get('base_url', DEFAULT_BASE_URL),
        timeout=api.get('timeout', 30),
        retries=api.get('retries', 5),
    )


__all__ = ["DataUSAClient", "build_client"]
