"""Pytest fixtures for test configuration.

Global test safety measures:
 - Block real HTTP: requests.get raises unless a test monkeypatches it
 - Run Qt offscreen so GUI tests work without a display
"""
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import requests


os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


@pytest.fixture(autouse=True)
def _no_network(monkeypatch):
    def _blocked(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")
    monkeypatch.setattr(requests, 'get', _blocked)


from .mocks.fixtures import *  # noqa: F401,F403,E402


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Provide a minimal test configuration as a dict.

    Tests pass cfg to CLI/modules directly rather than setting environment
    variables. Export paths are isolated to tmp_path.
    """
    return {
        'log_level': 'DEBUG',
        'api': {
            'base_url': 'https://example.test/api/data',
            'timeout': 5,
            'retries': 1,
        },
        'table': {
            'page_size': 3,
            'empty_state_message': 'No data available',
            'search_placeholder': 'Search...',
        },
        'filters': {
            'default_state': 'Nation',
            'default_year': 'latest',
        },
        'export': {'directory': str(tmp_path / 'export')},
    }
