from __future__ import annotations
import pytest

from popdash.services.population_service import PopulationService
from .mock_client import MockPopulationClient

NATION_RECORDS = [
    {'id': '01000US', 'year': '2013', 'population': 311536594},
    {'id': '01000US', 'year': '2014', 'population': 314107084},
    {'id': '01000US', 'year': '2015', 'population': 316515021},
    {'id': '01000US', 'year': '2016', 'population': 318558162},
    {'id': '01000US', 'year': '2017', 'population': 321004407},
    {'id': '01000US', 'year': '2018', 'population': 322903030},
    {'id': '01000US', 'year': '2019', 'population': 324697795},
]

STATE_LOCATIONS = [
    {'value': '04000US06', 'label': 'California', 'slug': 'california'},
    {'value': '04000US48', 'label': 'Texas', 'slug': 'texas'},
]


@pytest.fixture
def nation_records():
    return [dict(r) for r in NATION_RECORDS]


@pytest.fixture
def mock_client(nation_records):
    return MockPopulationClient(records=nation_records, locations=[dict(l) for l in STATE_LOCATIONS])


@pytest.fixture
def population_service(mock_client):
    return PopulationService(mock_client)


@pytest.fixture
def state_rows():
    """Small {id, name, value} dataset with a tie on value."""
    return [
        {'id': 1, 'name': 'State C', 'value': 300},
        {'id': 2, 'name': 'State A', 'value': 120},
        {'id': 3, 'name': 'State B', 'value': 5},
        {'id': 4, 'name': 'State D', 'value': 120},
    ]
