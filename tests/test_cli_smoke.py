import csv

import pytest
import requests
from click.testing import CliRunner

from popdash.cli import cli
from tests.mocks.mock_client import MockPopulationClient


@pytest.fixture
def use_service(monkeypatch, population_service):
    monkeypatch.setattr('popdash.cli.table_cmds.get_population_service', lambda cfg: population_service)
    return population_service


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ['version'], obj={})
    assert result.exit_code == 0
    assert 'popdash 0.1.0' in result.output


def test_cli_config_section(test_config):
    result = CliRunner().invoke(cli, ['config', '--section', 'table'], obj=test_config)
    assert result.exit_code == 0
    assert '"page_size": 3' in result.output
    assert 'api' not in result.output


def test_cli_config_unknown_section(test_config):
    result = CliRunner().invoke(cli, ['config', '-s', 'nope'], obj=test_config)
    assert result.exit_code != 0
    assert "Unknown section 'nope'" in result.output


def test_cli_locations(test_config, use_service):
    result = CliRunner().invoke(cli, ['locations'], obj=test_config)
    assert result.exit_code == 0, result.output
    assert 'United States' in result.output
    assert '04000US48' in result.output
    assert '3 locations' in result.output


def test_cli_table_sorted_first_page(test_config, use_service, mock_client):
    result = CliRunner().invoke(cli, ['table', '--sort', 'value:desc'], obj=test_config)
    assert result.exit_code == 0, result.output
    assert mock_client.calls == [('population', 'Nation', 'latest')]
    assert 'Value ▼' in result.output
    assert '324,697,795' in result.output
    assert '311,536,594' not in result.output
    assert '[1] 2 3' in result.output
    assert 'Showing 1 to 3 of 7 results' in result.output


def test_cli_table_search_and_page(test_config, use_service):
    result = CliRunner().invoke(cli, ['table', '-q', '201', '-p', '3'], obj=test_config)
    assert result.exit_code == 0, result.output
    assert 'Showing 7 to 7 of 7 results' in result.output


def test_cli_table_no_matches(test_config, use_service):
    result = CliRunner().invoke(cli, ['table', '-q', 'zzz'], obj=test_config)
    assert result.exit_code == 0
    assert 'No data available' in result.output


def test_cli_table_bad_sort(test_config, use_service):
    result = CliRunner().invoke(cli, ['table', '--sort', 'bogus'], obj=test_config)
    assert result.exit_code == 2
    assert "Unknown column 'bogus'" in result.output


def test_cli_table_fetch_error(test_config, monkeypatch):
    from popdash.services.population_service import PopulationService
    failing = PopulationService(MockPopulationClient(error=requests.ConnectionError('down')))
    monkeypatch.setattr('popdash.cli.table_cmds.get_population_service', lambda cfg: failing)
    result = CliRunner().invoke(cli, ['table'], obj=test_config)
    assert result.exit_code == 1
    assert 'Failed to fetch population data' in result.output


def test_cli_export(tmp_path, test_config, use_service):
    out = tmp_path / 'out' / 'population.csv'
    result = CliRunner().invoke(cli, ['export', str(out), '--sort', 'year:desc', '-q', '2019'], obj=test_config)
    assert result.exit_code == 0, result.output
    with out.open(newline='', encoding='utf-8') as fh:
        rows = list(csv.reader(fh))
    assert rows == [['Label', 'Year', 'Value'], ['01000US', '2019', '324697795']]


@pytest.mark.parametrize('page', ['4', '0'])
def test_cli_table_page_out_of_range(test_config, use_service, page):
    result = CliRunner().invoke(cli, ['table', '-p', page], obj=test_config)
    assert result.exit_code == 2
    assert 'Page must be between 1 and 3' in result.output
