import json

import pytest
from typer.testing import CliRunner

from worldevents.cli import app
from worldevents.cli import events as events_cli
from worldevents.config import load_sources, save_sources
from worldevents.pipeline import EventAggregator


runner = CliRunner()


@pytest.fixture
def config_dir(tmp_path, monkeypatch, europe_source, asia_source):
    monkeypatch.setenv("WORLDEVENTS_CONFIG", str(tmp_path / "config.yaml"))
    save_sources([europe_source, asia_source], tmp_path / "sources.yaml")
    return tmp_path


def test_init_writes_config_and_sources(tmp_path):
    result = runner.invoke(app, ["init", "--config-dir", str(tmp_path), "--port", "9000"])

    assert result.exit_code == 0
    assert (tmp_path / "config.yaml").exists()
    assert len(load_sources(tmp_path / "sources.yaml")) > 0


def test_init_refuses_to_overwrite(tmp_path):
    runner.invoke(app, ["init", "--config-dir", str(tmp_path)])

    result = runner.invoke(app, ["init", "--config-dir", str(tmp_path)])

    assert result.exit_code == 1


def test_sources_list(config_dir):
    result = runner.invoke(app, ["sources", "list", "--region", "asia"])

    assert result.exit_code == 0
    assert "s2" in result.stdout
    assert "s1" not in result.stdout


def test_sources_test_unknown_id(config_dir):
    result = runner.invoke(app, ["sources", "test", "nope"])

    assert result.exit_code == 1


def test_events_json_output(config_dir, monkeypatch, scenario_fetcher):
    async def fake_run_aggregation(config, query, region, limit):
        aggregator = EventAggregator(scenario_fetcher, config.sources)
        return await aggregator.aggregate(query=query, region=region, limit=limit)

    monkeypatch.setattr(events_cli, "run_aggregation", fake_run_aggregation)

    result = runner.invoke(app, ["events", "--region", "asia", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [e["title"] for e in payload["events"]] == ["Asia Trade Talks"]
    assert payload["sources"] == [{"id": "s2", "name": "S2", "homepage": "https://s2.example.com"}]


def test_events_with_empty_registry(tmp_path, monkeypatch):
    monkeypatch.setenv("WORLDEVENTS_CONFIG", str(tmp_path / "config.yaml"))
    save_sources([], tmp_path / "sources.yaml")

    result = runner.invoke(app, ["events"])

    assert result.exit_code == 1
