import json

import pytest

from route_planner import config
from route_planner import main as cli
from route_planner.exceptions import MeasurementFailure


@pytest.fixture
def patched_client(monkeypatch, fake_client):
    monkeypatch.setattr(cli, "ORSClient", lambda: fake_client)
    return fake_client


def test_add_locations_plans_route(patched_client, tmp_path, capsys):
    store = tmp_path / "locations.json"
    output = tmp_path / "map.html"

    cli.main(["--add", "depot", "--add", "far", "--add", "near",
              "--store", str(store), "--output", str(output)])

    assert output.exists()
    assert len(json.loads(store.read_text())["locations"]) == 3
    assert "Route Analysis" in capsys.readouterr().out


def test_haversine_oracle_skips_ors_distances(patched_client, tmp_path):
    cli.main(["--add", "depot", "--add", "far", "--oracle", "haversine",
              "--store", str(tmp_path / "s.json"), "--output", str(tmp_path / "m.html")])

    assert patched_client.measure_calls == 0


def test_clear_removes_store(patched_client, tmp_path):
    store = tmp_path / "locations.json"
    store.write_text(json.dumps({"locations": [{"lat": 0, "lng": 0}]}))

    cli.main(["--clear", "--store", str(store)])

    assert not store.exists()


def test_unknown_location_exits_with_error(patched_client, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--add", "atlantis", "--store", str(tmp_path / "s.json")])
    assert excinfo.value.code == 1


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(config, "ORS_API_KEY", None)
    monkeypatch.setattr(config, "ORS_API_URL", "https://api.openrouteservice.org")


def test_clear_works_without_api_key(no_api_key, tmp_path):
    store = tmp_path / "locations.json"
    store.write_text(json.dumps({"locations": [{"lat": 0, "lng": 0}]}))

    cli.main(["--clear", "--store", str(store)])

    assert not store.exists()


def test_haversine_csv_plan_without_api_key(no_api_key, tmp_path):
    data = tmp_path / "stops.csv"
    data.write_text("latitude,longitude\n0.0,0.0\n0.0,0.3\n0.0,0.1\n")
    output = tmp_path / "map.html"

    cli.main(["--data", str(data), "--oracle", "haversine",
              "--store", str(tmp_path / "s.json"), "--output", str(output)])

    assert "Start" in output.read_text()


def test_failed_analysis_does_not_fail_the_plan(patched_client, monkeypatch, tmp_path):
    class FailingValidator:
        def __init__(self, *args):
            pass

        def compare_methods(self):
            raise MeasurementFailure("Error calculating distances")

    monkeypatch.setattr(cli, "RouteValidator", FailingValidator)
    output = tmp_path / "map.html"

    cli.main(["--add", "depot", "--add", "far", "--store", str(tmp_path / "s.json"), "--output", str(output)])

    assert output.exists()


def test_unwritable_output_exits_with_error(patched_client, tmp_path):
    output = tmp_path / "missing" / "map.html"

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--add", "depot", "--add", "far", "--store", str(tmp_path / "s.json"), "--output", str(output)])
    assert excinfo.value.code == 1
