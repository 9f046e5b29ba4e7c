import json
from datetime import date

import httpx
import pytest
from loguru import logger
from typer.testing import CliRunner

import cli.cli as planner_cli
from planner.config.settings import settings
from planner.integrations.api.client import PlannerAPIClient
from planner.storage.trip_storage import TRIP_STORAGE_KEY

runner = CliRunner()

TRIP_JSON = {
    "id": "t1",
    "destination": "Salvador",
    "starts_at": "2024-06-03T00:00:00",
    "ends_at": "2024-06-10T00:00:00",
    "is_confirmed": True,
}


@pytest.fixture(autouse=True)
def pt_locale(monkeypatch, storage_file):
    monkeypatch.setattr(settings, "locale", "pt-BR")
    monkeypatch.setattr(settings, "log_level", "ERROR")
    monkeypatch.setattr(settings, "log_file", None)
    monkeypatch.setattr(planner_cli, "_today", lambda: date(2024, 6, 1))


@pytest.fixture
def fake_api(monkeypatch):
    """Point the CLI at a MockTransport-backed client and record requests."""
    requests: list[httpx.Request] = []
    routes = {
        ("GET", "/trips/t1"): httpx.Response(200, json={"trip": TRIP_JSON}),
        ("POST", "/trips"): httpx.Response(201, json={"tripId": "t1"}),
        ("PUT", "/trips/t1"): httpx.Response(204),
        ("POST", "/trips/t1/activities"): httpx.Response(201, json={"activityId": "a1"}),
        ("GET", "/trips/t1/activities"): httpx.Response(200, json={"activities": [
            {"date": "2024-06-03", "activities": [{"id": "a1", "occurs_at": "2024-06-03T14:00:00", "title": "Museu"}]},
        ]}),
        ("GET", "/trips/t1/links"): httpx.Response(200, json={"links": []}),
        ("GET", "/trips/t1/participants"): httpx.Response(200, json={"participants": []}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return routes.get((request.method, request.url.path), httpx.Response(404, json={"message": "Not found"}))

    monkeypatch.setattr(
        planner_cli,
        "PlannerAPIClient",
        lambda: PlannerAPIClient(base_url="http://planner.test", transport=httpx.MockTransport(handler)),
    )
    return requests


def test_pick_replays_taps():
    result = runner.invoke(planner_cli.app, ["pick", "2024-06-01", "2024-06-01", "2024-06-10", "2024-06-03"])

    assert result.exit_code == 0
    assert "State: complete" in result.output
    assert "Label: 3 de jun até 10 de jun" in result.output
    assert "2024-06-07" in result.output


def test_pick_english_locale():
    result = runner.invoke(planner_cli.app, ["pick", "--locale", "en", "2024-06-10", "2024-06-03"])

    assert result.exit_code == 0
    assert "Label: 3 Jun to 10 Jun" in result.output


def test_pick_rejects_malformed_day():
    result = runner.invoke(planner_cli.app, ["pick", "2024-13-01"])
    assert result.exit_code == 2


def test_create_trip_stores_current_trip(fake_api, storage_file):
    result = runner.invoke(
        planner_cli.app,
        ["trip", "create", "Salvador", "2024-06-10", "2024-06-03", "--guest", "Ana@mail.com"],
    )

    assert result.exit_code == 0, result.output
    body = json.loads(fake_api[-1].content)
    assert body["starts_at"] == "2024-06-03T00:00:00"
    assert body["ends_at"] == "2024-06-10T00:00:00"
    assert body["emails_to_invite"] == ["ana@mail.com"]
    assert json.loads(storage_file.read_text()) == {TRIP_STORAGE_KEY: "t1"}


def test_create_trip_with_short_destination_fails(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "create", "Rio", "2024-06-03", "2024-06-10"])

    assert result.exit_code == 1
    assert "O destino deve ter ao menos 4 caracteres" in result.output
    assert fake_api == []


def test_show_uses_stored_trip(fake_api):
    runner.invoke(planner_cli.app, ["trip", "use", "t1"])
    result = runner.invoke(planner_cli.app, ["trip", "show"])

    assert result.exit_code == 0, result.output
    assert "Salvador, 3 à 10 de jun" in result.output
    assert "Nenhum link adicionado." in result.output


def test_show_without_trip_fails():
    result = runner.invoke(planner_cli.app, ["trip", "show"])
    assert result.exit_code == 1


def test_activities_listing(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "activities", "t1"])

    assert result.exit_code == 0, result.output
    assert "Dia 3" in result.output
    assert "14:00h Museu" in result.output


def test_add_activity_outside_trip_is_rejected(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "add-activity", "Museu", "--day", "2024-06-20", "--hour", "14", "--trip-id", "t1"])

    assert result.exit_code == 1
    assert all(r.method == "GET" for r in fake_api)


def test_add_activity(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "add-activity", "Museu", "--day", "2024-06-04", "--hour", "14", "--trip-id", "t1"])

    assert result.exit_code == 0, result.output
    assert json.loads(fake_api[-1].content) == {"occurs_at": "2024-06-04T14:00:00", "title": "Museu"}
    assert "(4 de junho, 14:00h)" in result.output


def test_forget_trip(storage_file):
    runner.invoke(planner_cli.app, ["trip", "use", "t1"])
    result = runner.invoke(planner_cli.app, ["trip", "forget"])

    assert result.exit_code == 0
    assert json.loads(storage_file.read_text()) == {}


def test_add_link_rejects_invalid_url(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "add-link", "Reserva", "airbnb", "--trip-id", "t1"])

    assert result.exit_code == 1
    assert "Link inválido." in result.output
    assert fake_api == []


def test_create_trip_rejects_past_start(fake_api, storage_file):
    result = runner.invoke(planner_cli.app, ["trip", "create", "Paris", "2024-05-20", "2024-06-05"])

    assert result.exit_code == 1
    assert "Selecione datas a partir de hoje." in result.output
    assert fake_api == []
    assert not storage_file.exists()


def test_update_trip(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "update", "Recife", "2024-06-12", "2024-06-01", "--trip-id", "t1"])

    assert result.exit_code == 0, result.output
    request = fake_api[-1]
    assert (request.method, request.url.path) == ("PUT", "/trips/t1")
    assert json.loads(request.content) == {
        "destination": "Recife",
        "starts_at": "2024-06-01T00:00:00",
        "ends_at": "2024-06-12T00:00:00",
    }


def test_update_trip_rejects_past_end(fake_api):
    result = runner.invoke(planner_cli.app, ["trip", "update", "Recife", "2024-06-12", "2024-05-31", "--trip-id", "t1"])

    assert result.exit_code == 1
    assert "Atualizar viagem:" in result.output
    assert "Selecione datas a partir de hoje." in result.output
    assert fake_api == []


def test_debug_logs_to_configured_file(tmp_path, monkeypatch):
    log_file = tmp_path / "logs" / "planner.log"
    monkeypatch.setattr(settings, "log_file", str(log_file))

    result = runner.invoke(planner_cli.app, ["--debug", "pick", "2024-06-01"])
    logger.remove()

    assert result.exit_code == 0
    assert "[PICKER] Tapped 2024-06-01" in log_file.read_text(encoding="utf-8")
