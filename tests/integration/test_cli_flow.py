import json

import httpx
import pytest
from typer.testing import CliRunner

import geocli.main
from conftest import fake_location, json_response
from geocli.main import app, create_dependencies


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def fake_endpoint(monkeypatch, requests_seen):
    """Routes the app's HTTP traffic to an in-memory endpoint and disables backoff sleeps.

    Addresses containing 'Atlantis' never resolve; everything else is found.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        address = request.url.params["address"]
        if "Atlantis" in address:
            return json_response({"status": "ZERO_RESULTS", "results": []})
        return json_response({"status": "OK", "results": [{"geometry": {"location": fake_location(address)}}]})

    def patched_create_dependencies(url, api_key=None, **kwargs):
        return create_dependencies(url, api_key, transport=httpx.MockTransport(handler), sleep=lambda seconds: None)

    monkeypatch.setattr(geocli.main, "create_dependencies", patched_create_dependencies)
    return handler


def test_geocode_prints_ordered_json(runner, fake_endpoint, requests_seen, address_file):
    result = runner.invoke(app, ["geocode", str(address_file), "--api-key", "abc", "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {"address": "1600 Amphitheatre Parkway, Mountain View, CA", "status": "FOUND",
         "location": fake_location("1600 Amphitheatre Parkway, Mountain View, CA")},
        {"address": "Nowhere Street 0, Atlantis", "status": "NOT_FOUND"},
        {"address": "10 Downing Street, London", "status": "FOUND",
         "location": fake_location("10 Downing Street, London")},
    ]
    # two found addresses take one request each, the missing one uses every attempt
    assert len(requests_seen) == 2 + 5
    assert all(request.url.params["key"] == "abc" for request in requests_seen)


def test_geocode_uses_configured_url(runner, fake_endpoint, requests_seen, address_file, monkeypatch):
    monkeypatch.setenv("GEOCLI_GEOCODING_URL", "https://configured.example/geocode/json")

    result = runner.invoke(app, ["geocode", str(address_file), "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    assert {request.url.host for request in requests_seen} == {"configured.example"}
    assert all("key" not in request.url.params for request in requests_seen)


def test_geocode_empty_file_prints_empty_array(runner, fake_endpoint, requests_seen, tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n", encoding="utf-8")

    result = runner.invoke(app, ["geocode", str(empty), "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == []
    assert requests_seen == []


def test_geocode_missing_file_exits_with_error(runner, fake_endpoint, tmp_path):
    result = runner.invoke(app, ["geocode", str(tmp_path / "nope.txt"), "--log-level", "CRITICAL"])

    assert result.exit_code == 1
    assert "Could not read addresses" in result.output


def test_geocode_malformed_url_exits_before_any_work(runner, fake_endpoint, requests_seen, address_file):
    result = runner.invoke(app, ["geocode", str(address_file), "--url", "not a url", "--log-level", "CRITICAL"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert requests_seen == []
