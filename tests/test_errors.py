"""Tests for how remote and transport failures reach the caller."""
import logging

import httpx
import pytest

from conftest import API_KEY, BASE_URL
from opsgenie_alerts.config import Settings
from opsgenie_alerts.services.client import AlertClient
from opsgenie_alerts.utils.errors import AlertAPIError, AlertValidationError, OpsgenieError


def test_remote_business_error_is_surfaced_verbatim(client, transport):
    transport.respond(400, {"code": 11, "error": "Alert with alias [db-latency] already exists"})

    with pytest.raises(AlertAPIError) as exc_info:
        client.create_alert("down", alias="db-latency")

    error = exc_info.value
    assert error.status_code == 400
    assert error.message == "Alert with alias [db-latency] already exists"
    assert error.payload == {"code": 11, "error": "Alert with alias [db-latency] already exists"}
    assert error.method == "POST"
    assert error.url == f"{BASE_URL}alert"
    assert isinstance(error, OpsgenieError)


def test_non_json_error_keeps_raw_body(client, transport):
    transport.respond(502, raw=b"Bad Gateway")

    with pytest.raises(AlertAPIError) as exc_info:
        client.get_alert(id="abc")

    assert exc_info.value.status_code == 502
    assert exc_info.value.payload == "Bad Gateway"
    assert str(exc_info.value) == "502: Bad Gateway"


def test_malformed_success_body_raises(client, transport):
    transport.respond(200, raw=b"<html>not json</html>")

    with pytest.raises(AlertAPIError) as exc_info:
        client.list_alerts()

    assert exc_info.value.message == "Malformed JSON in Opsgenie response"
    assert exc_info.value.payload == "<html>not json</html>"


def test_empty_success_body_returns_empty_mapping(client, transport):
    transport.respond(200, raw=b"")

    assert client.close_alert(id="abc") == {}


def test_transport_errors_propagate_unchanged():
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    alert_client = AlertClient(
        API_KEY,
        base_url=BASE_URL,
        transport=httpx.MockTransport(_fail),
        settings=Settings(_env_file=None),
    )

    with pytest.raises(httpx.ConnectError):
        alert_client.create_alert("down")


def test_requests_are_not_retried(client, transport):
    transport.respond(503, {"error": "unavailable"})

    with pytest.raises(AlertAPIError):
        client.get_alert(id="abc")

    assert len(transport.requests) == 1


def test_missing_api_key_is_a_validation_error(transport):
    alert_client = AlertClient(base_url=BASE_URL, transport=transport, settings=Settings(_env_file=None))

    with pytest.raises(AlertValidationError):
        alert_client.create_alert("down")

    assert transport.requests == []


def test_validation_error_is_a_value_error(client):
    with pytest.raises(ValueError):
        client.close_alert()


def test_failed_request_is_logged_without_the_key(client, transport, caplog):
    transport.respond(404, {"code": 5, "error": "Alert not found"})
    caplog.set_level(logging.DEBUG, logger="opsgenie_alerts.services.client")

    with pytest.raises(AlertAPIError):
        client.get_alert(id="missing")

    sent = [record for record in caplog.records if record.getMessage() == "Sending Opsgenie request"]
    failed = [record for record in caplog.records if record.getMessage() == "Opsgenie request failed"]
    assert sent and failed
    assert sent[0].params["apiKey"] != API_KEY
    assert sent[0].params["apiKey"].endswith(API_KEY[-4:])
    assert failed[0].status_code == 404
    assert failed[0].levelno == logging.WARNING
    assert API_KEY not in caplog.text
