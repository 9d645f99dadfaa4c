"""Tests for the HTTP host routes."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from filestore.core.config import settings
from filestore.core.exceptions import ComponentError, ValidationError, VerificationError
from filestore.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
    }


def test_unknown_action_returns_404(client):
    response = client.post("/actions/renameFile", json={})

    assert response.status_code == 404
    assert "uploadFile" in response.json()["detail"]


def test_action_events_are_returned(client, cfg):
    async def handler(msg, cfg, emitter):
        await emitter.emit("data", {"fileId": msg.body["fileToGet"], "apiKey": cfg["apiKey"]})

    with patch("filestore.api.routes_actions.get_handler", return_value=handler):
        response = client.post(
            "/actions/lookupFileById",
            json={"message": {"id": "msg-1", "body": {"fileToGet": "f-1"}}, "cfg": cfg},
        )

    assert response.status_code == 200
    assert response.json() == {
        "action": "lookupFileById",
        "events": [{"event": "data", "payload": {"fileId": "f-1", "apiKey": "test-api-key"}}],
    }


def test_invalid_input_returns_400(client, cfg):
    response = client.post(
        "/actions/deleteFileById",
        json={"message": {"body": {}}, "cfg": cfg},
    )

    assert response.status_code == 400
    assert "msg.body.fileToDelete is required" in response.json()["detail"]


def test_failed_action_returns_502_with_events(client, cfg):
    async def handler(msg, cfg, emitter):
        await emitter.emit("error", "boom")
        await emitter.emit("end")
        raise ComponentError("boom")

    with patch("filestore.api.routes_actions.get_handler", return_value=handler):
        response = client.post("/actions/uploadFile", json={"cfg": cfg})

    assert response.status_code == 502
    body = response.json()
    assert body["detail"] == "boom"
    assert [e["event"] for e in body["events"]] == ["error", "end"]


@pytest.mark.parametrize(
    "outcome,status_code,expected",
    [
        (True, 200, {"verified": True}),
        (False, 200, {"verified": False}),
    ],
)
def test_verify_route(client, cfg, outcome, status_code, expected):
    with patch("filestore.api.routes_actions.verify", new=AsyncMock(return_value=outcome)):
        response = client.post("/verify", json=cfg)

    assert response.status_code == status_code
    assert response.json() == expected


def test_verify_route_server_error(client, cfg):
    error = VerificationError("Filestore server error (HTTP 500) while verifying credentials, try again later")
    with patch("filestore.api.routes_actions.verify", new=AsyncMock(side_effect=error)):
        response = client.post("/verify", json=cfg)

    assert response.status_code == 503


def test_verify_route_missing_credentials(client):
    with patch(
        "filestore.api.routes_actions.verify",
        new=AsyncMock(side_effect=ValidationError("cfg.apiKey is required")),
    ):
        response = client.post("/verify", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "cfg.apiKey is required"
