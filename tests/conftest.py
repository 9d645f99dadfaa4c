"""Pytest configuration and shared fixtures."""

import json

import httpx
import pytest

from filestore.emitter import CollectingEmitter
from filestore.models.upload import UploadTarget

BASE_URL = "https://filestore.test"


class FakeFilestore:
    """In-memory stand-in for the Filestore API behind ``httpx.MockTransport``.

    Records every request, answers metadata requests with a ``fileId`` and
    accepts chunks. ``fail_on`` maps a request number (1-based, counting
    every request) to the status code to answer with.
    """

    def __init__(self, new_file_id: str = "new-file-id", fail_on: dict | None = None):
        self.new_file_id = new_file_id
        self.fail_on = fail_on or {}
        self.requests: list[httpx.Request] = []
        self.received = bytearray()
        self.attachments: dict[str, bytes] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url in self.attachments:
            return httpx.Response(200, content=self.attachments[url])

        status = self.fail_on.get(len(self.requests))
        if status:
            return httpx.Response(status, json={"error": "rejected"})

        if request.headers.get("content-type") == "application/octet-stream":
            self.received.extend(request.content)
            return httpx.Response(200, json={"status": "partial"})

        if request.method == "POST":
            return httpx.Response(201, json={"fileId": self.new_file_id})
        if request.method == "PATCH":
            return httpx.Response(200, json={"fileId": url.rsplit("/", 1)[-1]})
        return httpx.Response(200, json={"method": request.method, "url": url})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def chunk_requests(self) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.headers.get("content-type") == "application/octet-stream"
        ]

    @staticmethod
    def json_body(request: httpx.Request):
        return json.loads(request.content)


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def cfg():
    """Valid action configuration."""
    return {
        "apiKey": "test-api-key",
        "tenantId": "test-tenant",
        "resourceServerUrl": BASE_URL,
    }


@pytest.fixture
def emitter():
    return CollectingEmitter()


@pytest.fixture
def fake_filestore():
    return FakeFilestore()


@pytest.fixture
def create_target():
    return UploadTarget(
        resource_server_url=BASE_URL,
        api_key="test-api-key",
        tenant_id="test-tenant",
    )


@pytest.fixture
def update_target():
    return UploadTarget(
        resource_server_url=BASE_URL,
        api_key="test-api-key",
        tenant_id="test-tenant",
        file_id="abc",
    )
