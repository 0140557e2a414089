"""Shared fixtures: a fake Akamai transport, a fake signer and the FastAPI test client.

requests.Session is replaced by FakeSession for every test that asks for
`transport`, so nothing leaves the process.
"""

import json
import os

import pytest
import requests

# Keep a developer's .edgerc or .env from leaking into the tests
os.environ.setdefault("AKAMAI_HOST", "https://akab-test.purge.akamaiapis.net")
os.environ.setdefault("AKAMAI_EDGERC_PATH", "/nonexistent/.edgerc")


class FakeResponse:
    def __init__(self, status_code=201, body=None, raw=None, fail_read=False):
        self.status_code = status_code
        self._body = body
        self._raw = raw
        self._fail_read = fail_read
        self.closed = False

    def json(self):
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body

    def iter_content(self, chunk_size=1):
        if self._fail_read:
            raise requests.ConnectionError("connection reset while reading body")
        yield b"<html></html>"

    def close(self):
        self.closed = True


class FakeTransport:
    """Records outbound calls and answers them from canned responses."""

    def __init__(self):
        self.sent = []
        self.gets = []
        self.purge_response = FakeResponse(
            201,
            {
                "httpStatus": 201,
                "detail": "Request accepted",
                "estimatedSeconds": 5,
                "purgeId": "e535071c-26b2-11e7-94d7-276f2f54d938",
                "supportId": "17PY1492793544958045-219026624",
            },
        )
        self.get_responses = {}

    def _answer(self, response):
        if isinstance(response, Exception):
            raise response
        return response

    def send(self, request, timeout=None):
        self.sent.append((request, timeout))
        return self._answer(self.purge_response)

    def get(self, url, headers=None, timeout=None, stream=False):
        self.gets.append((url, dict(headers or {}), timeout))
        return self._answer(self.get_responses.get(url, FakeResponse(200)))


class FakeSession:
    def __init__(self, transport):
        self.transport = transport

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        pass

    def send(self, request, timeout=None):
        return self.transport.send(request, timeout=timeout)

    def get(self, url, headers=None, timeout=None, stream=False):
        return self.transport.get(url, headers=headers, timeout=timeout, stream=stream)


class FakeSigner:
    def __init__(self, error=None):
        self.error = error
        self.signed = []

    def sign(self, request):
        if self.error is not None:
            raise self.error
        request.headers["Authorization"] = "EG1-HMAC-SHA256 client_token=fake;signature=fake"
        self.signed.append(request)
        return request


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(requests, "Session", lambda: FakeSession(fake))
    return fake


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def settings():
    from config import Settings

    return Settings(
        akamai_host="https://akab-test.purge.akamaiapis.net",
        post_purge_enabled=True,
        post_purge_headers={"X-Cache-Warm": "1", "User-Agent": "purge-warmer"},
        post_purge_delay_seconds=0,
        request_timeout_seconds=3,
    )


@pytest.fixture
def client(settings, signer, transport):
    from fastapi.testclient import TestClient

    from config import get_settings
    from main import app
    from services.signing import get_signer

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_signer] = lambda: signer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
