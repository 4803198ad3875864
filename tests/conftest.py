"""
Content Page Editor - Pytest Configuration & Shared Fixtures

Provides reusable fixtures for:
- An in-memory fake of the remote content API (served via httpx.MockTransport)
- A ContentService and ContentStore wired to that fake
- A FastAPI TestClient for the full application
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from src.content_client import ContentService
from src.main import create_app
from src.services.content_store import ContentStore

BASE_URL = "http://content-api.test"

SAMPLE_CONTENTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "はじめに",
        "body": "このページではサービスの概要を説明します。",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    },
    {
        "id": 2,
        "title": "使い方",
        "body": "サイドバーからページを選んで編集してください。",
        "createdAt": "2024-01-02T00:00:00.000Z",
        "updatedAt": "2024-01-02T00:00:00.000Z",
    },
]

_ITEM_PATH = re.compile(r"^/content/(\d+)$")


# ---------------------------------------------------------------------------
# Fake content API
# ---------------------------------------------------------------------------


class FakeContentAPI:
    """
    Minimal stand-in for the remote content API.

    Records every request it receives.  ``fail(method, path, status)``
    makes the matching request answer with *status*; ``disconnect()``
    makes every request raise a connection error.
    """

    def __init__(self, contents: Optional[List[Dict[str, Any]]] = None):
        self.records: Dict[int, Dict[str, Any]] = {
            c["id"]: dict(c) for c in (contents or [])
        }
        self.next_id = max(self.records, default=0) + 1
        self.requests: List[httpx.Request] = []
        self._failures: Dict[Tuple[str, str], int] = {}
        self._disconnected = False

    # -- controls -----------------------------------------------------------
    def fail(self, method: str, path: str, status: int) -> None:
        self._failures[(method, path)] = status

    def disconnect(self) -> None:
        self._disconnected = True

    def recover(self) -> None:
        self._failures.clear()
        self._disconnected = False

    def calls(self, method: str, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # -- request handling ---------------------------------------------------
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self._disconnected:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path
        status = self._failures.get((request.method, path))
        if status is not None:
            return httpx.Response(status, json={"message": "boom"})

        if path == "/content":
            if request.method == "GET":
                return httpx.Response(200, json=list(self.records.values()))
            if request.method == "POST":
                data = json.loads(request.content or b"{}")
                record = {"id": self.next_id, **data}
                self.records[self.next_id] = record
                self.next_id += 1
                return httpx.Response(201, json=record)

        match = _ITEM_PATH.match(path)
        if match:
            content_id = int(match.group(1))
            if content_id not in self.records:
                return httpx.Response(404, json={"message": "Not Found"})
            if request.method == "GET":
                return httpx.Response(200, json=self.records[content_id])
            if request.method == "PUT":
                self.records[content_id].update(json.loads(request.content or b"{}"))
                return httpx.Response(200, json=self.records[content_id])
            if request.method == "DELETE":
                del self.records[content_id]
                return httpx.Response(204)

        return httpx.Response(405)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_api() -> FakeContentAPI:
    """A fake content API seeded with two pages."""
    return FakeContentAPI(SAMPLE_CONTENTS)


@pytest.fixture
def empty_api() -> FakeContentAPI:
    """A fake content API with no pages."""
    return FakeContentAPI()


@pytest.fixture
def service(fake_api: FakeContentAPI) -> ContentService:
    return ContentService(BASE_URL, transport=fake_api.transport)


@pytest.fixture
def store(service: ContentService) -> ContentStore:
    return ContentStore(service)


@pytest.fixture
def client(service: ContentService):
    """TestClient for the full app, talking to the seeded fake API."""
    with TestClient(create_app(service)) as test_client:
        yield test_client


@pytest.fixture
def empty_client(empty_api: FakeContentAPI):
    service = ContentService(BASE_URL, transport=empty_api.transport)
    with TestClient(create_app(service)) as test_client:
        yield test_client
