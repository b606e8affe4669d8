from __future__ import annotations

import json

import httpx
import pytest

from payloads import BASE_URL
from processos_search.api import ProcessesApi
from processos_search.client import ApiClient
from processos_search.notify import RecordingNotifier


class FakeServer:
    """Routes requests to canned responses and records what was asked."""

    def __init__(self) -> None:
        self.routes: dict[str, list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, body=None, status: int = 200) -> None:
        content = json.dumps(body).encode() if body is not None else b""
        self.routes.setdefault(path, []).append(
            httpx.Response(status, content=content, headers={"Content-Type": "application/json"})
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        queue = self.routes.get(path)
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {path}"})
        return queue.pop(0) if len(queue) > 1 else queue[0]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def api(server: FakeServer):
    client = ApiClient(BASE_URL, transport=httpx.MockTransport(server.handler))
    yield ProcessesApi(client)
    client.close()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
