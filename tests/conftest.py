import json
from typing import Any, List

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = ""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; replays queued responses in order."""

    def __init__(self):
        self.headers = {}
        self.requests: List[dict] = []
        self._responses: List[Any] = []

    def queue(self, status_code: int = 200, body: Any = None, text: str = None):
        if text is None:
            text = json.dumps(body)
        self._responses.append(FakeResponse(status_code, text))

    def queue_result(self, result: Any):
        self.queue(body={"jsonrpc": "2.0", "id": "sanctum-integration", "result": result})

    def push_result(self, result: Any):
        """Put a result ahead of everything already queued."""
        self._responses.insert(
            0, FakeResponse(200, json.dumps({"jsonrpc": "2.0", "id": "sanctum-integration", "result": result}))
        )

    def queue_error(self, code: int, message: str):
        self.queue(body={"jsonrpc": "2.0", "id": "sanctum-integration", "error": {"code": code, "message": message}})

    def queue_exception(self, exc: Exception):
        self._responses.append(exc)

    def post(self, url, data=None, timeout=None, **kwargs):
        self.requests.append(
            {"url": url, "body": json.loads(data), "timeout": timeout, "headers": dict(self.headers)}
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_body(self) -> dict:
        return self.requests[-1]["body"]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
