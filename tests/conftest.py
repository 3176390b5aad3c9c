from __future__ import annotations

import json
import re
import uuid
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from src.config.env import ACCOUNT_ID_KEYS, API_TOKEN_KEYS, CUSTOMER_CODE_KEYS, StreamConfig

API_ROOT = "https://api.cloudflare.com/client/v4/accounts/acct-123/stream"


def make_response(status_code: int = 200, body: Any = None, url: str = API_ROOT) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.reason = "OK" if status_code < 400 else "Error"
    response.encoding = "utf-8"
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


def envelope(result: Any = None, errors: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {"result": result, "success": not errors, "errors": errors or [], "messages": []}


class FakeSession(requests.Session):
    """Session that records requests and answers from a handler instead of the network."""

    def __init__(self, handler: Callable[..., requests.Response]):
        super().__init__()
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": dict(self.headers), **kwargs})
        return self.handler(method, url, **kwargs)


class FakeStreamBackend:
    """In-memory stand-in for the live input endpoints."""

    def __init__(self) -> None:
        self.inputs: Dict[str, Dict[str, Any]] = {}

    def __call__(self, method, url, **kwargs):
        path = url[len(API_ROOT):]
        if method == "POST" and path == "/live_inputs":
            body = kwargs["json"]
            uid = uuid.uuid4().hex
            live_input = {
                "uid": uid,
                "meta": body["meta"],
                "recording": body["recording"],
                "preferLowLatency": body["preferLowLatency"],
                "deleteRecordingAfterDays": body["deleteRecordingAfterDays"],
                "rtmps": {"url": "rtmps://live.cloudflare.com:443/live/", "streamKey": f"key-{uid}"},
                "created": "2024-05-01T12:00:00.000Z",
                "modified": "2024-05-01T12:00:00.000Z",
                "status": None,
            }
            self.inputs[uid] = live_input
            return make_response(201, envelope(live_input), url)
        if method == "GET" and path == "/live_inputs":
            return make_response(200, envelope(list(self.inputs.values())), url)

        match = re.fullmatch(r"/live_inputs/([^/]+)(/videos)?", path)
        if match and match.group(1) in self.inputs:
            uid, videos = match.groups()
            if method == "GET":
                return make_response(200, envelope([] if videos else self.inputs[uid]), url)
            if method == "DELETE":
                del self.inputs[uid]
                return make_response(200, None, url)
        return make_response(404, envelope(None, [{"code": 10003, "message": "Live input not found"}]), url)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    # setenv before delenv so monkeypatch restores variables that load_dotenv may add
    for key in ACCOUNT_ID_KEYS + API_TOKEN_KEYS + CUSTOMER_CODE_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    yield


@pytest.fixture
def config() -> StreamConfig:
    return StreamConfig(account_id="acct-123", api_token="secret-token", customer_code="abc123")


@pytest.fixture
def backend() -> FakeStreamBackend:
    return FakeStreamBackend()
