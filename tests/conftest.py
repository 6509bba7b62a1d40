from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyattendance._transport import HttpResponse
from pyattendance.config import StoreConfig


@dataclass
class FakeContentsBackend:
    """In-memory GitHub contents API with sha-based optimistic concurrency."""

    files: dict[str, tuple[dict[str, Any], str]] = field(default_factory=dict)
    requests: list[tuple[str, str, dict[str, Any] | None]] = field(default_factory=list)
    puts: list[dict[str, Any]] = field(default_factory=list)
    get_status: int | None = None
    put_status: int | None = None
    raw_get_body: Any = None
    concurrent_writes: int = 0
    _revision: int = 0

    def _next_sha(self) -> str:
        self._revision += 1
        return f"sha-{self._revision}"

    def seed(self, path: str, document: dict[str, Any]) -> str:
        sha = self._next_sha()
        self.files[path] = (document, sha)
        return sha

    def document(self, path: str) -> dict[str, Any] | None:
        entry = self.files.get(path)
        return entry[0] if entry else None

    def sha(self, path: str) -> str | None:
        entry = self.files.get(path)
        return entry[1] if entry else None

    @property
    def request_count(self) -> int:
        return len(self.requests)

    def _get(self, path: str) -> HttpResponse:
        if self.get_status is not None:
            return HttpResponse(status=self.get_status, body={"message": "error"})
        if self.raw_get_body is not None:
            return HttpResponse(status=200, body=self.raw_get_body)
        if path not in self.files:
            return HttpResponse(status=404, body={"message": "Not Found"})
        document, sha = self.files[path]
        encoded = base64.encodebytes(json.dumps(document).encode("utf-8")).decode("ascii")
        return HttpResponse(
            status=200,
            body={"name": path, "path": path, "sha": sha, "size": 1, "encoding": "base64", "content": encoded},
        )

    def _put(self, path: str, body: dict[str, Any]) -> HttpResponse:
        self.puts.append(body)
        if self.put_status is not None:
            return HttpResponse(status=self.put_status, body={"message": "error"})
        if self.concurrent_writes > 0 and path in self.files:
            # another writer commits between our read and our write
            self.concurrent_writes -= 1
            document, _ = self.files[path]
            self.files[path] = ({**document, "concurrent": self._revision}, self._next_sha())

        current = self.files.get(path)
        sha = body.get("sha")
        if current is not None and sha is None:
            return HttpResponse(status=422, body={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'})
        if current is not None and sha != current[1]:
            return HttpResponse(status=409, body={"message": f"{path} does not match {sha}"})
        if current is None and sha is not None:
            return HttpResponse(status=409, body={"message": f"{path} does not match {sha}"})

        document = json.loads(base64.b64decode(body["content"]).decode("utf-8"))
        new_sha = self._next_sha()
        self.files[path] = (document, new_sha)
        return HttpResponse(
            status=201 if current is None else 200,
            body={"content": {"path": path, "sha": new_sha}, "commit": {"sha": f"commit-{self._revision}"}},
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> HttpResponse:
        self.requests.append((method, url, dict(params) if params else None))
        path = url.split("/contents/", 1)[1]
        if method == "GET":
            return self._get(path)
        if method == "PUT":
            assert json_body is not None
            return self._put(path, dict(json_body))
        raise AssertionError(f"Unexpected method: {method}")


@pytest.fixture
def config() -> StoreConfig:
    return StoreConfig(token="ghp-test-token", repository="octo/records")


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeContentsBackend:
    fake = FakeContentsBackend()

    async def fake_request(_self: Any, method: str, url: str, **kwargs: Any) -> HttpResponse:
        return await fake.request(method, url, **kwargs)

    monkeypatch.setattr("pyattendance._transport.GitHubTransport.request", fake_request)
    return fake
