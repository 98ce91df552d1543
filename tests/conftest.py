from __future__ import annotations

from typing import Any

import pytest
import requests
from requests import Session

from aptree_api import AptreeAddresses, AptreeClient

NODE_URL = "https://node.test/v1"
APTREE = "0xa11ce"
MONEYFI = "0xb0b"
SENDER = "0x5e4de7"

NOT_JSON = object()


class DummyResponse:
    def __init__(self, payload: Any, *, status_code: int = 200, text: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if not (200 <= self.status_code < 300):
            raise requests.HTTPError(f"status={self.status_code}")

    def json(self) -> Any:
        if self._payload is NOT_JSON:
            raise ValueError("Expecting value")
        return self._payload


class DummySession(Session):
    """Session answering from a fixed route table keyed by (method, url)."""

    def __init__(self) -> None:
        super().__init__()
        self.routes: dict[tuple[str, str], DummyResponse] = {}
        self.calls: list[tuple[str, str, Any, float | None]] = []

    def add(self, method: str, path: str, payload: Any, *, status_code: int = 200) -> None:
        url = NODE_URL if path == "/" else f"{NODE_URL}{path}"
        self.routes[(method, url)] = DummyResponse(payload, status_code=status_code)

    def request(  # type: ignore[override]
        self, method: str, url: str, json: Any = None, timeout: float | None = None, **_: Any
    ) -> DummyResponse:
        self.calls.append((method, url, json, timeout))
        response = self.routes.get((method, url))
        if response is None:
            return DummyResponse(
                {"message": f"no route for {method} {url}", "error_code": "web_framework_error"},
                status_code=404,
            )
        return response


@pytest.fixture
def session() -> DummySession:
    return DummySession()


@pytest.fixture
def addresses() -> AptreeAddresses:
    return AptreeAddresses(aptree=APTREE, moneyfi=MONEYFI)


@pytest.fixture
def client(session: DummySession, addresses: AptreeAddresses) -> AptreeClient:
    return AptreeClient(addresses, node_url=NODE_URL, request_timeout=3.0, session=session)


@pytest.fixture
def connected_client(client: AptreeClient, session: DummySession) -> AptreeClient:
    session.add("GET", "/", {"chain_id": 2, "ledger_version": "100"})
    session.add("GET", f"/accounts/{SENDER}", {"sequence_number": "7"})
    client.connect()
    session.calls.clear()
    return client
