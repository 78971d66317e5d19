"""Shared fixtures: scripted transport, client with a fixed device id, JWT builder."""

from __future__ import annotations

import time
from typing import Any, Callable, Iterator

import jwt
import pytest

from welstory import WelstoryClient, WelstoryRestaurant
from welstory.core.config import get_settings
from welstory.services.transport import MockTransport, reset_transport

DEVICE_ID = "0b6f1c2e-1111-4c4c-8a8a-123456789abc"
BASE_URL = "https://welplus.test/"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("WELSTORY_BASE_URL", "WELSTORY_TRANSPORT", "WELSTORY_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_transport()
    yield
    get_settings.cache_clear()
    reset_transport()


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def client(transport: MockTransport) -> WelstoryClient:
    return WelstoryClient(base_url=BASE_URL, device_id=DEVICE_ID, transport=transport)


@pytest.fixture
def restaurant(client: WelstoryClient) -> WelstoryRestaurant:
    return WelstoryRestaurant(client, "REST000595", "R5 B1F", "Building R5 basement")


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(exp_in: float | None = 120, **claims: Any) -> str:
        payload = dict(claims)
        if exp_in is not None:
            payload["exp"] = int(time.time() + exp_in)
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    return _make
