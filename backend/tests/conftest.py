from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from typing import Any

import pytest

from models import Session


class FakeConnection:
    """In-memory stand-in for a WebSocket: records every JSON payload sent."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail

    async def send_json(self, data: Any) -> None:
        # Yield like a real socket write so concurrent tasks can interleave.
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(data)

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]

    def last(self, type_: str) -> dict[str, Any]:
        return [m for m in self.sent if m["type"] == type_][-1]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_connection() -> Callable[..., FakeConnection]:
    return FakeConnection


@pytest.fixture
def make_session() -> Callable[..., Session]:
    counter = itertools.count(1)

    def _make(name: str | None = None, *, fail: bool = False) -> Session:
        return Session(id=name or f"s{next(counter)}", connection=FakeConnection(fail=fail))

    return _make
