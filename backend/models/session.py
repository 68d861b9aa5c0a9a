from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from .game import Mark


class Connection(Protocol):
    """The part of a transport connection the game core relies on."""

    async def send_json(self, data: Any) -> None: ...


@dataclass(eq=False)
class Session:
    id: str
    connection: Connection
    symbol: Mark | None = None
    room_id: str | None = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
