import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import app, create_app


def test_health() -> None:
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.fixture
def client():
    with TestClient(create_app(Settings())) as test_client:
        yield test_client


def test_two_players_are_paired_and_play(client: TestClient) -> None:
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        first.send_json({"type": "JOIN_GAME"})
        assert first.receive_json()["type"] == "WAITING"

        second.send_json({"type": "JOIN_GAME"})
        start_x = first.receive_json()
        start_o = second.receive_json()
        assert (start_x["type"], start_x["symbol"]) == ("GAME_START", "X")
        assert (start_o["type"], start_o["symbol"]) == ("GAME_START", "O")
        assert start_x["roomId"] == start_o["roomId"]

        for ws in (first, second):
            state = ws.receive_json()
            assert state["type"] == "GAME_STATE"
            assert state["currentPlayer"] == "X"
            assert state["activeBoard"] is None
            assert state["winner"] is None

        second.send_json({"type": "MOVE", "bigIndex": 4, "smallIndex": 0})
        assert second.receive_json() == {"type": "ERROR", "message": "not your turn"}

        first.send_json({"type": "MOVE", "bigIndex": 4, "smallIndex": 0})
        for ws in (first, second):
            state = ws.receive_json()
            assert state["type"] == "GAME_STATE"
            assert state["smallBoards"][4][0] == "X"
            assert state["lastMove"] == {"bigIndex": 4, "smallIndex": 0}
            assert state["activeBoard"] == 0
            assert state["currentPlayer"] == "O"


def test_opponent_disconnect_is_reported(client: TestClient) -> None:
    with client.websocket_connect("/ws") as survivor:
        with client.websocket_connect("/ws") as leaver:
            survivor.send_json({"type": "JOIN_GAME"})
            assert survivor.receive_json()["type"] == "WAITING"
            leaver.send_json({"type": "JOIN_GAME"})
            assert survivor.receive_json()["type"] == "GAME_START"
            assert survivor.receive_json()["type"] == "GAME_STATE"

        message = survivor.receive_json()
        assert message == {"type": "OPPONENT_DISCONNECT", "message": "Opponent disconnected"}

        registry = client.app.state.registry
        assert registry.rooms == {}


def test_garbage_frames_do_not_drop_the_connection(client: TestClient) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_text("{not json")
        ws.send_json({"type": "SURRENDER"})
        ws.send_json({"type": "JOIN_GAME"})
        assert ws.receive_json()["type"] == "WAITING"
