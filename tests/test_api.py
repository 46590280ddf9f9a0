"""Tests for the FastAPI Tic-Tac-Toe backend."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tictactoe.game import GameEngine
from tictactoe.ui import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


def test_initial_state(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    assert response.json() == {
        "board": [""] * 9,
        "currentPlayer": "X",
        "winner": "",
        "gameOver": False,
    }


def test_move_and_follow_up(client):
    client.post("/api/game")
    move = client.post("/api/game/move", json={"index": 4})
    assert move.status_code == 200
    state = move.json()
    assert state["board"][4] == "X"
    assert state["currentPlayer"] == "O"

    follow_up = client.get("/api/state")
    assert follow_up.json() == state


def test_occupied_cell_rejected(client):
    client.post("/api/game/move", json={"index": 0})
    before = client.get("/api/state").json()

    duplicate = client.post("/api/game/move", json={"index": 0})
    assert duplicate.status_code == 400
    assert duplicate.json() == {"detail": "Cell already occupied", "code": "cell_occupied"}
    assert client.get("/api/state").json() == before


def test_invalid_index_rejected(client):
    response = client.post("/api/game/move", json={"index": 9})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_index"


def test_move_after_win_rejected(client):
    for index in (0, 3, 1, 4, 2):
        client.post("/api/game/move", json={"index": index})
    state = client.get("/api/state").json()
    assert state["gameOver"] is True
    assert state["winner"] == "X"

    response = client.post("/api/game/move", json={"index": 8})
    assert response.status_code == 400
    assert response.json()["code"] == "game_over"


def test_malformed_move_body(client):
    response = client.post("/api/game/move", json={"index": "middle"})
    assert response.status_code == 422


@pytest.mark.parametrize("index", [True, 2.0, "4"])
def test_non_integer_index_not_coerced(client, index):
    response = client.post("/api/game/move", json={"index": index})
    assert response.status_code == 422
    assert client.get("/api/state").json()["board"] == [""] * 9


def test_reset_clears_finished_game(client):
    for index in (0, 3, 1, 4, 2):
        client.post("/api/game/move", json={"index": index})
    reset = client.post("/api/game/reset")
    assert reset.status_code == 200
    assert reset.json()["board"] == [""] * 9
    assert reset.json()["gameOver"] is False
    assert reset.json()["currentPlayer"] == "X"


def test_app_serves_supplied_engine():
    engine = GameEngine()
    engine.make_move(8)
    client = TestClient(create_app(engine))
    assert client.get("/api/state").json()["board"][8] == "X"


def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Tic-Tac-Toe" in response.text


def test_index_page_controls(client):
    page = client.get("/").text
    assert 'id="theme-toggle"' in page
    assert "dark-theme" in page
    assert "setTimeout(resetGame, AUTO_RESET_DELAY_MS)" in page
    assert "AUTO_RESET_DELAY_MS = 2000" in page
    assert "Error resetting game. Please try again." in page
