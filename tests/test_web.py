import chess
import pytest
from fastapi.testclient import TestClient

from web import app as web_app
from web.app import app, get_rng

from conftest import FOOLS_MATE_FEN, SINGLE_MOVE_FEN, WHITE_MATE_IN_ONE_FEN, ScriptedRng


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_rng(rng):
    app.dependency_overrides[get_rng] = lambda: rng


class TestMoveEndpoint:
    def test_searched_move(self, client):
        resp = client.post("/api/move", json={"fen": WHITE_MATE_IN_ONE_FEN, "level": 10})
        assert resp.status_code == 200
        body = resp.json()
        assert body["move"] == "a1a8"
        assert body["source"] == "search"
        assert body["name"] == "Vision 10"
        assert body["depth"] == 3
        assert body["nodes"] > 0
        assert chess.Board(body["fen"]).is_checkmate()

    def test_level_defaults_to_strongest(self, client):
        resp = client.post("/api/move", json={"fen": WHITE_MATE_IN_ONE_FEN})
        assert resp.json()["level"] == 10

    def test_random_move(self, client):
        rng = ScriptedRng([0.1])
        use_rng(rng)
        resp = client.post("/api/move", json={"fen": chess.STARTING_FEN, "level": 1})
        body = resp.json()
        assert resp.status_code == 200
        assert body["source"] == "random"
        assert body["score"] is None
        assert body["depth"] == 0
        assert body["move"] == rng.offered[0][0].uci()

    def test_single_move_any_level(self, client):
        use_rng(ScriptedRng([0.0, 0.0], pick=0))
        resp = client.post("/api/move", json={"fen": SINGLE_MOVE_FEN, "level": 2})
        assert resp.json()["move"] == "h6h5"

    def test_invalid_fen(self, client):
        resp = client.post("/api/move", json={"fen": "not a fen", "level": 5})
        assert resp.status_code == 400
        assert "Invalid FEN" in resp.json()["detail"]

    def test_game_over(self, client):
        resp = client.post("/api/move", json={"fen": FOOLS_MATE_FEN, "level": 5})
        assert resp.status_code == 400
        assert "already over" in resp.json()["detail"]

    @pytest.mark.parametrize("level", [0, 11, "hard"])
    def test_invalid_level(self, client, level):
        resp = client.post("/api/move", json={"fen": chess.STARTING_FEN, "level": level})
        assert resp.status_code == 422

    def test_engine_error(self, client, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(web_app, "choose_move", broken)
        resp = client.post("/api/move", json={"fen": chess.STARTING_FEN, "level": 10})
        assert resp.status_code == 500
        assert "boom" in resp.json()["detail"]


class TestLevelsEndpoint:
    def test_lists_all_levels(self, client):
        resp = client.get("/api/levels")
        assert resp.status_code == 200
        levels = resp.json()
        assert [lv["tier"] for lv in levels] == list(range(1, 11))
        assert levels[0]["name"] == "Vision 1"
        assert levels[0]["random_rate"] == 0.8
        assert levels[-1]["mistake_probability"] == 0
        assert [lv["depth"] for lv in levels] == [1, 1, 1, 2, 2, 2, 2, 3, 3, 3]
