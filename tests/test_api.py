"""
Tests for the HTTP control surface.
"""
import pytest
from fastapi.testclient import TestClient

from handcricket.api.game import get_game
from handcricket.engine.game_session import GameSession
from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.state import TossChoice
from main import app


@pytest.fixture
def client(store, commentary, rng):
    game = GameSession(store, engine=MatchEngine(rng=rng), commentary=commentary)
    app.dependency_overrides[get_game] = lambda: game
    yield TestClient(app)
    app.dependency_overrides.clear()


def _start(client, rng, choice="bat"):
    rng.choices.append(TossChoice.SCISSORS)
    assert client.post("/api/game/difficulty", json={"level": "hard"}).status_code == 200
    toss = client.post("/api/game/toss", json={"choice": "rock"})
    assert toss.json()["winner"] == "player"
    return client.post("/api/game/choose", json={"choice": choice})


class TestSetup:
    def test_initial_state(self, client):
        response = client.get("/api/game/state")

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "difficulty_select"
        assert data["player_score"] == 0
        assert data["target"] == 0
        assert data["history"] == []

    def test_unknown_difficulty_rejected(self, client):
        assert client.post("/api/game/difficulty", json={"level": "impossible"}).status_code == 422

    def test_toss_tie_stays_in_toss(self, client, rng):
        rng.choices.append(TossChoice.ROCK)
        client.post("/api/game/difficulty", json={"level": "easy"})

        data = client.post("/api/game/toss", json={"choice": "rock"}).json()

        assert data["is_tie"] is True
        assert data["winner"] is None
        assert data["match_state"]["phase"] == "toss"

    def test_choose_before_toss_rejected(self, client):
        client.post("/api/game/difficulty", json={"level": "easy"})

        response = client.post("/api/game/choose", json={"choice": "bat"})

        assert response.status_code == 400

    def test_choose_bat(self, client, rng):
        data = _start(client, rng).json()

        assert data["phase"] == "batting"
        assert data["batting_side"] == "player"
        assert data["ready_for_next_ball"] is True
        assert data["message"] == "You are batting. Let's start!"


class TestBall:
    def test_ball_scores_runs(self, client, rng):
        _start(client, rng)
        rng.ints = [1]

        data = client.post("/api/game/ball", json={"value": 4}).json()

        assert data["player_move"] == 4
        assert data["computer_move"] == 1
        assert data["is_out"] is False
        assert data["runs"] == 4
        assert data["match_state"]["player_score"] == 4
        assert data["match_state"]["ready_for_next_ball"] is False

    def test_second_ball_waits_for_resolve(self, client, rng):
        _start(client, rng)
        client.post("/api/game/ball", json={"value": 4})

        assert client.post("/api/game/ball", json={"value": 5}).status_code == 409

        resolved = client.post("/api/game/resolve").json()
        assert resolved["ready_for_next_ball"] is True
        assert client.post("/api/game/ball", json={"value": 5}).status_code == 200

    @pytest.mark.parametrize("value", [0, 7, -1])
    def test_out_of_range_value_rejected(self, client, rng, value):
        _start(client, rng)

        response = client.post("/api/game/ball", json={"value": value})

        assert response.status_code == 400
        state = client.get("/api/game/state").json()
        assert state["player_score"] == 0
        assert state["ready_for_next_ball"] is True

    def test_ball_before_match_rejected(self, client):
        assert client.post("/api/game/ball", json={"value": 3}).status_code == 400

    def test_full_match(self, client, rng):
        _start(client, rng)
        rng.ints = [1, 3, 2]

        client.post("/api/game/ball", json={"value": 4})
        client.post("/api/game/resolve")
        out = client.post("/api/game/ball", json={"value": 3}).json()
        client.post("/api/game/resolve")

        assert out["is_out"] is True
        assert out["match_state"]["target"] == 5
        assert out["match_state"]["batting_side"] == "computer"
        assert out["match_state"]["player_score"] == 4

        final = client.post("/api/game/ball", json={"value": 2}).json()

        assert final["match_state"]["phase"] == "game_over"
        assert final["match_state"]["result"] == "win"
        assert final["match_state"]["result_title"] == "You Won! 🎉"
        assert [a["id"] for a in final["unlocked_achievements"]] == ["firstWin"]
        assert final["match_state"]["history"][0]["icon"] == "🏁"

        stats = client.get("/api/stats").json()
        assert stats["wins"] == 1
        assert stats["matches_played"] == 1
        assert stats["total_runs"] == 4
        assert stats["wickets"] == 1
        assert stats["unlocked_achievement_ids"] == ["firstWin"]

        commentary = client.post("/api/game/commentary").json()
        assert commentary["commentary"] == "What a match!"

        reset = client.post("/api/game/reset").json()
        assert reset["phase"] == "difficulty_select"
        assert reset["history"] == []


class TestStatsAndSettings:
    def test_commentary_before_game_over_rejected(self, client):
        assert client.post("/api/game/commentary").status_code == 400

    def test_achievement_list(self, client):
        data = client.get("/api/stats/achievements").json()

        assert [a["id"] for a in data] == ["firstWin", "tenWins", "fiftyRuns", "hundredRuns", "fiveWickets"]
        assert not any(a["unlocked"] for a in data)

    def test_empty_stats(self, client):
        data = client.get("/api/stats").json()

        assert data["wins"] == 0
        assert data["matches_played"] == 0
        assert data["unlocked_achievement_ids"] == []

    def test_theme(self, client):
        assert client.get("/api/settings/theme").json() == {"theme": "light"}
        assert client.put("/api/settings/theme", json={"theme": "dark"}).json() == {"theme": "dark"}
        assert client.get("/api/settings/theme").json() == {"theme": "dark"}
        assert client.put("/api/settings/theme", json={}).json() == {"theme": "light"}

    def test_unknown_theme_rejected(self, client):
        assert client.put("/api/settings/theme", json={"theme": "purple"}).status_code == 422


def test_health(client):
    assert client.get("/api/health").json() == {"status": "healthy"}


def test_game_session_built_once_under_concurrent_requests(monkeypatch):
    import threading
    import time
    from concurrent.futures import ThreadPoolExecutor
    from unittest.mock import MagicMock

    import handcricket.api.game as game_api

    built = []
    lock = threading.Lock()

    def slow_session(store):
        time.sleep(0.05)
        session = MagicMock(spec=GameSession)
        with lock:
            built.append(session)
        return session

    monkeypatch.setattr(game_api, "_game", None)
    monkeypatch.setattr(game_api, "StatsStore", MagicMock())
    monkeypatch.setattr(game_api, "GameSession", slow_session)

    with ThreadPoolExecutor(max_workers=8) as pool:
        sessions = list(pool.map(lambda _: game_api.get_game(), range(8)))

    assert len(built) == 1
    assert all(s is built[0] for s in sessions)
