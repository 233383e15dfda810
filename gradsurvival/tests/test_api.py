"""
Tests for API layer.

Tests:
- API service methods
- Request/response serialization
- Game lifecycle via HTTP
- Error handling
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import PerformActionRequest, SessionStatus
from ..api.service import APIService
from ..engine_core.errors import SessionNotFound, UnknownAction
from ..session import InMemorySessionStore, SessionManager


@pytest.fixture
def service(processor):
    """A fresh API service over the deterministic processor."""
    return APIService(
        session_manager=SessionManager(store=InMemorySessionStore(), processor=processor)
    )


@pytest.fixture
def client(service):
    return TestClient(create_app(service))


class TestAPIService:
    """Tests for APIService."""

    def test_create_game(self, service):
        response = service.create_game()
        assert response.id
        assert response.day == 1
        assert response.stats.health == 80
        assert response.status == SessionStatus.ACTIVE

    def test_get_game(self, service):
        created = service.create_game()
        response = service.get_game(created.id)
        assert response.id == created.id

    def test_get_missing_game(self, service):
        with pytest.raises(SessionNotFound):
            service.get_game("missing")

    def test_perform_action(self, service):
        created = service.create_game()
        response = service.perform_action(
            PerformActionRequest(game_id=created.id, action="writePaper")
        )
        assert response.game_state.day == 2
        assert response.game_state.last_action == "writePaper"
        assert "research" in response.changes

    def test_unknown_action(self, service):
        created = service.create_game()
        with pytest.raises(UnknownAction):
            service.perform_action(PerformActionRequest(game_id=created.id, action="nap"))

    def test_end_game(self, service):
        created = service.create_game()
        assert service.end_game(created.id).success
        assert not service.end_game(created.id).success

    def test_list_actions(self, service):
        response = service.list_actions()
        assert response.count == 10
        coffee = next(a for a in response.actions if a.id == "drinkCoffee")
        assert coffee.side_effect == "coffee"
        assert coffee.effects["money"] == -5000

    def test_summary(self, service):
        created = service.create_game()
        summary = service.get_summary(created.id)
        assert summary.outcome == SessionStatus.ACTIVE
        assert summary.final_stats.advisor_favor == 50
        assert summary.stat_levels["research"] == "critical"


class TestSerialization:
    """camelCase on the wire."""

    def test_request_accepts_camel_case(self):
        request = PerformActionRequest.model_validate({"gameId": "g1", "action": "sleep"})
        assert request.game_id == "g1"

    def test_response_dumps_camel_case(self, service):
        data = service.create_game().model_dump(by_alias=True)
        assert "totalDays" in data
        assert "isGameOver" in data
        assert "advisorFavor" in data["stats"]
        assert data["counters"] == {"coffee": 0, "ramen": 0, "allNighter": 0}


class TestHTTP:
    """Tests through the FastAPI app."""

    def test_game_flow(self, client):
        response = client.post("/api/game")
        assert response.status_code == 200
        game = response.json()
        assert game["stats"]["advisorFavor"] == 50
        assert game["totalDays"] == 0

        response = client.post("/api/game/action", json={"gameId": game["id"], "action": "sleep"})
        assert response.status_code == 200
        body = response.json()
        assert body["gameState"]["day"] == 2
        assert body["gameState"]["lastAction"] == "sleep"
        assert "changes" in body

        response = client.get(f"/api/game/{game['id']}")
        assert response.json()["totalDays"] == 1

        response = client.delete(f"/api/game/{game['id']}")
        assert response.json() == {"success": True, "gameId": game["id"]}

    def test_missing_game(self, client):
        response = client.get("/api/game/missing")
        assert response.status_code == 404
        body = response.json()
        assert body["errorCode"] == "SESSION_NOT_FOUND"
        assert body["details"]["gameId"] == "missing"

    def test_action_on_missing_game(self, client):
        response = client.post("/api/game/action", json={"gameId": "missing", "action": "sleep"})
        assert response.status_code == 404

    def test_unknown_action(self, client):
        game = client.post("/api/game").json()
        response = client.post("/api/game/action", json={"gameId": game["id"], "action": "nap"})
        assert response.status_code == 400
        body = response.json()
        assert body["errorCode"] == "UNKNOWN_ACTION"
        assert "sleep" in body["details"]["validActions"]

        # Rejected turns leave the game untouched
        assert client.get(f"/api/game/{game['id']}").json()["totalDays"] == 0

    def test_malformed_body(self, client):
        response = client.post("/api/game/action", json={"gameId": "g1"})
        assert response.status_code == 422
        assert response.json()["errorCode"] == "VALIDATION_ERROR"

    def test_summary(self, client):
        game = client.post("/api/game").json()
        response = client.get(f"/api/game/{game['id']}/summary", params={"recent": 3})
        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "active"
        assert body["recentEvents"] == []

    def test_list_games(self, client):
        game = client.post("/api/game").json()
        body = client.get("/api/games").json()
        assert body["games"] == [game["id"]]
        assert body["count"] == 1

    def test_actions(self, client):
        body = client.get("/api/actions").json()
        assert body["count"] == 10
        assert body["actions"][0]["id"] == "readPapers"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
