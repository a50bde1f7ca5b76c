"""
Tests for the FastAPI application.

Tests:
- JSON routes and their status codes
- Browser pages and redirects
- Busy sessions answer 504
- Lifespan starts and stops the reaper
"""

import re

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.models import ErrorResponse
from ..api.service import APIService
from ..config import Settings
from .conftest import card


PLAYER_TURN = (
    card("10"), card("9", "hearts"), card("6"), card("7", "hearts"),
    card("2", "diamonds"), card("3", "diamonds"), card("4", "diamonds"),
)
NATURAL = (card("Ace"), card("9", "hearts"), card("King"), card("7", "hearts"))


class BusyService(APIService):
    """Every hit times out."""

    def hit(self, session_id):
        return ErrorResponse(
            error=f"Session {session_id} did not respond in time",
            error_code="SESSION_TIMEOUT",
            details={"session_id": session_id},
        )


@pytest.fixture
def make_client(rigged_registry):
    clients = []

    def factory(*prefix, service_cls=APIService, short=False):
        service = service_cls(session_manager=rigged_registry(*prefix, short=short))
        client = TestClient(create_app(service=service, settings=Settings()))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client(*PLAYER_TURN)


class TestSessionRoutes:

    def test_create_session(self, client):
        response = client.post("/api/v1/sessions")
        assert response.status_code == 200

        data = response.json()
        assert re.fullmatch(r"game-\d+", data["session_id"])
        assert data["status"] == "player_turn"
        assert data["player"]["score"] == 16
        assert data["dealer"]["hidden_cards"] == 1
        assert data["dealer"]["score"] is None
        assert len(data["dealer"]["cards"]) == 1

    def test_hit_then_stand(self, client):
        session_id = client.post("/api/v1/sessions").json()["session_id"]

        hit = client.post(f"/api/v1/sessions/{session_id}/hit")
        assert hit.status_code == 200
        assert hit.json()["player"]["score"] == 18

        stand = client.post(f"/api/v1/sessions/{session_id}/stand")
        assert stand.status_code == 200
        data = stand.json()
        assert data["is_terminal"] is True
        assert data["status"] == "stand"
        assert data["message"] == "You lose!"

        gone = client.get(f"/api/v1/sessions/{session_id}")
        assert gone.status_code == 404
        assert gone.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_get_state(self, client):
        session_id = client.post("/api/v1/sessions").json()["session_id"]
        response = client.get(f"/api/v1/sessions/{session_id}")
        assert response.status_code == 200
        assert response.json()["cards_remaining"] == 48

    def test_invalid_id(self, client):
        response = client.post("/api/v1/sessions/bogus/hit")
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_SESSION_ID"

    def test_unknown_id(self, client):
        response = client.post("/api/v1/sessions/game-1/stand")
        assert response.status_code == 404
        assert response.json()["details"] == {"session_id": "game-1"}

    def test_list_and_delete(self, client):
        session_id = client.post("/api/v1/sessions").json()["session_id"]
        listed = client.get("/api/v1/sessions").json()
        assert listed == {"sessions": [session_id], "count": 1}

        assert client.delete(f"/api/v1/sessions/{session_id}").json()["success"] is True
        assert client.delete(f"/api/v1/sessions/{session_id}").json()["success"] is False
        assert client.get("/api/v1/sessions").json()["count"] == 0

    def test_deck_exhausted(self, make_client):
        client = make_client(card("2"), card("3"), card("2", "hearts"), card("3", "hearts"), short=True)
        session_id = client.post("/api/v1/sessions").json()["session_id"]

        response = client.post(f"/api/v1/sessions/{session_id}/stand")
        assert response.status_code == 500
        assert response.json()["error_code"] == "DECK_EXHAUSTED"

    def test_timeout(self, make_client):
        client = make_client(*PLAYER_TURN, service_cls=BusyService)
        session_id = client.post("/api/v1/sessions").json()["session_id"]

        response = client.post(f"/api/v1/sessions/{session_id}/hit")
        assert response.status_code == 504
        assert response.json()["error_code"] == "SESSION_TIMEOUT"

    def test_health(self, client):
        client.post("/api/v1/sessions")
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["active_sessions"] == 1


class TestBrowserPages:

    def test_index_redirects_to_new(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/new"

    def test_new_redirects_to_game(self, client):
        response = client.get("/new", follow_redirects=False)
        assert response.status_code == 303
        assert re.fullmatch(r"/game/game-\d+", response.headers["location"])

    def test_table_hides_hole_card(self, client):
        location = client.get("/new", follow_redirects=False).headers["location"]
        page = client.get(location)
        assert page.status_code == 200
        assert "9 of hearts + ???" in page.text
        assert "7 of hearts" not in page.text
        assert f'href="{location}/hit"' in page.text

    def test_stand_shows_full_hand(self, client):
        location = client.get("/new", follow_redirects=False).headers["location"]
        page = client.get(f"{location}/stand")
        assert page.status_code == 200
        assert "Dealer's Full Hand (18)" in page.text
        assert "7 of hearts" in page.text
        assert 'href="/new"' in page.text

    def test_finished_game_redirects_to_new(self, client):
        location = client.get("/new", follow_redirects=False).headers["location"]
        client.get(f"{location}/stand")
        response = client.get(location, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/new"

    def test_unknown_game_redirects_to_new(self, client):
        response = client.get("/game/game-1/hit", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/new"

    def test_invalid_game_id(self, client):
        response = client.get("/game/not-a-game", follow_redirects=False)
        assert response.status_code == 400

    def test_natural_rendered_without_redirect(self, make_client):
        client = make_client(*NATURAL)
        response = client.get("/new", follow_redirects=False)
        assert response.status_code == 200
        assert "Blackjack! You win!" in response.text

    def test_busy_page(self, make_client):
        client = make_client(*PLAYER_TURN, service_cls=BusyService)
        location = client.get("/new", follow_redirects=False).headers["location"]
        response = client.get(f"{location}/hit")
        assert response.status_code == 504
        assert "try again" in response.text

    def test_deck_exhausted_page(self, make_client):
        client = make_client(card("2"), card("3"), card("2", "hearts"), card("3", "hearts"), short=True)
        location = client.get("/new", follow_redirects=False).headers["location"]
        response = client.get(f"{location}/stand")
        assert response.status_code == 500
        assert "Deck is exhausted" in response.text


class TestLifespan:

    def test_reaper_runs_while_serving(self, rigged_registry):
        service = APIService(session_manager=rigged_registry(*PLAYER_TURN))
        app = create_app(service=service, settings=Settings(eviction_interval=3600))

        with TestClient(app) as client:
            assert app.state.reaper.running
            client.post("/api/v1/sessions")
            assert len(service.session_manager) == 1

        assert not app.state.reaper.running
        assert len(service.session_manager) == 0
