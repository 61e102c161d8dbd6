"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _card(code: str) -> dict:
    return {"rank": code[:-1], "suit": code[-1]}


def _state(player: list[str], dealer: list[str], draws: list[str], **overrides) -> dict:
    """Build a wire-format playing state. ``draws`` is in draw order."""
    state = {
        "playerHand": {"cards": [_card(c) for c in player]},
        "dealerHand": {"cards": [_card(c) for c in dealer], "hasHiddenCard": True},
        "deck": [_card(c) for c in reversed(draws)],
        "gameStatus": "playing",
        "canDouble": True,
        "bankroll": 1000,
        "currentBet": 50,
        "isDoubled": False,
    }
    state.update(overrides)
    return state


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_show_betting(client):
    """Test entering the betting phase without a state."""
    response = await client.post("/api/game", json={"action": "showBetting", "state": None})
    assert response.status_code == 200
    data = response.json()

    assert data["gameStatus"] == "betting"
    assert data["bankroll"] == 1000
    assert data["currentBet"] == 50
    assert data["canDouble"] is False
    assert data["playerHand"]["cards"] == []
    assert data["deck"] == []
    assert data["outcome"] is None


@pytest.mark.asyncio
async def test_deal(client):
    """Test dealing a new round."""
    response = await client.post(
        "/api/game",
        json={"action": "deal", "state": None, "bet": 50, "bankroll": 1000},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["gameStatus"] == "playing"
    assert data["currentBet"] == 50
    assert data["bankroll"] == 1000
    assert data["canDouble"] is True
    assert data["isDoubled"] is False
    assert len(data["playerHand"]["cards"]) == 2
    assert len(data["dealerHand"]["cards"]) == 2
    assert len(data["deck"]) == 48
    assert data["dealerHand"]["hasHiddenCard"] is True


@pytest.mark.asyncio
async def test_deal_card_format(client):
    """Test cards carry rank, suit symbol and code."""
    response = await client.post("/api/game", json={"action": "deal", "bet": 10, "bankroll": 100})
    card = response.json()["playerHand"]["cards"][0]
    assert set(card) == {"rank", "suit", "code"}
    assert card["suit"] in {"♠", "♣", "♥", "♦"}
    assert card["code"].startswith(card["rank"])


@pytest.mark.asyncio
async def test_deal_insufficient_funds(client):
    """Test betting more than the bankroll."""
    response = await client.post(
        "/api/game",
        json={"action": "deal", "state": None, "bet": 600, "bankroll": 500},
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["required"] == 600
    assert detail["available"] == 500


@pytest.mark.asyncio
async def test_invalid_action(client):
    """Test an unknown action."""
    response = await client.post("/api/game", json={"action": "fold", "state": None})
    assert response.status_code == 400
    assert "Invalid action" in response.json()["detail"]


@pytest.mark.asyncio
async def test_hit_without_state(client):
    """Test that in-round actions need a state."""
    response = await client.post("/api/game", json={"action": "hit", "state": None})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invalid_bet_amount(client):
    """Test that a zero bet fails validation."""
    response = await client.post("/api/game", json={"action": "deal", "bet": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_full_round_trip(client):
    """Test dealing then standing with the returned state."""
    dealt = await client.post("/api/game", json={"action": "deal", "bet": 50, "bankroll": 1000})
    state = dealt.json()

    response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.status_code == 200
    data = response.json()

    assert data["gameStatus"] == "gameOver"
    assert data["outcome"] in {"win", "lose", "push"}
    assert data["dealerHand"]["hasHiddenCard"] is False
    assert data["dealerHand"]["score"] >= 17
    assert data["bankroll"] in {950, 1000, 1050}
    cards = len(data["deck"]) + len(data["playerHand"]["cards"]) + len(data["dealerHand"]["cards"])
    assert cards == 52


@pytest.mark.asyncio
async def test_push_scenario(client):
    """Test [K♠, Q♥] against [K♣, J♦]."""
    state = _state(["KS", "QH"], ["KC", "JD"], [])
    response = await client.post("/api/game", json={"action": "stand", "state": state})
    data = response.json()
    assert data["outcome"] == "push"
    assert data["bankroll"] == 1000
    assert data["playerHand"]["score"] == 20
    assert data["dealerHand"]["score"] == 20


@pytest.mark.asyncio
async def test_hit_bust_scenario(client):
    """Test hitting into [10♠, 8♥, 5♦]."""
    state = _state(["10S", "8H"], ["9C", "7D"], ["5D", "2C"])
    response = await client.post("/api/game", json={"action": "hit", "state": state})
    data = response.json()
    assert data["playerHand"]["score"] == 23
    assert data["playerHand"]["isBusted"] is True
    assert data["outcome"] == "lose"
    assert data["bankroll"] == 950
    assert len(data["dealerHand"]["cards"]) == 2


@pytest.mark.asyncio
async def test_double_down(client):
    """Test doubling settles against the doubled bet."""
    state = _state(["5S", "6H"], ["10C", "7D"], ["KD"])
    response = await client.post("/api/game", json={"action": "double", "state": state})
    data = response.json()
    assert data["isDoubled"] is True
    assert data["currentBet"] == 100
    assert data["outcome"] == "win"
    assert data["bankroll"] == 1100


@pytest.mark.asyncio
async def test_ineligible_action_returns_state(client):
    """Test a hit after game over comes back unchanged."""
    state = _state(["KS", "QH"], ["KC", "JD"], [], gameStatus="gameOver", outcome="push", canDouble=False)
    state["dealerHand"]["hasHiddenCard"] = False
    response = await client.post("/api/game", json={"action": "hit", "state": state})
    assert response.status_code == 200
    data = response.json()
    assert data["gameStatus"] == "gameOver"
    assert len(data["playerHand"]["cards"]) == 2


@pytest.mark.asyncio
async def test_client_score_is_ignored(client):
    """Test that scores are recomputed from the cards."""
    state = _state(["KS", "QH"], ["KC", "JD"], [])
    state["playerHand"]["score"] = 21
    response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.json()["outcome"] == "push"


@pytest.mark.asyncio
async def test_malformed_card(client):
    """Test an unknown rank is rejected."""
    state = _state(["ZS", "QH"], ["KC", "JD"], [])
    response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_card(client):
    """Test a state holding the same card twice is rejected."""
    state = _state(["KS", "KS"], ["KC", "JD"], [])
    response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.status_code == 400
    assert "Duplicate" in response.json()["detail"]


@pytest.mark.asyncio
async def test_inconsistent_state(client):
    """Test an outcome on a round still in play is rejected."""
    state = _state(["KS", "QH"], ["KC", "JD"], [], outcome="win")
    response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_exhausted_deck_is_server_error():
    """Test that running out of cards is reported as an internal error."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        state = _state(["10S", "9H"], ["2C", "3D"], [])
        response = await client.post("/api/game", json={"action": "stand", "state": state})
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
