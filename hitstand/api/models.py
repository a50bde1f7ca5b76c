"""
API Models - Framework-agnostic response shapes.

The service returns these dataclasses; the FastAPI app converts them to
the Pydantic schemas in schemas.py.

Design principles:
- Never expose the dealer's hole card before the round ends
- Self-describing (names alongside raw card values)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SessionStatus(Enum):
    PLAYER_TURN = "player_turn"
    BUST = "bust"
    STAND = "stand"


@dataclass
class CardInfo:
    """Card information for display."""
    card_id: int
    rank: str
    suit: str
    name: str
    points: int


@dataclass
class HandInfo:
    """One side of the table."""
    cards: list[CardInfo] = field(default_factory=list)
    score: int | None = None  # None while hidden
    hidden_cards: int = 0


@dataclass
class GameStateResponse:
    """
    Table state after an action.

    GET  /api/v1/sessions/{id}
    POST /api/v1/sessions/{id}/hit
    POST /api/v1/sessions/{id}/stand
    """
    session_id: str
    status: SessionStatus
    player: HandInfo
    dealer: HandInfo
    is_terminal: bool = False
    message: str = ""
    cards_remaining: int = 0


@dataclass
class ErrorResponse:
    """Error response."""
    error: str
    error_code: str
    details: dict[str, Any] | None = None
