"""
API Module - HTTP interface.

Exposes sessions via a REST API and plain HTML pages:
1. Deal a round
2. Hit or stand
3. Read the table state

The HTTP layer only validates, forwards and renders; all game state
lives in the session actors.
"""

from .models import (
    GameStateResponse,
    ErrorResponse,
    HandInfo,
    CardInfo,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    "GameStateResponse",
    "ErrorResponse",
    "HandInfo",
    "CardInfo",
    "SessionStatus",
    "APIService",
    "create_app",
]
