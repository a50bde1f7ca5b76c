"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.

Error Codes:
- INVALID_SESSION_ID: Session ID is malformed
- SESSION_NOT_FOUND: Session does not exist, has finished, or has expired
- SESSION_TIMEOUT: Session did not answer in time, retry
- DECK_EXHAUSTED: The round ran out of cards
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    PLAYER_TURN = "player_turn"
    BUST = "bust"
    STAND = "stand"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_TIMEOUT = "SESSION_TIMEOUT"
    DECK_EXHAUSTED = "DECK_EXHAUSTED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: int = Field(..., ge=0, le=51)
    rank: str
    suit: str
    name: str = Field(description="e.g. 'Ace of spades'")
    points: int

    model_config = {"from_attributes": True}


class HandInfo(BaseModel):
    """Cards held by one side of the table."""
    cards: list[CardInfo] = Field(default_factory=list)
    score: Optional[int] = Field(None, description="Null while the dealer's hand is hidden")
    hidden_cards: int = Field(0, ge=0)

    model_config = {"from_attributes": True}


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Table state after an action."""
    session_id: str
    status: SessionStatus
    player: HandInfo
    dealer: HandInfo
    is_terminal: bool = False
    message: str = ""
    cards_remaining: int = 0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    active_sessions: int = 0
