"""
API Service - Business logic layer between API and sessions.

The service:
1. Translates API calls to registry calls
2. Turns core errors into ErrorResponse values
3. Retires sessions whose round has finished
4. Formats snapshots for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .models import (
    GameStateResponse,
    ErrorResponse,
    HandInfo,
    CardInfo,
    SessionStatus,
)
from ..engine_core.action import Action
from ..engine_core.cards import Card
from ..engine_core.state import TableSnapshot
from ..errors import HitstandError
from ..session import SessionRegistry

logger = logging.getLogger("hitstand.api.service")


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Deal
        state = service.create_session()

        # Play
        state = service.hit(state.session_id)
        state = service.stand(state.session_id)
    """
    session_manager: SessionRegistry = field(default_factory=SessionRegistry)

    # Remove a session as soon as its round is over
    retire_finished: bool = True

    def create_session(self) -> GameStateResponse | ErrorResponse:
        """
        Deal a new round.
        """
        session = self.session_manager.create_session()
        try:
            snapshot = session.submit(Action.show(), timeout=self.session_manager.reply_timeout)
        except HitstandError as e:
            return self._error(e)
        return self._finish(session.session_id, snapshot)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """
        Get current table state without acting.
        """
        return self._act(session_id, Action.show())

    def hit(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._act(session_id, Action.hit())

    def stand(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._act(session_id, Action.stand())

    def submit(self, session_id: str, action_name: str) -> GameStateResponse | ErrorResponse:
        """
        Apply an action given by name ("hit", "stand", "show").
        """
        try:
            action = Action.parse(action_name)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code="VALIDATION_ERROR")
        return self._act(session_id, action)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _act(self, session_id: str, action: Action) -> GameStateResponse | ErrorResponse:
        try:
            snapshot = self.session_manager.submit(session_id, action)
        except HitstandError as e:
            return self._error(e)
        return self._finish(session_id, snapshot)

    def _finish(self, session_id: str, snapshot: TableSnapshot) -> GameStateResponse:
        if snapshot.is_terminal and self.retire_finished:
            self.session_manager.end_session(session_id, reason="completed")
        return self._build_game_state(session_id, snapshot)

    def _error(self, error: HitstandError) -> ErrorResponse:
        logger.info("Request failed: %s (%s)", error.message, error.error_code)
        details = {"session_id": error.session_id} if error.session_id else None
        return ErrorResponse(
            error=error.message,
            error_code=error.error_code,
            details=details,
        )

    def _build_game_state(self, session_id: str, snapshot: TableSnapshot) -> GameStateResponse:
        """Convert a snapshot to GameStateResponse."""
        if snapshot.bust:
            status = SessionStatus.BUST
        elif snapshot.stand:
            status = SessionStatus.STAND
        else:
            status = SessionStatus.PLAYER_TURN

        return GameStateResponse(
            session_id=session_id,
            status=status,
            player=HandInfo(
                cards=[self._card_info(c) for c in snapshot.player_hand],
                score=snapshot.player_score,
            ),
            dealer=HandInfo(
                cards=[self._card_info(c) for c in snapshot.dealer_hand],
                score=snapshot.dealer_score,
                hidden_cards=snapshot.dealer_hidden,
            ),
            is_terminal=snapshot.is_terminal,
            message=snapshot.message,
            cards_remaining=snapshot.cards_remaining,
        )

    def _card_info(self, card: Card) -> CardInfo:
        return CardInfo(
            card_id=card.value,
            rank=card.rank,
            suit=card.suit,
            name=str(card),
            points=card.points,
        )
