"""
Errors - The failure taxonomy shared by the engine, sessions and API.

Every error carries an error_code that the API layer reports verbatim:
- INVALID_SESSION_ID: identifier failed validation, no lookup was made
- SESSION_NOT_FOUND: unknown, ended or evicted session
- SESSION_TIMEOUT: the session worker did not reply in time (retryable)
- DECK_EXHAUSTED: a draw was attempted on an empty deck

A Hit or Stand on a finished round is NOT an error. The reducer answers it
with an ignored no-op result so the state machine stays total.
"""

from __future__ import annotations


class HitstandError(Exception):
    """Base class for all hitstand errors."""
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, session_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.session_id = session_id


class InvalidIdentifier(HitstandError):
    """Session identifier is malformed."""
    error_code = "INVALID_SESSION_ID"


class SessionNotFound(HitstandError):
    """Session is unknown, finished or expired."""
    error_code = "SESSION_NOT_FOUND"


class SessionTimeout(HitstandError):
    """Session worker did not reply within the bound."""
    error_code = "SESSION_TIMEOUT"


class DeckExhausted(HitstandError):
    """No cards are left to draw."""
    error_code = "DECK_EXHAUSTED"
