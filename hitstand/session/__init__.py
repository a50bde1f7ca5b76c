"""
Session Module - Live games and their workers.

A session is one Blackjack round:
- Created when the client deals
- Owned by a single actor thread that applies actions in order
- Removed when the round ends, the client quits, or its TTL passes

Sessions are EPHEMERAL: in-memory only.
"""

from .actor import GameActor, ActorState, DEFAULT_REPLY_TIMEOUT
from .manager import (
    SessionRegistry,
    SessionReaper,
    Session,
    validate_session_id,
    SESSION_ID_PATTERN,
)
from .rwlock import ReadWriteLock

__all__ = [
    "GameActor",
    "ActorState",
    "DEFAULT_REPLY_TIMEOUT",
    "SessionRegistry",
    "SessionReaper",
    "Session",
    "validate_session_id",
    "SESSION_ID_PATTERN",
    "ReadWriteLock",
]
