"""
Session Registry - Creates, finds and reclaims game sessions.

LIFECYCLE:
1. Client deals → registry shuffles a deck, deals, starts an actor
2. Client hits/stands → registry finds the session, actor applies the action
3. Round over, client ends, or TTL passes → entry removed; the actor
   stops once no caller holds the Session

PERSISTENCE RULES:
- In-memory only, nothing survives a restart

LOCKING:
- Lookups take the shared lock; create, end and evict take it exclusively
- Removing an entry only affects later lookups. A caller already holding
  the Session keeps it, and commands it already queued still complete
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging
import random
import re
import threading
import time
import weakref

from ..engine_core.action import Action
from ..engine_core.cards import Deck
from ..engine_core.reducer import deal
from ..engine_core.state import TableSnapshot
from ..errors import InvalidIdentifier, SessionNotFound
from .actor import GameActor, DEFAULT_REPLY_TIMEOUT
from .rwlock import ReadWriteLock

logger = logging.getLogger("hitstand.session.manager")


SESSION_ID_PATTERN = re.compile(r"^game-\d+$")
DEFAULT_SESSION_TTL = 30 * 60


def validate_session_id(session_id: str) -> str:
    """Reject malformed identifiers before any lookup."""
    if not isinstance(session_id, str) or not SESSION_ID_PATTERN.fullmatch(session_id):
        raise InvalidIdentifier(f"Invalid game ID: {session_id!r}")
    return session_id


@dataclass
class Session:
    """
    One live game.

    The round itself lives inside the actor; the session only carries
    what the registry needs to find and expire it.

    The actor stops once the last reference to its Session is gone, so a
    handle taken before removal keeps working.
    """
    session_id: str
    created_at: float
    actor: GameActor

    def __post_init__(self):
        weakref.finalize(self, self.actor.close)

    def submit(self, action: Action, timeout: float | None = DEFAULT_REPLY_TIMEOUT) -> TableSnapshot:
        return self.actor.submit(action, timeout=timeout)

    def is_active(self) -> bool:
        """Check if session still accepts actions."""
        return self.actor.is_open

    def age(self, now: float) -> float:
        return now - self.created_at


class SessionRegistry:
    """
    Concurrent map of session id to Session.

    Responsibilities:
    - Create sessions with a fresh shuffled deck
    - Route actions to the right actor
    - Evict sessions older than the TTL

    Construct one per application; tests construct their own.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_SESSION_TTL,
        reply_timeout: float | None = DEFAULT_REPLY_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        deck_factory: Callable[[], Deck] | None = None,
        rng: random.Random | None = None,
    ):
        self.ttl = ttl
        self.reply_timeout = reply_timeout
        self._clock = clock
        self._rng = rng
        self._deck_factory = deck_factory or (lambda: Deck.shuffled(self._rng))

        self._sessions: dict[str, Session] = {}
        self._lock = ReadWriteLock()
        self._last_id = 0

    def _next_id(self) -> str:
        """Strictly increasing nanosecond id. Caller holds the write lock."""
        n = max(time.time_ns(), self._last_id + 1)
        self._last_id = n
        return f"game-{n}"

    def create_session(self) -> Session:
        """
        Deal a new round and register it.

        Returns:
            New Session with its actor already running
        """
        state = deal(self._deck_factory())

        with self._lock.write_locked():
            session_id = self._next_id()
            session = Session(
                session_id=session_id,
                created_at=self._clock(),
                actor=GameActor(state, session_id=session_id),
            )
            self._sessions[session_id] = session

        logger.info("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock.read_locked():
            return self._sessions.get(session_id)

    def lookup(self, session_id: str) -> Session:
        """
        Validated lookup.

        Raises:
            InvalidIdentifier: malformed id
            SessionNotFound: no such live session
        """
        validate_session_id(session_id)
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found", session_id=session_id)
        return session

    def submit(self, session_id: str, action: Action) -> TableSnapshot:
        """
        Send an action to a session and wait for its snapshot.

        Raises:
            InvalidIdentifier, SessionNotFound, SessionTimeout, DeckExhausted
        """
        session = self.lookup(session_id)
        return session.submit(action, timeout=self.reply_timeout)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        Remove a session from the registry.

        Returns False if the session was not registered. Callers already
        holding the Session can still submit to it.
        """
        with self._lock.write_locked():
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def evict_expired(self, ttl: float | None = None) -> list[str]:
        """
        Remove every session older than ttl, finished or not.

        Returns the evicted ids.
        """
        ttl = self.ttl if ttl is None else ttl
        now = self._clock()

        with self._lock.write_locked():
            expired = [
                sid for sid, session in self._sessions.items()
                if session.age(now) > ttl
            ]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.info("Evicted %d expired session(s)", len(expired))
        return expired

    def list_active_sessions(self) -> list[str]:
        """List IDs of registered sessions."""
        with self._lock.read_locked():
            return [
                sid for sid, session in self._sessions.items()
                if session.is_active()
            ]

    def close_all(self) -> None:
        """Close every actor, held handles included. Used on shutdown."""
        with self._lock.write_locked():
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.actor.close()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return self.get_session(session_id) is not None


class SessionReaper:
    """
    Background thread that runs evict_expired() on a fixed interval.

    Usage:
        reaper = SessionReaper(registry, interval=3600)
        reaper.start()
        ...
        reaper.stop()
    """

    def __init__(self, registry: SessionRegistry, interval: float = 3600.0):
        self.registry = registry
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="session-reaper", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.registry.evict_expired()
            except Exception:
                logger.exception("Eviction pass failed")
