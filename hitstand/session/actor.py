"""
Game Actor - The single worker that owns one round.

The actor:
1. Holds the GameState; nothing outside the worker thread touches it
2. Takes commands from a FIFO queue, one at a time, in arrival order
3. Applies each through the reducer
4. Answers on a reply queue private to that command

Callers wait for the reply with a bound. A caller that gives up does not
affect the worker: the reply queue has room for exactly one answer and
the worker never blocks on it. Commands already queued when the actor is
closed still run and still answer.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import queue
import threading

from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, TableSnapshot
from ..errors import HitstandError, SessionNotFound, SessionTimeout

logger = logging.getLogger("hitstand.session.actor")


DEFAULT_REPLY_TIMEOUT = 2.0


class ActorState(Enum):
    """Lifecycle of an actor."""
    RUNNING = "running"
    CLOSING = "closing"  # No new commands; queued ones still run
    STOPPED = "stopped"


@dataclass
class Command:
    """An action plus the queue its answer goes to."""
    action: Action
    reply: queue.Queue


@dataclass
class Reply:
    """Answer to one command: a snapshot or an error."""
    snapshot: TableSnapshot | None = None
    error: HitstandError | None = None


_STOP = object()


class GameActor:
    """
    Serialized owner of one round.

    Usage:
        actor = GameActor(deal(Deck.shuffled()), session_id="game-1")
        snapshot = actor.submit(Action.hit(), timeout=2.0)
        actor.close()
    """

    def __init__(
        self,
        initial_state: GameState,
        session_id: str = "",
        reducer: Reducer | None = None,
    ):
        self.session_id = session_id
        self._state = initial_state
        self._reducer = reducer or Reducer()
        self._commands: queue.Queue = queue.Queue()

        # Orders close() against submit() so nothing lands behind the stop marker
        self._gate = threading.Lock()
        self._status = ActorState.RUNNING

        self.commands_processed = 0

        self._thread = threading.Thread(
            target=self._run,
            name=f"actor-{session_id or id(self)}",
            daemon=True,
        )
        self._thread.start()

    @property
    def status(self) -> ActorState:
        return self._status

    @property
    def is_open(self) -> bool:
        return self._status == ActorState.RUNNING

    def submit(
        self,
        action: Action,
        timeout: float | None = DEFAULT_REPLY_TIMEOUT,
    ) -> TableSnapshot:
        """
        Queue an action and wait for its snapshot.

        Raises:
            SessionNotFound: the actor has been closed
            SessionTimeout: no reply within timeout seconds
            HitstandError: the action failed inside the worker
        """
        reply: queue.Queue = queue.Queue(maxsize=1)

        with self._gate:
            if self._status != ActorState.RUNNING:
                raise SessionNotFound(
                    f"Session {self.session_id} is closed",
                    session_id=self.session_id,
                )
            self._commands.put(Command(action=action, reply=reply))

        try:
            answer = reply.get(timeout=timeout)
        except queue.Empty:
            logger.warning(
                "Session %s: no reply to %s within %ss",
                self.session_id, action.action_type.value, timeout,
            )
            raise SessionTimeout(
                f"Session {self.session_id} did not respond in time",
                session_id=self.session_id,
            ) from None

        if answer.error is not None:
            raise answer.error
        return answer.snapshot

    def close(self) -> None:
        """Stop accepting commands; the worker exits after draining the queue."""
        with self._gate:
            if self._status != ActorState.RUNNING:
                return
            self._status = ActorState.CLOSING
            self._commands.put(_STOP)

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker to exit. Returns True if it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    # =========================================================================
    # Worker
    # =========================================================================

    def _run(self) -> None:
        while True:
            command = self._commands.get()
            if command is _STOP:
                break
            answer = self._process(command.action)
            # Capacity one, one answer per command: never blocks
            command.reply.put_nowait(answer)

        self._status = ActorState.STOPPED
        logger.debug("Session %s: worker stopped", self.session_id)

    def _process(self, action: Action) -> Reply:
        try:
            result = self._reducer.apply(self._state, action)
        except HitstandError as e:
            e.session_id = e.session_id or self.session_id
            logger.error(
                "Session %s: %s failed: %s",
                self.session_id, action.action_type.value, e,
            )
            return Reply(error=e)
        except Exception:
            logger.exception(
                "Session %s: unexpected error during %s",
                self.session_id, action.action_type.value,
            )
            return Reply(error=HitstandError(
                "Internal error", session_id=self.session_id,
            ))

        self.commands_processed += 1
        self._state = result.new_state
        for change in result.state_changes:
            logger.debug("Session %s: %s", self.session_id, change)

        return Reply(snapshot=self._state.snapshot())
