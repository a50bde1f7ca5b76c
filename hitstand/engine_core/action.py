"""
Action System - Player actions and their results.

All state changes flow through actions applied by the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions a session accepts."""
    HIT = "hit"
    STAND = "stand"

    # Read-only: returns the current state without acting
    SHOW = "show"


@dataclass(frozen=True)
class Action:
    """
    A player request to be applied to a round.
    """
    action_type: ActionType

    @classmethod
    def hit(cls) -> Action:
        """Factory for hit action."""
        return cls(action_type=ActionType.HIT)

    @classmethod
    def stand(cls) -> Action:
        """Factory for stand action."""
        return cls(action_type=ActionType.STAND)

    @classmethod
    def show(cls) -> Action:
        """Factory for a read of the current state."""
        return cls(action_type=ActionType.SHOW)

    @classmethod
    def parse(cls, name: str) -> Action:
        """Build an action from its wire name ("hit", "stand", "show")."""
        try:
            return cls(action_type=ActionType(name.lower()))
        except ValueError:
            raise ValueError(f"Unknown action: {name}") from None


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Failures are raised, never returned. ignored is set when a Hit or Stand
    reaches a finished round: the state is returned unchanged.
    """
    new_state: Any  # GameState
    ignored: bool = False

    # Human-readable changes, for logging
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def applied(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Result carrying the new state."""
        return cls(new_state=state, state_changes=changes or [])

    @classmethod
    def no_op(cls, state: Any, reason: str) -> ActionResult:
        """Create an ignored result that keeps the state."""
        return cls(new_state=state, ignored=True, state_changes=[reason])
