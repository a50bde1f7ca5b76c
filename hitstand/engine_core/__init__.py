"""
Engine Core - Deterministic Blackjack rules.

The engine is the pure part of the system that:
1. Models cards and the per-session deck
2. Scores hands (soft/hard Aces, blackjack)
3. Plays the dealer (hits soft 17)
4. Applies player actions via the reducer

Nothing here knows about threads, sessions or HTTP.
"""

from .cards import Card, Deck, RANKS, SUITS
from .scoring import score, has_soft_value, is_blackjack, is_bust
from .dealer import play_dealer, dealer_must_draw
from .state import GameState, GamePhase, TableSnapshot
from .action import Action, ActionType, ActionResult
from .reducer import Reducer, apply_action, deal, settle

__all__ = [
    "Card",
    "Deck",
    "RANKS",
    "SUITS",
    "score",
    "has_soft_value",
    "is_blackjack",
    "is_bust",
    "play_dealer",
    "dealer_must_draw",
    "GameState",
    "GamePhase",
    "TableSnapshot",
    "Action",
    "ActionType",
    "ActionResult",
    "Reducer",
    "apply_action",
    "deal",
    "settle",
]
