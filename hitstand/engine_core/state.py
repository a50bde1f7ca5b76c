"""
Game State - One Blackjack round and its client-facing snapshot.

Design principles:
- Immutable: every transition returns a new GameState
- Complete: player hand, dealer hand and deck together hold every card
  the round started with, each exactly once
- Owned: only the session worker ever holds a GameState; callers get
  TableSnapshot copies
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .cards import Card, Deck
from .scoring import score


class GamePhase(Enum):
    """Phase of a round, derived from the terminal flags."""
    PLAYER_TURN = "player_turn"
    BUST = "bust"
    STAND = "stand"


@dataclass(frozen=True)
class GameState:
    """
    A Blackjack round.

    Once bust or stand is set the round is over: no further card is
    drawn for either party.
    """
    player_hand: tuple[Card, ...] = ()
    dealer_hand: tuple[Card, ...] = ()
    deck: Deck = field(default_factory=Deck)
    bust: bool = False
    stand: bool = False
    message: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.bust or self.stand

    @property
    def phase(self) -> GamePhase:
        if self.bust:
            return GamePhase.BUST
        if self.stand:
            return GamePhase.STAND
        return GamePhase.PLAYER_TURN

    @property
    def player_score(self) -> int:
        return score(self.player_hand)

    @property
    def dealer_score(self) -> int:
        return score(self.dealer_hand)

    def all_cards(self) -> list[Card]:
        """Every card of the round: hands plus remaining deck."""
        return list(self.player_hand) + list(self.dealer_hand) + list(self.deck.cards)

    def _copy_with(self, **changes) -> GameState:
        return replace(self, **changes)

    def snapshot(self) -> TableSnapshot:
        """Client view; the dealer's hole cards stay hidden until the round ends."""
        if self.is_terminal:
            dealer_visible = self.dealer_hand
            dealer_score = self.dealer_score
        else:
            dealer_visible = self.dealer_hand[:1]
            dealer_score = None

        return TableSnapshot(
            player_hand=self.player_hand,
            dealer_hand=dealer_visible,
            dealer_hidden=len(self.dealer_hand) - len(dealer_visible),
            player_score=self.player_score,
            dealer_score=dealer_score,
            bust=self.bust,
            stand=self.stand,
            message=self.message,
            cards_remaining=self.deck.size,
        )


@dataclass(frozen=True)
class TableSnapshot:
    """
    What a client is allowed to see of a round.

    dealer_score is None while the dealer's hand is hidden.
    """
    player_hand: tuple[Card, ...]
    dealer_hand: tuple[Card, ...]
    dealer_hidden: int
    player_score: int
    dealer_score: int | None
    bust: bool
    stand: bool
    message: str
    cards_remaining: int

    @property
    def is_terminal(self) -> bool:
        return self.bust or self.stand
