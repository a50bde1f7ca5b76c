"""
Pytest fixtures for hitstand tests.
"""

import pytest

from ..engine_core.cards import Card, Deck
from ..engine_core.reducer import deal
from ..engine_core.state import GameState
from ..session import SessionRegistry


def card(rank: str, suit: str = "spades") -> Card:
    return Card.of(rank, suit)


def rigged(*prefix: Card) -> Deck:
    """Full 52-card deck whose front is `prefix`, rest in value order."""
    rest = [c for c in Deck.standard().cards if c not in prefix]
    return Deck.stacked(list(prefix) + rest)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def make_card():
    """Card factory: make_card("Ace", "hearts")."""
    return card


@pytest.fixture
def rigged_deck():
    """Deck factory with a fixed front: rigged_deck(c1, c2, ...)."""
    return rigged


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock):
    """Isolated registry on a fake clock."""
    reg = SessionRegistry(ttl=60, reply_timeout=2.0, clock=clock)
    yield reg
    reg.close_all()


@pytest.fixture
def rigged_registry(clock):
    """
    Registry whose every deal uses the same fixed deck.

    Usage: reg = rigged_registry(card1, card2, ...)
    """
    created = []

    def factory(*prefix, short=False):
        deck = Deck.stacked(prefix) if short else rigged(*prefix)
        reg = SessionRegistry(ttl=60, reply_timeout=2.0, clock=clock, deck_factory=lambda: deck)
        created.append(reg)
        return reg

    yield factory
    for reg in created:
        reg.close_all()


@pytest.fixture
def player_turn_state() -> GameState:
    """Player 10+6 against dealer 9 + hidden 7, small cards next."""
    deck = rigged(
        card("10", "spades"), card("9", "hearts"),
        card("6", "spades"), card("7", "hearts"),
        card("2", "diamonds"), card("3", "diamonds"), card("4", "diamonds"),
    )
    return deal(deck)
