"""
Cards - Card values and the per-session deck.

A card is an integer 0-51. Rank and suit are derived with modulo
arithmetic: rank = value % 13, suit = value % 4. Since 13 and 4 are
coprime, the 52 values cover the 52 rank/suit pairs exactly once.

The deck is an immutable tuple consumed front-to-back. Drawing returns
the card and a new, shorter deck.
"""

from __future__ import annotations
from dataclasses import dataclass
import random

from ..errors import DeckExhausted


RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "Jack", "Queen", "King", "Ace")
POINTS = (2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 10, 10, 11)
SUITS = ("spades", "hearts", "diamonds", "clubs")

DECK_SIZE = 52


@dataclass(frozen=True, order=True)
class Card:
    """
    A playing card, identified by its value.

    >>> str(Card(12))
    'Ace of spades'
    """
    value: int

    def __post_init__(self):
        if not 0 <= self.value < DECK_SIZE:
            raise ValueError(f"Card value out of range: {self.value}")

    @classmethod
    def of(cls, rank: str, suit: str) -> Card:
        """Build the card for a rank/suit pair, e.g. Card.of("Ace", "hearts")."""
        r = RANKS.index(rank)
        s = SUITS.index(suit)
        for value in range(DECK_SIZE):
            if value % len(RANKS) == r and value % len(SUITS) == s:
                return cls(value)
        raise ValueError(f"No card for {rank} of {suit}")  # unreachable for valid input

    @property
    def rank(self) -> str:
        return RANKS[self.value % len(RANKS)]

    @property
    def suit(self) -> str:
        return SUITS[self.value % len(SUITS)]

    @property
    def points(self) -> int:
        """Blackjack value with the Ace counted high."""
        return POINTS[self.value % len(POINTS)]

    @property
    def is_ace(self) -> bool:
        return self.rank == "Ace"

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"


@dataclass(frozen=True)
class Deck:
    """
    Remaining cards of one session, front card drawn first.

    Usage:
        deck = Deck.shuffled()
        card, deck = deck.draw()
    """
    cards: tuple[Card, ...] = ()

    @classmethod
    def standard(cls) -> Deck:
        """All 52 cards in value order."""
        return cls(cards=tuple(Card(v) for v in range(DECK_SIZE)))

    @classmethod
    def shuffled(cls, rng: random.Random | None = None) -> Deck:
        cards = list(cls.standard().cards)
        (rng or random).shuffle(cards)
        return cls(cards=tuple(cards))

    @classmethod
    def stacked(cls, cards) -> Deck:
        """Deck with a fixed order, for rigged rounds and tests."""
        return cls(cards=tuple(cards))

    @property
    def size(self) -> int:
        return len(self.cards)

    def draw(self) -> tuple[Card, Deck]:
        """Take the front card."""
        if not self.cards:
            raise DeckExhausted("Deck is exhausted")
        return self.cards[0], Deck(cards=self.cards[1:])

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
