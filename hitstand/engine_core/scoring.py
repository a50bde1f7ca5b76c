"""
Hand Evaluator - Scoring rules shared by player and dealer.

Every Ace starts at 11. While the total is over 21, one Ace still
counted high is demoted to 1. A hand is soft when an Ace survives that
loop at 11. score() and has_soft_value() read the same evaluation so the
two can never disagree.
"""

from __future__ import annotations
from typing import Iterable

from .cards import Card


BLACKJACK = 21


def evaluate(hand: Iterable[Card]) -> tuple[int, int]:
    """
    Return (best total, number of Aces still counted as 11).
    """
    total = 0
    high_aces = 0
    for card in hand:
        total += card.points
        if card.is_ace:
            high_aces += 1

    while total > BLACKJACK and high_aces > 0:
        total -= 10
        high_aces -= 1

    return total, high_aces


def score(hand: Iterable[Card]) -> int:
    """Best score of a hand."""
    return evaluate(hand)[0]


def has_soft_value(hand: Iterable[Card]) -> bool:
    """True if at least one Ace is still counted as 11."""
    return evaluate(hand)[1] > 0


def is_blackjack(hand) -> bool:
    """Two-card 21."""
    return len(hand) == 2 and score(hand) == BLACKJACK


def is_bust(hand: Iterable[Card]) -> bool:
    return score(hand) > BLACKJACK
