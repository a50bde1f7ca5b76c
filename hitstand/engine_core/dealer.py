"""
Dealer Policy - Dealer hits soft 17.

The dealer draws while the score is under 17, or exactly 17 with an Ace
still counted as 11. Soft status is re-read after every card. The loop
ends on a hard 17+ or a bust; each pass consumes a card, so it always
terminates (by stopping or by DeckExhausted).
"""

from __future__ import annotations

from .cards import Card, Deck
from .scoring import score, has_soft_value


DEALER_STANDS_ON = 17


def dealer_must_draw(hand) -> bool:
    """Whether the dealer has to take another card."""
    total = score(hand)
    if total < DEALER_STANDS_ON:
        return True
    return total == DEALER_STANDS_ON and has_soft_value(hand)


def play_dealer(
    hand: tuple[Card, ...],
    deck: Deck,
) -> tuple[tuple[Card, ...], Deck]:
    """
    Draw for the dealer until the stopping rule is met.

    Returns the final dealer hand and the remaining deck.

    Raises:
        DeckExhausted: if the deck runs out before the dealer stops
    """
    while dealer_must_draw(hand):
        card, deck = deck.draw()
        hand = hand + (card,)
    return hand, deck
