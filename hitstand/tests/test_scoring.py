"""
Tests for the hand evaluator.

Tests:
- Ace demotion, any number of Aces
- Blackjack detection over every two-card hand
- Soft value agrees with score
"""

from itertools import combinations

import pytest

from ..engine_core.cards import Card, Deck
from ..engine_core.scoring import score, is_blackjack, has_soft_value, is_bust, evaluate
from .conftest import card


def hard_total(hand):
    """Sum with every Ace counted as 1."""
    return sum(1 if c.is_ace else c.points for c in hand)


class TestScore:

    @pytest.mark.parametrize("ranks, expected", [
        (["Ace", "King"], 21),
        (["Ace", "Ace"], 12),
        (["Ace", "Ace", "Ace", "Ace"], 14),
        (["Ace", "Ace", "9"], 21),
        (["Ace", "6"], 17),
        (["Ace", "6", "10"], 17),
        (["King", "Queen", "2"], 22),
        (["5", "Ace", "Ace", "King"], 17),
        ([], 0),
    ])
    def test_examples(self, ranks, expected):
        hand = [Card.of(r, s) for r, s in zip(ranks, ["spades", "hearts", "diamonds", "clubs"])]
        assert score(hand) == expected

    def test_never_over_21_when_demotion_can_avoid_it(self):
        cards = Deck.standard().cards
        for hand in combinations(cards, 3):
            if hard_total(hand) <= 21:
                assert score(hand) <= 21

    def test_each_ace_counts_once(self):
        cards = Deck.standard().cards
        for hand in combinations(cards, 3):
            total = score(hand)
            aces = sum(1 for c in hand if c.is_ace)
            # Only 1 or 11 per Ace: at most one Ace can stay high
            assert total in {hard_total(hand)} | ({hard_total(hand) + 10} if aces else set())


class TestBlackjack:

    def test_every_two_card_hand(self):
        for hand in combinations(Deck.standard().cards, 2):
            ranks = {c.rank for c in hand}
            ten_valued = any(c.points == 10 for c in hand)
            expected = "Ace" in ranks and ten_valued
            assert is_blackjack(hand) == expected

    def test_three_card_21_is_not_blackjack(self):
        hand = [card("7", "spades"), card("7", "hearts"), card("7", "clubs")]
        assert score(hand) == 21
        assert not is_blackjack(hand)


class TestSoftValue:

    def test_soft_17(self):
        assert has_soft_value([card("Ace"), card("6", "hearts")])

    def test_demoted_ace_is_hard(self):
        assert not has_soft_value([card("Ace"), card("6", "hearts"), card("10", "clubs")])

    def test_no_ace_is_hard(self):
        assert not has_soft_value([card("10"), card("7", "hearts")])

    def test_agrees_with_score(self):
        for hand in combinations(Deck.standard().cards, 3):
            total, high_aces = evaluate(hand)
            assert has_soft_value(hand) == (total == hard_total(hand) + 10)
            assert high_aces in (0, 1)

    def test_is_bust(self):
        assert is_bust([card("King"), card("Queen", "hearts"), card("2", "clubs")])
        assert not is_bust([card("Ace"), card("Ace", "hearts"), card("King", "clubs")])
