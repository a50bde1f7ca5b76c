"""
Reducer - Applies actions to a round.

The reducer is the single point of state change.
All transitions go through deal() and apply_action().

Design principles:
- Pure function: (state, action) -> new_state, the input is never touched
- Total: Hit or Stand on a finished round is an ignored no-op
- Draw failures (DeckExhausted) propagate before any new state exists,
  so a failed action leaves the previous state as it was
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .action import Action, ActionType, ActionResult
from .cards import Deck
from .dealer import play_dealer
from .scoring import score, is_blackjack, is_bust
from .state import GameState

logger = logging.getLogger("hitstand.engine_core.reducer")


MSG_BLACKJACK = "Blackjack! You win!"
MSG_BUST = "Bust! You lose!"
MSG_DEALER_BUST = "Dealer busts! You win!"
MSG_WIN = "You win!"
MSG_PUSH = "Push!"
MSG_LOSE = "You lose!"


def deal(deck: Deck) -> GameState:
    """
    Start a round: player, dealer, player, dealer.

    A natural blackjack ends the round at once.
    """
    p1, deck = deck.draw()
    d1, deck = deck.draw()
    p2, deck = deck.draw()
    d2, deck = deck.draw()

    state = GameState(player_hand=(p1, p2), dealer_hand=(d1, d2), deck=deck)

    if is_blackjack(state.player_hand):
        message = MSG_PUSH if is_blackjack(state.dealer_hand) else MSG_BLACKJACK
        state = state._copy_with(stand=True, message=message)

    return state


def settle(player_hand, dealer_hand) -> str:
    """Outcome message once the dealer has finished drawing."""
    player_score = score(player_hand)
    dealer_score = score(dealer_hand)

    if is_bust(dealer_hand):
        return MSG_DEALER_BUST
    if player_score == dealer_score:
        return MSG_PUSH
    if is_blackjack(player_hand):
        return MSG_BLACKJACK
    if player_score > dealer_score:
        return MSG_WIN
    return MSG_LOSE


@dataclass
class Reducer:
    """
    Reducer applies actions to a round.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the round.

        Returns ActionResult with the new state.

        Raises:
            DeckExhausted: if a draw finds no card left
        """
        if action.action_type != ActionType.SHOW and state.is_terminal:
            logger.debug("Ignoring %s on finished round", action.action_type.value)
            return ActionResult.no_op(state, f"Round already over ({state.phase.value})")

        return self._get_handler(action.action_type)(state, action)

    def _get_handler(self, action_type: ActionType) -> Callable:
        handlers = {
            ActionType.HIT: self._handle_hit,
            ActionType.STAND: self._handle_stand,
            ActionType.SHOW: self._handle_show,
        }
        return handlers[action_type]

    def _handle_show(self, state: GameState, action: Action) -> ActionResult:
        return ActionResult.applied(state)

    def _handle_hit(self, state: GameState, action: Action) -> ActionResult:
        card, deck = state.deck.draw()
        player_hand = state.player_hand + (card,)
        new_state = state._copy_with(player_hand=player_hand, deck=deck)
        changes = [f"Player drew {card}"]

        if is_bust(player_hand):
            new_state = new_state._copy_with(bust=True, message=MSG_BUST)
            changes.append("Player bust")
        if is_blackjack(player_hand):
            new_state = new_state._copy_with(stand=True, message=MSG_BLACKJACK)

        return ActionResult.applied(new_state, changes)

    def _handle_stand(self, state: GameState, action: Action) -> ActionResult:
        dealer_hand, deck = play_dealer(state.dealer_hand, state.deck)
        drawn = len(dealer_hand) - len(state.dealer_hand)
        message = settle(state.player_hand, dealer_hand)

        new_state = state._copy_with(
            dealer_hand=dealer_hand,
            deck=deck,
            stand=True,
            message=message,
        )
        return ActionResult.applied(
            new_state,
            [f"Dealer drew {drawn} card(s)", message],
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.
    """
    return Reducer().apply(state, action)
