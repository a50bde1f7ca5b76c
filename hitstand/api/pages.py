"""
HTML pages for browser play.

While the round is on, only the dealer's first card is shown.
"""

from __future__ import annotations
from html import escape

from .models import GameStateResponse


def _cards(hand) -> str:
    return "".join(f"<p>{escape(card.name)}</p>" for card in hand.cards)


def render_table(state: GameStateResponse) -> str:
    """Render a table page for a GameStateResponse."""
    parts = ["<html><body>", "<h1>Blackjack</h1>"]
    if state.message:
        parts.append(f'<p style="color:red">{escape(state.message)}</p>')

    if state.is_terminal:
        parts.append(f"<h2>Dealer's Full Hand ({state.dealer.score})</h2>")
        parts.append(_cards(state.dealer))
    else:
        first = escape(state.dealer.cards[0].name) if state.dealer.cards else ""
        parts.append("<h2>Dealer's Hand</h2>")
        parts.append(f"<p>{first} + ???</p>")

    parts.append(f"<h2>Your Hand ({state.player.score})</h2>")
    parts.append(_cards(state.player))

    game_id = escape(state.session_id)
    if state.is_terminal:
        parts.append(f"<h3>{escape(state.message)}</h3>")
        parts.append('<a href="/new">New Game</a>')
    else:
        parts.append(f'<a href="/game/{game_id}/hit">Hit</a> ')
        parts.append(f'<a href="/game/{game_id}/stand">Stand</a>')

    parts.append("</body></html>")
    return "\n".join(parts)


def render_busy(session_id: str) -> str:
    """Page shown when the session did not answer in time."""
    game_id = escape(session_id)
    return (
        "<html><body><h1>Blackjack</h1>"
        "<p>The table is busy. Please try again.</p>"
        f'<a href="/game/{game_id}">Try again</a> '
        '<a href="/new">New Game</a>'
        "</body></html>"
    )


def render_failure(message: str) -> str:
    """Page shown when a round failed (e.g. the deck ran out)."""
    return (
        "<html><body><h1>Blackjack</h1>"
        f"<p>Something went wrong: {escape(message)}</p>"
        '<a href="/new">New Game</a>'
        "</body></html>"
    )
