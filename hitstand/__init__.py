"""
Hitstand - Blackjack sessions over HTTP

Each game is owned by its own worker that applies one action at a time.
The package provides:
- Blackjack rules (scoring, dealer soft-17 policy, round state machine)
- Per-session actors with bounded request/reply
- A session registry with TTL eviction
- A FastAPI app and HTML pages on top
"""

__version__ = "0.1.0"
