"""
Hitstand CLI - Command-line interface.

Usage:
    hitstand serve [--host HOST] [--port PORT]   Run the web server
    hitstand play [--seed N]                     Play a round in the terminal
"""

import argparse
import logging
import random
import sys

from .config import Settings


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hitstand - Blackjack sessions over HTTP",
        prog="hitstand",
    )
    parser.add_argument("--log-level", help="Logging level (default: $HITSTAND_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a round in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "play":
        cmd_play(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings):
    """Run the FastAPI app under uvicorn."""
    import uvicorn
    from .api.app import create_app

    app = create_app(settings=settings)
    print(f"Server running on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)


def cmd_play(args, settings, input_fn=input):
    """Play one round against the dealer."""
    from .api.service import APIService
    from .api.models import ErrorResponse
    from .session import SessionRegistry

    registry = SessionRegistry(
        ttl=settings.session_ttl,
        reply_timeout=settings.reply_timeout,
        rng=random.Random(args.seed) if args.seed is not None else None,
    )
    service = APIService(session_manager=registry)

    state = service.create_session()
    while not isinstance(state, ErrorResponse):
        _print_table(state)
        if state.is_terminal:
            break

        try:
            choice = input_fn("(h)it or (s)tand? ").strip().lower()
        except EOFError:
            print()
            break
        if choice.startswith("h"):
            state = service.hit(state.session_id)
        elif choice.startswith("s"):
            state = service.stand(state.session_id)

    if isinstance(state, ErrorResponse):
        print(f"Error: {state.error} ({state.error_code})")
        registry.close_all()
        sys.exit(1)

    registry.close_all()


def _print_table(state):
    dealer = ", ".join(c.name for c in state.dealer.cards)
    if state.dealer.hidden_cards:
        dealer += " + ???"
        print(f"Dealer: {dealer}")
    else:
        print(f"Dealer: {dealer} ({state.dealer.score})")
    player = ", ".join(c.name for c in state.player.cards)
    print(f"You:    {player} ({state.player.score})")
    if state.message:
        print(state.message)


if __name__ == "__main__":
    main()
