"""
FastAPI Application - JSON API and browser pages.

Endpoints:
    POST   /api/v1/sessions             Deal a new round
    GET    /api/v1/sessions             List active sessions
    GET    /api/v1/sessions/{id}        Get table state
    POST   /api/v1/sessions/{id}/hit    Take a card
    POST   /api/v1/sessions/{id}/stand  Stand, dealer plays
    DELETE /api/v1/sessions/{id}        End session

Browser:
    GET /                     Redirect to /new
    GET /new                  Deal and show the table
    GET /game/{id}            Show the table
    GET /game/{id}/hit        Hit and show the table
    GET /game/{id}/stand      Stand and show the table

Unknown or expired games redirect to /new. A session that does not answer
within the reply timeout yields 504 and a "try again" response.
"""

from contextlib import asynccontextmanager
from typing import Optional, Union
import logging

from ..config import Settings

logger = logging.getLogger("hitstand.api.app")

VERSION = "1.0.0"

# Error code -> HTTP status
ERROR_STATUS = {
    "INVALID_SESSION_ID": 400,
    "VALIDATION_ERROR": 400,
    "SESSION_NOT_FOUND": 404,
    "SESSION_TIMEOUT": 504,
    "DECK_EXHAUSTED": 500,
    "INTERNAL_ERROR": 500,
}


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse, HTMLResponse, RedirectResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .models import ErrorResponse as ServiceError
    from .pages import render_table, render_busy, render_failure
    from .schemas import (
        GameStateResponse,
        HandInfo,
        CardInfo,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorCode,
    )
    from ..session import SessionRegistry, SessionReaper

    settings = settings or Settings.from_env()

    if service is None:
        service = APIService(
            session_manager=SessionRegistry(
                ttl=settings.session_ttl,
                reply_timeout=settings.reply_timeout,
            )
        )
    api_service = service
    reaper = SessionReaper(api_service.session_manager, interval=settings.eviction_interval)

    @asynccontextmanager
    async def lifespan(app):
        reaper.start()
        logger.info(
            "Session reaper started (ttl=%ss, interval=%ss)",
            settings.session_ttl, settings.eviction_interval,
        )
        try:
            yield
        finally:
            reaper.stop()
            api_service.session_manager.close_all()

    app = FastAPI(
        title="Hitstand Blackjack API",
        description="""
Single-player Blackjack. Each session is an independent round processed
one action at a time.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_SESSION_ID` | Session ID is malformed |
| `SESSION_NOT_FOUND` | Session does not exist, finished, or expired |
| `SESSION_TIMEOUT` | Session did not answer in time, retry |
| `DECK_EXHAUSTED` | The round ran out of cards |
        """,
        version=VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = api_service
    app.state.reaper = reaper

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ServiceError) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 500),
            content=ErrorResponse(
                error=error.error,
                error_code=ErrorCode(error.error_code),
                details=error.details,
            ).model_dump(mode="json"),
        )

    def respond(result) -> Union[GameStateResponse, JSONResponse]:
        if isinstance(result, ServiceError):
            return make_error_response(result)
        return _convert_game_state(result)

    # =========================================================================
    # Session Endpoints
    # =========================================================================
    # Plain def handlers run in the threadpool while they wait on a session.

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        tags=["Sessions"],
        summary="Deal a new round",
    )
    def create_session() -> Union[GameStateResponse, JSONResponse]:
        """
        Shuffle a fresh deck and deal two cards each.

        A natural blackjack finishes the round immediately.
        """
        return respond(api_service.create_session())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            504: {"model": ErrorResponse},
        },
        tags=["Sessions"],
        summary="Get table state",
    )
    def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game_state(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release its worker."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    action_responses = {
        400: {"model": ErrorResponse, "description": "Malformed session ID"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        500: {"model": ErrorResponse, "description": "Deck exhausted"},
        504: {"model": ErrorResponse, "description": "Session busy, try again"},
    }

    @app.post(
        "/api/v1/sessions/{session_id}/hit",
        response_model=GameStateResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Take a card",
    )
    def hit(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Draw one card. Ignored if the round is already over."""
        return respond(api_service.hit(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/stand",
        response_model=GameStateResponse,
        responses=action_responses,
        tags=["Game"],
        summary="Stand",
    )
    def stand(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Dealer draws to hard 17 (hits soft 17) and the round is settled."""
        return respond(api_service.stand(session_id))

    # =========================================================================
    # Browser Pages
    # =========================================================================

    def render(result, session_id: str):
        if not isinstance(result, ServiceError):
            return HTMLResponse(render_table(result))
        if result.error_code == "INVALID_SESSION_ID":
            return HTMLResponse("Invalid game ID", status_code=400)
        if result.error_code == "SESSION_NOT_FOUND":
            return RedirectResponse("/new", status_code=303)
        if result.error_code == "SESSION_TIMEOUT":
            return HTMLResponse(render_busy(session_id), status_code=504)
        return HTMLResponse(render_failure(result.error), status_code=500)

    @app.get("/", include_in_schema=False)
    def index():
        return RedirectResponse("/new", status_code=303)

    @app.get("/new", include_in_schema=False)
    def new_game():
        result = api_service.create_session()
        if isinstance(result, ServiceError) or result.is_terminal:
            return render(result, "")
        return RedirectResponse(f"/game/{result.session_id}", status_code=303)

    @app.get("/game/{session_id}", include_in_schema=False)
    def show_game(session_id: str):
        return render(api_service.get_game_state(session_id), session_id)

    @app.get("/game/{session_id}/hit", include_in_schema=False)
    def hit_page(session_id: str):
        return render(api_service.hit(session_id), session_id)

    @app.get("/game/{session_id}/stand", include_in_schema=False)
    def stand_page(session_id: str):
        return render(api_service.stand(session_id), session_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="hitstand",
            version=VERSION,
            active_sessions=len(api_service.session_manager),
        )

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _convert_hand(hand) -> HandInfo:
        return HandInfo(
            cards=[
                CardInfo(
                    card_id=c.card_id,
                    rank=c.rank,
                    suit=c.suit,
                    name=c.name,
                    points=c.points,
                )
                for c in hand.cards
            ],
            score=hand.score,
            hidden_cards=hand.hidden_cards,
        )

    def _convert_game_state(response) -> GameStateResponse:
        """Convert service GameStateResponse to Pydantic model."""
        return GameStateResponse(
            session_id=response.session_id,
            status=response.status.value,
            player=_convert_hand(response.player),
            dealer=_convert_hand(response.dealer),
            is_terminal=response.is_terminal,
            message=response.message,
            cards_remaining=response.cards_remaining,
        )

    return app


# For running directly: uvicorn hitstand.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
