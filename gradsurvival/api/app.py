"""
FastAPI Application - REST API for the web client.

Endpoints:
    POST   /api/game                   Create a new game
    GET    /api/game/{id}              Get game state
    POST   /api/game/action            Play one turn
    DELETE /api/game/{id}              Delete (reset) a game
    GET    /api/game/{id}/summary      End screen numbers
    GET    /api/games                  List stored game ids
    GET    /api/actions                Action catalog

Turn Flow:
    1. POST /api/game returns the fresh game state
    2. POST /api/game/action with {"gameId", "action"} plays a turn
       - Response carries the new state, the event (if any) and the
         merged stat changes for this turn
    3. Once isGraduated or isGameOver is set, further actions return the
       game unchanged with empty changes

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional
import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..engine_core.errors import GameError, SessionNotFound, UnknownAction
from ..session import SessionManager, InMemorySessionStore, JsonFileSessionStore
from .service import APIService
from .schemas import (
    ActionListResponse,
    ActionResponse,
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    GameSummaryResponse,
    HealthResponse,
    PerformActionRequest,
)

# Environment configuration
GRADSURVIVAL_ENV = os.getenv("GRADSURVIVAL_ENV", "development")
GRADSURVIVAL_STORE_DIR = os.getenv("GRADSURVIVAL_STORE_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.UNKNOWN_ACTION: 400,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_service(store_dir: Optional[str] = None) -> APIService:
    """Build the service over a file store if a directory is given, else in memory."""
    store = JsonFileSessionStore(store_dir) if store_dir else InMemorySessionStore()
    return APIService(session_manager=SessionManager(store=store))


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Grad School Survival API",
        description="""
Turn-based grad school survival game.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | No game is stored under the id |
| `UNKNOWN_ACTION` | The action id is not in the catalog |
| `VALIDATION_ERROR` | The request body is malformed |
| `INTERNAL_ERROR` | Unexpected server error |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or create_service(GRADSURVIVAL_STORE_DIR)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=ERROR_STATUS[error_code],
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json", by_alias=True),
        )

    @app.exception_handler(SessionNotFound)
    async def session_not_found_handler(request: Request, exc: SessionNotFound):
        return make_error_response(
            ErrorCode.SESSION_NOT_FOUND,
            str(exc),
            details={"gameId": exc.session_id},
        )

    @app.exception_handler(UnknownAction)
    async def unknown_action_handler(request: Request, exc: UnknownAction):
        return make_error_response(
            ErrorCode.UNKNOWN_ACTION,
            str(exc),
            details={
                "action": exc.action_id,
                "validActions": api_service.session_manager.processor.rules.actions.ids,
            },
        )

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError):
        logger.error("Unhandled game error on %s: %s", request.url.path, exc)
        return make_error_response(ErrorCode.INTERNAL_ERROR, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unexpected error on %s", request.url.path)
        return make_error_response(ErrorCode.INTERNAL_ERROR, "Internal server error")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/game",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Create a new game",
    )
    async def create_game() -> GameStateResponse:
        """Create a new game with the starting stats on day 1 of semester 1."""
        return api_service.create_game()

    @app.post(
        "/api/game/action",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action"},
            404: {"model": ErrorResponse, "description": "Game not found"},
            422: {"model": ErrorResponse, "description": "Malformed request"},
        },
        tags=["Game"],
        summary="Play one turn",
    )
    async def perform_action(body: PerformActionRequest) -> ActionResponse:
        """
        Apply an action, resolve at most one random event and advance a day.

        **Request Body:**
        ```json
        {"gameId": "…", "action": "writePaper"}
        ```
        """
        return api_service.perform_action(body)

    @app.get(
        "/api/game/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> GameStateResponse:
        """Get the complete current game state."""
        return api_service.get_game(game_id)

    @app.delete(
        "/api/game/{game_id}",
        response_model=EndSessionResponse,
        tags=["Game"],
        summary="Delete a game",
    )
    async def end_game(game_id: str) -> EndSessionResponse:
        """Delete a game so the player can start over."""
        return api_service.end_game(game_id)

    @app.get(
        "/api/game/{game_id}/summary",
        response_model=GameSummaryResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get end screen numbers",
    )
    async def get_summary(
        game_id: str,
        recent: int = Query(5, ge=0, le=50, description="How many recent events to include"),
    ) -> GameSummaryResponse:
        """Outcome, loss message, tallies, stat levels and recent events."""
        return api_service.get_summary(game_id, recent=recent)

    @app.get(
        "/api/games",
        tags=["Game"],
        summary="List stored games",
    )
    async def list_games() -> dict:
        """List stored game ids."""
        games = api_service.list_games()
        return {"games": games, "count": len(games)}

    @app.get(
        "/api/actions",
        response_model=ActionListResponse,
        tags=["Catalog"],
        summary="List actions",
    )
    async def list_actions() -> ActionListResponse:
        """The action catalog in display order."""
        return api_service.list_actions()

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="gradsurvival",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Grad School Survival API",
            "version": __version__,
            "environment": GRADSURVIVAL_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn gradsurvival.api.app:app
app = create_app()
