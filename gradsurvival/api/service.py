"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session manager calls
2. Formats engine values as response schemas

Errors from the engine (UnknownAction, SessionNotFound) propagate to the
caller, which maps them to HTTP responses.

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.action import TurnResult
from ..engine_core.state import GameEvent, GameSession
from ..engine_core.summary import recent_events, stat_levels, summarize
from ..session import SessionManager
from .schemas import (
    ActionInfo,
    ActionListResponse,
    ActionResponse,
    EndSessionResponse,
    GameEventInfo,
    GameStateResponse,
    GameSummaryResponse,
    PerformActionRequest,
)


@dataclass
class APIService:
    """
    Main API service for the web client.

    Usage:
        service = APIService()

        game = service.create_game()
        result = service.perform_action(
            PerformActionRequest(game_id=game.id, action="sleep")
        )
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self) -> GameStateResponse:
        """Create a new game."""
        session = self.session_manager.create_session()
        return session_to_response(session)

    def get_game(self, game_id: str) -> GameStateResponse:
        """
        Get game state.

        Raises SessionNotFound.
        """
        return session_to_response(self.session_manager.get_session(game_id))

    def perform_action(self, request: PerformActionRequest) -> ActionResponse:
        """
        Play one turn.

        Raises SessionNotFound or UnknownAction.
        """
        result = self.session_manager.perform_action(request.game_id, request.action)
        return turn_result_to_response(result)

    def end_game(self, game_id: str) -> EndSessionResponse:
        """Delete a game."""
        success = self.session_manager.end_session(game_id)
        return EndSessionResponse(success=success, game_id=game_id)

    def get_summary(self, game_id: str, recent: int = 5) -> GameSummaryResponse:
        """
        Get end screen numbers for a game.

        Raises SessionNotFound.
        """
        session = self.session_manager.get_session(game_id)
        summary = summarize(session)
        return GameSummaryResponse(
            game_id=session.session_id,
            outcome=summary.outcome.value,
            reason=summary.reason.value if summary.reason else None,
            message=summary.message,
            semester=summary.semester,
            total_days=summary.total_days,
            coffee=summary.coffee,
            ramen=summary.ramen,
            all_nighter=summary.all_nighter,
            final_stats=summary.final_stats,
            stat_levels=stat_levels(session.stats),
            recent_events=[event_to_info(e) for e in recent_events(session, recent)],
        )

    def list_actions(self) -> ActionListResponse:
        """List the action catalog."""
        actions = [
            ActionInfo(
                id=action.id,
                name=action.name,
                description=action.description,
                effects={k.value: v for k, v in action.effects.items()},
                side_effect=action.side_effect.value if action.side_effect else None,
            )
            for action in self.session_manager.processor.rules.actions
        ]
        return ActionListResponse(actions=actions, count=len(actions))

    def list_games(self) -> list[str]:
        """List stored game IDs."""
        return self.session_manager.list_sessions()


def session_to_response(session: GameSession) -> GameStateResponse:
    """Convert a GameSession to its response schema."""
    data: dict[str, Any] = session.to_dict()
    data["status"] = session.status.value
    return GameStateResponse.model_validate(data)


def event_to_info(event: GameEvent) -> GameEventInfo:
    return GameEventInfo.model_validate(event.to_dict())


def turn_result_to_response(result: TurnResult) -> ActionResponse:
    data = result.to_dict()
    return ActionResponse(
        game_state=session_to_response(result.session),
        event=event_to_info(result.event) if result.event else None,
        changes=data["changes"],
    )
