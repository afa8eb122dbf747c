"""
Game Simulation Exceptions

Only precondition failures are raised. A missing position player is
handled inside the engine with the floor rating.
"""

from typing import Any, Dict, Optional


class SimulationException(Exception):
    """Base exception for the game engine."""

    def __init__(
        self,
        message: str,
        error_code: str = "SIM_000",
        context_dict: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context_dict = context_dict or {}
        super().__init__(f"[{error_code}] {message}")


class MissingRosterException(SimulationException):
    """A game references a team that has no roster."""

    def __init__(self, game_id: str, team_id: int):
        self.game_id = game_id
        self.team_id = team_id
        super().__init__(
            f"No roster for team {team_id} in game {game_id}",
            error_code="SIM_001",
            context_dict={"game_id": game_id, "team_id": team_id}
        )
