"""
Game Model

A scheduled game. The scheduler creates games unplayed; the season
controller fills in the score once the engine has resolved it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .team import Team


@dataclass
class Game:
    """A regular-season or playoff game."""
    game_id: str
    season: int
    week: int                          # Week inside the phase the game belongs to
    home_team_id: int
    away_team_id: int
    home_score: int = 0
    away_score: int = 0
    is_completed: bool = False
    is_playoff: bool = False
    playoff_round: Optional[str] = None   # PlayoffRound value for playoff games

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: int) -> int:
        """
        Raises:
            ValueError: If the team is not in this game
        """
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise ValueError(f"Team {team_id} does not play in game {self.game_id}")

    @property
    def is_tie(self) -> bool:
        return self.is_completed and self.home_score == self.away_score

    @property
    def winner_id(self) -> Optional[int]:
        """Winning team id, or None if unplayed or tied."""
        if not self.is_completed or self.home_score == self.away_score:
            return None
        return self.home_team_id if self.home_score > self.away_score else self.away_team_id

    @property
    def loser_id(self) -> Optional[int]:
        winner = self.winner_id
        if winner is None:
            return None
        return self.opponent_of(winner)

    def points_for(self, team_id: int) -> int:
        return self.home_score if team_id == self.home_team_id else self.away_score

    def points_against(self, team_id: int) -> int:
        return self.away_score if team_id == self.home_team_id else self.home_score

    def is_divisional(self, teams: Mapping[int, Team]) -> bool:
        home, away = teams[self.home_team_id], teams[self.away_team_id]
        return home.conference == away.conference and home.division == away.division

    def is_conference(self, teams: Mapping[int, Team]) -> bool:
        return teams[self.home_team_id].conference == teams[self.away_team_id].conference

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "season": self.season,
            "week": self.week,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_completed": self.is_completed,
            "is_playoff": self.is_playoff,
            "playoff_round": self.playoff_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        return cls(
            game_id=data["game_id"],
            season=int(data["season"]),
            week=int(data["week"]),
            home_team_id=int(data["home_team_id"]),
            away_team_id=int(data["away_team_id"]),
            home_score=int(data.get("home_score", 0)),
            away_score=int(data.get("away_score", 0)),
            is_completed=bool(data.get("is_completed", False)),
            is_playoff=bool(data.get("is_playoff", False)),
            playoff_round=data.get("playoff_round"),
        )

    def __str__(self) -> str:
        if self.is_completed:
            return (f"Week {self.week}: {self.away_team_id} {self.away_score} @ "
                    f"{self.home_team_id} {self.home_score}")
        return f"Week {self.week}: {self.away_team_id} @ {self.home_team_id}"
