"""
Team Models

The team read slice used by the season core: league placement, the current
record, the depth chart and the head coach. Contracts, cap space and the
front office live elsewhere and are not modelled here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .enums import Conference, Division, Position
from .player import Player


class OffensiveScheme(Enum):
    WEST_COAST = "west_coast"
    AIR_RAID = "air_raid"
    SPREAD = "spread"
    POWER_RUN = "power_run"


class DefensiveScheme(Enum):
    FOUR_THREE = "4-3"
    THREE_FOUR = "3-4"
    NICKEL = "nickel"
    COVER_TWO = "cover_2"


@dataclass
class Coach:
    """Head coach ratings the resolver reads."""
    name: str
    game_management: int = 65
    preferred_offense: Optional[OffensiveScheme] = None
    preferred_defense: Optional[DefensiveScheme] = None


@dataclass
class TeamRecord:
    """Win/loss record and points for one season."""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    division_rank: int = 0            # 0 until standings are finalized

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Win percentage with ties counted as half a win."""
        if self.games_played == 0:
            return 0.0
        return (self.wins + (self.ties * 0.5)) / self.games_played

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def record_string(self) -> str:
        """Record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    def record_game(self, points_scored: int, points_allowed: int) -> None:
        """Apply one final score to the record."""
        self.points_for += points_scored
        self.points_against += points_allowed
        if points_scored > points_allowed:
            self.wins += 1
        elif points_scored < points_allowed:
            self.losses += 1
        else:
            self.ties += 1

    def reset(self) -> None:
        self.wins = self.losses = self.ties = 0
        self.points_for = self.points_against = 0
        self.division_rank = 0


@dataclass
class Team:
    """
    A franchise as seen by the season core.

    ``depth_chart`` maps each position to player ids ordered by depth;
    index 0 is the starter.
    """
    team_id: int
    city: str
    nickname: str
    abbreviation: str
    conference: Conference
    division: Division
    record: TeamRecord = field(default_factory=TeamRecord)
    depth_chart: Dict[Position, List[str]] = field(default_factory=dict)
    head_coach: Optional[Coach] = None
    offensive_scheme: Optional[OffensiveScheme] = None
    defensive_scheme: Optional[DefensiveScheme] = None

    # Coaching modifier tuning
    COACHING_BASELINE = 65
    COACHING_DIVISOR = 5.0
    SCHEME_FIT_BONUS = 0.5

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.nickname}"

    @property
    def division_key(self) -> str:
        """Conference-qualified division name (e.g., "AFC North")."""
        return f"{self.conference.value} {self.division.value}"

    @property
    def coaching_modifier(self) -> float:
        """
        Power adjustment from the head coach.

        (game management - 65) / 5, plus a half point for each side of the
        ball where the coach's preferred scheme matches the team's.
        """
        coach = self.head_coach
        if coach is None:
            return 0.0

        modifier = (coach.game_management - self.COACHING_BASELINE) / self.COACHING_DIVISOR
        if coach.preferred_offense is not None and coach.preferred_offense == self.offensive_scheme:
            modifier += self.SCHEME_FIT_BONUS
        if coach.preferred_defense is not None and coach.preferred_defense == self.defensive_scheme:
            modifier += self.SCHEME_FIT_BONUS
        return modifier

    def depth_at(self, position: Position) -> List[str]:
        return self.depth_chart.get(position, [])

    def starter_ids(self) -> List[str]:
        """Depth chart starters in position order."""
        starters = []
        for position in Position:
            ids = self.depth_at(position)
            if ids:
                starters.append(ids[0])
        return starters

    def __str__(self) -> str:
        return f"{self.full_name} ({self.record.record_string})"


@dataclass
class TeamRoster:
    """A team together with the players referenced by its depth chart."""
    team: Team
    players: Dict[str, Player] = field(default_factory=dict)

    @property
    def team_id(self) -> int:
        return self.team.team_id

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def depth_players(self, position: Position) -> List[Player]:
        """Players at a position in depth order, skipping unknown ids."""
        return [self.players[pid] for pid in self.team.depth_at(position) if pid in self.players]

    def healthy_at(self, position: Position, limit: Optional[int] = None) -> List[Player]:
        """Healthy players at a position in depth order."""
        healthy = [p for p in self.depth_players(position) if not p.is_injured]
        return healthy if limit is None else healthy[:limit]

    def starter(self, position: Position) -> Optional[Player]:
        """First healthy player on the depth chart at a position."""
        healthy = self.healthy_at(position, 1)
        return healthy[0] if healthy else None

    def starters(self) -> List[Player]:
        """Listed starter at each position (injured or not)."""
        result = []
        for position in Position:
            players = self.depth_players(position)
            if players:
                result.append(players[0])
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team.team_id,
            "depth_chart": {pos.value: list(ids) for pos, ids in self.team.depth_chart.items()},
            "players": {pid: player.to_dict() for pid, player in self.players.items()},
        }
