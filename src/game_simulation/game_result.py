"""
Game Result Classes

Output of one simulated game: score lines, team stats, per-player stat
lines, injuries and the game summary. Nothing here touches league state;
the season controller applies a result to teams and players.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from league import Injury, InjurySeverity, InjuryType


@dataclass
class TeamGameStats:
    """
    Team-level statistics for one side of a game.

    ``sacks`` and ``sack_yards`` are sacks TAKEN by this offense.
    """
    team_id: int

    # === Offense ===
    total_yards: int = 0
    passing_yards: int = 0
    rushing_yards: int = 0
    touchdowns: int = 0
    field_goals: int = 0

    # === Situational ===
    first_downs: int = 0
    third_down_attempts: int = 0
    third_down_conversions: int = 0
    time_of_possession_seconds: int = 0

    # === Turnovers / Sacks taken ===
    turnovers: int = 0
    sacks: int = 0
    sack_yards: int = 0

    # === Penalties ===
    penalties: int = 0
    penalty_yards: int = 0

    @property
    def third_down_percentage(self) -> float:
        if self.third_down_attempts == 0:
            return 0.0
        return self.third_down_conversions / self.third_down_attempts

    @property
    def time_of_possession_display(self) -> str:
        minutes, seconds = divmod(self.time_of_possession_seconds, 60)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PlayerGameStats:
    """
    One player's stat line for a game (or a season, once accumulated).

    Only the fields relevant to the player's role are non-zero.
    """
    player_id: str
    team_id: int = 0

    # Passing
    completions: int = 0
    attempts: int = 0
    passing_yards: int = 0
    passing_tds: int = 0
    interceptions: int = 0
    sacked: int = 0

    # Rushing
    rush_attempts: int = 0
    rushing_yards: int = 0
    rushing_tds: int = 0
    fumbles: int = 0
    fumbles_lost: int = 0

    # Receiving
    targets: int = 0
    receptions: int = 0
    receiving_yards: int = 0
    receiving_tds: int = 0

    # Defense
    total_tackles: int = 0
    solo_tackles: int = 0
    sacks: float = 0.0
    tackles_for_loss: int = 0
    qb_hits: int = 0
    forced_fumbles: int = 0
    interceptions_def: int = 0
    passes_defended: int = 0
    defensive_tds: int = 0

    # Kicking
    fg_made: int = 0
    fg_attempted: int = 0
    xp_made: int = 0
    xp_attempted: int = 0

    # Punting
    punts: int = 0
    punt_yards: int = 0

    # Season accumulation
    games_played: int = 0

    _IDENTITY_FIELDS = ('player_id', 'team_id')

    @property
    def scrimmage_yards(self) -> int:
        return self.rushing_yards + self.receiving_yards

    @property
    def total_tds(self) -> int:
        return self.rushing_tds + self.receiving_tds

    def accumulate(self, other: 'PlayerGameStats') -> None:
        """
        Add another stat line into this one (season totals).

        Raises:
            ValueError: If the lines belong to different players
        """
        if other.player_id != self.player_id:
            raise ValueError(f"Cannot add stats of {other.player_id} to {self.player_id}")
        for stat_field in fields(self):
            if stat_field.name in self._IDENTITY_FIELDS:
                continue
            setattr(self, stat_field.name,
                    getattr(self, stat_field.name) + getattr(other, stat_field.name))
        self.team_id = other.team_id or self.team_id

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GameInjuryEvent:
    """An injury suffered during a game, before it is applied to the player."""
    player_id: str
    team_id: int
    injury_type: InjuryType
    severity: InjurySeverity
    weeks_out: int
    can_return: bool = True

    def to_injury(self) -> Injury:
        return Injury(
            injury_type=self.injury_type,
            severity=self.severity,
            weeks_remaining=self.weeks_out,
            total_weeks=self.weeks_out,
            can_return=self.can_return,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'team_id': self.team_id,
            'injury_type': self.injury_type.value,
            'severity': self.severity.value,
            'weeks_out': self.weeks_out,
            'can_return': self.can_return,
        }


@dataclass
class GameResult:
    """Complete result of one simulated game."""
    game_id: str
    home_team_id: int
    away_team_id: int
    home_score: int
    away_score: int
    home_quarter_scores: List[int] = field(default_factory=list)
    away_quarter_scores: List[int] = field(default_factory=list)
    home_team_stats: Optional[TeamGameStats] = None
    away_team_stats: Optional[TeamGameStats] = None
    player_stats: Dict[str, PlayerGameStats] = field(default_factory=dict)
    injuries: List[GameInjuryEvent] = field(default_factory=list)
    player_of_the_game_id: Optional[str] = None
    player_of_the_game_line: Optional[str] = None
    key_plays: List[str] = field(default_factory=list)
    is_playoff: bool = False

    @property
    def winner_id(self) -> Optional[int]:
        if self.home_score == self.away_score:
            return None
        return self.home_team_id if self.home_score > self.away_score else self.away_team_id

    @property
    def margin(self) -> int:
        return abs(self.home_score - self.away_score)

    def stats_for_team(self, team_id: int) -> List[PlayerGameStats]:
        return [line for line in self.player_stats.values() if line.team_id == team_id]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence and comparison."""
        return {
            'game_id': self.game_id,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'home_quarter_scores': list(self.home_quarter_scores),
            'away_quarter_scores': list(self.away_quarter_scores),
            'home_team_stats': self.home_team_stats.to_dict() if self.home_team_stats else None,
            'away_team_stats': self.away_team_stats.to_dict() if self.away_team_stats else None,
            'player_stats': {pid: line.to_dict() for pid, line in self.player_stats.items()},
            'injuries': [injury.to_dict() for injury in self.injuries],
            'player_of_the_game_id': self.player_of_the_game_id,
            'player_of_the_game_line': self.player_of_the_game_line,
            'key_plays': list(self.key_plays),
            'is_playoff': self.is_playoff,
        }
