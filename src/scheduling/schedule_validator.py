"""
Schedule Validator

Checks a generated regular season against the hard constraints (errors)
and the soft preferences (warnings).
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from league import Game, Team

from .config import ScheduleConfig


logger = logging.getLogger(__name__)


@dataclass
class ScheduleValidation:
    """Outcome of schedule verification."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    team_game_counts: Dict[int, int] = field(default_factory=dict)
    bye_weeks: Dict[int, List[int]] = field(default_factory=dict)   # team_id -> weeks without a game

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        return f"{len(self.errors)} errors, {len(self.warnings)} warnings"


class ScheduleValidator:
    """Verifies regular season schedules."""

    def __init__(self, config: Optional[ScheduleConfig] = None):
        self.config = config or ScheduleConfig()

    def validate(self, games: Sequence[Game], teams: Mapping[int, Team]) -> ScheduleValidation:
        """
        Validate a schedule.

        Errors:
            - a team with two games in the same week
            - a team without exactly ``games_per_team`` games
            - a team without exactly one bye, or a bye outside the window
            - a divisional pair that does not meet once at each venue

        Warnings:
            - a non-divisional game in the final week
            - the same two teams meeting in consecutive weeks
        """
        result = ScheduleValidation()
        weeks_by_team: Dict[int, List[int]] = defaultdict(list)
        opponent_by_week: Dict[int, Dict[int, int]] = defaultdict(dict)

        for game in games:
            for team_id in (game.home_team_id, game.away_team_id):
                weeks_by_team[team_id].append(game.week)
                opponent_by_week[team_id][game.week] = game.opponent_of(team_id)

        all_weeks = set(range(1, self.config.total_weeks + 1))
        window = set(self.config.bye_week.weeks)

        for team_id in sorted(teams):
            team_weeks = weeks_by_team.get(team_id, [])
            result.team_game_counts[team_id] = len(team_weeks)

            duplicates = sorted(week for week, n in Counter(team_weeks).items() if n > 1)
            for week in duplicates:
                result.errors.append(f"Team {team_id} has multiple games in week {week}")

            if len(team_weeks) != self.config.games_per_team:
                result.errors.append(
                    f"Team {team_id} has {len(team_weeks)} games "
                    f"(expected {self.config.games_per_team})"
                )

            out_of_range = sorted(week for week in set(team_weeks) if week not in all_weeks)
            for week in out_of_range:
                result.errors.append(f"Team {team_id} has a game in invalid week {week}")

            byes = sorted(all_weeks - set(team_weeks))
            result.bye_weeks[team_id] = byes
            if len(byes) != 1:
                result.errors.append(f"Team {team_id} has {len(byes)} bye weeks (expected 1)")
            for week in byes:
                if week not in window:
                    result.errors.append(
                        f"Team {team_id} bye in week {week} is outside weeks "
                        f"{self.config.bye_week.start_week}-{self.config.bye_week.end_week}"
                    )

        self._check_divisional_series(games, teams, result)
        self._check_final_week(games, teams, result)
        self._check_back_to_back(opponent_by_week, result)

        return result

    # ========== Helper Methods ==========

    def _check_divisional_series(
        self,
        games: Sequence[Game],
        teams: Mapping[int, Team],
        result: ScheduleValidation
    ) -> None:
        venues: Counter = Counter(
            (g.home_team_id, g.away_team_id) for g in games if g.is_divisional(teams)
        )
        team_ids = sorted(teams)
        for i, team_a in enumerate(team_ids):
            for team_b in team_ids[i + 1:]:
                a, b = teams[team_a], teams[team_b]
                if a.conference != b.conference or a.division != b.division:
                    continue
                if venues[(team_a, team_b)] != 1 or venues[(team_b, team_a)] != 1:
                    result.errors.append(
                        f"Division rivals {team_a} and {team_b} meet "
                        f"{venues[(team_a, team_b)]}x at {team_a} and "
                        f"{venues[(team_b, team_a)]}x at {team_b} (expected 1 each)"
                    )

    def _check_final_week(
        self,
        games: Sequence[Game],
        teams: Mapping[int, Team],
        result: ScheduleValidation
    ) -> None:
        final_week = self.config.total_weeks
        for game in games:
            if game.week == final_week and not game.is_divisional(teams):
                result.warnings.append(
                    f"Week {final_week} non-divisional game: "
                    f"{game.away_team_id} @ {game.home_team_id}"
                )

    def _check_back_to_back(
        self,
        opponent_by_week: Dict[int, Dict[int, int]],
        result: ScheduleValidation
    ) -> None:
        reported: Set[tuple] = set()
        for team_id in sorted(opponent_by_week):
            weekly = opponent_by_week[team_id]
            for week in sorted(weekly):
                opponent = weekly[week]
                if weekly.get(week + 1) != opponent:
                    continue
                key = (min(team_id, opponent), max(team_id, opponent), week)
                if key in reported:
                    continue
                reported.add(key)
                result.warnings.append(
                    f"Teams {key[0]} and {key[1]} meet in consecutive weeks {week} and {week + 1}"
                )
