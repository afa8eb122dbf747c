"""
Team Stats Generator

Derives plausible team box-score totals from the final score and team power.
"""

import logging
import random
from typing import Optional, Tuple

from .game_result import TeamGameStats
from .score_generator import decompose_score
from .simulation_constants import (
    CLOSE_GAME_MARGIN,
    GAME_SECONDS,
    LOW_TURNOVER_POWER,
    MAX_TURNOVERS,
    MIN_TOTAL_YARDS,
    PASS_RATIO_CLOSE,
    PASS_RATIO_LOSING,
    PASS_RATIO_WINNING,
    POSSESSION_LOSING_BASE,
    POSSESSION_NOISE,
    POSSESSION_WINNING_BASE,
    YARDS_NOISE,
    YARDS_PER_POINT,
)


class TeamStatsGenerator:
    """Generates TeamGameStats for both sides of a game."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def generate(
        self,
        home_team_id: int,
        away_team_id: int,
        home_score: int,
        away_score: int,
        home_power: float,
        away_power: float,
        rng: random.Random
    ) -> Tuple[TeamGameStats, TeamGameStats]:
        """
        Generate home then away team stats.

        The home side counts as winning on a tie. Away time of possession
        is whatever the home side did not use.
        """
        home_winning = home_score >= away_score
        margin = abs(home_score - away_score)

        home = self._generate_side(home_team_id, home_score, margin, home_power, home_winning, rng)
        home.time_of_possession_seconds = (
            (POSSESSION_WINNING_BASE if home_winning else POSSESSION_LOSING_BASE)
            + rng.randrange(POSSESSION_NOISE)
        )

        away = self._generate_side(away_team_id, away_score, margin, away_power, not home_winning, rng)
        away.time_of_possession_seconds = GAME_SECONDS - home.time_of_possession_seconds

        return home, away

    def pass_ratio(self, margin: int, is_winning: bool) -> float:
        """Share of yards gained through the air."""
        if margin <= CLOSE_GAME_MARGIN:
            return PASS_RATIO_CLOSE
        return PASS_RATIO_WINNING if is_winning else PASS_RATIO_LOSING

    # ========== Helper Methods ==========

    def _generate_side(
        self,
        team_id: int,
        score: int,
        margin: int,
        power: float,
        is_winning: bool,
        rng: random.Random
    ) -> TeamGameStats:
        total_yards = max(MIN_TOTAL_YARDS, score * YARDS_PER_POINT + rng.randint(-YARDS_NOISE, YARDS_NOISE))
        passing_yards = int(total_yards * self.pass_ratio(margin, is_winning))
        rushing_yards = total_yards - passing_yards

        turnovers = rng.randrange(MAX_TURNOVERS + 1)
        if power > LOW_TURNOVER_POWER:
            turnovers = max(0, turnovers - 1)

        first_downs = max(0, total_yards // 15 + rng.randint(-2, 2))

        third_down_attempts = 10 + rng.randrange(8)
        conversion_rate = 0.30 + power * 0.003 + rng.random() * 0.1
        third_down_conversions = max(1, min(third_down_attempts, int(third_down_attempts * conversion_rate)))

        penalties = 4 + rng.randrange(8)
        penalty_yards = penalties * (5 + rng.randrange(8))

        sacks = rng.randrange(5)
        sack_yards = sacks * (5 + rng.randrange(5))

        touchdowns, field_goals = decompose_score(score)

        return TeamGameStats(
            team_id=team_id,
            total_yards=total_yards,
            passing_yards=passing_yards,
            rushing_yards=rushing_yards,
            touchdowns=touchdowns,
            field_goals=field_goals,
            first_downs=first_downs,
            third_down_attempts=third_down_attempts,
            third_down_conversions=third_down_conversions,
            turnovers=turnovers,
            sacks=sacks,
            sack_yards=sack_yards,
            penalties=penalties,
            penalty_yards=penalty_yards,
        )
