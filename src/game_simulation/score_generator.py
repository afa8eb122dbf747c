"""
Score Generator

Turns two team power ratings into a final score and a quarter-by-quarter
line. Every final score is a combination of touchdowns (7) and field
goals (3) plus an occasional 1 or 2 point adjustment (missed extra point,
two-point conversion or safety).
"""

import logging
import math
import random
from typing import List, Optional, Tuple

from .simulation_constants import (
    BASE_POINTS,
    FIELD_GOAL_POINTS,
    HOME_FIELD_ADVANTAGE,
    MAX_EXPECTED_POINTS,
    MIN_EXPECTED_POINTS,
    ODD_POINTS_CHANCE,
    PLAYOFF_HOME_TIEBREAK,
    POINTS_PER_POWER,
    POWER_BASELINE,
    QUARTER_NOISE,
    QUARTER_SCORE_TABLE,
    QUARTER_WEIGHTS,
    SCORE_STDDEV,
    TOUCHDOWN_POINTS,
)


def decompose_score(score: int) -> Tuple[int, int]:
    """
    Split a score into (touchdowns, field goals), touchdowns first.

    The 1-2 leftover points of an adjusted score are ignored.
    """
    touchdowns = score // TOUCHDOWN_POINTS
    field_goals = (score - touchdowns * TOUCHDOWN_POINTS) // FIELD_GOAL_POINTS
    return touchdowns, field_goals


def gaussian(rng: random.Random) -> float:
    """Standard normal draw via Box-Muller (two uniform draws)."""
    u1 = 1.0 - rng.random()
    u2 = 1.0 - rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.sin(2.0 * math.pi * u2)


class ScoreGenerator:
    """Generates final scores and quarter splits."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def expected_points(self, power: float) -> float:
        expected = BASE_POINTS + (power - POWER_BASELINE) * POINTS_PER_POWER
        return max(MIN_EXPECTED_POINTS, min(MAX_EXPECTED_POINTS, expected))

    def generate_score(
        self,
        home_power: float,
        away_power: float,
        is_playoff: bool,
        rng: random.Random
    ) -> Tuple[int, int]:
        """
        Draw a final score.

        Args:
            home_power: Home team power (home field is added here)
            away_power: Away team power
            is_playoff: Playoff games cannot end tied
            rng: Random stream

        Returns:
            (home_score, away_score)
        """
        home_expected = self.expected_points(home_power + HOME_FIELD_ADVANTAGE)
        away_expected = self.expected_points(away_power)

        home_raw = max(0, round(home_expected + gaussian(rng) * SCORE_STDDEV))
        away_raw = max(0, round(away_expected + gaussian(rng) * SCORE_STDDEV))

        home_score = self.snap_to_score(home_raw, rng)
        away_score = self.snap_to_score(away_raw, rng)

        if is_playoff and home_score == away_score:
            # Overtime
            if rng.random() < PLAYOFF_HOME_TIEBREAK:
                home_score += FIELD_GOAL_POINTS if rng.randrange(2) == 0 else TOUCHDOWN_POINTS
            else:
                away_score += FIELD_GOAL_POINTS if rng.randrange(2) == 0 else TOUCHDOWN_POINTS
            self.logger.debug(f"Playoff tie broken in overtime: {home_score}-{away_score}")

        return home_score, away_score

    def snap_to_score(self, raw: int, rng: random.Random) -> int:
        """Reduce a raw point total to touchdowns and field goals, with an occasional odd point."""
        if raw <= 0:
            return 0

        touchdowns, field_goals = decompose_score(raw)
        score = touchdowns * TOUCHDOWN_POINTS + field_goals * FIELD_GOAL_POINTS

        if rng.randrange(ODD_POINTS_CHANCE) == 0 and score > 0:
            score += 1 if rng.randrange(2) == 0 else 2
        return score

    def split_into_quarters(self, total: int, rng: random.Random) -> List[int]:
        """
        Distribute a final score over four quarters.

        Quarters 1-3 are snapped to common quarter scores and capped by what
        is left; quarter 4 takes the remainder so the line always adds up.
        """
        quarters = []
        remaining = total

        for weight in QUARTER_WEIGHTS[:3]:
            points = max(0, round(total * weight + (rng.random() - 0.5) * QUARTER_NOISE))
            points = min(self.snap_quarter_score(points), remaining)
            quarters.append(points)
            remaining -= points

        quarters.append(remaining)
        return quarters

    @staticmethod
    def snap_quarter_score(raw: int) -> int:
        """Nearest common quarter score; the lower value wins an exact tie."""
        return min(QUARTER_SCORE_TABLE, key=lambda value: abs(raw - value))
