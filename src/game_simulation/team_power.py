"""
Team Power Calculator

Rates a team on a 0-100ish scale from its depth chart: weighted starter
ratings, injured starters replaced by backups, a small depth bonus and the
head coach's modifier.
"""

import logging
from typing import Dict, Optional

from league import Position, TeamRoster

from .simulation_constants import (
    BACKUP_EFFECTIVENESS,
    DEPTH_DEFAULT_RATING,
    DEPTH_SLOTS,
    DEPTH_WEIGHT,
    FLOOR_RATING,
    POSITION_WEIGHTS,
)


class TeamPowerCalculator:
    """
    Computes team power.

    Usage:
        calculator = TeamPowerCalculator()
        power = calculator.calculate(roster)
    """

    def __init__(
        self,
        position_weights: Optional[Dict[Position, float]] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.position_weights = position_weights or POSITION_WEIGHTS
        self.logger = logger or logging.getLogger(__name__)

    def calculate(self, roster: TeamRoster) -> float:
        """
        Args:
            roster: Team and players referenced by its depth chart

        Returns:
            Weighted power including depth bonus and coaching modifier
        """
        power = sum(
            self.position_rating(roster, position) * weight
            for position, weight in self.position_weights.items()
        )
        depth = self.depth_bonus(roster)
        coaching = roster.team.coaching_modifier
        total = power + depth * DEPTH_WEIGHT + coaching

        self.logger.debug(
            f"{roster.team.abbreviation} power {total:.2f} "
            f"(lineup {power:.2f}, depth {depth:.1f}, coaching {coaching:+.2f})"
        )
        return total

    def position_rating(self, roster: TeamRoster, position: Position) -> float:
        """Effective rating at one position before weighting."""
        depth_ids = roster.team.depth_at(position)
        if not depth_ids:
            return float(FLOOR_RATING)

        starter = roster.get_player(depth_ids[0])
        if starter is not None and not starter.is_injured:
            return float(starter.overall)

        for player_id in depth_ids[1:]:
            backup = roster.get_player(player_id)
            if backup is not None and not backup.is_injured:
                return backup.overall * BACKUP_EFFECTIVENESS

        return float(FLOOR_RATING)

    def depth_bonus(self, roster: TeamRoster) -> float:
        """Mean overall of second and third stringers across the depth chart."""
        ratings = []
        for position in Position:
            depth_ids = roster.team.depth_at(position)
            for slot in DEPTH_SLOTS:
                if slot < len(depth_ids):
                    player = roster.get_player(depth_ids[slot])
                    if player is not None:
                        ratings.append(player.overall)

        if not ratings:
            return DEPTH_DEFAULT_RATING
        return sum(ratings) / len(ratings)
