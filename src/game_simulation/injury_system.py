"""
Injury System

In-game injury resolution. The simulator only depends on the
``InjuryResolver`` protocol; ``InjurySystem`` is the default implementation.
"""

import logging
import random
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from league import InjurySeverity, InjuryType, Player, Position

from .game_result import GameInjuryEvent


class InjuryResolver(Protocol):
    """Protocol for the collaborator that decides who gets hurt in a game."""

    def process_game_injuries(
        self,
        home_starters: Sequence[Player],
        away_starters: Sequence[Player],
        rng: random.Random
    ) -> List[GameInjuryEvent]:
        """
        Args:
            home_starters: Listed home starters (already injured ones are skipped)
            away_starters: Listed away starters
            rng: Random stream

        Returns:
            New injuries, home players first
        """
        ...


# Per-game injury chance for a player with average injury resistance
BASE_INJURY_RATES: Dict[Position, float] = {
    Position.QB: 0.035,
    Position.HB: 0.050,
    Position.FB: 0.030,
    Position.WR: 0.035,
    Position.TE: 0.035,
    Position.LT: 0.030,
    Position.LG: 0.030,
    Position.C: 0.030,
    Position.RG: 0.030,
    Position.RT: 0.030,
    Position.EDGE: 0.035,
    Position.DT: 0.035,
    Position.MLB: 0.040,
    Position.OLB: 0.040,
    Position.CB: 0.035,
    Position.FS: 0.035,
    Position.SS: 0.035,
    Position.K: 0.005,
    Position.P: 0.005,
    Position.LS: 0.005,
}
DEFAULT_INJURY_RATE = 0.030

# (upper roll bound, severity, min weeks, max weeks)
SEVERITY_TABLE: List[Tuple[float, InjurySeverity, int, int]] = [
    (0.45, InjurySeverity.MINOR, 1, 2),
    (0.75, InjurySeverity.MODERATE, 3, 6),
    (0.92, InjurySeverity.SEVERE, 6, 16),
    (1.00, InjurySeverity.SEASON_ENDING, 16, 52),
]

INJURY_POOLS: Dict[InjurySeverity, List[InjuryType]] = {
    InjurySeverity.MINOR: [
        InjuryType.HAMSTRING_STRAIN,
        InjuryType.ANKLE_SPRAIN,
        InjuryType.HIP_POINTER,
        InjuryType.RIB_CONTUSION,
        InjuryType.NECK_STRAIN,
        InjuryType.GROIN_STRAIN,
    ],
    InjurySeverity.MODERATE: [
        InjuryType.CONCUSSION,
        InjuryType.KNEE_SPRAIN,
        InjuryType.SHOULDER_SPRAIN,
        InjuryType.HIGH_ANKLE_SPRAIN,
        InjuryType.BACK_STRAIN,
    ],
    InjurySeverity.SEVERE: [
        InjuryType.MCL_SPRAIN,
        InjuryType.HAND_FRACTURE,
        InjuryType.FOOT_FRACTURE,
        InjuryType.ROTATOR_CUFF,
    ],
    InjurySeverity.SEASON_ENDING: [
        InjuryType.ACL_TEAR,
        InjuryType.ACHILLES_TEAR,
        InjuryType.PECTORAL_TEAR,
    ],
}


class InjurySystem:
    """
    Default injury resolver.

    Each healthy starter rolls once per game against a position base rate
    scaled by injury resistance (99 roughly halves it, 1 roughly doubles it).
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def process_game_injuries(
        self,
        home_starters: Sequence[Player],
        away_starters: Sequence[Player],
        rng: random.Random
    ) -> List[GameInjuryEvent]:
        injuries = []
        for player in list(home_starters) + list(away_starters):
            if player.is_injured:
                continue
            if rng.random() < self.injury_rate(player):
                event = self.roll_injury(player, rng)
                injuries.append(event)
                self.logger.debug(
                    f"{player.full_name} ({player.position.value}) injured: "
                    f"{event.injury_type.display_name}, {event.weeks_out} wk"
                )
        return injuries

    def injury_rate(self, player: Player) -> float:
        base_rate = BASE_INJURY_RATES.get(player.position, DEFAULT_INJURY_RATE)
        resistance = 1.0 - (player.attributes.injury_resistance - 50) / 100
        return base_rate * resistance

    def roll_injury(self, player: Player, rng: random.Random) -> GameInjuryEvent:
        roll = rng.random()
        for upper, severity, min_weeks, max_weeks in SEVERITY_TABLE:
            if roll < upper:
                break

        weeks = rng.randint(min_weeks, max_weeks)
        injury_type = rng.choice(INJURY_POOLS[severity])

        return GameInjuryEvent(
            player_id=player.player_id,
            team_id=player.team_id or 0,
            injury_type=injury_type,
            severity=severity,
            weeks_out=weeks,
            can_return=severity is not InjurySeverity.SEASON_ENDING,
        )
