"""
Season Phase

The ten ordered phases of a league year and their fixed lengths in weeks.
The order is cyclic: after the Super Bowl the next league year starts again
at the post season.
"""

from enum import Enum
from typing import Dict, List


class SeasonPhase(Enum):
    """League-year phases in calendar order."""
    POST_SEASON = "post_season"
    COMBINE_SCOUTING = "combine_scouting"
    FREE_AGENCY = "free_agency"
    PRE_DRAFT = "pre_draft"
    DRAFT = "draft"
    POST_DRAFT = "post_draft"
    PRESEASON = "preseason"
    REGULAR_SEASON = "regular_season"
    PLAYOFFS = "playoffs"
    SUPER_BOWL = "super_bowl"

    @classmethod
    def from_string(cls, value: str) -> 'SeasonPhase':
        """
        Convert string to enum (case-insensitive).

        Accepts the stored value ('regular_season'), the member name
        ('REGULAR_SEASON') or the display name ('Regular Season').

        Args:
            value: String representation of the phase

        Returns:
            SeasonPhase enum member

        Raises:
            ValueError: If the string doesn't match any phase
        """
        try:
            return cls(value.lower())
        except ValueError:
            pass

        for phase in cls:
            if phase.display_name.lower() == value.strip().lower():
                return phase

        normalized = value.upper().replace(' ', '_').replace('-', '_')
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(
                f"Invalid season phase: '{value}'. "
                f"Valid values: {[p.value for p in cls]}"
            )

    @classmethod
    def ordered(cls) -> List['SeasonPhase']:
        """All phases in calendar order."""
        return list(cls)

    @property
    def display_name(self) -> str:
        """Human-readable name (e.g., "Post-Draft / OTAs")."""
        return _DISPLAY_NAMES[self]

    @property
    def duration(self) -> int:
        """Length of the phase in weeks."""
        return PHASE_DURATIONS[self]

    @property
    def index(self) -> int:
        """Zero-based position in the league year."""
        return _ORDER.index(self)

    @property
    def next_phase(self) -> 'SeasonPhase':
        """Following phase, wrapping from SUPER_BOWL back to POST_SEASON."""
        return _ORDER[(self.index + 1) % len(_ORDER)]

    @property
    def is_last(self) -> bool:
        return self.index == len(_ORDER) - 1

    @property
    def is_offseason(self) -> bool:
        """True for the six phases between the Super Bowl and preseason."""
        return self.index < SeasonPhase.PRESEASON.index

    @property
    def is_game_phase(self) -> bool:
        """True for phases in which games are played."""
        return self in (SeasonPhase.REGULAR_SEASON, SeasonPhase.PLAYOFFS, SeasonPhase.SUPER_BOWL)


PHASE_DURATIONS: Dict[SeasonPhase, int] = {
    SeasonPhase.POST_SEASON: 2,
    SeasonPhase.COMBINE_SCOUTING: 2,
    SeasonPhase.FREE_AGENCY: 4,
    SeasonPhase.PRE_DRAFT: 2,
    SeasonPhase.DRAFT: 1,
    SeasonPhase.POST_DRAFT: 3,
    SeasonPhase.PRESEASON: 4,
    SeasonPhase.REGULAR_SEASON: 18,
    SeasonPhase.PLAYOFFS: 4,
    SeasonPhase.SUPER_BOWL: 1,
}

_DISPLAY_NAMES: Dict[SeasonPhase, str] = {
    SeasonPhase.POST_SEASON: "Post Season",
    SeasonPhase.COMBINE_SCOUTING: "Combine & Scouting",
    SeasonPhase.FREE_AGENCY: "Free Agency",
    SeasonPhase.PRE_DRAFT: "Pre-Draft",
    SeasonPhase.DRAFT: "NFL Draft",
    SeasonPhase.POST_DRAFT: "Post-Draft / OTAs",
    SeasonPhase.PRESEASON: "Preseason",
    SeasonPhase.REGULAR_SEASON: "Regular Season",
    SeasonPhase.PLAYOFFS: "Playoffs",
    SeasonPhase.SUPER_BOWL: "Super Bowl",
}

_ORDER: List[SeasonPhase] = list(SeasonPhase)

WEEKS_PER_SEASON = sum(PHASE_DURATIONS.values())
