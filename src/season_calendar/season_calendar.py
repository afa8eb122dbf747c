"""
Season Calendar

Week-granular state machine for the league year. Tracks the season year,
the current phase and the week inside that phase, and advances one week or
one phase at a time. There is no terminal state: the calendar cycles
through league years indefinitely.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .calendar_exceptions import CalendarStateException, InvalidPhaseException
from .season_phase import SeasonPhase


logger = logging.getLogger(__name__)

# Listener signature: (old_phase, new_phase, season_year)
PhaseListener = Callable[[SeasonPhase, SeasonPhase, int], None]


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of a calendar advance."""
    advanced: bool
    year_changed: bool
    new_phase: SeasonPhase
    phase_changed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "advanced": self.advanced,
            "year_changed": self.year_changed,
            "new_phase": self.new_phase.value,
            "phase_changed": self.phase_changed,
        }


class SeasonCalendar:
    """
    Phase/week calendar for one league.

    Invariant: 1 <= week <= phase.duration at all times.
    """

    DEFAULT_YEAR = 2025

    def __init__(
        self,
        year: int = DEFAULT_YEAR,
        phase: SeasonPhase = SeasonPhase.POST_SEASON,
        week: int = 1
    ):
        """
        Initialize the calendar.

        Args:
            year: League year
            phase: Starting phase
            week: Week inside the starting phase (1-based)

        Raises:
            InvalidPhaseException: If week is outside the phase's duration
        """
        if not 1 <= week <= phase.duration:
            raise InvalidPhaseException(phase.value, week, phase.duration)

        self._year = year
        self._phase = phase
        self._week = week
        self._listeners: List[PhaseListener] = []

    # ==================== Properties ====================

    @property
    def year(self) -> int:
        return self._year

    @property
    def phase(self) -> SeasonPhase:
        return self._phase

    @property
    def week(self) -> int:
        """Week inside the current phase."""
        return self._week

    # ==================== Advancement ====================

    def can_advance(self) -> bool:
        """
        Whether the calendar may move forward.

        Extension point for blocking conditions (unsigned draft picks, a
        pending roster cut-down, ...). Nothing blocks advancement today.
        """
        return True

    def advance_week(self) -> AdvanceResult:
        """
        Move forward one week, rolling into the next phase when the current
        phase's weeks are used up.

        Returns:
            AdvanceResult describing the move
        """
        if not self.can_advance():
            logger.info(f"Calendar advance blocked at {self}")
            return AdvanceResult(advanced=False, year_changed=False, new_phase=self._phase)

        self._week += 1
        if self._week > self._phase.duration:
            return self.advance_to_next_phase()

        logger.debug(f"Advanced to {self}")
        return AdvanceResult(advanced=True, year_changed=False, new_phase=self._phase)

    def advance_to_next_phase(self) -> AdvanceResult:
        """
        Skip to week 1 of the next phase.

        Wrapping past the Super Bowl starts a new league year.

        Returns:
            AdvanceResult with phase_changed set
        """
        old_phase = self._phase
        year_changed = old_phase.is_last

        if year_changed:
            self._year += 1

        self._phase = old_phase.next_phase
        self._week = 1

        logger.info(
            f"Phase transition: {old_phase.display_name} -> {self._phase.display_name} "
            f"(year {self._year})"
        )
        self._notify_listeners(old_phase, self._phase)

        return AdvanceResult(
            advanced=True,
            year_changed=year_changed,
            new_phase=self._phase,
            phase_changed=True
        )

    # ==================== Queries ====================

    def get_absolute_week(self) -> int:
        """Week counter relative to the start of the league year (1..41)."""
        preceding = sum(phase.duration for phase in SeasonPhase.ordered()[:self._phase.index])
        return preceding + self._week

    def weeks_remaining_in_phase(self) -> int:
        return self._phase.duration - self._week

    def is_regular_season(self) -> bool:
        return self._phase == SeasonPhase.REGULAR_SEASON

    def is_playoffs(self) -> bool:
        """True during the playoff rounds and the Super Bowl."""
        return self._phase in (SeasonPhase.PLAYOFFS, SeasonPhase.SUPER_BOWL)

    def is_offseason(self) -> bool:
        return self._phase.is_offseason

    # ==================== Listeners ====================

    def add_listener(self, listener: PhaseListener) -> None:
        """
        Register a callback for phase changes.

        Args:
            listener: Callback(old_phase, new_phase, season_year)
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: PhaseListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self, old_phase: SeasonPhase, new_phase: SeasonPhase) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_phase, new_phase, self._year)
            except Exception:
                logger.exception(
                    f"Phase listener failed on {old_phase.value} -> {new_phase.value}"
                )
                raise

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self._year,
            "phase": self._phase.value,
            "week": self._week,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonCalendar':
        """
        Restore a calendar from ``to_dict`` output.

        Raises:
            CalendarStateException: If a key is missing
            InvalidPhaseException: If the phase is unknown or the week is out of range
        """
        missing = [key for key in ("year", "phase", "week") if key not in data]
        if missing:
            raise CalendarStateException(
                f"Calendar state is missing keys: {', '.join(missing)}",
                state_info=dict(data)
            )

        try:
            phase = SeasonPhase.from_string(str(data["phase"]))
        except ValueError as e:
            raise InvalidPhaseException(data["phase"]) from e

        return cls(year=int(data["year"]), phase=phase, week=int(data["week"]))

    def __str__(self) -> str:
        return f"{self._year} {self._phase.display_name} week {self._week}"

    def __repr__(self) -> str:
        return (f"SeasonCalendar(year={self._year}, phase={self._phase.value}, "
                f"week={self._week})")


def create_calendar(year: Optional[int] = None) -> SeasonCalendar:
    """Calendar at the start of a league year."""
    return SeasonCalendar(year=year if year is not None else SeasonCalendar.DEFAULT_YEAR)
