"""
Season Calendar

Phase/week calendar for the league year.
"""

from .season_phase import SeasonPhase, PHASE_DURATIONS, WEEKS_PER_SEASON
from .season_calendar import SeasonCalendar, AdvanceResult, create_calendar
from .calendar_exceptions import (
    CalendarException,
    InvalidPhaseException,
    CalendarStateException,
)

__all__ = [
    'SeasonPhase',
    'PHASE_DURATIONS',
    'WEEKS_PER_SEASON',
    'SeasonCalendar',
    'AdvanceResult',
    'create_calendar',
    'CalendarException',
    'InvalidPhaseException',
    'CalendarStateException',
]
