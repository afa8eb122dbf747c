"""
Season Management

Drives a league through the calendar: schedule generation, weekly game
simulation, playoff progression and the Super Bowl.
"""

from .season_controller import SeasonController, SeasonEvent, SeasonListener
from .season_constants import SeasonConstants, SeasonEventTypes
from .season_exceptions import (
    SeasonException,
    SeasonInitializationException,
    InvalidSeasonStateException,
)

__all__ = [
    'SeasonController',
    'SeasonEvent',
    'SeasonListener',
    'SeasonConstants',
    'SeasonEventTypes',
    'SeasonException',
    'SeasonInitializationException',
    'InvalidSeasonStateException',
]
