"""
League Models

Teams, players, records and games shared by the calendar, scheduler,
playoff system and game engine.
"""

from .enums import (
    Conference,
    Division,
    Position,
    OFFENSIVE_POSITIONS,
    DEFENSIVE_POSITIONS,
    SPECIAL_TEAMS_POSITIONS,
)
from .injury import Injury, InjurySeverity, InjuryType
from .player import Player, PlayerAttributes
from .team import Coach, DefensiveScheme, OffensiveScheme, Team, TeamRecord, TeamRoster
from .game import Game
from .league_factory import League, LeagueFactory, build_default_league, NFL_TEAMS

__all__ = [
    'Conference',
    'Division',
    'Position',
    'OFFENSIVE_POSITIONS',
    'DEFENSIVE_POSITIONS',
    'SPECIAL_TEAMS_POSITIONS',
    'Injury',
    'InjurySeverity',
    'InjuryType',
    'Player',
    'PlayerAttributes',
    'Coach',
    'DefensiveScheme',
    'OffensiveScheme',
    'Team',
    'TeamRecord',
    'TeamRoster',
    'Game',
    'League',
    'LeagueFactory',
    'build_default_league',
    'NFL_TEAMS',
]
