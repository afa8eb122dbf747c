"""
Scheduling Module

Regular season schedule generation:
- Rotation-based matchups (division, intra/inter-conference, same-standing, 17th game)
- Bye weeks and week placement for 17 games in 18 weeks
- Schedule verification
"""

from .config import ScheduleConfig, ByeWeekConfig, DEFAULT_CONFIG
from .matchup_builder import LeagueStructure, Matchup, MatchupBucket, MatchupBuilder, circle_pairings
from .week_assigner import WeekAssigner, WeekAssignment
from .schedule_validator import ScheduleValidator, ScheduleValidation
from .schedule_generator import ScheduleGenerator, generate_regular_season
from .scheduling_exceptions import SchedulingException, InvalidLeagueStructureException

__all__ = [
    'ScheduleConfig',
    'ByeWeekConfig',
    'DEFAULT_CONFIG',
    'LeagueStructure',
    'Matchup',
    'MatchupBucket',
    'MatchupBuilder',
    'circle_pairings',
    'WeekAssigner',
    'WeekAssignment',
    'ScheduleValidator',
    'ScheduleValidation',
    'ScheduleGenerator',
    'generate_regular_season',
    'SchedulingException',
    'InvalidLeagueStructureException',
]
