"""
Game Simulation

Statistical game engine: team power, score and quarter lines, team and
player box scores, injuries and a short game summary.
"""

from .game_result import GameResult, TeamGameStats, PlayerGameStats, GameInjuryEvent
from .game_simulator import GameSimulator
from .team_power import TeamPowerCalculator
from .score_generator import ScoreGenerator, decompose_score
from .team_stats_generator import TeamStatsGenerator
from .player_stats_generator import PlayerStatsGenerator, allocate
from .game_summary import GameSummaryBuilder
from .injury_system import InjuryResolver, InjurySystem
from .simulation_exceptions import SimulationException, MissingRosterException

__all__ = [
    'GameResult',
    'TeamGameStats',
    'PlayerGameStats',
    'GameInjuryEvent',
    'GameSimulator',
    'TeamPowerCalculator',
    'ScoreGenerator',
    'decompose_score',
    'TeamStatsGenerator',
    'PlayerStatsGenerator',
    'allocate',
    'GameSummaryBuilder',
    'InjuryResolver',
    'InjurySystem',
    'SimulationException',
    'MissingRosterException',
]
