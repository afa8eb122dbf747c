"""
Season Constants

Centralized constants for the season cycle to eliminate magic numbers.

Usage:
    from season.season_constants import SeasonConstants

    if games_played >= SeasonConstants.REGULAR_SEASON_GAME_COUNT:
        # Regular season is over
"""

from playoff_system import PlayoffRound


class SeasonConstants:
    """
    Season simulation constants.
    """

    # ==================== Game Counts ====================

    REGULAR_SEASON_WEEKS = 18
    """Number of regular season weeks"""

    REGULAR_SEASON_GAMES_PER_TEAM = 17
    """Games per team in regular season"""

    REGULAR_SEASON_GAME_COUNT = 272
    """Total regular season games (32 teams x 17 games / 2 teams per game)"""

    PLAYOFF_GAME_COUNT = 13
    """
    Total playoff games:
    - Wild Card Round: 6 games (3 AFC + 3 NFC)
    - Divisional Round: 4 games (2 AFC + 2 NFC)
    - Conference Championships: 2 games (1 AFC + 1 NFC)
    - Super Bowl: 1 game
    """

    # ==================== Playoff Weeks ====================

    PLAYOFF_ROUND_WEEKS = {
        PlayoffRound.WILD_CARD: 1,
        PlayoffRound.DIVISIONAL: 2,
        PlayoffRound.CONFERENCE: 3,
        PlayoffRound.SUPER_BOWL: 1,
    }
    """
    Week of each round inside its phase. The first three rounds belong to
    PLAYOFFS (week 4 is the off week before the Super Bowl); the Super Bowl
    is week 1 of the SUPER_BOWL phase.
    """

    # ==================== Safety Limits ====================

    MAX_WEEKS_PER_SIMULATION = 100
    """Upper bound on weeks advanced by simulate_season() before giving up"""


class SeasonEventTypes:
    """Event names delivered to season listeners."""
    PHASE_CHANGED = "phase_changed"
    SCHEDULE_GENERATED = "schedule_generated"
    GAME_COMPLETED = "game_completed"
    ROUND_GENERATED = "round_generated"
    SEASON_COMPLETED = "season_completed"
