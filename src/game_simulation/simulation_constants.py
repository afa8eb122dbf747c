"""
Simulation Constants

Tunable numbers for the statistical game engine. Kept in one module so
balance changes never touch the generators themselves.
"""

from typing import Dict, List

from league import Position


# ==================== Team Power ====================

# Contribution of each position's starter to team power. Sums to 1.0.
POSITION_WEIGHTS: Dict[Position, float] = {
    Position.QB: 0.18,
    Position.EDGE: 0.09,
    Position.CB: 0.08,
    Position.WR: 0.08,
    Position.LT: 0.07,
    Position.DT: 0.06,
    Position.HB: 0.06,
    Position.RT: 0.05,
    Position.TE: 0.04,
    Position.FS: 0.04,
    Position.SS: 0.04,
    Position.MLB: 0.04,
    Position.LG: 0.03,
    Position.RG: 0.03,
    Position.C: 0.03,
    Position.OLB: 0.03,
    Position.K: 0.02,
    Position.P: 0.015,
    Position.FB: 0.01,
    Position.LS: 0.005,
}

BACKUP_EFFECTIVENESS = 0.85      # Backup playing for an injured starter
FLOOR_RATING = 40                # Nobody healthy at the position
DEPTH_WEIGHT = 0.05              # Weight of the depth bonus
DEPTH_DEFAULT_RATING = 50.0      # Depth bonus when no team has 2nd/3rd stringers
DEPTH_SLOTS = (1, 2)             # Depth chart indices averaged for the bonus

# ==================== Score Model ====================

HOME_FIELD_ADVANTAGE = 3.0
BASE_POINTS = 17.0
POINTS_PER_POWER = 0.25
POWER_BASELINE = 50.0
MIN_EXPECTED_POINTS = 10.0
MAX_EXPECTED_POINTS = 42.0
SCORE_STDDEV = 7.0

TOUCHDOWN_POINTS = 7
FIELD_GOAL_POINTS = 3
ODD_POINTS_CHANCE = 10           # 1-in-N chance of a 1 or 2 point adjustment

PLAYOFF_HOME_TIEBREAK = 0.55

# ==================== Quarter Split ====================

QUARTER_WEIGHTS: List[float] = [0.20, 0.30, 0.20, 0.30]
QUARTER_NOISE = 6.0              # Uniform noise width, centered on zero
QUARTER_SCORE_TABLE: List[int] = [0, 3, 6, 7, 10, 13, 14, 17, 20, 21, 24, 27, 28]

# ==================== Team Stats ====================

YARDS_PER_POINT = 13
YARDS_NOISE = 40
MIN_TOTAL_YARDS = 150

CLOSE_GAME_MARGIN = 3
PASS_RATIO_CLOSE = 0.60
PASS_RATIO_WINNING = 0.55
PASS_RATIO_LOSING = 0.65

MAX_TURNOVERS = 3
LOW_TURNOVER_POWER = 75

GAME_SECONDS = 3600
POSSESSION_WINNING_BASE = 1800
POSSESSION_LOSING_BASE = 1600
POSSESSION_NOISE = 200

# ==================== Player Stats ====================

COMPLETION_MIN = 0.50
COMPLETION_MAX = 0.80
COMPLETION_NOISE = 0.05

SCRAMBLE_SHARE_MIN = 0.05
SCRAMBLE_SHARE_SPREAD = 0.08
HB1_SHARE_MIN = 0.65
HB1_SHARE_SPREAD = 0.10

HB_TARGET_SHARE = 0.12
TE_TARGET_SHARE = 0.15

# Share of wide receiver targets by depth slot, keyed by receiver count
WR_TARGET_SHARES: Dict[int, List[float]] = {
    1: [1.0],
    2: [0.58, 0.42],
    3: [0.38, 0.33, 0.29],
    4: [0.30, 0.26, 0.23, 0.21],
}
MAX_WIDE_RECEIVERS = 4

CATCH_RATES: Dict[Position, float] = {
    Position.WR: 0.64,
    Position.TE: 0.70,
    Position.HB: 0.78,
}
YARDS_PER_CATCH: Dict[Position, float] = {
    Position.WR: 13.0,
    Position.TE: 10.5,
    Position.HB: 7.5,
}

FUMBLE_ON_HB_CHANCE = 0.6

# Who takes handoffs when no halfback is healthy and there is no quarterback
EMERGENCY_CARRIER_POSITIONS = (Position.FB, Position.WR, Position.TE)

# Position factors for tackle power
TACKLE_FACTORS: Dict[Position, float] = {
    Position.MLB: 1.5,
    Position.OLB: 1.2,
    Position.SS: 1.1,
    Position.EDGE: 0.9,
    Position.CB: 0.8,
    Position.FS: 1.0,
    Position.DT: 0.7,
}
DEFENDERS_PER_POSITION = 2
TEAM_TACKLE_RANGE = (40, 64)
SOLO_SHARE_MIN = 0.55
SOLO_SHARE_SPREAD = 0.20

PASS_RUSH_POSITIONS = (Position.EDGE, Position.DT, Position.OLB)
COVERAGE_POSITIONS = (Position.CB, Position.FS, Position.SS)
INTERCEPTION_WALK_CONTINUE = 0.5

FG_MISS_CHANCE = 0.15
PUNT_BASE = 8
PUNT_DISTANCE_RANGE = (38, 49)

# ==================== Player of the Game ====================

WINNER_MULTIPLIER = 1.2
SCRIMMAGE_THRESHOLD = 50

# ==================== Narrative ====================

MAX_KEY_PLAYS = 5
CLOSE_GAME_NARRATIVE_MARGIN = 7
