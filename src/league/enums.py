"""
League Enumerations

Closed enumerations for league structure and roster positions.
"""

from enum import Enum
from typing import List


class _LookupMixin:
    """Case-insensitive parsing shared by the league enums."""

    @classmethod
    def from_string(cls, value: str):
        """
        Convert a string to a member (case-insensitive, value or name).

        Raises:
            ValueError: If the string doesn't match any member
        """
        normalized = value.strip().upper().replace(' ', '_').replace('-', '_')
        for member in cls:
            if member.value.upper() == normalized or member.name == normalized:
                return member
        raise ValueError(
            f"Invalid {cls.__name__}: '{value}'. "
            f"Valid values: {[m.value for m in cls]}"
        )


class Conference(_LookupMixin, Enum):
    AFC = "AFC"
    NFC = "NFC"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def other(self) -> 'Conference':
        return Conference.NFC if self is Conference.AFC else Conference.AFC


class Division(_LookupMixin, Enum):
    """Division names. Combined with a Conference they identify a division."""
    EAST = "East"
    NORTH = "North"
    SOUTH = "South"
    WEST = "West"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def order(self) -> int:
        return list(Division).index(self)


class Position(_LookupMixin, Enum):
    """Depth chart positions."""
    # Offense
    QB = "QB"
    HB = "HB"
    FB = "FB"
    WR = "WR"
    TE = "TE"
    LT = "LT"
    LG = "LG"
    C = "C"
    RG = "RG"
    RT = "RT"
    # Defense
    EDGE = "EDGE"
    DT = "DT"
    MLB = "MLB"
    OLB = "OLB"
    CB = "CB"
    FS = "FS"
    SS = "SS"
    # Special teams
    K = "K"
    P = "P"
    LS = "LS"

    @property
    def display_name(self) -> str:
        return _POSITION_NAMES[self]

    @property
    def is_offense(self) -> bool:
        return self in OFFENSIVE_POSITIONS

    @property
    def is_defense(self) -> bool:
        return self in DEFENSIVE_POSITIONS

    @property
    def is_special_teams(self) -> bool:
        return self in SPECIAL_TEAMS_POSITIONS

    @property
    def is_offensive_line(self) -> bool:
        return self in OFFENSIVE_LINE_POSITIONS


_POSITION_NAMES = {
    Position.QB: "Quarterback",
    Position.HB: "Halfback",
    Position.FB: "Fullback",
    Position.WR: "Wide Receiver",
    Position.TE: "Tight End",
    Position.LT: "Left Tackle",
    Position.LG: "Left Guard",
    Position.C: "Center",
    Position.RG: "Right Guard",
    Position.RT: "Right Tackle",
    Position.EDGE: "Edge Rusher",
    Position.DT: "Defensive Tackle",
    Position.MLB: "Middle Linebacker",
    Position.OLB: "Outside Linebacker",
    Position.CB: "Cornerback",
    Position.FS: "Free Safety",
    Position.SS: "Strong Safety",
    Position.K: "Kicker",
    Position.P: "Punter",
    Position.LS: "Long Snapper",
}

OFFENSIVE_LINE_POSITIONS: List[Position] = [
    Position.LT, Position.LG, Position.C, Position.RG, Position.RT,
]

OFFENSIVE_POSITIONS: List[Position] = [
    Position.QB, Position.HB, Position.FB, Position.WR, Position.TE,
] + OFFENSIVE_LINE_POSITIONS

DEFENSIVE_POSITIONS: List[Position] = [
    Position.EDGE, Position.DT, Position.MLB, Position.OLB,
    Position.CB, Position.FS, Position.SS,
]

SPECIAL_TEAMS_POSITIONS: List[Position] = [Position.K, Position.P, Position.LS]
