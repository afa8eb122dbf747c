"""
Player Models

Players and the subset of ratings the game engine reads. Ratings are on a
0-99 scale; anything not supplied defaults to a league-average 50.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .enums import Position
from .injury import Injury


@dataclass
class PlayerAttributes:
    """Ratings consumed by the resolver."""
    # Passing
    short_accuracy: int = 50
    medium_accuracy: int = 50
    deep_accuracy: int = 50
    # Ball carrying / receiving
    catching: int = 50
    speed: int = 50
    carrying: int = 50
    # Defense
    tackle: int = 50
    pursuit: int = 50
    hit_power: int = 50
    finesse_moves: int = 50
    power_moves: int = 50
    play_recognition: int = 50
    zone_coverage: int = 50
    man_coverage: int = 50
    # Kicking
    kick_power: int = 50
    kick_accuracy: int = 50
    # General
    injury_resistance: int = 50

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerAttributes':
        known = {k: int(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class Player:
    """A rostered player."""
    player_id: str
    first_name: str
    last_name: str
    position: Position
    overall: int
    team_id: Optional[int] = None
    attributes: PlayerAttributes = field(default_factory=PlayerAttributes)
    injury: Optional[Injury] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_injured(self) -> bool:
        """Unavailable: an injury still counting down, or one the player cannot return from."""
        if self.injury is None:
            return False
        return not self.injury.is_healed or not self.injury.can_return

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "position": self.position.value,
            "overall": self.overall,
            "team_id": self.team_id,
            "attributes": self.attributes.to_dict(),
            "injury": self.injury.to_dict() if self.injury else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        injury = data.get("injury")
        return cls(
            player_id=str(data["player_id"]),
            first_name=data["first_name"],
            last_name=data["last_name"],
            position=Position.from_string(data["position"]),
            overall=int(data["overall"]),
            team_id=data.get("team_id"),
            attributes=PlayerAttributes.from_dict(data.get("attributes", {})),
            injury=Injury.from_dict(injury) if injury else None,
        )

    def __str__(self) -> str:
        return f"{self.position.value} {self.full_name} ({self.overall})"
