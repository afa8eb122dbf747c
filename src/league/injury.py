"""
Injury models and enumerations.

Defines injury types, severity levels and the Injury record a player
carries while unavailable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class InjuryType(Enum):
    """All trackable injury types."""
    # Head/Neck
    CONCUSSION = "concussion"
    NECK_STRAIN = "neck_strain"

    # Upper Body
    SHOULDER_SPRAIN = "shoulder_sprain"
    ROTATOR_CUFF = "rotator_cuff"
    HAND_FRACTURE = "hand_fracture"
    PECTORAL_TEAR = "pectoral_tear"

    # Core/Torso
    RIB_CONTUSION = "rib_contusion"
    BACK_STRAIN = "back_strain"

    # Lower Body
    HIP_POINTER = "hip_pointer"
    HAMSTRING_STRAIN = "hamstring_strain"
    GROIN_STRAIN = "groin_strain"
    KNEE_SPRAIN = "knee_sprain"
    MCL_SPRAIN = "mcl_sprain"
    ACL_TEAR = "acl_tear"
    HIGH_ANKLE_SPRAIN = "high_ankle_sprain"
    ANKLE_SPRAIN = "ankle_sprain"
    ACHILLES_TEAR = "achilles_tear"
    FOOT_FRACTURE = "foot_fracture"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title().replace('Acl', 'ACL').replace('Mcl', 'MCL')


class InjurySeverity(Enum):
    """Injury severity classification."""
    MINOR = "minor"                  # 1-2 weeks
    MODERATE = "moderate"            # 3-6 weeks
    SEVERE = "severe"                # 6-16 weeks
    SEASON_ENDING = "season_ending"  # 16+ weeks, may not return

    @property
    def display_name(self) -> str:
        return self.value.replace('_', '-').title()


@dataclass
class Injury:
    """
    An active injury on a player.

    ``weeks_remaining`` counts down once per played week; the injury is
    healed when it reaches zero.
    """
    injury_type: InjuryType
    severity: InjurySeverity
    weeks_remaining: int
    total_weeks: int
    can_return: bool = True        # False for career-threatening injuries

    @property
    def is_healed(self) -> bool:
        return self.weeks_remaining <= 0

    def tick(self) -> bool:
        """
        Count down one week.

        Returns:
            True if the injury healed on this tick
        """
        if self.weeks_remaining > 0:
            self.weeks_remaining -= 1
        return self.is_healed

    @property
    def description(self) -> str:
        return (f"{self.injury_type.display_name} ({self.severity.display_name}, "
                f"{self.weeks_remaining} wk)")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "injury_type": self.injury_type.value,
            "severity": self.severity.value,
            "weeks_remaining": self.weeks_remaining,
            "total_weeks": self.total_weeks,
            "can_return": self.can_return,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Injury':
        return cls(
            injury_type=InjuryType(data["injury_type"]),
            severity=InjurySeverity(data["severity"]),
            weeks_remaining=int(data["weeks_remaining"]),
            total_weeks=int(data["total_weeks"]),
            can_return=bool(data.get("can_return", True)),
        )
