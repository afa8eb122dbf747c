"""
Playoff errors.

    PlayoffException
    ├── InvalidRoundException      (PLAYOFF_ROUND_001)
    ├── InvalidSeedingException    (PLAYOFF_SEED_002)
    └── InvalidBracketException    (PLAYOFF_BRACKET_003)

Too few surviving seeds is not an error here: round generation returns
an empty game list and logs a warning, and the caller decides.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ExceptionSeverity(Enum):
    CRITICAL = "critical"  # seeding unusable, reseed from standings
    ERROR = "error"
    WARNING = "warning"


class RecoveryStrategy(Enum):
    ABORT = "abort"
    RETRY = "retry"
    RESET = "reset"


class PlayoffException(Exception):
    """
    Base class for playoff errors.

    Subclasses fix error_code, severity and recovery_strategy at class
    level; context holds whatever identifies the bad round, seed or game.
    """

    error_code = "PLAYOFF_000"
    severity = ExceptionSeverity.ERROR
    recovery_strategy = RecoveryStrategy.ABORT

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context_dict = {k: v for k, v in context.items() if v is not None}
        details = ", ".join(f"{k}={v}" for k, v in self.context_dict.items())
        super().__init__(f"[{self.error_code}] {message}" + (f" ({details})" if details else ""))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
        }


class InvalidRoundException(PlayoffException):
    """Round name is not one of wild_card, divisional, conference, super_bowl."""

    error_code = "PLAYOFF_ROUND_001"

    def __init__(self, round_name: Any, valid_rounds: Optional[List[str]] = None):
        super().__init__(f"Invalid playoff round: '{round_name}'",
                         invalid_round=str(round_name), valid_rounds=valid_rounds)


class InvalidSeedingException(PlayoffException):
    """Seed list holds a team or seed number twice, or a team from the other conference."""

    error_code = "PLAYOFF_SEED_002"
    severity = ExceptionSeverity.CRITICAL
    recovery_strategy = RecoveryStrategy.RESET

    def __init__(self, message: str, conference: Optional[str] = None,
                 seed_number: Optional[int] = None, team_id: Optional[int] = None):
        super().__init__(message, conference=conference, seed_number=seed_number, team_id=team_id)


class InvalidBracketException(PlayoffException):
    """Generated round has the wrong game count or mis-tagged games."""

    error_code = "PLAYOFF_BRACKET_003"
    recovery_strategy = RecoveryStrategy.RETRY

    def __init__(self, message: str, round_name: Optional[str] = None, game_count: Optional[int] = None):
        super().__init__(message, round=round_name, game_count=game_count)
