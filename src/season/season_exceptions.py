"""
Season orchestration errors.

    SeasonException
    ├── SeasonInitializationException   (SEASON_INIT_002)
    └── InvalidSeasonStateException     (SEASON_STATE_006)

Every error carries the calendar position it was raised at, so a failed
simulation can be reported as "2025 playoffs week 2" without the caller
keeping its own bookkeeping.
"""

from typing import Any, Dict, Optional


class SeasonException(Exception):
    """
    Base class for controller errors.

    Attributes:
        message: Human-readable error message
        error_code: Stable code for programmatic handling
        season_context: Calendar position and any extra details
        operation: Controller step that failed
        recovery_strategy: Suggested action ("abort", "reset", "rollback")
    """

    error_code = "SEASON_000"
    operation = "season"
    recovery_strategy = "abort"

    def __init__(self, message: str, season_context: Optional[Dict[str, Any]] = None,
                 operation: Optional[str] = None):
        self.message = message
        self.season_context = dict(season_context or {})
        if operation:
            self.operation = operation
        super().__init__(self._render())

    @property
    def position(self) -> Optional[str]:
        """Calendar position as "<year> <phase> week <n>", when known."""
        ctx = self.season_context
        if not all(key in ctx for key in ("year", "phase", "week")):
            return None
        return f"{ctx['year']} {ctx['phase']} week {ctx['week']}"

    def _render(self) -> str:
        text = f"[{self.error_code}] {self.message}"
        if self.position:
            text += f" at {self.position}"
        extras = {k: v for k, v in self.season_context.items()
                  if k not in ("year", "phase", "week") and v is not None}
        if extras:
            text += "\n  " + ", ".join(f"{k}={v}" for k, v in extras.items())
        return f"{text}\n  Operation: {self.operation}, recovery: {self.recovery_strategy}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "season_context": self.season_context,
            "recovery_strategy": self.recovery_strategy,
        }


class SeasonInitializationException(SeasonException):
    """The controller was handed a league or calendar it cannot run."""

    error_code = "SEASON_INIT_002"
    operation = "initialization"
    recovery_strategy = "reset"

    def __init__(self, message: str, component: Optional[str] = None,
                 season_context: Optional[Dict[str, Any]] = None):
        self.component = component
        super().__init__(message, season_context={"component": component, **(season_context or {})})


class InvalidSeasonStateException(SeasonException):
    """
    Season state stopped making sense mid-simulation.

    state_issue names the problem, e.g. "insufficient_playoff_seeds",
    "no_champion" or "season_did_not_complete".
    """

    error_code = "SEASON_STATE_006"
    operation = "state_validation"
    recovery_strategy = "rollback"

    def __init__(self, message: str, state_issue: str,
                 season_context: Optional[Dict[str, Any]] = None, operation: Optional[str] = None):
        self.state_issue = state_issue
        super().__init__(
            message,
            season_context={**(season_context or {}), "state_issue": state_issue},
            operation=operation,
        )
