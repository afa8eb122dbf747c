"""
Calendar Exception Classes

Exception hierarchy for the season calendar. Every exception carries an
error code rendered in front of its message.
"""

from typing import Any, Dict, Optional


class CalendarException(Exception):
    """
    Base exception for all calendar-related errors.

    Provides error code support and structured error messages.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context_dict: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize calendar exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context_dict: Calendar values at the time of the error
        """
        self.message = message
        self.error_code = error_code
        self.context_dict = context_dict or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidPhaseException(CalendarException):
    """
    Raised when a phase name cannot be parsed or a week lies outside its phase.
    """

    def __init__(self, phase: Any, week: Optional[int] = None, max_week: Optional[int] = None):
        self.phase = phase
        self.week = week
        self.max_week = max_week

        if week is None:
            error_code = "UNKNOWN_PHASE"
            message = f"Unknown season phase: '{phase}'"
        else:
            error_code = "WEEK_OUT_OF_RANGE"
            message = (f"Week {week} is outside phase '{phase}' "
                       f"(valid weeks: 1-{max_week})")

        super().__init__(message, error_code, {"phase": str(phase), "week": week})


class CalendarStateException(CalendarException):
    """
    Raised when stored calendar state is inconsistent or incomplete.
    """

    def __init__(self, message: str, state_info: Optional[Dict[str, Any]] = None):
        self.state_info = state_info or {}

        full_message = message
        if self.state_info:
            details = ", ".join(f"{k}={v}" for k, v in self.state_info.items())
            full_message = f"{message} (state: {details})"

        super().__init__(full_message, "CALENDAR_STATE_ERROR", self.state_info)
