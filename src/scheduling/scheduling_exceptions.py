"""
Scheduling Exception Classes

Raised only when a league cannot be scheduled at all. Degraded schedules
(a team short of its game count, a bye outside the window) are reported
through ScheduleValidation instead.
"""

from typing import Any, Dict, List, Optional


class SchedulingException(Exception):
    """Base exception for schedule generation errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "SCHEDULE_000",
        context_dict: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context_dict = context_dict or {}
        super().__init__(f"[{self.error_code}] {self.message}")


class InvalidLeagueStructureException(SchedulingException):
    """
    Raised when the league topology or configuration cannot produce a schedule.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = problems or []
        detail = f"{message}: {'; '.join(self.problems)}" if self.problems else message
        super().__init__(detail, "SCHEDULE_001", {"problems": self.problems})
