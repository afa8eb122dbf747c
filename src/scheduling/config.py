"""
Configuration for the Regular Season Schedule Generator

Centralized configuration for schedule shape, bye-week window and the
bounded retry/repair loops of week assignment.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class ByeWeekConfig:
    """Configuration for bye week scheduling"""
    start_week: int = 5           # Earliest bye week
    end_week: int = 14            # Latest bye week
    max_teams_per_week: int = 4   # Maximum teams on bye each week

    @property
    def weeks(self) -> List[int]:
        return list(range(self.start_week, self.end_week + 1))

    def validate(self, total_weeks: int = 18, team_count: int = 32) -> bool:
        """Validate bye week configuration"""
        if self.start_week < 1 or self.end_week > total_weeks:
            return False
        if self.start_week > self.end_week:
            return False
        if self.max_teams_per_week < 1:
            return False

        # Capacity for every team to get a bye
        max_capacity = len(self.weeks) * self.max_teams_per_week
        return max_capacity >= team_count

    def to_dict(self) -> Dict[str, int]:
        return {
            'start_week': self.start_week,
            'end_week': self.end_week,
            'max_teams_per_week': self.max_teams_per_week,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ByeWeekConfig':
        return cls(
            start_week=data.get('start_week', 5),
            end_week=data.get('end_week', 14),
            max_teams_per_week=data.get('max_teams_per_week', 4),
        )


@dataclass
class ScheduleConfig:
    """Complete configuration for regular season schedule generation"""

    # Rotation anchor: the season in which every rotation index is zero
    base_year: int = 2025
    total_weeks: int = 18
    games_per_team: int = 17

    bye_week: ByeWeekConfig = field(default_factory=ByeWeekConfig)

    # Search bounds
    max_generation_attempts: int = 10   # Full matchup + week assignment retries
    placement_attempts: int = 20        # Greedy placement retries per generation attempt
    max_repair_steps: int = 5000        # Eviction steps per placement attempt

    # Soft constraints
    prefer_divisional_final_week: bool = True
    consecutive_fix_passes: int = 5

    def validate(self, team_count: int = 32) -> Tuple[bool, List[str]]:
        """Validate entire configuration"""
        errors = []

        if self.total_weeks < 1:
            errors.append(f"Invalid total weeks: {self.total_weeks}")

        if self.games_per_team != self.total_weeks - 1:
            errors.append(
                f"Each team needs exactly one bye: {self.games_per_team} games "
                f"in {self.total_weeks} weeks"
            )

        if team_count % 2 != 0:
            errors.append(f"Odd number of teams cannot be scheduled: {team_count}")

        if not self.bye_week.validate(self.total_weeks, team_count):
            errors.append("Invalid bye week configuration")

        if self.max_generation_attempts < 1 or self.placement_attempts < 1:
            errors.append("Need at least one generation and placement attempt")

        if self.max_repair_steps < 0:
            errors.append(f"Invalid repair step limit: {self.max_repair_steps}")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_year': self.base_year,
            'total_weeks': self.total_weeks,
            'games_per_team': self.games_per_team,
            'bye_week': self.bye_week.to_dict(),
            'search': {
                'max_generation_attempts': self.max_generation_attempts,
                'placement_attempts': self.placement_attempts,
                'max_repair_steps': self.max_repair_steps,
            },
            'soft_constraints': {
                'prefer_divisional_final_week': self.prefer_divisional_final_week,
                'consecutive_fix_passes': self.consecutive_fix_passes,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleConfig':
        config = cls(
            base_year=data.get('base_year', 2025),
            total_weeks=data.get('total_weeks', 18),
            games_per_team=data.get('games_per_team', 17),
        )

        if 'bye_week' in data:
            config.bye_week = ByeWeekConfig.from_dict(data['bye_week'])

        if 'search' in data:
            search = data['search']
            config.max_generation_attempts = search.get('max_generation_attempts', 10)
            config.placement_attempts = search.get('placement_attempts', 20)
            config.max_repair_steps = search.get('max_repair_steps', 5000)

        if 'soft_constraints' in data:
            soft = data['soft_constraints']
            config.prefer_divisional_final_week = soft.get('prefer_divisional_final_week', True)
            config.consecutive_fix_passes = soft.get('consecutive_fix_passes', 5)

        return config

    def to_json(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, filepath: str) -> 'ScheduleConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))


# Global default configuration
DEFAULT_CONFIG = ScheduleConfig()
