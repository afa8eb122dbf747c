"""
Regular Season Schedule Generator

Generates a complete regular season from the league topology:
- 17 games per team across 18 weeks (272 games for 32 teams)
- Exactly one bye per team inside the bye window
- Divisional home-and-away series plus rotating division matchups

Generation is deterministic for a given random stream. Each attempt builds
matchups, assigns weeks and verifies the result; the first schedule with no
errors is returned, otherwise the attempt with the fewest errors.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from league import Game, Team

from .config import ScheduleConfig
from .matchup_builder import LeagueStructure, Matchup, MatchupBuilder
from .schedule_validator import ScheduleValidation, ScheduleValidator
from .scheduling_exceptions import InvalidLeagueStructureException
from .week_assigner import WeekAssigner


class ScheduleGenerator:
    """
    Generates regular season schedules.

    The generator holds no state between calls apart from the validation
    report of the most recent schedule (``last_validation``).
    """

    def __init__(self, config: Optional[ScheduleConfig] = None, logger: Optional[logging.Logger] = None):
        """
        Initialize schedule generator.

        Args:
            config: Schedule configuration (defaults to the 17-game season)
            logger: Optional logger for tracking generation progress
        """
        self.config = config or ScheduleConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.validator = ScheduleValidator(self.config)
        self.last_validation: Optional[ScheduleValidation] = None

    def generate_regular_season(
        self,
        teams: Sequence[Team],
        season_year: int,
        rng: random.Random,
        prior_year_division_ranks: Optional[Dict[int, int]] = None
    ) -> List[Game]:
        """
        Generate the regular season schedule.

        Args:
            teams: Every team in the league
            season_year: Season being scheduled
            rng: Random stream; consumed in a fixed order
            prior_year_division_ranks: Optional team_id -> final division rank
                from the previous season (used for same-standing games)

        Returns:
            Games ordered by week, ids ``regular_{season}_{week}_{n}``

        Raises:
            InvalidLeagueStructureException: If the league or configuration
                cannot be scheduled
        """
        structure = LeagueStructure(teams)

        is_valid, problems = self.config.validate(team_count=len(structure.team_ids))
        if not is_valid:
            self.logger.error(f"Invalid schedule configuration: {problems}")
            raise InvalidLeagueStructureException("Invalid schedule configuration", problems)

        team_map = structure.teams
        best_games: List[Game] = []
        best_validation: Optional[ScheduleValidation] = None

        for attempt in range(1, self.config.max_generation_attempts + 1):
            builder = MatchupBuilder(structure, self.config, self.logger.getChild("matchups"))
            matchups = builder.build(season_year, rng, prior_year_division_ranks)

            assigner = WeekAssigner(structure, self.config, self.logger.getChild("weeks"))
            assignment = assigner.assign(matchups, rng)

            games = self._build_games(matchups, assignment.game_weeks, season_year)
            validation = self.validator.validate(games, team_map)
            validation.warnings = builder.warnings + validation.warnings

            if best_validation is None or len(validation.errors) < len(best_validation.errors):
                best_games, best_validation = games, validation

            if validation.is_valid:
                break

            self.logger.info(
                f"Schedule attempt {attempt} for {season_year} had "
                f"{len(validation.errors)} errors, retrying"
            )

        self.last_validation = best_validation

        if best_validation.errors:
            self.logger.warning(
                f"Season {season_year} schedule has {len(best_validation.errors)} errors "
                f"after {self.config.max_generation_attempts} attempts"
            )
            for error in best_validation.errors:
                self.logger.warning(f"  {error}")

        for warning in best_validation.warnings:
            self.logger.debug(f"Schedule warning: {warning}")

        self.logger.info(
            f"Generated {len(best_games)} regular season games for {season_year} "
            f"({best_validation.summary()})"
        )
        return best_games

    def _build_games(
        self,
        matchups: List[Matchup],
        weeks: List[int],
        season_year: int
    ) -> List[Game]:
        order = sorted(range(len(matchups)), key=lambda i: (weeks[i], i))

        games: List[Game] = []
        number_in_week = 0
        previous_week = None
        for index in order:
            week = weeks[index]
            number_in_week = number_in_week + 1 if week == previous_week else 1
            previous_week = week

            matchup = matchups[index]
            games.append(Game(
                game_id=f"regular_{season_year}_{week}_{number_in_week}",
                season=season_year,
                week=week,
                home_team_id=matchup.home_team_id,
                away_team_id=matchup.away_team_id,
            ))

        return games


def generate_regular_season(
    teams: Sequence[Team],
    season_year: int,
    rng: random.Random,
    prior_year_division_ranks: Optional[Dict[int, int]] = None,
    config: Optional[ScheduleConfig] = None
) -> List[Game]:
    """Convenience wrapper around ScheduleGenerator.generate_regular_season."""
    generator = ScheduleGenerator(config)
    return generator.generate_regular_season(teams, season_year, rng, prior_year_division_ranks)
