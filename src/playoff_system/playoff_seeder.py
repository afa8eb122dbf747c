"""
Playoff Seeder

Calculates playoff seeding from team records and completed regular season
games. Pure calculation logic with no side effects.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from league import Game, Team

from .seeding_models import ConferenceSeeding, PlayoffSeed, PlayoffSeeding


logger = logging.getLogger(__name__)


@dataclass
class _SplitRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def percentage(self) -> float:
        games = self.wins + self.losses + self.ties
        if games == 0:
            return 0.0
        return (self.wins + self.ties * 0.5) / games

    def add(self, points_for: int, points_against: int) -> None:
        if points_for > points_against:
            self.wins += 1
        elif points_for < points_against:
            self.losses += 1
        else:
            self.ties += 1

    def __str__(self) -> str:
        if self.ties:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"


@dataclass
class _Standing:
    """A team with the split records the tiebreakers read."""
    team: Team
    division: _SplitRecord
    conference: _SplitRecord

    @property
    def team_id(self) -> int:
        return self.team.team_id


class PlayoffSeeder:
    """
    Calculates playoff seeding.

    Tiebreak chain:
    1. Win percentage (ties count half)
    2. Division record (division ranking only)
    3. Conference record
    4. Point differential
    5. Points scored

    Teams still level keep their input order.

    Usage:
        seeder = PlayoffSeeder()
        seeding = seeder.determine_playoff_seeds(teams, completed_games)
        afc_seeds = seeding.afc.seeds
    """

    PLAYOFF_TEAMS_PER_CONFERENCE = 7
    WILDCARDS_PER_CONFERENCE = 3

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def determine_playoff_seeds(
        self,
        teams: Sequence[Team],
        completed_games: Sequence[Game],
        season: Optional[int] = None
    ) -> PlayoffSeeding:
        """
        Seed both conferences.

        Args:
            teams: Every team; win percentage and points come from ``team.record``
            completed_games: Regular season games; only completed, non-playoff
                games feed the division and conference records
            season: Season year for the result (defaults to the games' season)

        Returns:
            PlayoffSeeding with seeds 1-4 for division winners and 5-7 for wildcards
        """
        standings = self._build_standings(teams, completed_games)

        if season is None:
            season = completed_games[0].season if completed_games else 0

        conferences = sorted({team.conference for team in teams}, key=lambda c: c.value)
        division_standings: Dict[str, List[int]] = {}
        seedings: Dict[str, ConferenceSeeding] = {}

        for conference in conferences:
            conference_standings = [s for s in standings if s.team.conference == conference]
            seeding, divisions = self._calculate_conference_seeding(conference_standings, conference.value)
            seedings[conference.value] = seeding
            division_standings.update(divisions)

        empty = ConferenceSeeding(conference="", seeds=[])
        result = PlayoffSeeding(
            season=season,
            afc=seedings.get("AFC", empty),
            nfc=seedings.get("NFC", empty),
            division_standings=division_standings
        )

        for seeding in (result.afc, result.nfc):
            self.logger.info(
                f"{seeding.conference} seeds: "
                + ", ".join(f"#{s.seed} {s.team_id} ({s.record_string})" for s in seeding.seeds)
            )
        return result

    # ==================== Ranking ====================

    def rank_division(self, standings: List[_Standing]) -> List[_Standing]:
        """Order a division, best first."""
        return sorted(
            standings,
            key=lambda s: (
                s.team.record.win_percentage,
                s.division.percentage,
                s.conference.percentage,
                s.team.record.point_differential,
                s.team.record.points_for,
            ),
            reverse=True
        )

    def rank_across_divisions(self, standings: List[_Standing]) -> List[_Standing]:
        """Order division winners or wildcard candidates, best first."""
        return sorted(
            standings,
            key=lambda s: (
                s.team.record.win_percentage,
                s.conference.percentage,
                s.team.record.point_differential,
                s.team.record.points_for,
            ),
            reverse=True
        )

    def _calculate_conference_seeding(
        self,
        standings: List[_Standing],
        conference: str
    ) -> Tuple[ConferenceSeeding, Dict[str, List[int]]]:
        by_division: Dict[str, List[_Standing]] = defaultdict(list)
        for standing in standings:
            by_division[standing.team.division_key].append(standing)

        division_winners: List[_Standing] = []
        division_order: Dict[str, List[int]] = {}
        for key in sorted(by_division, key=lambda k: by_division[k][0].team.division.order):
            ranked = self.rank_division(by_division[key])
            division_order[key] = [s.team_id for s in ranked]
            division_winners.append(ranked[0])

        division_winners = self.rank_across_divisions(division_winners)
        winner_ids = {s.team_id for s in division_winners}

        wildcard_pool = [s for s in standings if s.team_id not in winner_ids]
        wildcard_slots = max(0, min(self.WILDCARDS_PER_CONFERENCE,
                                    self.PLAYOFF_TEAMS_PER_CONFERENCE - len(division_winners)))
        wildcards = self.rank_across_divisions(wildcard_pool)[:wildcard_slots]

        seeds = [
            self._create_playoff_seed(standing, number, conference, number <= len(division_winners))
            for number, standing in enumerate(division_winners + wildcards, start=1)
        ]

        qualified = {seed.team_id for seed in seeds}
        eliminated = [s.team_id for s in standings if s.team_id not in qualified]

        return ConferenceSeeding(conference=conference, seeds=seeds, eliminated_teams=eliminated), division_order

    # ========== Helper Methods ==========

    def _build_standings(self, teams: Sequence[Team], games: Sequence[Game]) -> List[_Standing]:
        team_map = {team.team_id: team for team in teams}
        division: Dict[int, _SplitRecord] = {team.team_id: _SplitRecord() for team in teams}
        conference: Dict[int, _SplitRecord] = {team.team_id: _SplitRecord() for team in teams}

        for game in games:
            if not game.is_completed or game.is_playoff:
                continue
            home = team_map.get(game.home_team_id)
            away = team_map.get(game.away_team_id)
            if home is None or away is None:
                continue

            if home.conference == away.conference:
                conference[home.team_id].add(game.home_score, game.away_score)
                conference[away.team_id].add(game.away_score, game.home_score)
                if home.division == away.division:
                    division[home.team_id].add(game.home_score, game.away_score)
                    division[away.team_id].add(game.away_score, game.home_score)

        return [
            _Standing(team=team, division=division[team.team_id], conference=conference[team.team_id])
            for team in teams
        ]

    def _create_playoff_seed(
        self,
        standing: _Standing,
        seed: int,
        conference: str,
        is_division_winner: bool
    ) -> PlayoffSeed:
        record = standing.team.record
        return PlayoffSeed(
            seed=seed,
            team_id=standing.team_id,
            conference=conference,
            is_division_winner=is_division_winner,
            wins=record.wins,
            losses=record.losses,
            ties=record.ties,
            points_for=record.points_for,
            points_against=record.points_against,
            division_name=standing.team.division_key,
            division_record=str(standing.division),
            conference_record=str(standing.conference),
        )
