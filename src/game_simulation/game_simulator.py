"""
Game Simulator

Resolves a scheduled game into a full box score without simulating plays.

The simulator is pure: it reads rosters, consumes the random stream in a
fixed order and returns a GameResult. Applying the result to records,
player stats and injuries is the caller's job.
"""

import logging
import random
from typing import Dict, Mapping, Optional

from league import Game, TeamRoster

from .game_result import GameResult, PlayerGameStats
from .game_summary import GameSummaryBuilder
from .injury_system import InjuryResolver, InjurySystem
from .player_stats_generator import PlayerStatsGenerator
from .score_generator import ScoreGenerator
from .simulation_exceptions import MissingRosterException
from .team_power import TeamPowerCalculator
from .team_stats_generator import TeamStatsGenerator


class GameSimulator:
    """
    Statistical game engine.

    Random draws happen in this order: score, quarters, team stats, offense
    (home, away), defense (home, away), special teams (home, away),
    injuries, narrative. Power and player of the game draw nothing.

    Usage:
        simulator = GameSimulator()
        result = simulator.simulate_game(game, league.rosters(), random.Random(42))
    """

    def __init__(
        self,
        injury_system: Optional[InjuryResolver] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.injury_system = injury_system or InjurySystem()
        self.power_calculator = TeamPowerCalculator()
        self.score_generator = ScoreGenerator()
        self.team_stats_generator = TeamStatsGenerator()
        self.player_stats_generator = PlayerStatsGenerator()

    def simulate_game(
        self,
        game: Game,
        rosters: Mapping[int, TeamRoster],
        rng: random.Random
    ) -> GameResult:
        """
        Simulate one game.

        Args:
            game: Scheduled game (not modified)
            rosters: team_id -> roster; must contain both teams
            rng: Random stream

        Returns:
            GameResult with scores, stats, injuries and summary

        Raises:
            MissingRosterException: If either team has no roster
        """
        home = self._roster(rosters, game, game.home_team_id)
        away = self._roster(rosters, game, game.away_team_id)

        home_power = self.power_calculator.calculate(home)
        away_power = self.power_calculator.calculate(away)

        home_score, away_score = self.score_generator.generate_score(
            home_power, away_power, game.is_playoff, rng
        )
        home_quarters = self.score_generator.split_into_quarters(home_score, rng)
        away_quarters = self.score_generator.split_into_quarters(away_score, rng)

        home_stats, away_stats = self.team_stats_generator.generate(
            home.team_id, away.team_id, home_score, away_score, home_power, away_power, rng
        )

        player_stats: Dict[str, PlayerGameStats] = {}
        generator = self.player_stats_generator
        generator.generate_offense(home, home_stats, player_stats, rng)
        generator.generate_offense(away, away_stats, player_stats, rng)
        generator.generate_defense(home, away_stats, player_stats, rng)
        generator.generate_defense(away, home_stats, player_stats, rng)
        generator.generate_special_teams(home, home_score, player_stats, rng)
        generator.generate_special_teams(away, away_score, player_stats, rng)

        injuries = self.injury_system.process_game_injuries(home.starters(), away.starters(), rng)

        players = dict(home.players)
        players.update(away.players)
        summary = GameSummaryBuilder(players)
        potg_id, potg_line = summary.player_of_the_game(
            player_stats, home.team, away.team, home_score, away_score
        )
        key_plays = summary.key_plays(player_stats, home.team, away.team, home_score, away_score, rng)

        self.logger.debug(
            f"{game.game_id}: {away.team.abbreviation} {away_score} @ "
            f"{home.team.abbreviation} {home_score} "
            f"(power {away_power:.1f} vs {home_power:.1f}, {len(injuries)} injuries)"
        )

        return GameResult(
            game_id=game.game_id,
            home_team_id=home.team_id,
            away_team_id=away.team_id,
            home_score=home_score,
            away_score=away_score,
            home_quarter_scores=home_quarters,
            away_quarter_scores=away_quarters,
            home_team_stats=home_stats,
            away_team_stats=away_stats,
            player_stats=player_stats,
            injuries=injuries,
            player_of_the_game_id=potg_id,
            player_of_the_game_line=potg_line,
            key_plays=key_plays,
            is_playoff=game.is_playoff,
        )

    def _roster(self, rosters: Mapping[int, TeamRoster], game: Game, team_id: int) -> TeamRoster:
        roster = rosters.get(team_id)
        if roster is None:
            self.logger.error(f"Cannot simulate {game.game_id}: no roster for team {team_id}")
            raise MissingRosterException(game.game_id, team_id)
        return roster
