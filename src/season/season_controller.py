"""
Season Controller

Orchestrates the league year on top of the calendar: schedule generation
when the regular season starts, week-by-week game simulation, playoff
seeding and bracket progression, and the Super Bowl.

The controller owns every mutation of league state (records, injuries,
season stats). The calendar, scheduler, playoff system and game engine it
drives are pure with respect to that state, and all randomness flows from
the single ``random.Random`` the controller holds.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from game_simulation import GameResult, GameSimulator, PlayerGameStats
from league import Conference, Game, League
from playoff_system import (
    PlayoffBracket,
    PlayoffManager,
    PlayoffRound,
    PlayoffSeed,
    PlayoffSeeder,
    PlayoffSeeding,
)
from scheduling import ScheduleConfig, ScheduleGenerator
from season_calendar import SeasonCalendar, SeasonPhase

from .season_constants import SeasonConstants, SeasonEventTypes
from .season_exceptions import InvalidSeasonStateException, SeasonInitializationException


@dataclass
class SeasonEvent:
    """Notification delivered to season listeners."""
    event_type: str
    season: int
    phase: SeasonPhase
    week: int
    payload: Dict[str, Any] = field(default_factory=dict)


SeasonListener = Callable[[SeasonEvent], None]


class SeasonController:
    """
    Drives a league through its calendar.

    Usage:
        controller = SeasonController(build_default_league(), seed=42)
        summary = controller.simulate_season()
        print(summary["champion_id"])

        # Or one week at a time
        controller.advance_week()
    """

    def __init__(
        self,
        league: League,
        calendar: Optional[SeasonCalendar] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        schedule_config: Optional[ScheduleConfig] = None,
        simulator: Optional[GameSimulator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize season controller.

        Args:
            league: Teams and players; mutated as games are applied
            calendar: Starting calendar (defaults to the post-season of 2025)
            rng: Random stream for every scheduling and simulation call
            seed: Seed for a fresh stream when ``rng`` is not given
            schedule_config: Regular season scheduling configuration
            simulator: Game engine (defaults to GameSimulator with InjurySystem)
            logger: Optional logger

        Raises:
            SeasonInitializationException: If the league has no teams
        """
        self.logger = logger or logging.getLogger(__name__)

        if not league.teams:
            raise SeasonInitializationException("League has no teams", component="league")

        self.league = league
        self.calendar = calendar or SeasonCalendar()
        self.rng = rng or random.Random(seed)

        self.schedule_generator = ScheduleGenerator(schedule_config, logger=self.logger.getChild("schedule"))
        self.simulator = simulator or GameSimulator()
        self.seeder = PlayoffSeeder()
        self.playoff_manager = PlayoffManager()

        # Current season state
        self.season_year: Optional[int] = None
        self.regular_season_games: List[Game] = []
        self.seeding: Optional[PlayoffSeeding] = None
        self.brackets: Dict[PlayoffRound, PlayoffBracket] = {}
        self.surviving_seeds: Dict[str, List[PlayoffSeed]] = {}
        self.game_results: Dict[str, GameResult] = {}
        self.season_player_stats: Dict[str, PlayerGameStats] = {}
        self.champion_id: Optional[int] = None

        # Carried between seasons
        self.prior_division_ranks: Optional[Dict[int, int]] = None
        self.champions: Dict[int, int] = {}

        self._listeners: List[SeasonListener] = []

    # ==================== Listeners ====================

    def add_listener(self, listener: SeasonListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SeasonListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event_type: str, **payload: Any) -> None:
        event = SeasonEvent(
            event_type=event_type,
            season=self.season_year if self.season_year is not None else self.calendar.year,
            phase=self.calendar.phase,
            week=self.calendar.week,
            payload=payload,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                self.logger.exception(f"Season listener failed on {event_type}")
                raise

    # ==================== Advancement ====================

    def advance_week(self) -> Dict[str, Any]:
        """
        Advance the calendar one week and play that week's games.

        Returns:
            Dictionary with the new calendar position and games played
        """
        result = self.calendar.advance_week()
        if not result.advanced:
            return {
                "advanced": False,
                "year": self.calendar.year,
                "phase": self.calendar.phase.value,
                "week": self.calendar.week,
                "games_played": 0,
            }

        if result.phase_changed:
            self._on_phase_entered(result.new_phase)

        self._tick_injuries()

        games_played = 0
        if self.calendar.phase.is_game_phase:
            games_played = self._play_week()

        return {
            "advanced": True,
            "year_changed": result.year_changed,
            "phase_changed": result.phase_changed,
            "year": self.calendar.year,
            "phase": self.calendar.phase.value,
            "week": self.calendar.week,
            "games_played": games_played,
        }

    def simulate_season(self) -> Dict[str, Any]:
        """
        Advance week by week until the next Super Bowl has been played.

        Returns:
            Season summary (see get_season_summary)

        Raises:
            InvalidSeasonStateException: If no champion is crowned within the
                safety limit
        """
        self.champion_id = None
        for _ in range(SeasonConstants.MAX_WEEKS_PER_SIMULATION):
            self.advance_week()
            if self.champion_id is not None:
                return self.get_season_summary()

        raise InvalidSeasonStateException(
            f"No champion after {SeasonConstants.MAX_WEEKS_PER_SIMULATION} weeks",
            state_issue="season_did_not_complete",
            season_context=self._context()
        )

    # ==================== Phase Handling ====================

    def _on_phase_entered(self, phase: SeasonPhase) -> None:
        self.logger.info(f"Entering {phase.display_name} {self.calendar.year}")
        self._emit(SeasonEventTypes.PHASE_CHANGED, phase=phase.value)

        if phase is SeasonPhase.REGULAR_SEASON:
            self._start_regular_season()
        elif phase is SeasonPhase.PLAYOFFS:
            self._start_playoffs()
        elif phase is SeasonPhase.SUPER_BOWL:
            self._generate_round(PlayoffRound.SUPER_BOWL)

    def _start_regular_season(self) -> None:
        self.season_year = self.calendar.year
        self.seeding = None
        self.brackets = {}
        self.surviving_seeds = {}
        self.game_results = {}
        self.season_player_stats = {}
        self.champion_id = None

        for team in self.league.team_list():
            team.record.reset()

        self.regular_season_games = self.schedule_generator.generate_regular_season(
            self.league.team_list(),
            self.season_year,
            self.rng,
            prior_year_division_ranks=self.prior_division_ranks,
        )

        validation = self.schedule_generator.last_validation
        self._emit(
            SeasonEventTypes.SCHEDULE_GENERATED,
            game_count=len(self.regular_season_games),
            errors=list(validation.errors) if validation else [],
            warnings=list(validation.warnings) if validation else [],
        )

    def _start_playoffs(self) -> None:
        self.seeding = self.seeder.determine_playoff_seeds(
            self.league.team_list(), self.regular_season_games, self.season_year
        )
        self.surviving_seeds = {
            Conference.AFC.value: list(self.seeding.afc.seeds),
            Conference.NFC.value: list(self.seeding.nfc.seeds),
        }
        self._generate_round(PlayoffRound.WILD_CARD)

    def _generate_round(self, playoff_round: PlayoffRound) -> None:
        week = SeasonConstants.PLAYOFF_ROUND_WEEKS[playoff_round]
        games = self.playoff_manager.generate_playoff_round(
            self.surviving_seeds.get(Conference.AFC.value, []),
            self.surviving_seeds.get(Conference.NFC.value, []),
            playoff_round,
            self.season_year,
            week,
        )
        if not games:
            self.logger.error(f"{playoff_round.display_name} produced no games")
            raise InvalidSeasonStateException(
                f"{playoff_round.display_name} produced no games",
                state_issue="insufficient_playoff_seeds",
                season_context=self._context()
            )

        bracket = PlayoffBracket(playoff_round=playoff_round, season=self.season_year, week=week, games=games)
        bracket.validate()
        self.brackets[playoff_round] = bracket
        self._emit(
            SeasonEventTypes.ROUND_GENERATED,
            round=playoff_round.value,
            games=[game.game_id for game in games],
        )

    def _after_playoff_week(self) -> None:
        """Advance the bracket once the round scheduled this week is fully played."""
        for playoff_round, bracket in list(self.brackets.items()):
            if not bracket.is_complete or self._round_phase(playoff_round) is not self.calendar.phase:
                continue
            if bracket.week != self.calendar.week:
                continue

            if playoff_round is PlayoffRound.SUPER_BOWL:
                self._complete_season(bracket)
                return

            for conference, seeds in self.surviving_seeds.items():
                self.surviving_seeds[conference] = self.playoff_manager.filter_to_winners(seeds, bracket.games)

            next_round = playoff_round.next_round
            if next_round is not None and next_round is not PlayoffRound.SUPER_BOWL:
                self._generate_round(next_round)
            return

    def _complete_season(self, bracket: PlayoffBracket) -> None:
        champion = bracket.winners()
        if not champion:
            raise InvalidSeasonStateException(
                "Super Bowl finished without a winner",
                state_issue="no_champion",
                season_context=self._context()
            )

        self.champion_id = champion[0]
        self.champions[self.season_year] = self.champion_id

        if self.seeding is not None:
            self.prior_division_ranks = self.seeding.division_ranks()
            for team_id, rank in self.prior_division_ranks.items():
                self.league.teams[team_id].record.division_rank = rank

        champion_team = self.league.teams[self.champion_id]
        self.logger.info(f"{champion_team.full_name} win the {self.season_year} Super Bowl")
        self._emit(SeasonEventTypes.SEASON_COMPLETED, champion_id=self.champion_id)

    # ==================== Game Simulation ====================

    def _play_week(self) -> int:
        games = self.games_for_week()
        if not games:
            return 0

        rosters = self.league.rosters()
        for game in games:
            result = self.simulator.simulate_game(game, rosters, self.rng)
            self._apply_result(game, result)

        self.logger.info(
            f"{self.calendar.phase.display_name} week {self.calendar.week}: {len(games)} games played"
        )

        if self.calendar.phase in (SeasonPhase.PLAYOFFS, SeasonPhase.SUPER_BOWL):
            self._after_playoff_week()
        return len(games)

    def games_for_week(self) -> List[Game]:
        """Unplayed games of the current calendar week, in schedule order."""
        phase = self.calendar.phase
        week = self.calendar.week

        if phase is SeasonPhase.REGULAR_SEASON:
            candidates = self.regular_season_games
        else:
            candidates = [
                game
                for playoff_round, bracket in self.brackets.items()
                if self._round_phase(playoff_round) is phase
                for game in bracket.games
            ]
        return [game for game in candidates if game.week == week and not game.is_completed]

    def _apply_result(self, game: Game, result: GameResult) -> None:
        game.home_score = result.home_score
        game.away_score = result.away_score
        game.is_completed = True
        self.game_results[game.game_id] = result

        if not game.is_playoff:
            self.league.teams[game.home_team_id].record.record_game(result.home_score, result.away_score)
            self.league.teams[game.away_team_id].record.record_game(result.away_score, result.home_score)

        for player_id, line in result.player_stats.items():
            totals = self.season_player_stats.get(player_id)
            if totals is None:
                totals = PlayerGameStats(player_id=player_id, team_id=line.team_id)
                self.season_player_stats[player_id] = totals
            totals.accumulate(line)

        for event in result.injuries:
            player = self.league.players.get(event.player_id)
            if player is not None and not player.is_injured:
                player.injury = event.to_injury()

        self._emit(
            SeasonEventTypes.GAME_COMPLETED,
            game_id=game.game_id,
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            home_score=game.home_score,
            away_score=game.away_score,
        )

    def _tick_injuries(self) -> None:
        for player in self.league.players.values():
            if player.injury is None:
                continue
            healed = player.injury.tick()
            if healed and player.injury.can_return:
                self.logger.debug(f"{player.full_name} returns from {player.injury.injury_type.display_name}")
                player.injury = None

    # ==================== Queries ====================

    @property
    def playoff_games(self) -> List[Game]:
        return [game for bracket in self.brackets.values() for game in bracket.games]

    def get_season_summary(self) -> Dict[str, Any]:
        return {
            "season": self.season_year,
            "regular_season_games": len(self.regular_season_games),
            "regular_season_completed": sum(1 for g in self.regular_season_games if g.is_completed),
            "playoff_games": len(self.playoff_games),
            "champion_id": self.champion_id,
            "seeding": self.seeding.to_dict() if self.seeding else None,
        }

    def get_current_state(self) -> Dict[str, Any]:
        return {
            "calendar": self.calendar.to_dict(),
            "season": self.season_year,
            "champion_id": self.champion_id,
            "rounds": [playoff_round.value for playoff_round in self.brackets],
        }

    # ========== Helper Methods ==========

    @staticmethod
    def _round_phase(playoff_round: PlayoffRound) -> SeasonPhase:
        if playoff_round is PlayoffRound.SUPER_BOWL:
            return SeasonPhase.SUPER_BOWL
        return SeasonPhase.PLAYOFFS

    def _context(self) -> Dict[str, Any]:
        return {
            "year": self.calendar.year,
            "phase": self.calendar.phase.value,
            "week": self.calendar.week,
        }

    def __str__(self) -> str:
        return f"SeasonController({self.calendar})"
