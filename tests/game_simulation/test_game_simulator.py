"""
Integration Tests for GameSimulator

Simulates games between generated teams and checks that the box score is
internally consistent: quarter lines, yard allocation, touchdowns,
turnovers and the defensive credits that mirror the opposing offense.
"""

import random

import pytest

from league import Game, Injury, InjurySeverity, InjuryType, Position
from game_simulation import GameSimulator, MissingRosterException


SEEDS = [1, 7, 42, 99, 2025]


def _sum(lines, attribute):
    return sum(getattr(line, attribute) for line in lines)


def _injure_all(roster, position):
    for player in roster.depth_players(position):
        player.injury = Injury(InjuryType.CONCUSSION, InjurySeverity.MODERATE, 3, 3)


class TestGameSimulator:
    """End-to-end checks on simulated results."""

    @pytest.fixture
    def simulator(self):
        return GameSimulator()

    @pytest.fixture
    def game(self):
        return Game("regular_2025_1_1", 2025, 1, home_team_id=1, away_team_id=2)

    @pytest.fixture
    def rosters(self, league):
        return league.rosters()

    # ==================== Determinism ====================

    def test_same_seed_same_result(self, simulator, game, rosters):
        first = simulator.simulate_game(game, rosters, random.Random(11))
        second = simulator.simulate_game(game, rosters, random.Random(11))

        assert first.to_dict() == second.to_dict()

    def test_game_not_modified(self, simulator, game, rosters, rng):
        simulator.simulate_game(game, rosters, rng)

        assert not game.is_completed
        assert game.home_score == 0 and game.away_score == 0

    # ==================== Scores ====================

    @pytest.mark.parametrize("seed", SEEDS)
    def test_quarters_add_up(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        assert len(result.home_quarter_scores) == 4
        assert sum(result.home_quarter_scores) == result.home_score
        assert sum(result.away_quarter_scores) == result.away_score
        assert min(result.home_quarter_scores + result.away_quarter_scores) >= 0

    def test_playoff_game_never_tied(self, simulator, rosters):
        game = Game("playoff_2025_wild_card_1", 2025, 1, 1, 2, is_playoff=True, playoff_round="wild_card")

        for seed in range(60):
            result = simulator.simulate_game(game, rosters, random.Random(seed))
            assert result.home_score != result.away_score
            assert result.is_playoff

    # ==================== Team / Player Consistency ====================

    @pytest.mark.parametrize("seed", SEEDS)
    def test_yards_allocated_exactly(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        for team_stats in (result.home_team_stats, result.away_team_stats):
            lines = result.stats_for_team(team_stats.team_id)
            assert team_stats.passing_yards + team_stats.rushing_yards == team_stats.total_yards
            assert _sum(lines, "rushing_yards") == team_stats.rushing_yards
            assert _sum(lines, "receiving_yards") == team_stats.passing_yards

    @pytest.mark.parametrize("seed", SEEDS)
    def test_quarterback_line_matches_receivers(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        for team_id in (1, 2):
            lines = result.stats_for_team(team_id)
            passers = [line for line in lines if line.attempts > 0]
            assert len(passers) == 1
            qb_line = passers[0]

            assert qb_line.completions == _sum(lines, "receptions")
            assert qb_line.passing_yards == _sum(lines, "receiving_yards")
            assert qb_line.passing_tds == _sum(lines, "receiving_tds")
            assert qb_line.completions <= qb_line.attempts

    @pytest.mark.parametrize("seed", SEEDS)
    def test_touchdowns_and_turnovers(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        for team_stats in (result.home_team_stats, result.away_team_stats):
            lines = result.stats_for_team(team_stats.team_id)
            assert _sum(lines, "rushing_tds") + _sum(lines, "receiving_tds") == team_stats.touchdowns
            assert _sum(lines, "interceptions") + _sum(lines, "fumbles_lost") == team_stats.turnovers

    @pytest.mark.parametrize("seed", SEEDS)
    def test_defense_mirrors_opposing_offense(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        sides = [
            (result.home_team_stats, result.away_team_id),
            (result.away_team_stats, result.home_team_id),
        ]
        for offense_stats, defense_team_id in sides:
            offense = result.stats_for_team(offense_stats.team_id)
            defense = result.stats_for_team(defense_team_id)

            assert _sum(defense, "sacks") == pytest.approx(offense_stats.sacks)
            assert _sum(defense, "interceptions_def") == _sum(offense, "interceptions")
            assert _sum(defense, "forced_fumbles") == _sum(offense, "fumbles_lost")

    def test_time_of_possession_fills_the_game(self, simulator, game, rosters, rng):
        result = simulator.simulate_game(game, rosters, rng)

        total = (result.home_team_stats.time_of_possession_seconds
                 + result.away_team_stats.time_of_possession_seconds)
        assert total == 3600

    def test_kicker_matches_score(self, simulator, game, rosters, rng):
        result = simulator.simulate_game(game, rosters, rng)

        kicker_id = rosters[1].team.depth_at(Position.K)[0]
        kicker = result.player_stats[kicker_id]
        assert kicker.fg_made == result.home_team_stats.field_goals
        assert kicker.xp_attempted == result.home_team_stats.touchdowns

    def test_every_line_counts_one_game(self, simulator, game, rosters, rng):
        result = simulator.simulate_game(game, rosters, rng)

        assert result.player_stats
        assert all(line.games_played == 1 for line in result.player_stats.values())
        assert {line.team_id for line in result.player_stats.values()} == {1, 2}

    # ==================== Injuries / Summary ====================

    @pytest.mark.parametrize("seed", SEEDS)
    def test_injuries_only_hit_starters(self, simulator, game, rosters, seed):
        result = simulator.simulate_game(game, rosters, random.Random(seed))

        starter_ids = set(rosters[1].team.starter_ids()) | set(rosters[2].team.starter_ids())
        for injury in result.injuries:
            assert injury.player_id in starter_ids
            assert injury.weeks_out >= 1

    def test_summary_attached(self, simulator, game, rosters, rng):
        result = simulator.simulate_game(game, rosters, rng)

        assert result.player_of_the_game_id in result.player_stats
        assert result.player_of_the_game_line
        assert len(result.key_plays) <= 6

    # ==================== Edge Cases ====================

    def test_missing_roster(self, simulator, game, rosters, rng):
        with pytest.raises(MissingRosterException) as exc_info:
            simulator.simulate_game(game, {1: rosters[1]}, rng)

        assert exc_info.value.error_code == "SIM_001"
        assert exc_info.value.team_id == 2
        assert str(exc_info.value).startswith("[SIM_001]")

    @pytest.mark.parametrize("seed", SEEDS)
    def test_no_healthy_quarterback(self, simulator, game, league, seed):
        """Without a quarterback every yard, touchdown and turnover still lands on a player."""
        _injure_all(league.roster_for(1), Position.QB)

        result = simulator.simulate_game(game, league.rosters(), random.Random(seed))

        team_stats = result.home_team_stats
        lines = result.stats_for_team(1)
        assert _sum(lines, "attempts") == 0
        assert team_stats.passing_yards == 0
        assert _sum(lines, "receiving_yards") == team_stats.passing_yards
        assert _sum(lines, "rushing_yards") == team_stats.rushing_yards == team_stats.total_yards
        assert _sum(lines, "rushing_tds") == team_stats.touchdowns
        assert _sum(lines, "fumbles_lost") == team_stats.turnovers
        assert team_stats.sacks == 0

        defense = result.stats_for_team(2)
        assert _sum(defense, "sacks") == 0
        assert _sum(defense, "forced_fumbles") == team_stats.turnovers

    def test_no_receivers(self, simulator, game, league, rng):
        """A quarterback with nobody to throw to runs for every yard."""
        roster = league.roster_for(1)
        for position in (Position.HB, Position.TE, Position.WR):
            _injure_all(roster, position)

        result = simulator.simulate_game(game, league.rosters(), rng)

        team_stats = result.home_team_stats
        qb_id = roster.starter(Position.QB).player_id
        qb_line = result.player_stats[qb_id]
        assert qb_line.attempts == 0
        assert team_stats.passing_yards == 0
        assert qb_line.rushing_yards == team_stats.rushing_yards
        assert qb_line.rushing_tds == team_stats.touchdowns
        assert qb_line.fumbles_lost == team_stats.turnovers

    def test_no_quarterback_or_halfback(self, simulator, game, league, rng):
        """A fullback or receiver takes the handoffs when no back is healthy."""
        roster = league.roster_for(1)
        _injure_all(roster, Position.QB)
        _injure_all(roster, Position.HB)

        result = simulator.simulate_game(game, league.rosters(), rng)

        team_stats = result.home_team_stats
        carriers = [line for line in result.stats_for_team(1) if line.rush_attempts > 0]
        assert carriers
        assert all(roster.get_player(line.player_id).position != Position.HB for line in carriers)
        assert _sum(carriers, "rushing_yards") == team_stats.rushing_yards
        assert _sum(carriers, "rushing_tds") == team_stats.touchdowns

    def test_injured_players_not_reinjured(self, simulator, game, league, rng):
        roster = league.roster_for(1)
        hurt = {p.player_id for p in roster.starters()}
        for player in roster.starters():
            player.injury = Injury(InjuryType.ANKLE_SPRAIN, InjurySeverity.MINOR, 2, 2)

        for seed in range(10):
            result = simulator.simulate_game(game, league.rosters(), random.Random(seed))
            assert not hurt & {injury.player_id for injury in result.injuries}
