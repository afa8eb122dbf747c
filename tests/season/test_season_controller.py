"""
Tests for SeasonController

Covers controller setup, week advancement, injury recovery, listener
events and complete seasons from the first regular season week through
the Super Bowl.
"""

import random

import pytest

from league import Conference, Injury, InjurySeverity, InjuryType, League, build_default_league
from season import (
    InvalidSeasonStateException,
    SeasonConstants,
    SeasonController,
    SeasonEventTypes,
    SeasonInitializationException,
)
from season_calendar import SeasonCalendar, SeasonPhase


def _preseason_calendar(year=2025):
    """Calendar one advance away from week 1 of the regular season."""
    return SeasonCalendar(year=year, phase=SeasonPhase.PRESEASON, week=4)


def _minor_injury(weeks, can_return=True):
    return Injury(InjuryType.HAMSTRING_STRAIN, InjurySeverity.MINOR, weeks, weeks, can_return=can_return)


@pytest.fixture(scope="module")
def completed_season():
    """One full simulated season with every emitted event recorded."""
    league = build_default_league(random.Random(2025))
    controller = SeasonController(league, calendar=_preseason_calendar(), seed=7)
    events = []
    controller.add_listener(events.append)

    summary = controller.simulate_season()
    return controller, events, summary


class TestSeasonControllerSetup:
    """Tests for construction and single-week advancement."""

    def test_empty_league_rejected(self):
        with pytest.raises(SeasonInitializationException) as exc_info:
            SeasonController(League())

        assert exc_info.value.error_code == "SEASON_INIT_002"
        assert exc_info.value.season_context["component"] == "league"

    def test_defaults(self, league):
        controller = SeasonController(league)

        assert controller.calendar.phase == SeasonPhase.POST_SEASON
        assert controller.season_year is None
        assert controller.champion_id is None
        assert "SeasonController" in str(controller)

    def test_offseason_week_plays_nothing(self, league):
        controller = SeasonController(league, seed=1)

        result = controller.advance_week()

        assert result["advanced"]
        assert result["phase"] == "post_season"
        assert result["week"] == 2
        assert result["games_played"] == 0
        assert controller.regular_season_games == []

    def test_entering_regular_season(self, league):
        controller = SeasonController(league, calendar=_preseason_calendar(), seed=3)
        events = []
        controller.add_listener(events.append)

        result = controller.advance_week()

        assert result["phase_changed"]
        assert result["phase"] == "regular_season"
        assert result["games_played"] == 16
        assert controller.season_year == 2025
        assert len(controller.regular_season_games) == SeasonConstants.REGULAR_SEASON_GAME_COUNT

        schedule_events = [e for e in events if e.event_type == SeasonEventTypes.SCHEDULE_GENERATED]
        assert len(schedule_events) == 1
        assert schedule_events[0].payload["game_count"] == 272
        assert schedule_events[0].payload["errors"] == []

    def test_week_one_results_applied(self, league):
        controller = SeasonController(league, calendar=_preseason_calendar(), seed=3)

        controller.advance_week()

        played = [g for g in controller.regular_season_games if g.is_completed]
        assert len(played) == 16
        assert all(g.week == 1 for g in played)
        assert sum(team.record.games_played for team in league.team_list()) == 32
        assert set(controller.game_results) == {g.game_id for g in played}
        assert controller.season_player_stats
        assert controller.games_for_week() == []

    def test_same_seed_same_week(self):
        scores = []
        for _ in range(2):
            league = build_default_league(random.Random(2025))
            controller = SeasonController(league, calendar=_preseason_calendar(), seed=99)
            controller.advance_week()
            scores.append([(g.game_id, g.home_score, g.away_score)
                           for g in controller.regular_season_games if g.is_completed])

        assert scores[0] == scores[1]

    def test_current_state(self, league):
        controller = SeasonController(league, calendar=_preseason_calendar(), seed=3)
        controller.advance_week()

        state = controller.get_current_state()

        assert state["calendar"]["phase"] == "regular_season"
        assert state["season"] == 2025
        assert state["rounds"] == []


class TestInjuryRecovery:
    """Tests for the weekly injury countdown."""

    def test_returnable_injury_cleared(self, league):
        player = next(iter(league.players.values()))
        player.injury = _minor_injury(1)
        controller = SeasonController(league, seed=1)

        controller.advance_week()

        assert player.injury is None
        assert not player.is_injured

    def test_countdown_continues(self, league):
        player = next(iter(league.players.values()))
        player.injury = _minor_injury(3)
        controller = SeasonController(league, seed=1)

        controller.advance_week()

        assert player.injury.weeks_remaining == 2
        assert player.is_injured

    def test_career_ending_injury_kept(self, league):
        player = next(iter(league.players.values()))
        player.injury = _minor_injury(1, can_return=False)
        controller = SeasonController(league, seed=1)

        controller.advance_week()
        controller.advance_week()

        assert player.injury is not None
        assert player.injury.weeks_remaining == 0
        assert player.is_injured


class TestSeasonControllerErrors:
    """Tests for failure paths."""

    def test_listener_failure_propagates(self, league):
        controller = SeasonController(league, calendar=SeasonCalendar(phase=SeasonPhase.POST_SEASON, week=2))

        def broken(event):
            raise RuntimeError("listener failed")

        controller.add_listener(broken)

        with pytest.raises(RuntimeError):
            controller.advance_week()

    def test_removed_listener_not_called(self, league):
        controller = SeasonController(league, calendar=SeasonCalendar(phase=SeasonPhase.POST_SEASON, week=2))
        events = []
        controller.add_listener(events.append)
        controller.remove_listener(events.append)

        controller.advance_week()

        assert events == []

    def test_empty_playoff_round(self, league, monkeypatch):
        controller = SeasonController(
            league, calendar=SeasonCalendar(year=2025, phase=SeasonPhase.REGULAR_SEASON, week=18), seed=5
        )
        controller.season_year = 2025
        monkeypatch.setattr(controller.playoff_manager, "generate_playoff_round", lambda *args: [])

        with pytest.raises(InvalidSeasonStateException) as exc_info:
            controller.advance_week()

        assert exc_info.value.state_issue == "insufficient_playoff_seeds"
        assert exc_info.value.error_code == "SEASON_STATE_006"

    def test_no_champion_within_limit(self, league, monkeypatch):
        monkeypatch.setattr(SeasonConstants, "MAX_WEEKS_PER_SIMULATION", 2)
        controller = SeasonController(league, seed=5)

        with pytest.raises(InvalidSeasonStateException) as exc_info:
            controller.simulate_season()

        assert exc_info.value.state_issue == "season_did_not_complete"


@pytest.mark.slow
class TestFullSeason:
    """A complete season through the Super Bowl."""

    def test_summary(self, completed_season):
        controller, _, summary = completed_season

        assert summary["season"] == 2025
        assert summary["regular_season_games"] == 272
        assert summary["regular_season_completed"] == 272
        assert summary["playoff_games"] == SeasonConstants.PLAYOFF_GAME_COUNT
        assert summary["champion_id"] == controller.champion_id
        assert summary["seeding"]["season"] == 2025

    def test_stops_at_super_bowl(self, completed_season):
        controller, _, _ = completed_season

        assert controller.calendar.phase == SeasonPhase.SUPER_BOWL
        assert controller.calendar.week == 1
        assert controller.calendar.year == 2025

    def test_every_team_plays_seventeen(self, completed_season):
        controller, _, _ = completed_season

        teams = controller.league.team_list()
        assert all(team.record.games_played == 17 for team in teams)
        assert sum(t.record.wins for t in teams) == sum(t.record.losses for t in teams)

    def test_bracket_progression(self, completed_season):
        controller, _, _ = completed_season

        counts = [len(controller.brackets[r].games) for r in controller.brackets]
        assert counts == [6, 4, 2, 1]
        assert all(g.is_completed and not g.is_tie for g in controller.playoff_games)

        seeded = {s.team_id for s in controller.seeding.afc.seeds + controller.seeding.nfc.seeds}
        assert {tid for g in controller.playoff_games for tid in (g.home_team_id, g.away_team_id)} <= seeded

    def test_super_bowl_crowns_champion(self, completed_season):
        controller, _, _ = completed_season

        super_bowl = controller.playoff_games[-1]
        league = controller.league

        assert super_bowl.playoff_round == "super_bowl"
        assert league.teams[super_bowl.home_team_id].conference == Conference.AFC
        assert league.teams[super_bowl.away_team_id].conference == Conference.NFC
        assert super_bowl.winner_id == controller.champion_id
        assert controller.champions == {2025: controller.champion_id}

    def test_division_ranks_stored(self, completed_season):
        controller, _, _ = completed_season

        ranks = controller.prior_division_ranks
        assert len(ranks) == 32
        assert all(controller.league.teams[tid].record.division_rank == rank for tid, rank in ranks.items())

    def test_events(self, completed_season):
        _, events, _ = completed_season

        types = [e.event_type for e in events]
        assert types.count(SeasonEventTypes.GAME_COMPLETED) == 285
        assert types[-1] == SeasonEventTypes.SEASON_COMPLETED

        rounds = [e.payload["round"] for e in events if e.event_type == SeasonEventTypes.ROUND_GENERATED]
        assert rounds == ["wild_card", "divisional", "conference", "super_bowl"]

        phases = [e.payload["phase"] for e in events if e.event_type == SeasonEventTypes.PHASE_CHANGED]
        assert phases == ["regular_season", "playoffs", "super_bowl"]

    def test_season_stats_accumulated(self, completed_season):
        controller, _, _ = completed_season

        lines = controller.season_player_stats.values()
        assert max(line.games_played for line in lines) <= 21
        assert sum(line.rushing_yards for line in lines) == sum(
            result.home_team_stats.rushing_yards + result.away_team_stats.rushing_yards
            for result in controller.game_results.values()
        )


@pytest.mark.slow
class TestConsecutiveSeasons:
    """Two seasons in a row from one controller."""

    def test_second_season(self):
        league = build_default_league(random.Random(11))
        controller = SeasonController(league, calendar=_preseason_calendar(), seed=11)

        first = controller.simulate_season()
        first_ranks = dict(controller.prior_division_ranks)
        second = controller.simulate_season()

        assert first["season"] == 2025
        assert second["season"] == 2026
        assert set(controller.champions) == {2025, 2026}
        assert all(team.record.games_played == 17 for team in league.team_list())
        assert controller.regular_season_games[0].game_id.startswith("regular_2026_")
        assert len(first_ranks) == 32
