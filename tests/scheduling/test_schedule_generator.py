"""
Tests for Regular Season Schedule Generation

Covers the rotation helpers, matchup buckets, configuration validation and
the full 32-team, 17-game, 18-week schedule.
"""

import random
from collections import Counter, defaultdict

import pytest

from league import Conference, Division, Team
from scheduling import (
    ByeWeekConfig,
    InvalidLeagueStructureException,
    LeagueStructure,
    MatchupBucket,
    MatchupBuilder,
    ScheduleConfig,
    ScheduleGenerator,
    ScheduleValidator,
    circle_pairings,
    generate_regular_season,
)


def _team(team_id, conference=Conference.AFC, division=Division.EAST):
    return Team(team_id, "City", f"Team{team_id}", f"T{team_id}", conference, division)


class TestCirclePairings:
    """Tests for the round-robin helper."""

    def test_four_divisions(self):
        assert circle_pairings(4, 0) == [(0, 1), (2, 3)]
        assert circle_pairings(4, 1) == [(0, 2), (1, 3)]
        assert circle_pairings(4, 2) == [(0, 3), (1, 2)]

    def test_rounds_repeat(self):
        assert circle_pairings(4, 3) == circle_pairings(4, 0)
        assert circle_pairings(4, -1) == circle_pairings(4, 2)

    def test_every_pair_meets_once_per_cycle(self):
        seen = Counter()
        for round_index in range(5):
            seen.update(circle_pairings(6, round_index))
        assert len(seen) == 15
        assert set(seen.values()) == {1}

    def test_odd_count_sits_one_out(self):
        pairs = circle_pairings(3, 0)
        assert len(pairs) == 1

    def test_single_item(self):
        assert circle_pairings(1, 0) == []


class TestScheduleConfig:
    """Tests for configuration validation and persistence."""

    def test_default_config_valid(self):
        is_valid, errors = ScheduleConfig().validate()
        assert is_valid
        assert errors == []

    def test_games_must_leave_one_bye(self):
        is_valid, errors = ScheduleConfig(games_per_team=18).validate()
        assert not is_valid
        assert any("bye" in e for e in errors)

    def test_odd_team_count(self):
        is_valid, errors = ScheduleConfig().validate(team_count=31)
        assert not is_valid

    def test_bye_capacity(self):
        """Ten bye weeks at four teams each can hold 40 teams, not 41."""
        assert ByeWeekConfig().validate(team_count=40)
        assert not ByeWeekConfig().validate(team_count=41)
        assert not ByeWeekConfig(start_week=12, end_week=8).validate()

    def test_json_round_trip(self, tmp_path):
        config = ScheduleConfig(max_generation_attempts=3, prefer_divisional_final_week=False)
        config.bye_week = ByeWeekConfig(start_week=6, end_week=13, max_teams_per_week=6)
        path = tmp_path / "schedule.json"

        config.to_json(str(path))
        loaded = ScheduleConfig.from_json(str(path))

        assert loaded == config

    def test_invalid_config_rejected_by_generator(self, teams, rng):
        generator = ScheduleGenerator(ScheduleConfig(total_weeks=17))
        with pytest.raises(InvalidLeagueStructureException):
            generator.generate_regular_season(teams, 2025, rng)


class TestLeagueStructure:
    """Tests for topology checks."""

    def test_empty_league(self):
        with pytest.raises(InvalidLeagueStructureException):
            LeagueStructure([])

    def test_single_conference(self):
        teams = [_team(i) for i in range(1, 5)]
        with pytest.raises(InvalidLeagueStructureException) as exc_info:
            LeagueStructure(teams)
        assert "conferences" in str(exc_info.value)

    def test_default_structure(self, teams):
        structure = LeagueStructure(teams)

        assert structure.conferences == [Conference.AFC, Conference.NFC]
        assert structure.division_count == 4
        assert structure.same_division(1, 4)
        assert not structure.same_division(1, 5)


class TestMatchupBuilder:
    """Tests for matchup construction."""

    @pytest.fixture
    def builder(self, teams):
        return MatchupBuilder(LeagueStructure(teams), ScheduleConfig())

    def test_every_team_gets_seventeen_games(self, builder, rng):
        matchups = builder.build(2025, rng)

        counts = Counter()
        for matchup in matchups:
            counts[matchup.home_team_id] += 1
            counts[matchup.away_team_id] += 1

        assert len(matchups) == 272
        assert set(counts.values()) == {17}
        assert builder.warnings == []

    def test_division_bucket_home_and_away(self, builder, rng):
        matchups = builder.build(2025, rng)
        division = [m for m in matchups if m.bucket == MatchupBucket.DIVISION]

        assert len(division) == 96
        ordered = {(m.home_team_id, m.away_team_id) for m in division}
        for home, away in ordered:
            assert (away, home) in ordered

    def test_no_duplicate_home_away_pair(self, builder, rng):
        matchups = builder.build(2026, rng)
        ordered = [(m.home_team_id, m.away_team_id) for m in matchups]
        assert len(ordered) == len(set(ordered))

    def test_prior_ranks_used_when_complete(self, builder, teams, rng):
        prior = {}
        for conference in Conference:
            for division in Division:
                members = sorted(t.team_id for t in teams
                                 if t.conference == conference and t.division == division)
                for place, team_id in enumerate(members, start=1):
                    prior[team_id] = place

        ranks = builder.build_effective_ranks(rng, prior)

        assert ranks[Conference.AFC][0] == {1: 1, 2: 2, 3: 3, 4: 4}

    def test_incomplete_prior_ranks_fall_back_to_shuffle(self, builder, rng):
        prior = {1: 1, 2: 1, 3: 3, 4: 4}   # duplicate rank in AFC East

        ranks = builder.build_effective_ranks(rng, prior)

        assert sorted(ranks[Conference.AFC][0]) == [1, 2, 3, 4]
        assert sorted(ranks[Conference.AFC][0].values()) == [1, 2, 3, 4]


class TestScheduleGenerator:
    """Tests for the full regular season schedule."""

    @pytest.fixture
    def generator(self):
        return ScheduleGenerator()

    @pytest.fixture
    def schedule(self, generator, teams):
        return generator.generate_regular_season(teams, 2025, random.Random(11))

    def test_game_count(self, schedule):
        assert len(schedule) == 272

    def test_seventeen_games_per_team(self, schedule, teams):
        counts = Counter()
        for game in schedule:
            counts[game.home_team_id] += 1
            counts[game.away_team_id] += 1

        assert {team.team_id: counts[team.team_id] for team in teams} == \
               {team.team_id: 17 for team in teams}

    def test_no_team_plays_twice_in_a_week(self, schedule):
        by_week = defaultdict(list)
        for game in schedule:
            by_week[game.week].extend([game.home_team_id, game.away_team_id])

        for week, team_ids in by_week.items():
            assert len(team_ids) == len(set(team_ids)), f"double booking in week {week}"

    def test_one_bye_inside_window(self, schedule, teams):
        weeks_played = defaultdict(set)
        for game in schedule:
            weeks_played[game.home_team_id].add(game.week)
            weeks_played[game.away_team_id].add(game.week)

        byes_per_week = Counter()
        for team in teams:
            byes = set(range(1, 19)) - weeks_played[team.team_id]
            assert len(byes) == 1
            bye = byes.pop()
            assert 5 <= bye <= 14
            byes_per_week[bye] += 1

        assert max(byes_per_week.values()) <= 4

    def test_divisional_rivals_meet_home_and_away(self, schedule, teams):
        team_map = {team.team_id: team for team in teams}
        divisional = Counter(
            (game.home_team_id, game.away_team_id)
            for game in schedule if game.is_divisional(team_map)
        )

        assert len(divisional) == 96
        assert set(divisional.values()) == {1}

    def test_games_sorted_by_week_with_ids(self, schedule):
        weeks = [game.week for game in schedule]
        assert weeks == sorted(weeks)
        assert schedule[0].game_id == "regular_2025_1_1"
        assert all(not game.is_completed and not game.is_playoff for game in schedule)
        assert len({game.game_id for game in schedule}) == 272

    def test_validation_report(self, generator, schedule):
        assert generator.last_validation is not None
        assert generator.last_validation.errors == []
        assert generator.last_validation.is_valid

    def test_same_seed_same_schedule(self, teams):
        first = generate_regular_season(teams, 2025, random.Random(5))
        second = generate_regular_season(teams, 2025, random.Random(5))

        assert [g.to_dict() for g in first] == [g.to_dict() for g in second]

    @pytest.mark.parametrize("season", [2026, 2027, 2028])
    def test_later_seasons_valid(self, generator, teams, season):
        schedule = generator.generate_regular_season(teams, season, random.Random(season))

        assert len(schedule) == 272
        assert generator.last_validation.errors == []


def _small_league(divisions_per_conference):
    """Two conferences of four-team divisions, ids numbered from 1."""
    teams = []
    for conference in (Conference.AFC, Conference.NFC):
        for division in list(Division)[:divisions_per_conference]:
            for _ in range(4):
                teams.append(_team(len(teams) + 1, conference, division))
    return teams


class TestSmallerLeagues:
    """Leagues with fewer than four divisions per conference."""

    @pytest.mark.parametrize("season", [2025, 2026, 2027])
    @pytest.mark.parametrize("divisions", [3, 2, 1])
    def test_full_schedule(self, divisions, season):
        teams = _small_league(divisions)
        generator = ScheduleGenerator()

        schedule = generator.generate_regular_season(teams, season, random.Random(0))

        counts = Counter()
        for game in schedule:
            counts[game.home_team_id] += 1
            counts[game.away_team_id] += 1

        assert len(schedule) == len(teams) * 17 // 2
        assert set(counts.values()) == {17}
        assert generator.last_validation.errors == []

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_three_division_matchups(self, seed):
        """The division left out of the intra-conference rotation is topped up."""
        teams = _small_league(3)
        builder = MatchupBuilder(LeagueStructure(teams), ScheduleConfig())

        matchups = builder.build(2025, random.Random(seed))

        counts = Counter()
        for matchup in matchups:
            counts[matchup.home_team_id] += 1
            counts[matchup.away_team_id] += 1
        assert len(matchups) == 204
        assert set(counts.values()) == {17}
        assert not any("after reconciliation" in w for w in builder.warnings)
        assert not any(m.bucket == MatchupBucket.RECONCILIATION
                       and builder.structure.same_division(m.home_team_id, m.away_team_id)
                       for m in matchups)

    def test_fresh_opponents_before_rematches(self):
        """24 teams have enough unplayed opponents, so nobody meets a non-rival twice."""
        teams = _small_league(3)
        builder = MatchupBuilder(LeagueStructure(teams), ScheduleConfig())

        matchups = builder.build(2025, random.Random(0))

        structure = builder.structure
        pairs = Counter(m.pair_key for m in matchups
                        if not structure.same_division(m.home_team_id, m.away_team_id))
        assert set(pairs.values()) == {1}

    def test_single_division_conferences_repeat_meetings(self):
        """Eight teams run out of opponents; repeats are spread and reported."""
        teams = _small_league(1)
        builder = MatchupBuilder(LeagueStructure(teams), ScheduleConfig())

        matchups = builder.build(2025, random.Random(0))

        division_venues = Counter((m.home_team_id, m.away_team_id) for m in matchups
                                  if builder.structure.same_division(m.home_team_id, m.away_team_id))
        assert set(division_venues.values()) == {1}
        assert len(matchups) == 68
        assert any("meet" in w for w in builder.warnings)


class TestScheduleValidator:
    """Tests for schedule verification on hand-built schedules."""

    def test_double_booking_reported(self, teams):
        from league import Game

        games = [
            Game("g1", 2025, 1, 1, 2),
            Game("g2", 2025, 1, 1, 3),
        ]
        team_map = {team.team_id: team for team in teams}

        result = ScheduleValidator().validate(games, team_map)

        assert not result.is_valid
        assert "Team 1 has multiple games in week 1" in result.errors
        assert result.team_game_counts[1] == 2
