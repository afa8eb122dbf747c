"""
Unit Tests for Playoff Seeder

Tests division winner and wildcard selection, seed ordering across
divisions, the tiebreak chain and the division standings handed to the
next season's scheduler.
"""

import pytest

from league import Game
from playoff_system import PlayoffSeeder


def _set_record(team, wins, losses, points_for=300, points_against=300, ties=0):
    team.record.wins = wins
    team.record.losses = losses
    team.record.ties = ties
    team.record.points_for = points_for
    team.record.points_against = points_against


class TestPlayoffSeeder:
    """Tests for determine_playoff_seeds."""

    @pytest.fixture
    def seeder(self):
        return PlayoffSeeder()

    @pytest.fixture
    def standings_league(self, league):
        """
        League with hand-set records.

        AFC:
        - Division winners: 1 (13-4), 5 (12-5), 13 (11-6), 9 (10-7)
        - Wildcards: 2 (11-6), 6 (10-7, +100), 14 (10-7, +10)
        - First team out: 10 (9-8)
        NFC mirrors the AFC with team ids + 16.
        Everyone else is 5-12.
        """
        for team in league.team_list():
            _set_record(team, 5, 12)

        for offset in (0, 16):
            teams = league.teams
            _set_record(teams[1 + offset], 13, 4)
            _set_record(teams[5 + offset], 12, 5)
            _set_record(teams[13 + offset], 11, 6)
            _set_record(teams[9 + offset], 10, 7)
            _set_record(teams[2 + offset], 11, 6)
            _set_record(teams[6 + offset], 10, 7, points_for=400, points_against=300)
            _set_record(teams[14 + offset], 10, 7, points_for=350, points_against=340)
            _set_record(teams[10 + offset], 9, 8)
        return league

    def test_seven_seeds_per_conference(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        for conference in (seeding.afc, seeding.nfc):
            assert [s.seed for s in conference.seeds] == [1, 2, 3, 4, 5, 6, 7]
            assert len(conference.eliminated_teams) == 9
        assert seeding.season == 2025

    def test_division_winners_take_top_four(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        assert [s.team_id for s in seeding.afc.division_winners] == [1, 5, 13, 9]
        assert all(s.is_division_winner for s in seeding.afc.seeds[:4])

    def test_wildcard_with_better_record_still_seeded_fifth(self, seeder, standings_league):
        """An 11-6 wildcard ranks below a 10-7 division winner."""
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        fifth = seeding.afc.get_seed_by_number(5)
        assert fifth.team_id == 2
        assert not fifth.is_division_winner
        assert fifth.seed_label == "#5 Seed (Wild Card)"

    def test_point_differential_breaks_wildcard_tie(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        assert [s.team_id for s in seeding.afc.wildcards] == [2, 6, 14]
        assert [s.team_id for s in seeding.nfc.wildcards] == [18, 22, 30]
        assert 10 in seeding.afc.eliminated_teams

    def test_seed_carries_record(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        top = seeding.afc.get_seed_by_team(1)
        assert top.seed == 1
        assert top.record_string == "13-4"
        assert top.division_name == "AFC East"
        assert top.seed_label == "#1 Seed (Bye)"
        assert seeding.get_team_seed(17).conference == "NFC"
        assert seeding.get_team_seed(3) is None

    def test_division_record_breaks_division_tie(self, seeder, standings_league):
        """Team 8 matches team 5 at 12-5 but lost the head-to-head division game."""
        _set_record(standings_league.teams[8], 12, 5)
        games = [Game("g1", 2025, 3, home_team_id=8, away_team_id=5,
                      home_score=10, away_score=24, is_completed=True)]

        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), games, 2025)

        north_winner = [s for s in seeding.afc.division_winners if s.division_name == "AFC North"]
        assert north_winner[0].team_id == 5
        assert north_winner[0].division_record == "1-0"
        assert seeding.division_standings["AFC North"][:2] == [5, 8]

    def test_playoff_and_unplayed_games_ignored(self, seeder, standings_league):
        games = [
            Game("g1", 2025, 3, 8, 5, home_score=30, away_score=0, is_completed=True, is_playoff=True),
            Game("g2", 2025, 4, 8, 5),
        ]

        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), games, 2025)

        assert seeding.get_team_seed(5).division_record == "0-0"

    def test_division_ranks_cover_every_team(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        ranks = seeding.division_ranks()

        assert len(ranks) == 32
        assert ranks[1] == 1
        assert ranks[2] == 2
        assert sorted(ranks.values()) == [1] * 8 + [2] * 8 + [3] * 8 + [4] * 8

    def test_season_defaults_to_games(self, seeder, standings_league):
        games = [Game("g1", 2031, 1, 1, 2)]
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), games)
        assert seeding.season == 2031

    def test_to_dict(self, seeder, standings_league):
        seeding = seeder.determine_playoff_seeds(standings_league.team_list(), [], 2025)

        data = seeding.to_dict()

        assert data["afc"]["seeds"][0]["team_id"] == 1
        assert len(data["division_standings"]) == 8
        assert seeding.for_conference("nfc") is seeding.nfc
        with pytest.raises(ValueError):
            seeding.for_conference("XFL")
