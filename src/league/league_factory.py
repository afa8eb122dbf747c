"""
League Factory

Builds a complete 32-team league with generated rosters, depth charts and
head coaches. Real roster construction (draft, free agency, trades) is owned
by other subsystems; this factory exists so the season core can be driven
end-to-end by demos and tests.

Usage:
    from league import build_default_league

    league = build_default_league(random.Random(7))
    controller = SeasonController(league, seed=7)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .enums import Conference, Division, Position
from .player import Player, PlayerAttributes
from .team import Coach, DefensiveScheme, OffensiveScheme, Team, TeamRoster


logger = logging.getLogger(__name__)


# (team_id, city, nickname, abbreviation, conference, division)
NFL_TEAMS: List[Tuple[int, str, str, str, Conference, Division]] = [
    (1, "Buffalo", "Bills", "BUF", Conference.AFC, Division.EAST),
    (2, "Miami", "Dolphins", "MIA", Conference.AFC, Division.EAST),
    (3, "New England", "Patriots", "NE", Conference.AFC, Division.EAST),
    (4, "New York", "Jets", "NYJ", Conference.AFC, Division.EAST),
    (5, "Baltimore", "Ravens", "BAL", Conference.AFC, Division.NORTH),
    (6, "Cincinnati", "Bengals", "CIN", Conference.AFC, Division.NORTH),
    (7, "Cleveland", "Browns", "CLE", Conference.AFC, Division.NORTH),
    (8, "Pittsburgh", "Steelers", "PIT", Conference.AFC, Division.NORTH),
    (9, "Houston", "Texans", "HOU", Conference.AFC, Division.SOUTH),
    (10, "Indianapolis", "Colts", "IND", Conference.AFC, Division.SOUTH),
    (11, "Jacksonville", "Jaguars", "JAX", Conference.AFC, Division.SOUTH),
    (12, "Tennessee", "Titans", "TEN", Conference.AFC, Division.SOUTH),
    (13, "Denver", "Broncos", "DEN", Conference.AFC, Division.WEST),
    (14, "Kansas City", "Chiefs", "KC", Conference.AFC, Division.WEST),
    (15, "Las Vegas", "Raiders", "LV", Conference.AFC, Division.WEST),
    (16, "Los Angeles", "Chargers", "LAC", Conference.AFC, Division.WEST),
    (17, "Dallas", "Cowboys", "DAL", Conference.NFC, Division.EAST),
    (18, "New York", "Giants", "NYG", Conference.NFC, Division.EAST),
    (19, "Philadelphia", "Eagles", "PHI", Conference.NFC, Division.EAST),
    (20, "Washington", "Commanders", "WAS", Conference.NFC, Division.EAST),
    (21, "Chicago", "Bears", "CHI", Conference.NFC, Division.NORTH),
    (22, "Detroit", "Lions", "DET", Conference.NFC, Division.NORTH),
    (23, "Green Bay", "Packers", "GB", Conference.NFC, Division.NORTH),
    (24, "Minnesota", "Vikings", "MIN", Conference.NFC, Division.NORTH),
    (25, "Atlanta", "Falcons", "ATL", Conference.NFC, Division.SOUTH),
    (26, "Carolina", "Panthers", "CAR", Conference.NFC, Division.SOUTH),
    (27, "New Orleans", "Saints", "NO", Conference.NFC, Division.SOUTH),
    (28, "Tampa Bay", "Buccaneers", "TB", Conference.NFC, Division.SOUTH),
    (29, "Arizona", "Cardinals", "ARI", Conference.NFC, Division.WEST),
    (30, "Los Angeles", "Rams", "LAR", Conference.NFC, Division.WEST),
    (31, "San Francisco", "49ers", "SF", Conference.NFC, Division.WEST),
    (32, "Seattle", "Seahawks", "SEA", Conference.NFC, Division.WEST),
]

# Active roster shape per position
ROSTER_COMPOSITION: Dict[Position, int] = {
    Position.QB: 3, Position.HB: 4, Position.FB: 1,
    Position.WR: 6, Position.TE: 3,
    Position.LT: 2, Position.LG: 2, Position.C: 2,
    Position.RG: 2, Position.RT: 2,
    Position.EDGE: 4, Position.DT: 3,
    Position.MLB: 2, Position.OLB: 3,
    Position.CB: 5, Position.FS: 2, Position.SS: 2,
    Position.K: 1, Position.P: 1, Position.LS: 1,
}

# Attributes that track a position's overall most closely
KEY_ATTRIBUTES: Dict[Position, List[str]] = {
    Position.QB: ["short_accuracy", "medium_accuracy", "deep_accuracy"],
    Position.HB: ["speed", "carrying", "catching"],
    Position.FB: ["carrying", "catching"],
    Position.WR: ["catching", "speed"],
    Position.TE: ["catching", "speed"],
    Position.EDGE: ["finesse_moves", "power_moves", "tackle", "pursuit"],
    Position.DT: ["power_moves", "finesse_moves", "tackle"],
    Position.MLB: ["tackle", "pursuit", "play_recognition", "hit_power"],
    Position.OLB: ["tackle", "pursuit", "finesse_moves", "power_moves"],
    Position.CB: ["zone_coverage", "man_coverage", "play_recognition", "speed"],
    Position.FS: ["zone_coverage", "play_recognition", "pursuit", "tackle"],
    Position.SS: ["tackle", "hit_power", "zone_coverage", "play_recognition"],
    Position.K: ["kick_power", "kick_accuracy"],
    Position.P: ["kick_power", "kick_accuracy"],
}

FIRST_NAMES = [
    "Aaron", "Adrian", "Antonio", "Brandon", "Calvin", "Darius", "DeAndre",
    "Derek", "Devon", "Ezekiel", "Frank", "Garrett", "Isaiah", "Jalen",
    "Jamal", "Jordan", "Justin", "Keion", "Lamar", "Marcus", "Marshawn",
    "Michael", "Nick", "Patrick", "Quentin", "Robert", "Saquon", "Terrell",
    "Tyler", "Victor", "Zach", "Alvin", "Carlos", "Damien", "Eddie", "Felix",
]

LAST_NAMES = [
    "Adams", "Allen", "Anderson", "Brown", "Davis", "Garcia", "Harris",
    "Jackson", "Johnson", "Jones", "Lewis", "Martin", "Miller", "Moore",
    "Robinson", "Smith", "Taylor", "Thomas", "Thompson", "Washington",
    "White", "Williams", "Wilson", "Young", "Bell", "Cooper", "Green",
    "Hill", "King", "Lee", "Parker", "Reed", "Scott", "Turner", "Walker",
]


@dataclass
class League:
    """All teams and players of one league, keyed by id."""
    teams: Dict[int, Team] = field(default_factory=dict)
    players: Dict[str, Player] = field(default_factory=dict)

    def roster_for(self, team_id: int) -> TeamRoster:
        """
        Raises:
            KeyError: If the team does not exist
        """
        team = self.teams[team_id]
        ids = {pid for ids in team.depth_chart.values() for pid in ids}
        return TeamRoster(
            team=team,
            players={pid: player for pid, player in self.players.items() if pid in ids}
        )

    def rosters(self) -> Dict[int, TeamRoster]:
        return {team_id: self.roster_for(team_id) for team_id in self.teams}

    def team_list(self) -> List[Team]:
        return [self.teams[team_id] for team_id in sorted(self.teams)]


class LeagueFactory:
    """Generates teams, coaches and rosters from a seeded random stream."""

    STARTER_MEAN = 74
    BACKUP_PENALTY = 7          # Each depth slot below starter loses this much on average
    RATING_STDDEV = 6
    ATTRIBUTE_SPREAD = 8

    def __init__(self, rng: random.Random, logger: Optional[logging.Logger] = None):
        self.rng = rng
        self.logger = logger or logging.getLogger(__name__)
        self._next_player_number = 1

    def build_league(
        self,
        team_definitions: Optional[List[Tuple[int, str, str, str, Conference, Division]]] = None
    ) -> League:
        """
        Build a league from team definitions (defaults to the 32 NFL teams).

        Returns:
            League with every team's depth chart filled
        """
        definitions = team_definitions or NFL_TEAMS
        league = League()

        for team_id, city, nickname, abbreviation, conference, division in definitions:
            team = Team(
                team_id=team_id,
                city=city,
                nickname=nickname,
                abbreviation=abbreviation,
                conference=conference,
                division=division,
                offensive_scheme=self.rng.choice(list(OffensiveScheme)),
                defensive_scheme=self.rng.choice(list(DefensiveScheme)),
            )
            team.head_coach = self.generate_coach()
            league.teams[team_id] = team

            for player in self.generate_roster(team):
                league.players[player.player_id] = player

        self.logger.info(
            f"Built league with {len(league.teams)} teams and {len(league.players)} players"
        )
        return league

    def generate_roster(self, team: Team) -> List[Player]:
        """Generate players for every position and fill the team's depth chart."""
        roster: List[Player] = []
        # Team strength shifts every player on the roster
        team_offset = self.rng.randint(-6, 6)

        for position, count in ROSTER_COMPOSITION.items():
            players = [
                self.generate_player(position, depth, team_offset, team.team_id)
                for depth in range(count)
            ]
            players.sort(key=lambda p: p.overall, reverse=True)
            team.depth_chart[position] = [p.player_id for p in players]
            roster.extend(players)

        return roster

    def generate_player(
        self,
        position: Position,
        depth: int = 0,
        team_offset: int = 0,
        team_id: Optional[int] = None
    ) -> Player:
        mean = self.STARTER_MEAN + team_offset - depth * self.BACKUP_PENALTY
        overall = self._clamp(round(self.rng.gauss(mean, self.RATING_STDDEV)))

        player_id = f"P{self._next_player_number:05d}"
        self._next_player_number += 1

        return Player(
            player_id=player_id,
            first_name=self.rng.choice(FIRST_NAMES),
            last_name=self.rng.choice(LAST_NAMES),
            position=position,
            overall=overall,
            team_id=team_id,
            attributes=self._generate_attributes(position, overall),
        )

    def generate_coach(self) -> Coach:
        return Coach(
            name=f"{self.rng.choice(FIRST_NAMES)} {self.rng.choice(LAST_NAMES)}",
            game_management=self.rng.randint(50, 85),
            preferred_offense=self.rng.choice(list(OffensiveScheme)),
            preferred_defense=self.rng.choice(list(DefensiveScheme)),
        )

    # ========== Helper Methods ==========

    def _generate_attributes(self, position: Position, overall: int) -> PlayerAttributes:
        attributes = PlayerAttributes()
        key_attributes = KEY_ATTRIBUTES.get(position, [])

        for name in PlayerAttributes.__dataclass_fields__:
            if name in key_attributes:
                value = overall + self.rng.randint(-self.ATTRIBUTE_SPREAD, self.ATTRIBUTE_SPREAD)
            else:
                value = self.rng.randint(35, 65)
            setattr(attributes, name, self._clamp(value))

        return attributes

    @staticmethod
    def _clamp(value: int) -> int:
        return max(30, min(99, value))


def build_default_league(rng: Optional[random.Random] = None) -> League:
    """Build the standard 32-team league."""
    return LeagueFactory(rng or random.Random(0)).build_league()
