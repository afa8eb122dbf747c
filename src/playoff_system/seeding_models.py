"""
Playoff Seeding Data Models

Data structures for representing playoff seeding calculations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PlayoffSeed:
    """
    A single playoff seed.

    Immutable once created: a round's survivors are new lists of the same
    seed objects, never edited copies.
    """
    seed: int                      # 1-7
    team_id: int
    conference: str                # "AFC" or "NFC"
    is_division_winner: bool       # True for seeds 1-4
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    division_name: str = ""        # e.g., "AFC North"
    division_record: str = ""      # e.g., "5-1"
    conference_record: str = ""    # e.g., "9-3"

    @property
    def record_string(self) -> str:
        """Record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def seed_label(self) -> str:
        """Seed label (e.g., '#1 Seed' or 'Wild Card')."""
        if self.seed == 1:
            return "#1 Seed (Bye)"
        elif self.is_division_winner:
            return f"#{self.seed} Seed (Division Winner)"
        else:
            return f"#{self.seed} Seed (Wild Card)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'team_id': self.team_id,
            'conference': self.conference,
            'is_division_winner': self.is_division_winner,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'points_for': self.points_for,
            'points_against': self.points_against,
            'division_name': self.division_name,
            'division_record': self.division_record,
            'conference_record': self.conference_record,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffSeed':
        return cls(
            seed=int(data['seed']),
            team_id=int(data['team_id']),
            conference=data['conference'],
            is_division_winner=bool(data['is_division_winner']),
            wins=int(data.get('wins', 0)),
            losses=int(data.get('losses', 0)),
            ties=int(data.get('ties', 0)),
            points_for=int(data.get('points_for', 0)),
            points_against=int(data.get('points_against', 0)),
            division_name=data.get('division_name', ""),
            division_record=data.get('division_record', ""),
            conference_record=data.get('conference_record', ""),
        )


@dataclass
class ConferenceSeeding:
    """
    Seeding for a single conference.

    Contains all 7 playoff seeds plus the teams that missed out.
    """
    conference: str
    seeds: List[PlayoffSeed]           # Ordered 1-7
    eliminated_teams: List[int] = field(default_factory=list)

    @property
    def division_winners(self) -> List[PlayoffSeed]:
        return [s for s in self.seeds if s.is_division_winner]

    @property
    def wildcards(self) -> List[PlayoffSeed]:
        return [s for s in self.seeds if not s.is_division_winner]

    def get_seed_by_number(self, seed_number: int) -> Optional[PlayoffSeed]:
        for seed in self.seeds:
            if seed.seed == seed_number:
                return seed
        return None

    def get_seed_by_team(self, team_id: int) -> Optional[PlayoffSeed]:
        for seed in self.seeds:
            if seed.team_id == team_id:
                return seed
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'conference': self.conference,
            'seeds': [s.to_dict() for s in self.seeds],
            'eliminated_teams': list(self.eliminated_teams),
        }


@dataclass
class PlayoffSeeding:
    """
    Complete playoff seeding for both conferences.

    ``division_standings`` keeps the full ordering of every division
    ("AFC North" -> team ids, first place first); the season controller uses
    it as next season's prior-year division ranks.
    """
    season: int
    afc: ConferenceSeeding
    nfc: ConferenceSeeding
    division_standings: Dict[str, List[int]] = field(default_factory=dict)

    def for_conference(self, conference: str) -> ConferenceSeeding:
        """
        Raises:
            ValueError: If the conference is not AFC or NFC
        """
        key = str(getattr(conference, 'value', conference)).upper()
        if key == 'AFC':
            return self.afc
        if key == 'NFC':
            return self.nfc
        raise ValueError(f"Unknown conference: {conference}")

    def division_ranks(self) -> Dict[int, int]:
        """team_id -> finishing place inside its division (1 = winner)."""
        ranks = {}
        for team_ids in self.division_standings.values():
            for place, team_id in enumerate(team_ids, start=1):
                ranks[team_id] = place
        return ranks

    def get_team_seed(self, team_id: int) -> Optional[PlayoffSeed]:
        return self.afc.get_seed_by_team(team_id) or self.nfc.get_seed_by_team(team_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'afc': self.afc.to_dict(),
            'nfc': self.nfc.to_dict(),
            'division_standings': {k: list(v) for k, v in self.division_standings.items()},
        }
