"""
Playoff Bracket Data Models

Playoff rounds and the collection of games that make up one round.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from league import Game

from .playoff_exceptions import InvalidBracketException, InvalidRoundException


class PlayoffRound(Enum):
    """Playoff rounds in order."""
    WILD_CARD = "wild_card"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    SUPER_BOWL = "super_bowl"

    @classmethod
    def from_string(cls, value: Any) -> 'PlayoffRound':
        """
        Resolve a round from its value or name (case-insensitive).

        Raises:
            InvalidRoundException: If the round is unknown
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace(' ', '_').replace('-', '_')
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidRoundException(value, [m.value for m in cls])

    @property
    def display_name(self) -> str:
        display_names = {
            PlayoffRound.WILD_CARD: 'Wild Card',
            PlayoffRound.DIVISIONAL: 'Divisional Round',
            PlayoffRound.CONFERENCE: 'Conference Championship',
            PlayoffRound.SUPER_BOWL: 'Super Bowl',
        }
        return display_names[self]

    @property
    def next_round(self) -> Optional['PlayoffRound']:
        rounds = list(PlayoffRound)
        index = rounds.index(self)
        return rounds[index + 1] if index + 1 < len(rounds) else None

    @property
    def games_per_conference(self) -> int:
        """Games per conference (the Super Bowl counts once overall)."""
        counts = {
            PlayoffRound.WILD_CARD: 3,
            PlayoffRound.DIVISIONAL: 2,
            PlayoffRound.CONFERENCE: 1,
            PlayoffRound.SUPER_BOWL: 1,
        }
        return counts[self]

    @property
    def expected_game_count(self) -> int:
        if self is PlayoffRound.SUPER_BOWL:
            return 1
        return self.games_per_conference * 2


@dataclass
class PlayoffBracket:
    """
    One round of the playoff bracket.

    The season controller keeps one bracket per round so completed rounds
    can be reported after the fact.
    """
    playoff_round: PlayoffRound
    season: int
    week: int
    games: List[Game] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.games) and all(game.is_completed for game in self.games)

    def winners(self) -> List[int]:
        return [game.winner_id for game in self.games if game.winner_id is not None]

    def validate(self) -> bool:
        """
        Validate bracket structure.

        Returns:
            True if the bracket is valid

        Raises:
            InvalidBracketException: If the game count or round tags are wrong
        """
        if len(self.games) != self.playoff_round.expected_game_count:
            raise InvalidBracketException(
                f"Expected {self.playoff_round.expected_game_count} games for "
                f"{self.playoff_round.display_name}, got {len(self.games)}",
                round_name=self.playoff_round.value,
                game_count=len(self.games)
            )

        for game in self.games:
            if not game.is_playoff or game.playoff_round != self.playoff_round.value:
                raise InvalidBracketException(
                    f"Game {game.game_id} is not tagged as {self.playoff_round.value}",
                    round_name=self.playoff_round.value
                )

        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round': self.playoff_round.value,
            'season': self.season,
            'week': self.week,
            'games': [game.to_dict() for game in self.games],
        }
