"""
Playoff Manager

Pure logic for playoff bracket generation and progression.
Implements the re-seeding rule after the wild card round.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from league import Game

from .bracket_models import PlayoffRound
from .playoff_exceptions import InvalidSeedingException
from .seeding_models import PlayoffSeed


class PlayoffManager:
    """
    Generates playoff rounds from seed lists and filters survivors.

    No side effects on its inputs: takes seeds and completed games, returns
    new games and new seed lists.

    Matchup rules:
    - Wild Card: (2)v(7), (3)v(6), (4)v(5), #1 gets a bye
    - Divisional: best remaining seed hosts the LOWEST remaining seed,
      the other two survivors play each other
    - Conference: the two survivors, better seed hosts
    - Super Bowl: AFC champion (listed home) vs NFC champion
    """

    WILD_CARD_PAIRINGS = ((2, 7), (3, 6), (4, 5))

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def generate_playoff_round(
        self,
        afc_seeds: Sequence[PlayoffSeed],
        nfc_seeds: Sequence[PlayoffSeed],
        playoff_round,
        season: int,
        week: int
    ) -> List[Game]:
        """
        Create the games of one playoff round.

        Args:
            afc_seeds: Surviving AFC seeds (any order)
            nfc_seeds: Surviving NFC seeds (any order)
            playoff_round: PlayoffRound or its string value
            season: Season year for game ids
            week: Calendar week of the PLAYOFFS / SUPER_BOWL phase

        Returns:
            Unplayed playoff games, AFC first. A conference with too few
            surviving seeds contributes no games; the Super Bowl needs both
            champions.

        Raises:
            InvalidRoundException: If the round name is unknown
            InvalidSeedingException: If a seed list holds duplicate teams
        """
        playoff_round = PlayoffRound.from_string(playoff_round)
        afc = self._sorted_seeds(afc_seeds, "AFC")
        nfc = self._sorted_seeds(nfc_seeds, "NFC")

        if playoff_round is PlayoffRound.SUPER_BOWL:
            if not afc or not nfc:
                self.logger.warning(
                    f"Cannot schedule Super Bowl {season}: "
                    f"AFC champion {'present' if afc else 'missing'}, "
                    f"NFC champion {'present' if nfc else 'missing'}"
                )
                return []
            pairs = [(afc[0], nfc[0])]
        else:
            pairs = []
            for conference, seeds in (("AFC", afc), ("NFC", nfc)):
                conference_pairs = self._conference_pairings(seeds, playoff_round)
                if conference_pairs is None:
                    self.logger.warning(
                        f"Insufficient {conference} seeds for {playoff_round.display_name} "
                        f"{season}: {len(seeds)} remaining"
                    )
                    continue
                pairs.extend(conference_pairs)

        games = [
            Game(
                game_id=f"playoff_{season}_{playoff_round.value}_{number}",
                season=season,
                week=week,
                home_team_id=home.team_id,
                away_team_id=away.team_id,
                is_playoff=True,
                playoff_round=playoff_round.value,
            )
            for number, (home, away) in enumerate(pairs, start=1)
        ]

        self.logger.info(
            f"Generated {playoff_round.display_name} {season} (week {week}): "
            + ", ".join(f"{g.away_team_id} @ {g.home_team_id}" for g in games)
        )
        return games

    def filter_to_winners(
        self,
        seeds: Sequence[PlayoffSeed],
        round_games: Iterable[Game]
    ) -> List[PlayoffSeed]:
        """
        Keep the seeds still alive after a round.

        A seed survives if its team won a completed game of the round, or if
        its team did not play in the round at all (bye).

        Args:
            seeds: Seeds that entered the round
            round_games: Games of that round only

        Returns:
            Survivors sorted by seed number
        """
        round_games = list(round_games)
        participants = set()
        winners = set()
        for game in round_games:
            participants.add(game.home_team_id)
            participants.add(game.away_team_id)
            if game.is_completed and game.winner_id is not None:
                winners.add(game.winner_id)

        survivors = [
            seed for seed in seeds
            if seed.team_id in winners or seed.team_id not in participants
        ]
        survivors.sort(key=lambda s: s.seed)

        eliminated = [seed.team_id for seed in seeds if seed not in survivors]
        if eliminated:
            self.logger.debug(f"Eliminated teams: {eliminated}")
        return survivors

    # ========== Helper Methods ==========

    def _conference_pairings(self, seeds: List[PlayoffSeed], playoff_round: PlayoffRound):
        """(home, away) seed pairs for one conference, or None if too few seeds."""
        if playoff_round is PlayoffRound.WILD_CARD:
            by_number: Dict[int, PlayoffSeed] = {seed.seed: seed for seed in seeds}
            if any(high not in by_number or low not in by_number
                   for high, low in self.WILD_CARD_PAIRINGS):
                return None
            return [(by_number[high], by_number[low]) for high, low in self.WILD_CARD_PAIRINGS]

        if playoff_round is PlayoffRound.DIVISIONAL:
            if len(seeds) < 3:
                return None
            # Re-seed: the top survivor draws the weakest one left
            top, lowest = seeds[0], seeds[-1]
            middle = seeds[1:-1]
            pairs = [(top, lowest)]
            if len(middle) >= 2:
                pairs.append((middle[0], middle[1]))
            return pairs

        if len(seeds) < 2:
            return None
        return [(seeds[0], seeds[1])]

    def _sorted_seeds(self, seeds: Sequence[PlayoffSeed], conference: str) -> List[PlayoffSeed]:
        team_ids = [seed.team_id for seed in seeds]
        if len(set(team_ids)) != len(team_ids):
            raise InvalidSeedingException(
                f"Duplicate teams in {conference} seed list: {team_ids}",
                conference=conference
            )
        return sorted(seeds, key=lambda s: s.seed)
