"""
Matchup Builder

Builds the home/away pairings of a regular season before any week is
assigned. Pairings come from five rotation buckets applied in order:

1. Division home-and-away (6 games per team)
2. Intra-conference division rotation (4 games)
3. Inter-conference division rotation (4 games)
4. Same-standing games against the two remaining same-conference divisions (2 games)
5. Inter-conference 17th game against a same-ranked team (1 game)

A reconciliation pass then tops up any team short of its game count and
trims any team over it. The buckets fill the 32-team league exactly;
smaller leagues (one to three divisions per conference) come up short and
are completed by reconciliation, with repeat meetings only once every
fresh opponent is used up.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from league import Conference, Division, Team

from .config import ScheduleConfig
from .scheduling_exceptions import InvalidLeagueStructureException


logger = logging.getLogger(__name__)


class MatchupBucket(Enum):
    """Which rotation rule produced a matchup, in build order."""
    DIVISION = 1
    INTRA_CONFERENCE = 2
    INTER_CONFERENCE = 3
    SAME_STANDING = 4
    EXTRA_GAME = 5
    RECONCILIATION = 6


class MeetingTier(Enum):
    """How many earlier meetings a reconciliation pairing may add to, tried in order."""
    FRESH = 0
    RETURN_TRIP = 1
    REPEAT = 2

    @property
    def max_prior_meetings(self) -> float:
        return float("inf") if self is MeetingTier.REPEAT else self.value


@dataclass(frozen=True)
class Matchup:
    """An unscheduled home/away pairing."""
    home_team_id: int
    away_team_id: int
    bucket: MatchupBucket

    @property
    def pair_key(self) -> Tuple[int, int]:
        """Order-independent key for the two teams."""
        return (min(self.home_team_id, self.away_team_id),
                max(self.home_team_id, self.away_team_id))

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: int) -> int:
        return self.away_team_id if team_id == self.home_team_id else self.home_team_id


class LeagueStructure:
    """
    Conference/division topology in a stable order.

    Conferences are ordered by name, divisions by their enum order and teams
    inside a division by id, so every index used by the rotation formulas is
    reproducible.
    """

    def __init__(self, teams: Sequence[Team]):
        if not teams:
            raise InvalidLeagueStructureException("Cannot schedule an empty league")

        self.teams: Dict[int, Team] = {team.team_id: team for team in teams}
        self.team_ids: List[int] = sorted(self.teams)

        problems = []
        if len(self.team_ids) % 2 != 0:
            problems.append(f"odd team count {len(self.team_ids)}")

        self.conferences: List[Conference] = sorted(
            {team.conference for team in teams}, key=lambda c: c.value
        )
        if len(self.conferences) != 2:
            problems.append(f"expected 2 conferences, found {len(self.conferences)}")

        self.division_names: Dict[Conference, List[Division]] = {}
        self.divisions: Dict[Conference, List[List[int]]] = {}
        for conference in self.conferences:
            names = sorted(
                {t.division for t in teams if t.conference == conference},
                key=lambda d: d.order
            )
            self.division_names[conference] = names
            self.divisions[conference] = [
                sorted(t.team_id for t in teams
                       if t.conference == conference and t.division == name)
                for name in names
            ]

        division_counts = {len(divs) for divs in self.divisions.values()}
        if len(division_counts) > 1:
            problems.append("conferences have different division counts")

        if problems:
            raise InvalidLeagueStructureException("League cannot be scheduled", problems)

        self._division_index: Dict[int, Tuple[Conference, int]] = {}
        for conference, divs in self.divisions.items():
            for index, members in enumerate(divs):
                for team_id in members:
                    self._division_index[team_id] = (conference, index)

    @property
    def division_count(self) -> int:
        """Divisions per conference."""
        return len(self.divisions[self.conferences[0]])

    def division_of(self, team_id: int) -> Tuple[Conference, int]:
        return self._division_index[team_id]

    def same_division(self, team_a: int, team_b: int) -> bool:
        return self._division_index[team_a] == self._division_index[team_b]


def circle_pairings(count: int, round_index: int) -> List[Tuple[int, int]]:
    """
    Pair ``count`` items for one round of a round-robin (circle method).

    Rounds cycle with period ``count - 1`` (``count`` when odd, where one item
    sits out each round). For four items the rounds are
    {0-1, 2-3}, {0-2, 1-3}, {0-3, 1-2}.
    """
    slots: List[Optional[int]] = list(range(count))
    if count % 2:
        slots.append(None)

    size = len(slots)
    rounds = size - 1
    if rounds <= 0:
        return []

    shift = rounds - 1 - (round_index % rounds)
    rotating = slots[1:]
    if shift:
        rotating = rotating[-shift:] + rotating[:-shift]
    arranged = [slots[0]] + rotating

    pairs = []
    for i in range(size // 2):
        a, b = arranged[i], arranged[size - 1 - i]
        if a is None or b is None:
            continue
        pairs.append((min(a, b), max(a, b)))
    return sorted(pairs)


class MatchupBuilder:
    """Builds one season's matchups for a fixed league structure."""

    RECONCILE_PASSES = 3

    def __init__(
        self,
        structure: LeagueStructure,
        config: Optional[ScheduleConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.structure = structure
        self.config = config or ScheduleConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.matchups: List[Matchup] = []
        self.warnings: List[str] = []
        self._venue_counts: Counter = Counter()
        self._pair_counts: Counter = Counter()

    def build(
        self,
        season_year: int,
        rng: random.Random,
        prior_year_division_ranks: Optional[Dict[int, int]] = None
    ) -> List[Matchup]:
        """
        Build all matchups for a season.

        Args:
            season_year: Season being scheduled
            rng: Random stream (rank fallback and reconciliation only)
            prior_year_division_ranks: team_id -> final division rank (1 = winner)

        Returns:
            Matchups in bucket order
        """
        self.matchups = []
        self.warnings = []
        self._venue_counts = Counter()
        self._pair_counts = Counter()

        offset = season_year - self.config.base_year
        division_count = self.structure.division_count
        ranks = self.build_effective_ranks(rng, prior_year_division_ranks)

        self._add_division_games()

        partners = self._intra_conference_partners(offset)
        self._add_intra_conference_rotation(partners)

        inter_index = offset % division_count
        self._add_inter_conference_rotation(inter_index)

        self._add_same_standing_games(partners, ranks, season_year, offset)
        self._add_extra_game(offset, inter_index, ranks, season_year)

        counts = Counter({bucket: 0 for bucket in MatchupBucket})
        counts.update(m.bucket for m in self.matchups)
        self.logger.debug(
            f"Season {season_year} buckets: "
            + ", ".join(f"{b.name.lower()}={counts[b]}" for b in MatchupBucket)
        )

        self._reconcile(rng)
        return list(self.matchups)

    def build_effective_ranks(
        self,
        rng: random.Random,
        prior_year_division_ranks: Optional[Dict[int, int]] = None
    ) -> Dict[Conference, List[Dict[int, int]]]:
        """
        Division ranks used by the same-standing buckets.

        A division keeps its prior-season ranks only when they are exactly
        1..n for its n teams. Otherwise its teams are shuffled and ranked in
        shuffled order.

        Returns:
            conference -> division index -> {rank: team_id}
        """
        prior = prior_year_division_ranks or {}
        ranks: Dict[Conference, List[Dict[int, int]]] = {}

        for conference in self.structure.conferences:
            ranks[conference] = []
            for members in self.structure.divisions[conference]:
                known = [prior.get(team_id) for team_id in members]
                if all(r is not None for r in known) and sorted(known) == list(range(1, len(members) + 1)):
                    ranks[conference].append({rank: tid for tid, rank in zip(members, known)})
                else:
                    shuffled = list(members)
                    rng.shuffle(shuffled)
                    ranks[conference].append({i + 1: tid for i, tid in enumerate(shuffled)})

        return ranks

    # ==================== Buckets ====================

    def _add_division_games(self) -> None:
        for conference in self.structure.conferences:
            for members in self.structure.divisions[conference]:
                for i, team_a in enumerate(members):
                    for team_b in members[i + 1:]:
                        self._add(team_a, team_b, MatchupBucket.DIVISION)
                        self._add(team_b, team_a, MatchupBucket.DIVISION)

    def _intra_conference_partners(self, offset: int) -> Dict[Conference, Dict[int, int]]:
        """Division index -> paired same-conference division index."""
        division_count = self.structure.division_count
        pairs = circle_pairings(division_count, offset)

        partners: Dict[int, int] = {}
        for a, b in pairs:
            partners[a] = b
            partners[b] = a
        return {conference: dict(partners) for conference in self.structure.conferences}

    def _add_intra_conference_rotation(self, partners: Dict[Conference, Dict[int, int]]) -> None:
        for conference in self.structure.conferences:
            divisions = self.structure.divisions[conference]
            for index_a, index_b in sorted(partners[conference].items()):
                if index_a < index_b:
                    self._add_full_division_series(
                        divisions[index_a], divisions[index_b], MatchupBucket.INTRA_CONFERENCE
                    )

    def _add_inter_conference_rotation(self, inter_index: int) -> None:
        conf_a, conf_b = self.structure.conferences
        division_count = self.structure.division_count
        for d in range(division_count):
            self._add_full_division_series(
                self.structure.divisions[conf_a][d],
                self.structure.divisions[conf_b][(d + inter_index) % division_count],
                MatchupBucket.INTER_CONFERENCE
            )

    def _add_full_division_series(
        self,
        division_a: List[int],
        division_b: List[int],
        bucket: MatchupBucket
    ) -> None:
        """
        Every team of A plays every team of B once.

        Team i of A hosts the first half of B counted cyclically from i and
        visits the rest, which gives each side two home and two away games
        for four-team divisions.
        """
        size = len(division_b)
        for i, team_a in enumerate(division_a):
            for k in range(size):
                team_b = division_b[(i + k) % size]
                if k < size // 2:
                    self._add(team_a, team_b, bucket)
                else:
                    self._add(team_b, team_a, bucket)

    def _add_same_standing_games(
        self,
        partners: Dict[Conference, Dict[int, int]],
        ranks: Dict[Conference, List[Dict[int, int]]],
        season_year: int,
        offset: int
    ) -> None:
        handled: Set[Tuple[int, int]] = set()

        for conference in self.structure.conferences:
            division_count = self.structure.division_count
            for d in range(division_count):
                remaining = [r for r in range(division_count)
                             if r != d and r != partners[conference].get(d)]
                if len(remaining) > 2:
                    start = offset % len(remaining)
                    remaining = [remaining[(start + i) % len(remaining)] for i in range(2)]

                for rank, team_id in sorted(ranks[conference][d].items()):
                    for r in remaining:
                        opponent = ranks[conference][r].get(rank)
                        if opponent is None:
                            continue
                        key = (min(team_id, opponent), max(team_id, opponent))
                        if key in handled:
                            continue
                        handled.add(key)

                        if (d + r + season_year) % 2 == 0:
                            self._add(team_id, opponent, MatchupBucket.SAME_STANDING)
                        else:
                            self._add(opponent, team_id, MatchupBucket.SAME_STANDING)

    def _add_extra_game(
        self,
        offset: int,
        inter_index: int,
        ranks: Dict[Conference, List[Dict[int, int]]],
        season_year: int
    ) -> None:
        conf_a, conf_b = self.structure.conferences
        division_count = self.structure.division_count
        extra_index = (offset - 2) % division_count

        if extra_index == inter_index:
            self.logger.debug(
                f"No inter-conference division left for the extra game "
                f"({division_count} divisions per conference)"
            )
            return

        conf_a_hosts = season_year % 2 == 0
        for d in range(division_count):
            other = (d + extra_index) % division_count
            for rank, team_id in sorted(ranks[conf_a][d].items()):
                opponent = ranks[conf_b][other].get(rank)
                if opponent is None:
                    continue
                if conf_a_hosts:
                    self._add(team_id, opponent, MatchupBucket.EXTRA_GAME)
                else:
                    self._add(opponent, team_id, MatchupBucket.EXTRA_GAME)

    # ==================== Reconciliation ====================

    def _reconcile(self, rng: random.Random) -> None:
        """Bring every team to exactly ``games_per_team`` where possible."""
        for _ in range(self.RECONCILE_PASSES):
            added = self._fill_short_teams(rng)
            dropped = self._drop_excess()
            if not added and not dropped:
                break

        target = self.config.games_per_team
        counts = self._game_counts()
        for team_id in self.structure.team_ids:
            if counts[team_id] != target:
                message = (f"Team {team_id} has {counts[team_id]} games after reconciliation "
                           f"(expected {target})")
                self.warnings.append(message)
                self.logger.warning(message)

    def _fill_short_teams(self, rng: random.Random) -> int:
        """
        Add games until no team is short of its count.

        Meeting tiers are tried in order: teams that have not met, then the
        unused venue of a pair that met once, then a repeat meeting. Within
        a tier a short team is first paired with another short team; failing
        that, a game between two other teams X-Y is split into short-X and
        short-Y, which leaves X and Y at their count. Division rivals are
        never paired here.

        Returns:
            Number of steps that added games
        """
        target = self.config.games_per_team
        counts = self._game_counts()
        steps = 0

        while True:
            short = [t for t in self.structure.team_ids if counts[t] < target]
            if not short:
                break
            rng.shuffle(short)

            for tier in MeetingTier:
                if self._pair_short_teams(short, counts, tier, rng):
                    break
                if self._split_game(short, counts, tier, rng):
                    break
            else:
                break
            steps += 1

        return steps

    def _pair_short_teams(self, short: List[int], counts: Counter, tier: MeetingTier,
                          rng: random.Random) -> bool:
        target = self.config.games_per_team
        for team_id in short:
            candidates = [o for o in short
                          if counts[o] < target and self._can_meet(team_id, o, tier)]
            if not candidates:
                continue
            fewest = min(self._meetings(team_id, o) for o in candidates)
            opponent = rng.choice([o for o in candidates if self._meetings(team_id, o) == fewest])
            self._add_reconciled(team_id, opponent, counts, rng)
            return True
        return False

    def _split_game(self, short: List[int], counts: Counter, tier: MeetingTier,
                    rng: random.Random) -> bool:
        """Replace a non-divisional X-Y with first-X and second-Y."""
        target = self.config.games_per_team
        for first in short:
            for second in short:
                if first == second and counts[first] > target - 2:
                    continue
                options = []
                for matchup in self.matchups:
                    if matchup.bucket == MatchupBucket.DIVISION:
                        continue
                    x, y = matchup.home_team_id, matchup.away_team_id
                    if x in (first, second) or y in (first, second):
                        continue
                    for a, b in ((x, y), (y, x)):
                        if first == second and a == b:
                            continue
                        if self._can_meet(first, a, tier) and self._can_meet(second, b, tier):
                            options.append((matchup, a, b))
                if not options:
                    continue

                matchup, a, b = rng.choice(options)
                self._remove(matchup)
                self._add_reconciled(first, a, counts, rng)
                self._add_reconciled(second, b, counts, rng)
                self.logger.debug(
                    f"Split {matchup.away_team_id} @ {matchup.home_team_id} "
                    f"to give {first} and {second} a game"
                )
                return True
        return False

    def _drop_excess(self) -> int:
        target = self.config.games_per_team
        counts = self._game_counts()
        dropped = 0

        for team_id in self.structure.team_ids:
            while counts[team_id] > target:
                removable = [m for m in self.matchups
                             if m.involves(team_id) and m.bucket != MatchupBucket.DIVISION]
                if not removable:
                    break
                # Latest bucket first, preferring opponents that are also over
                removable.sort(key=lambda m: (
                    counts[m.opponent_of(team_id)] > target,
                    m.bucket.value,
                ), reverse=True)
                victim = removable[0]

                self._remove(victim)
                counts[victim.home_team_id] -= 1
                counts[victim.away_team_id] -= 1
                dropped += 1
                self.logger.debug(
                    f"Dropped {victim.away_team_id} @ {victim.home_team_id} ({victim.bucket.name})"
                )

        return dropped

    def _add_reconciled(self, team_a: int, team_b: int, counts: Counter, rng: random.Random) -> None:
        """Add a reconciliation game, hosting it at the side with fewer home games."""
        home_counts = Counter(m.home_team_id for m in self.matchups)
        if home_counts[team_a] < home_counts[team_b]:
            home, away = team_a, team_b
        elif home_counts[team_a] > home_counts[team_b]:
            home, away = team_b, team_a
        elif rng.random() < 0.5:
            home, away = team_a, team_b
        else:
            home, away = team_b, team_a
        if self._venue_counts[(home, away)] > self._venue_counts[(away, home)]:
            home, away = away, home

        meetings = self._meetings(home, away)
        if meetings:
            message = f"Teams {home} and {away} meet {meetings + 1} times"
            self.warnings.append(message)
            self.logger.debug(message)

        self._add(home, away, MatchupBucket.RECONCILIATION, allow_repeat=True)
        counts[home] += 1
        counts[away] += 1
        self.logger.debug(f"Reconciliation added {away} @ {home}")

    def _can_meet(self, team_a: int, team_b: int, tier: MeetingTier) -> bool:
        if team_a == team_b or self.structure.same_division(team_a, team_b):
            return False
        return self._meetings(team_a, team_b) <= tier.max_prior_meetings

    # ========== Helper Methods ==========

    def _add(self, home: int, away: int, bucket: MatchupBucket, allow_repeat: bool = False) -> bool:
        """Record a matchup unless it duplicates an existing one."""
        if home == away:
            return False

        key = self._key(home, away)
        if not allow_repeat:
            if self._venue_counts[(home, away)]:
                return False
            if bucket != MatchupBucket.DIVISION and self._pair_counts[key]:
                return False

        self._venue_counts[(home, away)] += 1
        self._pair_counts[key] += 1
        self.matchups.append(Matchup(home, away, bucket))
        return True

    def _remove(self, matchup: Matchup) -> None:
        self.matchups.remove(matchup)
        self._venue_counts[(matchup.home_team_id, matchup.away_team_id)] -= 1
        self._pair_counts[matchup.pair_key] -= 1

    def _meetings(self, team_a: int, team_b: int) -> int:
        return self._pair_counts[self._key(team_a, team_b)]

    @staticmethod
    def _key(team_a: int, team_b: int) -> Tuple[int, int]:
        return (min(team_a, team_b), max(team_a, team_b))

    def _game_counts(self) -> Counter:
        counts = Counter({team_id: 0 for team_id in self.structure.team_ids})
        for matchup in self.matchups:
            counts[matchup.home_team_id] += 1
            counts[matchup.away_team_id] += 1
        return counts
