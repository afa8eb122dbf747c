"""
Player Stats Generator

Converts team totals into individual stat lines without simulating plays.

Allocation is exact: rushing yards of all ball carriers add up to the team
rushing total, receiving yards add up to the team passing total, and the
quarterback's passing line is the sum of what the receivers caught. Sacks,
interceptions and forced fumbles credited to a defense equal what the
opposing offense gave up.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from league import Player, Position, TeamRoster

from .game_result import PlayerGameStats, TeamGameStats
from .score_generator import decompose_score
from .simulation_constants import (
    CATCH_RATES,
    COMPLETION_MAX,
    COMPLETION_MIN,
    COMPLETION_NOISE,
    COVERAGE_POSITIONS,
    DEFENDERS_PER_POSITION,
    EMERGENCY_CARRIER_POSITIONS,
    FG_MISS_CHANCE,
    FUMBLE_ON_HB_CHANCE,
    HB1_SHARE_MIN,
    HB1_SHARE_SPREAD,
    HB_TARGET_SHARE,
    INTERCEPTION_WALK_CONTINUE,
    MAX_TURNOVERS,
    MAX_WIDE_RECEIVERS,
    PASS_RUSH_POSITIONS,
    PUNT_BASE,
    PUNT_DISTANCE_RANGE,
    SCRAMBLE_SHARE_MIN,
    SCRAMBLE_SHARE_SPREAD,
    SOLO_SHARE_MIN,
    SOLO_SHARE_SPREAD,
    TACKLE_FACTORS,
    TE_TARGET_SHARE,
    TEAM_TACKLE_RANGE,
    WR_TARGET_SHARES,
    YARDS_PER_CATCH,
)


StatLines = Dict[str, PlayerGameStats]


def allocate(total: int, weights: Sequence[float], caps: Optional[Sequence[int]] = None) -> List[int]:
    """
    Split an integer total proportionally to weights (largest remainder).

    Args:
        total: Amount to distribute
        weights: Relative shares; all-zero weights split evenly
        caps: Optional per-slot maximum

    Returns:
        Integer shares summing to ``total`` (or to the sum of caps, if smaller)
    """
    result = [0] * len(weights)
    remaining = total
    open_slots = [i for i in range(len(weights)) if caps is None or caps[i] > 0]

    while remaining > 0 and open_slots:
        weight_sum = sum(weights[i] for i in open_slots)
        if weight_sum > 0:
            shares = {i: remaining * weights[i] / weight_sum for i in open_slots}
        else:
            shares = {i: remaining / len(open_slots) for i in open_slots}

        given = 0
        for i in open_slots:
            amount = int(shares[i])
            if caps is not None:
                amount = min(amount, caps[i] - result[i])
            result[i] += amount
            given += amount

        leftover = remaining - given
        for i in sorted(open_slots, key=lambda slot: shares[slot] - int(shares[slot]), reverse=True):
            if leftover == 0:
                break
            if caps is None or result[i] < caps[i]:
                result[i] += 1
                leftover -= 1

        remaining = leftover
        open_slots = [i for i in open_slots if caps is None or result[i] < caps[i]]

    return result


def geometric_pick(count: int, rng: random.Random) -> int:
    """Index into a ranked list: each step down the list is a coin flip."""
    index = 0
    while index < count - 1 and rng.random() < INTERCEPTION_WALK_CONTINUE:
        index += 1
    return index


class PlayerStatsGenerator:
    """
    Allocates team totals to players.

    Call order matters for reproducibility: offense for both teams, then
    defense for both teams (defense reads the opposing offense's lines),
    then special teams.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    # ==================== Offense ====================

    def generate_offense(
        self,
        roster: TeamRoster,
        team_stats: TeamGameStats,
        stats: StatLines,
        rng: random.Random
    ) -> None:
        """
        Quarterback, rushing and receiving lines for one offense.

        Without a healthy quarterback, or with nobody to throw to, the
        passing game is folded into the run game: team passing yards move
        to rushing and sacks are cleared. Every touchdown is then a rushing
        touchdown, and every turnover is a fumble lost by a ball carrier.
        """
        quarterback = roster.starter(Position.QB)
        backs = roster.healthy_at(Position.HB, 2)
        receivers = self._receivers(roster, backs)

        touchdowns = team_stats.touchdowns
        passing_tds = min(touchdowns, int(touchdowns * 0.6 + rng.random() * 0.2 * touchdowns))
        rushing_tds = touchdowns - passing_tds

        if quarterback is not None and receivers:
            self._generate_passing(roster, quarterback, backs, receivers, team_stats, passing_tds, stats, rng)
            self._generate_rushing(roster, quarterback, backs, team_stats, rushing_tds, stats, rng)
            return

        missing = "quarterback" if quarterback is None else "receivers"
        self.logger.warning(
            f"{roster.team.abbreviation} has no healthy {missing}; passing game folded into the run game"
        )
        team_stats.rushing_yards += team_stats.passing_yards
        team_stats.passing_yards = 0
        team_stats.sacks = 0
        team_stats.sack_yards = 0

        carriers = self._generate_rushing(roster, quarterback, backs, team_stats, touchdowns, stats, rng)
        for _ in range(team_stats.turnovers if carriers else 0):
            fumbler = self._weighted_choice(carriers, [line.rush_attempts for line in carriers], rng)
            fumbler.fumbles += 1
            fumbler.fumbles_lost += 1

    def _generate_passing(
        self,
        roster: TeamRoster,
        quarterback: Player,
        backs: List[Player],
        receivers: List[Tuple[Player, float]],
        team_stats: TeamGameStats,
        passing_tds: int,
        stats: StatLines,
        rng: random.Random
    ) -> None:
        attributes = quarterback.attributes
        completion_pct = 0.55 + attributes.short_accuracy * 0.002 + attributes.medium_accuracy * 0.001
        completion_pct = max(COMPLETION_MIN, min(COMPLETION_MAX, completion_pct))
        completion_pct += rng.random() * 2 * COMPLETION_NOISE - COMPLETION_NOISE

        yards_per_completion = 9.0 + attributes.deep_accuracy * 0.04 + (rng.random() * 3 - 1.5)
        completions = max(10, int(team_stats.passing_yards / yards_per_completion))
        attempts = max(completions, int(completions / completion_pct))

        turnovers = team_stats.turnovers
        interceptions = rng.randrange(min(turnovers, MAX_TURNOVERS) + 1) if turnovers > 0 else 0

        qb_line = self._line(stats, quarterback, roster)
        qb_line.attempts = attempts
        qb_line.interceptions = interceptions
        qb_line.sacked = team_stats.sacks

        for _ in range(turnovers - interceptions):
            if backs and rng.random() < FUMBLE_ON_HB_CHANCE:
                fumbler = self._line(stats, backs[0], roster)
            else:
                fumbler = qb_line
            fumbler.fumbles += 1
            fumbler.fumbles_lost += 1

        target_weights = [share for _, share in receivers]
        targets = allocate(attempts, target_weights)

        catch_weights = []
        for (receiver, _), receiver_targets in zip(receivers, targets):
            catch_rate = CATCH_RATES[receiver.position] + (receiver.attributes.catching - 50) * 0.003
            catch_weights.append(receiver_targets * max(0.45, min(0.90, catch_rate)))
        receptions = allocate(completions, catch_weights, caps=targets)

        yard_weights = []
        for (receiver, _), catches in zip(receivers, receptions):
            per_catch = YARDS_PER_CATCH[receiver.position] + (receiver.attributes.speed - 50) * 0.05
            per_catch += rng.random() * 4 - 2
            yard_weights.append(catches * max(1.0, per_catch))
        receiving_yards = allocate(team_stats.passing_yards, yard_weights)

        lines = []
        for (receiver, _), receiver_targets, catches, yards in zip(receivers, targets, receptions, receiving_yards):
            line = self._line(stats, receiver, roster)
            line.targets += receiver_targets
            line.receptions += catches
            line.receiving_yards += yards
            lines.append(line)

        catchers = [line for line in lines if line.receptions > 0]
        for _ in range(passing_tds if catchers else 0):
            self._weighted_choice(catchers, [line.receptions for line in catchers], rng).receiving_tds += 1

        qb_line.completions = sum(line.receptions for line in lines)
        qb_line.passing_yards = sum(line.receiving_yards for line in lines)
        qb_line.passing_tds = sum(line.receiving_tds for line in lines)

    def _generate_rushing(
        self,
        roster: TeamRoster,
        quarterback: Optional[Player],
        backs: List[Player],
        team_stats: TeamGameStats,
        rushing_tds: int,
        stats: StatLines,
        rng: random.Random
    ) -> List[PlayerGameStats]:
        """Split team rushing among quarterback and backs; returns the carriers' lines."""
        remaining_yards = team_stats.rushing_yards
        remaining_tds = rushing_tds
        carriers = []

        if quarterback is not None:
            if backs:
                scramble = int(remaining_yards * (SCRAMBLE_SHARE_MIN + rng.random() * SCRAMBLE_SHARE_SPREAD))
                qb_tds = 1 if rng.randrange(10) == 0 and remaining_tds > 0 else 0
            else:
                scramble = remaining_yards
                qb_tds = remaining_tds
            qb_line = self._line(stats, quarterback, roster)
            qb_line.rushing_yards += scramble
            qb_line.rush_attempts += max(1, scramble // (3 + rng.randrange(4)))
            qb_line.rushing_tds += qb_tds
            carriers.append(qb_line)
            remaining_yards -= scramble
            remaining_tds -= qb_tds
        elif not backs:
            backs = self._emergency_carriers(roster)
            if not backs:
                self.logger.warning(f"{roster.team.abbreviation} has no healthy ball carriers")
                team_stats.total_yards -= team_stats.rushing_yards
                team_stats.rushing_yards = 0
                return carriers

        if not backs:
            return carriers

        if len(backs) > 1:
            lead_yards = int(remaining_yards * (HB1_SHARE_MIN + rng.random() * HB1_SHARE_SPREAD))
            lead_tds = rng.randint(1, remaining_tds) if remaining_tds > 0 else 0
        else:
            lead_yards = remaining_yards
            lead_tds = remaining_tds

        splits = [(backs[0], lead_yards, lead_tds)]
        if len(backs) > 1:
            splits.append((backs[1], remaining_yards - lead_yards, remaining_tds - lead_tds))

        for back, yards, tds in splits:
            line = self._line(stats, back, roster)
            line.rushing_yards += yards
            line.rush_attempts += max(1, yards // (3 + rng.randrange(3)))
            line.rushing_tds += tds
            carriers.append(line)
        return carriers

    @staticmethod
    def _emergency_carriers(roster: TeamRoster) -> List[Player]:
        """Fullback, then receivers, when no halfback can take a handoff."""
        players = []
        for position in EMERGENCY_CARRIER_POSITIONS:
            players.extend(roster.healthy_at(position, 1))
        return players[:2]

    def _receivers(self, roster: TeamRoster, backs: List[Player]):
        """(player, target weight) pairs: lead back, lead tight end, then wide receivers."""
        receivers = []
        if backs:
            receivers.append((backs[0], HB_TARGET_SHARE))
        tight_end = roster.starter(Position.TE)
        if tight_end is not None:
            receivers.append((tight_end, TE_TARGET_SHARE))

        wide_receivers = roster.healthy_at(Position.WR, MAX_WIDE_RECEIVERS)
        if wide_receivers:
            wr_pool = 1.0 - sum(share for _, share in receivers)
            for receiver, share in zip(wide_receivers, WR_TARGET_SHARES[len(wide_receivers)]):
                receivers.append((receiver, wr_pool * share))
        return receivers

    # ==================== Defense ====================

    def generate_defense(
        self,
        roster: TeamRoster,
        opponent_stats: TeamGameStats,
        stats: StatLines,
        rng: random.Random
    ) -> None:
        """
        Tackles, sacks, interceptions and forced fumbles for one defense.

        Must run after the opponent's offense so its interceptions and lost
        fumbles are known.
        """
        defenders = []
        for position, factor in TACKLE_FACTORS.items():
            for player in roster.healthy_at(position, DEFENDERS_PER_POSITION):
                attributes = player.attributes
                defenders.append((player, (attributes.tackle + attributes.pursuit) / 2 * factor))

        if not defenders:
            self.logger.warning(f"{roster.team.abbreviation} has no healthy defenders")
            return

        tackles = allocate(rng.randint(*TEAM_TACKLE_RANGE), [power for _, power in defenders])
        for (player, _), total in zip(defenders, tackles):
            line = self._line(stats, player, roster)
            line.total_tackles += total
            line.solo_tackles += int(total * (SOLO_SHARE_MIN + rng.random() * SOLO_SHARE_SPREAD))

        players = [player for player, _ in defenders]
        self._allocate_sacks(roster, players, opponent_stats.sacks, stats, rng)

        opponent_lines = [line for line in stats.values() if line.team_id == opponent_stats.team_id]
        interceptions = sum(line.interceptions for line in opponent_lines)
        fumbles_lost = sum(line.fumbles_lost for line in opponent_lines)

        coverage = sorted(
            (p for p in players if p.position in COVERAGE_POSITIONS),
            key=lambda p: p.attributes.play_recognition + p.attributes.zone_coverage,
            reverse=True
        )
        for _ in range(interceptions if coverage else 0):
            line = self._line(stats, coverage[geometric_pick(len(coverage), rng)], roster)
            line.interceptions_def += 1
            line.passes_defended += 1
        for player in coverage:
            if rng.random() < 0.3:
                self._line(stats, player, roster).passes_defended += 1 + rng.randrange(2)

        hitters = sorted(players, key=lambda p: p.attributes.hit_power, reverse=True)
        for _ in range(fumbles_lost):
            self._line(stats, hitters[geometric_pick(len(hitters), rng)], roster).forced_fumbles += 1

    def _allocate_sacks(
        self,
        roster: TeamRoster,
        defenders: List[Player],
        team_sacks: int,
        stats: StatLines,
        rng: random.Random
    ) -> None:
        rushers = sorted(
            (p for p in defenders if p.position in PASS_RUSH_POSITIONS),
            key=lambda p: (p.attributes.finesse_moves + p.attributes.power_moves) / 2,
            reverse=True
        )
        if not rushers or team_sacks <= 0:
            return

        # Work in half sacks
        remaining = team_sacks * 2
        credited = {}
        for rusher in rushers:
            if remaining <= 0:
                break
            rush = (rusher.attributes.finesse_moves + rusher.attributes.power_moves) / 200
            halves = min(remaining, int(remaining * rush * (0.8 + rng.random() * 0.4)))
            if halves > 0:
                credited[rusher.player_id] = credited.get(rusher.player_id, 0) + halves
                remaining -= halves
        if remaining > 0:
            top = rushers[0].player_id
            credited[top] = credited.get(top, 0) + remaining

        for rusher in rushers:
            halves = credited.get(rusher.player_id, 0)
            if halves == 0:
                continue
            line = self._line(stats, rusher, roster)
            line.sacks += halves / 2
            line.qb_hits += int(halves / 2) + rng.randrange(2)
            line.tackles_for_loss += int(halves / 2) + rng.randrange(2)

    # ==================== Special Teams ====================

    def generate_special_teams(
        self,
        roster: TeamRoster,
        score: int,
        stats: StatLines,
        rng: random.Random
    ) -> None:
        touchdowns, field_goals = decompose_score(score)

        kicker = roster.starter(Position.K)
        if kicker is not None:
            line = self._line(stats, kicker, roster)
            line.fg_made = field_goals
            line.fg_attempted = field_goals + (1 if rng.random() < FG_MISS_CHANCE else 0)
            line.xp_attempted = touchdowns
            line.xp_made = max(0, touchdowns - (1 if rng.randrange(15) == 0 else 0))

        punter = roster.starter(Position.P)
        if punter is not None:
            punts = max(1, PUNT_BASE - touchdowns - field_goals + rng.randint(-1, 1))
            line = self._line(stats, punter, roster)
            line.punts = punts
            line.punt_yards = punts * rng.randint(*PUNT_DISTANCE_RANGE)

    # ========== Helper Methods ==========

    @staticmethod
    def _line(stats: StatLines, player: Player, roster: TeamRoster) -> PlayerGameStats:
        line = stats.get(player.player_id)
        if line is None:
            line = PlayerGameStats(player_id=player.player_id, team_id=roster.team_id, games_played=1)
            stats[player.player_id] = line
        return line

    @staticmethod
    def _weighted_choice(items, weights, rng: random.Random):
        pick = rng.random() * sum(weights)
        for item, weight in zip(items, weights):
            pick -= weight
            if pick < 0:
                return item
        return items[-1]
