"""
Game Summary

Player of the game selection and the short key-play narrative attached to
every result.
"""

import random
from typing import Dict, List, Optional, Tuple

from league import Player, Team

from .game_result import PlayerGameStats
from .simulation_constants import (
    CLOSE_GAME_NARRATIVE_MARGIN,
    MAX_KEY_PLAYS,
    SCRIMMAGE_THRESHOLD,
    WINNER_MULTIPLIER,
)


class GameSummaryBuilder:
    """
    Builds the player of the game and key plays from finished stat lines.

    Usage:
        builder = GameSummaryBuilder(players)
        potg_id, potg_line = builder.player_of_the_game(stats, home, away, 24, 17)
        key_plays = builder.key_plays(stats, home, away, 24, 17, rng)
    """

    def __init__(self, players: Dict[str, Player]):
        self.players = players

    # ==================== Player of the Game ====================

    def player_of_the_game(
        self,
        stats: Dict[str, PlayerGameStats],
        home_team: Team,
        away_team: Team,
        home_score: int,
        away_score: int
    ) -> Tuple[Optional[str], Optional[str]]:
        """
        Highest rated stat line, with a bonus for the winning side.

        The home team counts as the winner of a tie. The first line reaching
        the top rating keeps it.

        Returns:
            (player_id, stat line) or (None, None) if nobody registered a positive rating
        """
        winning_team_id = home_team.team_id if home_score >= away_score else away_team.team_id
        best_rating = 0.0
        best_id = None
        best_line = None

        for player_id, line in stats.items():
            if player_id not in self.players:
                continue
            rating, summary = self.rate_line(line)
            if line.team_id == winning_team_id:
                rating *= WINNER_MULTIPLIER
            if rating > best_rating:
                best_rating = rating
                best_id = player_id
                best_line = summary

        return best_id, best_line

    def rate_line(self, line: PlayerGameStats) -> Tuple[float, str]:
        """Best of the passing, scrimmage and defensive ratings, with its summary text."""
        rating = 0.0
        summary = ""

        if line.passing_yards > 0:
            rating = line.passing_yards / 25 + line.passing_tds * 6 - line.interceptions * 4
            summary = (f"{line.completions}/{line.attempts}, {line.passing_yards} yds, "
                       f"{line.passing_tds} TD")
            if line.interceptions > 0:
                summary += f", {line.interceptions} INT"

        if line.rushing_yards > SCRIMMAGE_THRESHOLD or line.receiving_yards > SCRIMMAGE_THRESHOLD:
            scrimmage = line.scrimmage_yards / 15 + line.total_tds * 6
            if scrimmage > rating:
                rating = scrimmage
                parts = []
                if line.rushing_yards > 0:
                    parts.append(f"{line.rush_attempts} car, {line.rushing_yards} yds, {line.rushing_tds} TD")
                if line.receiving_yards > 0:
                    parts.append(f"{line.receptions} rec, {line.receiving_yards} yds, {line.receiving_tds} TD")
                summary = " | ".join(parts)

        defense = (line.solo_tackles + line.sacks * 3 + line.interceptions_def * 5
                   + line.forced_fumbles * 3 + line.defensive_tds * 8)
        if defense > rating:
            rating = defense
            parts = []
            if line.total_tackles > 0:
                parts.append(f"{line.total_tackles} tkl")
            if line.sacks > 0:
                parts.append(f"{line.sacks:g} sack")
            if line.interceptions_def > 0:
                parts.append(f"{line.interceptions_def} INT")
            if line.forced_fumbles > 0:
                parts.append(f"{line.forced_fumbles} FF")
            summary = ", ".join(parts)

        return rating, summary

    # ==================== Narrative ====================

    def key_plays(
        self,
        stats: Dict[str, PlayerGameStats],
        home_team: Team,
        away_team: Team,
        home_score: int,
        away_score: int,
        rng: random.Random
    ) -> List[str]:
        """
        Short narrative lines for standout performances.

        Every player with a stat line draws a synthetic clock, whether or not
        the line triggers a play. The shuffled list is capped, then a close-game
        line is appended for one-score games.
        """
        plays = []
        for player_id, line in stats.items():
            player = self.players.get(player_id)
            if player is None:
                continue

            quarter = rng.randrange(4) + 1
            minute = rng.randint(1, 15)
            second = rng.randrange(60)
            clock = f"Q{quarter} {minute}:{second:02d}"
            name = player.last_name

            if line.passing_tds >= 3:
                plays.append(f"{clock} - {name} throws TD #{line.passing_tds}")
            if line.rushing_yards >= 100:
                plays.append(f"{clock} - {name} breaks 100 rushing yards")
            if line.receiving_yards >= 100:
                plays.append(f"{clock} - {name} hauls in a big catch")
            if line.interceptions_def >= 1:
                plays.append(f"{clock} - {name} picks off the pass")
            if line.sacks >= 2:
                plays.append(f"{clock} - {name} gets sack #{int(line.sacks)}")
            if line.forced_fumbles >= 1:
                plays.append(f"{clock} - {name} forces a fumble")

        rng.shuffle(plays)
        plays = plays[:MAX_KEY_PLAYS]

        if abs(home_score - away_score) <= CLOSE_GAME_NARRATIVE_MARGIN:
            plays.append(
                f"Q4 2:{rng.randrange(60):02d} - Close finish, final score "
                f"{home_team.abbreviation} {home_score} - {away_team.abbreviation} {away_score}"
            )
        return plays
