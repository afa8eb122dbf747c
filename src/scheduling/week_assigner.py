"""
Week Assigner

Places a season's matchups into weeks so that every team plays exactly one
game or has its bye in each week.

Steps:
1. Byes are drawn from the bye window, handed out two teams at a time so
   that every week keeps an even number of active teams.
2. Divisional games are seated in the final week first (one pairing per
   division) when the final week lies outside the bye window.
3. Remaining matchups are placed greedily, in random order, into the
   lowest-numbered week open for both teams.
4. Anything the greedy pass could not place is repaired: first by swapping
   two weeks along an alternating chain of games, then by a bounded
   eviction walk.
5. Soft passes move the most divisional week to the end of the season and
   break up back-to-back meetings of the same two teams.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .config import ScheduleConfig
from .matchup_builder import LeagueStructure, Matchup


logger = logging.getLogger(__name__)

BYE = -1


class WeekGrid:
    """
    Team x week occupancy for one placement attempt.

    ``slots[team][week]`` holds the index of the matchup played that week or
    BYE. A missing week means the team is open.
    """

    def __init__(self, matchups: Sequence[Matchup], team_ids: Sequence[int], total_weeks: int):
        self.matchups = matchups
        self.weeks = list(range(1, total_weeks + 1))
        self.slots: Dict[int, Dict[int, int]] = {team_id: {} for team_id in team_ids}
        self.game_week: List[int] = [0] * len(matchups)

    def set_bye(self, team_id: int, week: int) -> None:
        self.slots[team_id][week] = BYE

    def is_open(self, team_id: int, week: int) -> bool:
        return week not in self.slots[team_id]

    def can_place(self, index: int, week: int) -> bool:
        matchup = self.matchups[index]
        return self.is_open(matchup.home_team_id, week) and self.is_open(matchup.away_team_id, week)

    def place(self, index: int, week: int) -> None:
        matchup = self.matchups[index]
        self.slots[matchup.home_team_id][week] = index
        self.slots[matchup.away_team_id][week] = index
        self.game_week[index] = week

    def unplace(self, index: int) -> None:
        week = self.game_week[index]
        matchup = self.matchups[index]
        del self.slots[matchup.home_team_id][week]
        del self.slots[matchup.away_team_id][week]
        self.game_week[index] = 0

    def open_weeks(self, team_id: int) -> List[int]:
        team_slots = self.slots[team_id]
        return [week for week in self.weeks if week not in team_slots]

    def games_in_week(self, week: int) -> List[int]:
        return [i for i, w in enumerate(self.game_week) if w == week]

    def byes_in_week(self, week: int) -> List[int]:
        return sorted(t for t, slots in self.slots.items() if slots.get(week) == BYE)

    def unplaced(self) -> List[int]:
        return [i for i, w in enumerate(self.game_week) if w == 0]

    # ========== Alternating Chains ==========

    def alternating_component(self, index: int, week_a: int, week_b: int) -> Optional[List[int]]:
        """
        Games reachable from ``index`` by alternating between two weeks.

        Returns None when the component touches a bye in either week, because
        exchanging the two weeks would then move a game onto a bye.
        """
        component: List[int] = []
        seen = set()
        stack = [index]

        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            component.append(current)

            week = self.game_week[current]
            other_week = week_b if week == week_a else week_a
            matchup = self.matchups[current]
            for team_id in (matchup.home_team_id, matchup.away_team_id):
                occupant = self.slots[team_id].get(other_week)
                if occupant is None:
                    continue
                if occupant == BYE:
                    return None
                if occupant not in seen:
                    stack.append(occupant)

        return component

    def exchange_weeks(self, component: List[int], week_a: int, week_b: int) -> None:
        """Move every game of a component to the other of the two weeks."""
        targets = [(i, week_b if self.game_week[i] == week_a else week_a) for i in component]
        for index in component:
            self.unplace(index)
        for index, week in targets:
            self.place(index, week)

    def swap_weeks(self, week_a: int, week_b: int) -> None:
        """Exchange the full contents of two weeks that share the same byes."""
        games_a = self.games_in_week(week_a)
        games_b = self.games_in_week(week_b)
        for index in games_a + games_b:
            self.unplace(index)
        for index in games_a:
            self.place(index, week_b)
        for index in games_b:
            self.place(index, week_a)

    def back_to_back_count(self) -> int:
        """Team-weeks in which a team meets the same opponent as the week before."""
        count = 0
        for team_id, team_slots in self.slots.items():
            for week in self.weeks[:-1]:
                first = team_slots.get(week)
                second = team_slots.get(week + 1)
                if first is None or second is None or BYE in (first, second):
                    continue
                if self.matchups[first].opponent_of(team_id) == self.matchups[second].opponent_of(team_id):
                    count += 1
        return count


@dataclass
class WeekAssignment:
    """Result of week assignment, aligned with the matchup list."""
    game_weeks: List[int]
    bye_weeks: Dict[int, int]
    forced_games: List[int] = field(default_factory=list)   # Placed on top of a conflict
    back_to_back: int = 0

    @property
    def is_complete(self) -> bool:
        return not self.forced_games


class WeekAssigner:
    """Assigns byes and weeks for one season's matchups."""

    def __init__(
        self,
        structure: LeagueStructure,
        config: Optional[ScheduleConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.structure = structure
        self.config = config or ScheduleConfig()
        self.logger = logger or logging.getLogger(__name__)

    def assign(self, matchups: Sequence[Matchup], rng: random.Random) -> WeekAssignment:
        """
        Assign a week to every matchup and a bye to every team.

        Args:
            matchups: Matchups from MatchupBuilder
            rng: Random stream

        Returns:
            WeekAssignment; ``forced_games`` is non-empty only if no
            conflict-free placement was found within the search bounds
        """
        best_grid: Optional[WeekGrid] = None
        best_byes: Dict[int, int] = {}
        best_unplaced: List[int] = []

        for attempt in range(1, self.config.placement_attempts + 1):
            grid = WeekGrid(matchups, self.structure.team_ids, self.config.total_weeks)
            byes = self.assign_byes(grid, rng)

            if self.config.prefer_divisional_final_week:
                self._seat_final_week(grid, rng)

            order = grid.unplaced()
            rng.shuffle(order)
            leftover = self._place_greedy(grid, order)
            if leftover:
                self.logger.debug(
                    f"Attempt {attempt}: greedy pass left {len(leftover)} games, repairing"
                )
                leftover = self._repair(grid, leftover, rng)

            if best_grid is None or len(leftover) < len(best_unplaced):
                best_grid, best_byes, best_unplaced = grid, byes, leftover

            if not leftover:
                break
            self.logger.debug(f"Attempt {attempt}: {len(leftover)} games could not be placed")

        grid = best_grid
        game_weeks = list(grid.game_week)

        if best_unplaced:
            for index in best_unplaced:
                game_weeks[index] = self._forced_week(grid, index)
            self.logger.warning(
                f"{len(best_unplaced)} games placed over a conflict after "
                f"{self.config.placement_attempts} attempts"
            )
            return WeekAssignment(game_weeks, best_byes, list(best_unplaced), grid.back_to_back_count())

        if self.config.prefer_divisional_final_week:
            self._prefer_divisional_final_week(grid)
        self._fix_back_to_back(grid, rng)

        return WeekAssignment(list(grid.game_week), best_byes, [], grid.back_to_back_count())

    def assign_byes(self, grid: WeekGrid, rng: random.Random) -> Dict[int, int]:
        """
        Give every team one bye inside the bye window.

        Teams are shuffled and taken two at a time. A pair goes to a random
        week that still has room for both; when no week has room it goes to
        any week in the window.

        Returns:
            team_id -> bye week
        """
        bye_config = self.config.bye_week
        window = bye_config.weeks

        order = list(self.structure.team_ids)
        rng.shuffle(order)

        per_week: Counter = Counter()
        byes: Dict[int, int] = {}

        for start in range(0, len(order), 2):
            group = order[start:start + 2]
            valid = [w for w in window if per_week[w] + len(group) <= bye_config.max_teams_per_week]
            if valid:
                week = rng.choice(valid)
            else:
                week = rng.randint(bye_config.start_week, bye_config.end_week)
                self.logger.warning(f"Bye capacity exhausted, teams {group} placed in week {week}")

            for team_id in group:
                byes[team_id] = week
                per_week[week] += 1
                grid.set_bye(team_id, week)

        return byes

    # ==================== Placement ====================

    def _seat_final_week(self, grid: WeekGrid, rng: random.Random) -> None:
        """Reserve the final week for one divisional pairing per division."""
        final_week = self.config.total_weeks
        if final_week in self.config.bye_week.weeks:
            return

        by_pair: Dict[tuple, List[int]] = {}
        for index, matchup in enumerate(grid.matchups):
            if self.structure.same_division(matchup.home_team_id, matchup.away_team_id):
                by_pair.setdefault(matchup.pair_key, []).append(index)

        for conference in self.structure.conferences:
            for members in self.structure.divisions[conference]:
                shuffled = list(members)
                rng.shuffle(shuffled)
                for i in range(0, len(shuffled) - 1, 2):
                    key = (min(shuffled[i], shuffled[i + 1]), max(shuffled[i], shuffled[i + 1]))
                    options = [idx for idx in by_pair.get(key, []) if grid.can_place(idx, final_week)]
                    if options:
                        grid.place(rng.choice(options), final_week)

    def _place_greedy(self, grid: WeekGrid, order: List[int]) -> List[int]:
        leftover = []
        for index in order:
            for week in grid.weeks:
                if grid.can_place(index, week):
                    grid.place(index, week)
                    break
            else:
                leftover.append(index)
        return leftover

    def _repair(self, grid: WeekGrid, pending: List[int], rng: random.Random) -> List[int]:
        """
        Place pending games by reshuffling already placed ones.

        Returns:
            Games still unplaced when the step budget runs out
        """
        queue = list(pending)
        steps = 0

        while queue and steps < self.config.max_repair_steps:
            steps += 1
            index = queue.pop()
            if self._place_direct(grid, index):
                continue
            if self._place_by_chain(grid, index):
                continue
            queue.extend(self._place_by_eviction(grid, index, rng))

        if queue:
            self.logger.debug(f"Repair stopped after {steps} steps with {len(queue)} games pending")
        else:
            self.logger.debug(f"Repair finished in {steps} steps")
        return queue

    def _place_direct(self, grid: WeekGrid, index: int) -> bool:
        matchup = grid.matchups[index]
        for week in grid.open_weeks(matchup.home_team_id):
            if grid.is_open(matchup.away_team_id, week):
                grid.place(index, week)
                return True
        return False

    def _place_by_chain(self, grid: WeekGrid, index: int) -> bool:
        """
        Free a common week by exchanging two weeks along an alternating chain.

        With week X open for team A but not B, and week Y open for B but not
        A, exchanging X and Y along the chain that starts at B's week-X game
        frees week X for B, provided the chain does not reach A.
        """
        matchup = grid.matchups[index]
        for team, other in ((matchup.home_team_id, matchup.away_team_id),
                            (matchup.away_team_id, matchup.home_team_id)):
            for week_x in grid.open_weeks(team):
                blocking = grid.slots[other].get(week_x)
                if blocking is None or blocking == BYE:
                    continue
                for week_y in grid.open_weeks(other):
                    component = grid.alternating_component(blocking, week_x, week_y)
                    if component is None:
                        continue
                    if grid.slots[team].get(week_y) in component:
                        continue
                    grid.exchange_weeks(component, week_x, week_y)
                    grid.place(index, week_x)
                    return True
        return False

    def _place_by_eviction(self, grid: WeekGrid, index: int, rng: random.Random) -> List[int]:
        """
        Place a game by evicting whatever blocks it in a random week.

        Returns:
            Games evicted (to be placed again)
        """
        matchup = grid.matchups[index]
        home, away = matchup.home_team_id, matchup.away_team_id

        options = []
        for team, other in ((home, away), (away, home)):
            for week in grid.open_weeks(team):
                occupant = grid.slots[other].get(week)
                if occupant is not None and occupant != BYE:
                    options.append((week, [occupant]))

        if not options:
            # Each team's open weeks are the other's bye: clear a shared week
            for week in grid.weeks:
                home_game = grid.slots[home].get(week)
                away_game = grid.slots[away].get(week)
                if home_game not in (None, BYE) and away_game not in (None, BYE):
                    options.append((week, sorted({home_game, away_game})))

        if not options:
            return [index]

        week, evicted = rng.choice(options)
        for victim in evicted:
            grid.unplace(victim)
        grid.place(index, week)
        return evicted

    def _forced_week(self, grid: WeekGrid, index: int) -> int:
        """Week for a game that could not be placed cleanly."""
        matchup = grid.matchups[index]
        for team in (matchup.home_team_id, matchup.away_team_id):
            open_weeks = grid.open_weeks(team)
            if open_weeks:
                return open_weeks[0]
        return grid.weeks[-1]

    # ==================== Soft Constraints ====================

    def _prefer_divisional_final_week(self, grid: WeekGrid) -> None:
        """Swap the final week with the full week holding the most divisional games."""
        final_week = self.config.total_weeks
        final_byes = grid.byes_in_week(final_week)

        def divisional_games(week: int) -> int:
            return sum(
                1 for i in grid.games_in_week(week)
                if self.structure.same_division(grid.matchups[i].home_team_id,
                                                grid.matchups[i].away_team_id)
            )

        current = divisional_games(final_week)
        total = len(grid.games_in_week(final_week))
        if current == total:
            return

        best_week, best_count = None, current
        for week in grid.weeks[:-1]:
            if grid.byes_in_week(week) != final_byes:
                continue
            count = divisional_games(week)
            if count > best_count:
                best_week, best_count = week, count

        if best_week is not None:
            grid.swap_weeks(best_week, final_week)
            self.logger.debug(
                f"Swapped week {best_week} into week {final_week} "
                f"({best_count} divisional games, was {current})"
            )

    def _fix_back_to_back(self, grid: WeekGrid, rng: random.Random) -> None:
        """Break up same-opponent meetings in consecutive weeks."""
        final_week = self.config.total_weeks

        for _ in range(self.config.consecutive_fix_passes):
            violations = grid.back_to_back_count()
            if violations == 0:
                return

            improved = False
            for team_id in self.structure.team_ids:
                team_slots = grid.slots[team_id]
                for week in grid.weeks[:-1]:
                    first = team_slots.get(week)
                    second = team_slots.get(week + 1)
                    if first is None or second is None or BYE in (first, second):
                        continue
                    if grid.matchups[first].opponent_of(team_id) != grid.matchups[second].opponent_of(team_id):
                        continue

                    # Keep the final week intact
                    target, target_week = (second, week + 1) if week + 1 != final_week else (first, week)
                    candidates = [w for w in grid.weeks
                                  if w not in (week, week + 1, final_week)]
                    rng.shuffle(candidates)

                    for other_week in candidates:
                        component = grid.alternating_component(target, target_week, other_week)
                        if component is None:
                            continue
                        grid.exchange_weeks(component, target_week, other_week)
                        new_violations = grid.back_to_back_count()
                        if new_violations < violations:
                            violations = new_violations
                            improved = True
                            break
                        grid.exchange_weeks(component, target_week, other_week)

            if not improved:
                break

        remaining = grid.back_to_back_count()
        if remaining:
            self.logger.debug(f"{remaining // 2} back-to-back meetings remain")
