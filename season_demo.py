#!/usr/bin/env python3
"""
Full Season Simulation Demo

Builds a generated 32-team league and simulates one or more complete
seasons from week 1 of the regular season through the Super Bowl, printing
division standings, playoff seeds, every playoff result and the champion.

Usage:
    python season_demo.py
    python season_demo.py --seed 7 --seasons 3 --log-level DEBUG
"""

import argparse
import random
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from league import build_default_league
from logging_config import (
    setup_development_logging,
    setup_logging,
    setup_schedule_debug_logging,
    setup_simulation_logging,
)
from season import SeasonController, SeasonException
from season_calendar import SeasonCalendar, SeasonPhase


def print_header(text: str) -> None:
    print()
    print("=" * 60)
    print(text)
    print("=" * 60)


def print_standings(controller: SeasonController) -> None:
    teams = controller.league.teams
    for division, team_ids in sorted(controller.seeding.division_standings.items()):
        print(f"\n{division}")
        for team_id in team_ids:
            team = teams[team_id]
            record = team.record
            print(f"  {team.abbreviation:<4} {record.record_string:<8} "
                  f"PF {record.points_for:>3}  PA {record.points_against:>3}")


def print_seeds(controller: SeasonController) -> None:
    teams = controller.league.teams
    for conference in (controller.seeding.afc, controller.seeding.nfc):
        print(f"\n{conference.conference}")
        for seed in conference.seeds:
            print(f"  {seed.seed}. {teams[seed.team_id].full_name:<28} {seed.record_string}")


def print_playoffs(controller: SeasonController) -> None:
    teams = controller.league.teams
    for playoff_round, bracket in controller.brackets.items():
        print(f"\n{playoff_round.display_name}")
        for game in bracket.games:
            away = teams[game.away_team_id].abbreviation
            home = teams[game.home_team_id].abbreviation
            print(f"  {away} {game.away_score:>2} @ {home} {game.home_score:>2}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate complete seasons of a generated league")
    parser.add_argument("--seed", type=int, default=2025, help="Random seed for league and season")
    parser.add_argument("--seasons", type=int, default=1, help="Number of seasons to simulate")
    parser.add_argument("--year", type=int, default=2025, help="First season year")
    parser.add_argument("--log-level", default="WARNING", help="Console log level")
    parser.add_argument("--debug", action="store_true", help="DEBUG logging to console and logs/")
    parser.add_argument("--debug-schedule", action="store_true", help="Log schedule repair passes to logs/")
    args = parser.parse_args()

    if args.debug:
        setup_development_logging()
    elif args.debug_schedule:
        setup_schedule_debug_logging()
    else:
        setup_logging(level=args.log_level, enable_file=False, format_style="simple")
        setup_simulation_logging("WARNING")

    rng = random.Random(args.seed)
    league = build_default_league(rng)
    calendar = SeasonCalendar(year=args.year, phase=SeasonPhase.PRESEASON, week=SeasonPhase.PRESEASON.duration)
    controller = SeasonController(league, calendar=calendar, rng=rng)

    try:
        for _ in range(args.seasons):
            summary = controller.simulate_season()

            print_header(f"{summary['season']} SEASON")
            print_standings(controller)
            print_header("PLAYOFF SEEDS")
            print_seeds(controller)
            print_header("PLAYOFFS")
            print_playoffs(controller)

            champion = league.teams[summary["champion_id"]]
            print(f"\nChampion: {champion.full_name}")

    except KeyboardInterrupt:
        print("\n\nSimulation interrupted.")
        return 1
    except SeasonException as e:
        print(f"\nSeason simulation failed: {e}")
        return 1

    if args.seasons > 1:
        print_header("CHAMPIONS")
        for year, team_id in sorted(controller.champions.items()):
            print(f"  {year}: {league.teams[team_id].full_name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
