"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- A generated 32-team league
- Seeded random streams
- Small hand-built teams and rosters
"""

import random
import sys
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src/ must come first so the packages under test win over any
    same-named test directory.
    """
    new_path = [p for p in sys.path if p != str(tests_path) and p != str(src_path)]
    new_path.insert(0, str(src_path))
    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture
def league():
    """
    Standard 32-team league built from a fixed seed.

    Every test gets a fresh copy, so records and injuries never leak
    between tests.
    """
    from league import build_default_league
    return build_default_league(random.Random(2025))


@pytest.fixture
def teams(league):
    """League teams ordered by team id."""
    return league.team_list()


@pytest.fixture
def rng():
    """Seeded random stream."""
    return random.Random(42)


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================

@pytest.fixture
def test_season():
    """Standard season year for testing."""
    return 2025


@pytest.fixture
def make_player():
    """
    Factory for standalone players.

    Returns:
        Callable(player_id, position, overall=70, team_id=1, **attributes)
    """
    from league import Player, PlayerAttributes

    def _make(player_id, position, overall=70, team_id=1, **attributes):
        return Player(
            player_id=player_id,
            first_name="Test",
            last_name=player_id,
            position=position,
            overall=overall,
            team_id=team_id,
            attributes=PlayerAttributes(**attributes),
        )

    return _make
