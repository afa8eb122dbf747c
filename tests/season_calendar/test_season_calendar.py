"""
Unit Tests for SeasonCalendar

Tests week/phase advancement, year rollover, listener notification and
serialization of the league-year calendar.
"""

import pytest

from season_calendar import (
    CalendarStateException,
    InvalidPhaseException,
    PHASE_DURATIONS,
    SeasonCalendar,
    SeasonPhase,
    WEEKS_PER_SEASON,
    create_calendar,
)


class TestSeasonPhase:
    """Tests for the SeasonPhase enum."""

    def test_phase_order_and_durations(self):
        """Phases run in league-year order with fixed durations."""
        assert SeasonPhase.ordered()[0] == SeasonPhase.POST_SEASON
        assert SeasonPhase.ordered()[-1] == SeasonPhase.SUPER_BOWL
        assert SeasonPhase.REGULAR_SEASON.duration == 18
        assert SeasonPhase.PLAYOFFS.duration == 4
        assert SeasonPhase.DRAFT.duration == 1
        assert WEEKS_PER_SEASON == sum(PHASE_DURATIONS.values()) == 41

    def test_next_phase_wraps(self):
        """Super Bowl is followed by the next year's post season."""
        assert SeasonPhase.PRESEASON.next_phase == SeasonPhase.REGULAR_SEASON
        assert SeasonPhase.SUPER_BOWL.next_phase == SeasonPhase.POST_SEASON
        assert SeasonPhase.SUPER_BOWL.is_last

    def test_offseason_flags(self):
        """The six phases before preseason are offseason."""
        offseason = [phase for phase in SeasonPhase if phase.is_offseason]
        assert len(offseason) == 6
        assert SeasonPhase.PRESEASON not in offseason
        assert not SeasonPhase.REGULAR_SEASON.is_offseason

    def test_game_phases(self):
        games = {phase for phase in SeasonPhase if phase.is_game_phase}
        assert games == {SeasonPhase.REGULAR_SEASON, SeasonPhase.PLAYOFFS, SeasonPhase.SUPER_BOWL}

    @pytest.mark.parametrize("text", ["regular_season", "REGULAR_SEASON", "Regular Season", "regular-season"])
    def test_from_string_accepts_common_forms(self, text):
        assert SeasonPhase.from_string(text) == SeasonPhase.REGULAR_SEASON

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError):
            SeasonPhase.from_string("halftime")


class TestSeasonCalendar:
    """Tests for SeasonCalendar advancement."""

    @pytest.fixture
    def calendar(self):
        return SeasonCalendar(year=2025)

    def test_default_starting_point(self, calendar):
        """A new calendar starts at week 1 of the post season."""
        assert calendar.year == 2025
        assert calendar.phase == SeasonPhase.POST_SEASON
        assert calendar.week == 1
        assert calendar.get_absolute_week() == 1

    def test_advance_within_phase(self, calendar):
        result = calendar.advance_week()

        assert result.advanced
        assert not result.phase_changed
        assert not result.year_changed
        assert calendar.phase == SeasonPhase.POST_SEASON
        assert calendar.week == 2

    def test_advance_rolls_into_next_phase(self, calendar):
        """Advancing past the last week of a phase starts week 1 of the next."""
        calendar.advance_week()
        result = calendar.advance_week()

        assert result.phase_changed
        assert result.new_phase == SeasonPhase.COMBINE_SCOUTING
        assert calendar.week == 1

    def test_full_year_cycle(self, calendar):
        """41 advances return to the same position one year later."""
        for _ in range(WEEKS_PER_SEASON):
            calendar.advance_week()

        assert calendar.year == 2026
        assert calendar.phase == SeasonPhase.POST_SEASON
        assert calendar.week == 1

    def test_year_changes_only_after_super_bowl(self):
        calendar = SeasonCalendar(year=2025, phase=SeasonPhase.PLAYOFFS, week=4)

        result = calendar.advance_week()
        assert result.new_phase == SeasonPhase.SUPER_BOWL
        assert not result.year_changed
        assert calendar.year == 2025

        result = calendar.advance_week()
        assert result.year_changed
        assert calendar.year == 2026
        assert calendar.phase == SeasonPhase.POST_SEASON

    def test_advance_to_next_phase_skips_remaining_weeks(self):
        calendar = SeasonCalendar(phase=SeasonPhase.REGULAR_SEASON, week=3)

        result = calendar.advance_to_next_phase()

        assert result.phase_changed
        assert calendar.phase == SeasonPhase.PLAYOFFS
        assert calendar.week == 1

    def test_absolute_week_and_remaining(self):
        calendar = SeasonCalendar(phase=SeasonPhase.REGULAR_SEASON, week=1)

        # 2 + 2 + 4 + 2 + 1 + 3 + 4 weeks precede the regular season
        assert calendar.get_absolute_week() == 19
        assert calendar.weeks_remaining_in_phase() == 17

    def test_phase_queries(self):
        assert SeasonCalendar(phase=SeasonPhase.REGULAR_SEASON).is_regular_season()
        assert SeasonCalendar(phase=SeasonPhase.SUPER_BOWL).is_playoffs()
        assert SeasonCalendar(phase=SeasonPhase.DRAFT).is_offseason()
        assert not SeasonCalendar(phase=SeasonPhase.PRESEASON).is_offseason()

    def test_week_outside_phase_rejected(self):
        with pytest.raises(InvalidPhaseException) as exc_info:
            SeasonCalendar(phase=SeasonPhase.DRAFT, week=2)

        assert exc_info.value.error_code == "WEEK_OUT_OF_RANGE"
        assert str(exc_info.value).startswith("[WEEK_OUT_OF_RANGE]")

    def test_create_calendar(self):
        calendar = create_calendar(2030)
        assert calendar.year == 2030
        assert calendar.phase == SeasonPhase.POST_SEASON
        assert create_calendar().year == SeasonCalendar.DEFAULT_YEAR


class TestCalendarListeners:
    """Tests for phase change notification."""

    def test_listener_called_on_phase_change_only(self):
        calendar = SeasonCalendar(year=2025)
        calls = []
        calendar.add_listener(lambda old, new, year: calls.append((old, new, year)))

        calendar.advance_week()
        assert calls == []

        calendar.advance_week()
        assert calls == [(SeasonPhase.POST_SEASON, SeasonPhase.COMBINE_SCOUTING, 2025)]

    def test_listener_registered_once(self):
        calendar = SeasonCalendar()
        calls = []

        def listener(old, new, year):
            calls.append(new)

        calendar.add_listener(listener)
        calendar.add_listener(listener)
        calendar.advance_to_next_phase()

        assert len(calls) == 1

    def test_removed_listener_not_called(self):
        calendar = SeasonCalendar()
        calls = []

        def listener(old, new, year):
            calls.append(new)

        calendar.add_listener(listener)
        calendar.remove_listener(listener)
        calendar.advance_to_next_phase()

        assert calls == []

    def test_listener_failure_propagates(self):
        calendar = SeasonCalendar()

        def broken(old, new, year):
            raise RuntimeError("listener failed")

        calendar.add_listener(broken)

        with pytest.raises(RuntimeError):
            calendar.advance_to_next_phase()


class TestCalendarSerialization:
    """Tests for to_dict / from_dict."""

    def test_restore_from_dict(self):
        calendar = SeasonCalendar(year=2027, phase=SeasonPhase.PLAYOFFS, week=3)

        restored = SeasonCalendar.from_dict(calendar.to_dict())

        assert restored.year == 2027
        assert restored.phase == SeasonPhase.PLAYOFFS
        assert restored.week == 3

    def test_missing_keys_rejected(self):
        with pytest.raises(CalendarStateException) as exc_info:
            SeasonCalendar.from_dict({"year": 2025})

        assert "phase" in str(exc_info.value)
        assert exc_info.value.error_code == "CALENDAR_STATE_ERROR"

    def test_unknown_phase_rejected(self):
        with pytest.raises(InvalidPhaseException) as exc_info:
            SeasonCalendar.from_dict({"year": 2025, "phase": "halftime", "week": 1})

        assert exc_info.value.error_code == "UNKNOWN_PHASE"

    def test_out_of_range_week_rejected(self):
        with pytest.raises(InvalidPhaseException):
            SeasonCalendar.from_dict({"year": 2025, "phase": "super_bowl", "week": 2})
