"""
tests/core/test_overlay.py

Covers:
  - Processing order inside one record (rest → statutory → workdays)
  - Year mismatch rejection leaves the table untouched
  - Idempotence
  - Month and leap-year rollover of spans, truncation at year end
  - Last-write-wins across records
  - Malformed spans (non-positive length, bad month)
"""

import pytest

from holiday_calendar.core.calendar import apply_adjustment, apply_adjustments, build_year_table
from holiday_calendar.core.errors import YearMismatchError
from holiday_calendar.core.models import AdjustmentRecord, DayKind, HolidaySpan, WorkDay, YearTable


@pytest.fixture
def spring_festival():
    return AdjustmentRecord(
        year=2018,
        name="Spring Festival",
        legal_holidays=[HolidaySpan(2, 15, 7)],
        workdays=[WorkDay(2, 11), WorkDay(2, 24)],
    )


# ── Concrete scenario ─────────────────────────────────────────────────────────

class TestSpringFestival2018:

    def test_statutory_span(self, table_2018, spring_festival):
        apply_adjustment(table_2018, spring_festival)
        feb = table_2018.month(2)
        for d in range(15, 22):
            assert feb[d] is DayKind.STATUTORY

    def test_workdays_cancel_weekends(self, table_2018, spring_festival):
        assert table_2018.get(2, 11) is DayKind.REST
        assert table_2018.get(2, 24) is DayKind.REST
        apply_adjustment(table_2018, spring_festival)
        assert 11 not in table_2018.month(2)
        assert 24 not in table_2018.month(2)

    def test_untouched_weekends_remain(self, table_2018, spring_festival):
        apply_adjustment(table_2018, spring_festival)
        assert sorted(table_2018.month(2)) == [3, 4, 10, 15, 16, 17, 18, 19, 20, 21, 25]
        assert table_2018.get(2, 25) is DayKind.REST

    def test_other_months_untouched(self, table_2018, spring_festival):
        before = table_2018.copy()
        apply_adjustment(table_2018, spring_festival)
        for m in (1, 3, 12):
            assert table_2018.month(m) == before.month(m)

    def test_mixed_rest_and_statutory(self, table_2018):
        record = AdjustmentRecord(
            year=2018,
            name="春节",
            holidays=[HolidaySpan(2, 15, 7)],
            legal_holidays=[HolidaySpan(2, 16, 3)],
            workdays=[WorkDay(2, 11), WorkDay(2, 24)],
        )
        apply_adjustment(table_2018, record)
        feb = table_2018.month(2)
        assert feb[15] is DayKind.REST
        assert [feb[d] for d in (16, 17, 18)] == [DayKind.STATUTORY] * 3
        assert [feb[d] for d in (19, 20, 21)] == [DayKind.REST] * 3


# ── Precedence within a record ────────────────────────────────────────────────

class TestPrecedence:

    def test_statutory_overrides_rest_in_same_record(self):
        table = YearTable.empty(2018)
        record = AdjustmentRecord(
            year=2018,
            holidays=[HolidaySpan(5, 1, 3)],
            legal_holidays=[HolidaySpan(5, 1, 1)],
        )
        apply_adjustment(table, record)
        assert table.get(5, 1) is DayKind.STATUTORY
        assert table.get(5, 2) is DayKind.REST

    def test_workday_wins_over_rest_span(self):
        table = YearTable.empty(2018)
        record = AdjustmentRecord(year=2018, holidays=[HolidaySpan(5, 1, 3)], workdays=[WorkDay(5, 2)])
        apply_adjustment(table, record)
        assert table.month(5) == {1: DayKind.REST, 3: DayKind.REST}

    def test_workday_wins_over_statutory_span(self):
        table = YearTable.empty(2018)
        record = AdjustmentRecord(year=2018, legal_holidays=[HolidaySpan(5, 1, 3)], workdays=[WorkDay(5, 1)])
        apply_adjustment(table, record)
        assert table.get(5, 1) is DayKind.ORDINARY

    def test_workday_on_ordinary_day_is_noop(self, table_2018):
        before = table_2018.copy()
        apply_adjustment(table_2018, AdjustmentRecord(year=2018, workdays=[WorkDay(1, 2)]))
        assert table_2018 == before

    def test_workday_with_invalid_month_is_ignored(self, table_2018):
        before = table_2018.copy()
        apply_adjustment(table_2018, AdjustmentRecord(year=2018, workdays=[WorkDay(13, 1)]))
        assert table_2018 == before


# ── Across records ────────────────────────────────────────────────────────────

class TestAcrossRecords:

    def test_later_rest_overwrites_earlier_statutory(self):
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, legal_holidays=[HolidaySpan(3, 5, 1)]))
        apply_adjustment(table, AdjustmentRecord(year=2018, holidays=[HolidaySpan(3, 5, 1)]))
        assert table.get(3, 5) is DayKind.REST

    def test_later_span_undoes_earlier_workday(self, table_2018):
        # 2018-03-10 is a Saturday
        apply_adjustment(table_2018, AdjustmentRecord(year=2018, workdays=[WorkDay(3, 10)]))
        assert table_2018.get(3, 10) is DayKind.ORDINARY
        apply_adjustment(table_2018, AdjustmentRecord(year=2018, holidays=[HolidaySpan(3, 10, 1)]))
        assert table_2018.get(3, 10) is DayKind.REST

    def test_later_workday_cancels_earlier_statutory(self):
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, legal_holidays=[HolidaySpan(3, 5, 2)]))
        apply_adjustment(table, AdjustmentRecord(year=2018, workdays=[WorkDay(3, 6)]))
        assert table.month(3) == {5: DayKind.STATUTORY}

    def test_batch_stops_at_first_mismatch(self):
        table = YearTable.empty(2018)
        records = [
            AdjustmentRecord(year=2018, holidays=[HolidaySpan(3, 5, 1)]),
            AdjustmentRecord(year=2019, holidays=[HolidaySpan(3, 6, 1)]),
            AdjustmentRecord(year=2018, holidays=[HolidaySpan(3, 7, 1)]),
        ]
        with pytest.raises(YearMismatchError):
            apply_adjustments(table, records)
        assert table.month(3) == {5: DayKind.REST}


# ── Validation ────────────────────────────────────────────────────────────────

class TestYearMismatch:

    def test_rejected_without_changes(self, table_2018, spring_festival):
        before = table_2018.copy()
        record = AdjustmentRecord(
            year=2019,
            name="Spring Festival",
            legal_holidays=spring_festival.legal_holidays,
            workdays=spring_festival.workdays,
        )
        with pytest.raises(YearMismatchError) as excinfo:
            apply_adjustment(table_2018, record)
        assert table_2018 == before
        assert excinfo.value.table_year == 2018
        assert excinfo.value.record_year == 2019

    def test_bad_month_leaves_table_untouched(self, table_2018):
        before = table_2018.copy()
        record = AdjustmentRecord(
            year=2018,
            holidays=[HolidaySpan(2, 1, 3)],
            legal_holidays=[HolidaySpan(13, 1, 1)],
        )
        with pytest.raises(ValueError):
            apply_adjustment(table_2018, record)
        assert table_2018 == before


# ── Idempotence ───────────────────────────────────────────────────────────────

class TestIdempotence:

    def test_apply_twice_equals_apply_once(self, spring_festival):
        once = build_year_table(2018)
        twice = build_year_table(2018)
        apply_adjustment(once, spring_festival)
        apply_adjustment(twice, spring_festival)
        apply_adjustment(twice, spring_festival)
        assert once == twice


# ── Span resolution ───────────────────────────────────────────────────────────

class TestSpanResolution:

    def test_month_boundary_rollover(self):
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, holidays=[HolidaySpan(1, 30, 4)]))
        assert table.month(1) == {30: DayKind.REST, 31: DayKind.REST}
        assert table.month(2) == {1: DayKind.REST, 2: DayKind.REST}

    def test_leap_year_rollover(self):
        table = YearTable.empty(2020)
        apply_adjustment(table, AdjustmentRecord(year=2020, holidays=[HolidaySpan(2, 28, 3)]))
        assert table.month(2) == {28: DayKind.REST, 29: DayKind.REST}
        assert table.month(3) == {1: DayKind.REST}

    def test_common_year_rollover(self):
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, holidays=[HolidaySpan(2, 28, 3)]))
        assert table.month(2) == {28: DayKind.REST}
        assert table.month(3) == {1: DayKind.REST, 2: DayKind.REST}

    def test_span_truncated_at_year_end(self):
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, holidays=[HolidaySpan(12, 30, 5)]))
        assert table.month(12) == {30: DayKind.REST, 31: DayKind.REST}
        assert table.month(1) == {}

    def test_span_starting_before_year_keeps_in_year_days(self):
        # start=0 resolves to Dec 31 of the previous year
        table = YearTable.empty(2018)
        apply_adjustment(table, AdjustmentRecord(year=2018, holidays=[HolidaySpan(1, 0, 3)]))
        assert table.month(1) == {1: DayKind.REST, 2: DayKind.REST}
        assert table.month(12) == {}

    @pytest.mark.parametrize("length", [0, -3])
    def test_non_positive_length_has_no_effect(self, table_2018, length):
        before = table_2018.copy()
        apply_adjustment(table_2018, AdjustmentRecord(year=2018, holidays=[HolidaySpan(1, 2, length)]))
        assert table_2018 == before

    def test_start_past_month_end_rolls_forward(self):
        span = HolidaySpan(2, 30, 1)
        assert [d.isoformat() for d in span.iter_dates(2018)] == ["2018-03-02"]
