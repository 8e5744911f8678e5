"""
tests/core/test_models.py

Covers:
  - DayKind values, names and parsing
  - YearTable JSON shape and round trip
"""

import pytest

from holiday_calendar.core import models
from holiday_calendar.core.calendar import build_year_table
from holiday_calendar.core.models import DayKind, YearTable


class TestDayKind:

    def test_wire_values(self):
        assert int(DayKind.ORDINARY) == 0
        assert int(DayKind.REST) == 1
        assert int(DayKind.STATUTORY) == 2

    def test_rank(self):
        assert DayKind.STATUTORY > DayKind.REST > DayKind.ORDINARY

    def test_str(self):
        assert str(DayKind.STATUTORY) == "statutory"

    def test_is_off(self):
        assert DayKind.REST.is_off
        assert not DayKind.ORDINARY.is_off

    @pytest.mark.parametrize(
        "value,expected",
        [(1, DayKind.REST), ("2", DayKind.STATUTORY), ("rest", DayKind.REST), (" Ordinary ", DayKind.ORDINARY)],
    )
    def test_parse(self, value, expected):
        assert DayKind.parse(value) is expected

    @pytest.mark.parametrize("value", [3, "holiday", "-1"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            DayKind.parse(value)


class TestYearTable:

    def test_to_dict_shape(self, table_2018):
        data = table_2018.to_dict()
        assert data["year"] == 2018
        assert list(data["month"]) == [str(m) for m in range(1, 13)]
        assert data["month"]["1"]["6"] == 1
        assert "1" not in data["month"]["1"]

    def test_from_dict(self, table_2018):
        assert YearTable.from_dict(table_2018.to_dict()) == table_2018

    def test_copy_is_independent(self, table_2018):
        clone = table_2018.copy()
        clone.month(1)[1] = DayKind.STATUTORY
        assert table_2018.get(1, 1) is DayKind.ORDINARY

    def test_count_by_kind(self):
        table = build_year_table(2018)
        table.month(1)[1] = DayKind.STATUTORY
        assert table.count(DayKind.STATUTORY) == 1
        assert table.count(DayKind.REST) == 104
        assert table.count() == 105

    def test_days_in_month(self):
        assert YearTable.empty(2020).days_in_month(2) == 29
        assert YearTable.empty(2018).days_in_month(2) == 28


def test_models_package_docstring():
    assert models.__doc__ is not None
    assert "聚合导出" in models.__doc__
