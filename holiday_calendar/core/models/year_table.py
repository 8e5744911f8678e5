"""年表 / 月表模型。"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from typing import Any

from holiday_calendar.core.models.day_kind import DayKind

MonthTable = dict[int, DayKind]
"""月表：日 -> 分类，仅保存非工作日，缺失即工作日。"""

MONTHS = range(1, 13)


def _empty_months() -> dict[int, MonthTable]:
    return {m: {} for m in MONTHS}


@dataclass(frozen=True, slots=True)
class YearTable:
    """
    某一年的节假日表。

    约定：
    - year 构造后不可修改（frozen），一年只对应一张表；
    - months 固定包含 1..12 共 12 个月表（可为空），叠加放假安排时原地修改；
    - 月表只保存非工作日（REST / STATUTORY）。
    """

    year: int
    months: dict[int, MonthTable] = field(default_factory=_empty_months)

    @classmethod
    def empty(cls, year: int) -> YearTable:
        """返回 12 个月表均为空的年表。"""
        return cls(year)

    def month(self, month: int) -> MonthTable:
        """
        返回指定月份的月表（原对象，可修改）。

        Raises:
            KeyError: 月份不在 1..12。
        """
        return self.months[month]

    def get(self, month: int, day: int) -> DayKind:
        """返回某日分类；没有记录时为 ORDINARY。"""
        return self.months.get(month, {}).get(day, DayKind.ORDINARY)

    def days_in_month(self, month: int) -> int:
        return calendar.monthrange(self.year, month)[1]

    def count(self, kind: DayKind | None = None) -> int:
        """统计记录条数；指定 kind 时只统计该分类。"""
        return sum(
            1
            for mt in self.months.values()
            for v in mt.values()
            if kind is None or v is kind
        )

    def copy(self) -> YearTable:
        """深拷贝（月表各自独立）。"""
        return YearTable(self.year, {m: dict(mt) for m, mt in self.months.items()})

    def to_dict(self) -> dict[str, Any]:
        """
        转为 JSON 友好的结构。

        形如 ``{"year": 2018, "month": {"1": {"6": 1, "7": 1}, ...}}``，
        与历史接口返回的字段名保持一致。
        """
        return {
            "year": self.year,
            "month": {str(m): month_to_dict(mt) for m, mt in sorted(self.months.items())},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> YearTable:
        """从 to_dict() 的结构还原年表。"""
        table = cls.empty(int(data["year"]))
        for m, mt in (data.get("month") or {}).items():
            table.months[int(m)] = month_from_dict(mt)
        return table


def month_to_dict(month: MonthTable) -> dict[str, int]:
    return {str(d): int(k) for d, k in sorted(month.items())}


def month_from_dict(data: dict[str, Any]) -> MonthTable:
    return {int(d): DayKind.parse(k) for d, k in data.items()}
