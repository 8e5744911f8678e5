"""年表集合的只读查询。

并发约定：
- HolidayBook 构造时深拷贝年表，之后只读，可被任意多个请求线程并发读取；
- 需要热更新时构造新的 HolidayBook，再通过 HolidayBookHolder.swap() 整体替换，
  正在使用旧快照的读者不受影响。
"""

from __future__ import annotations

import calendar
import threading
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType

from holiday_calendar.core.errors import NotFoundError
from holiday_calendar.core.models import DayKind, MonthTable, YearTable


class HolidayBook:
    """year -> YearTable 的不可变快照。"""

    def __init__(self, tables: Mapping[int, YearTable] | None = None) -> None:
        self._tables: Mapping[int, YearTable] = MappingProxyType(
            {year: t.copy() for year, t in (tables or {}).items()}
        )

    def __contains__(self, year: object) -> bool:
        return year in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"HolidayBook(years={self.years()})"

    def years(self) -> list[int]:
        return sorted(self._tables)

    def get_year(self, year: int) -> YearTable:
        """
        返回整年年表（副本，修改不影响快照）。

        Raises:
            NotFoundError: 该年份没有导入过放假安排。
        """
        return self._table(year).copy()

    def get_month(self, year: int, month: int) -> Mapping[int, DayKind]:
        """
        返回月表的只读视图。

        Raises:
            NotFoundError: 年份不存在或月份不在 1..12。
        """
        table = self._table(year)
        month_table = table.months.get(month)
        if month_table is None:
            raise NotFoundError(f"holidays of {year}-{month:02d} not exists")
        return MappingProxyType(month_table)

    def classify_day(self, year: int, month: int, day: int) -> DayKind:
        """
        返回某日分类，没有记录即 ORDINARY。

        Raises:
            NotFoundError: 年份不存在，或 (month, day) 不是该年的真实日期。
        """
        return self._month_for_day(year, month, day).get(day, DayKind.ORDINARY)

    def get_override(self, year: int, month: int, day: int) -> DayKind:
        """
        返回某日的显式记录（用于核对）。

        Raises:
            NotFoundError: 年份不存在、日期非法，或该日没有记录（即工作日）。
        """
        kind = self._month_for_day(year, month, day).get(day)
        if kind is None:
            raise NotFoundError(f"{year}-{month:02d}-{day:02d} is not a holiday")
        return kind

    def has_override(self, year: int, month: int, day: int) -> bool:
        """该日是否存在显式记录。"""
        return day in self._month_for_day(year, month, day)

    def classify(self, d: date) -> DayKind:
        return self.classify_day(d.year, d.month, d.day)

    def is_off_day(self, d: date) -> bool:
        """是否休息（休息日或法定假日）。"""
        return self.classify(d).is_off

    def is_workday(self, d: date) -> bool:
        return not self.is_off_day(d)

    def _table(self, year: int) -> YearTable:
        table = self._tables.get(year)
        if table is None:
            raise NotFoundError(f"holidays of {year} not exists")
        return table

    def _month_for_day(self, year: int, month: int, day: int) -> MonthTable:
        table = self._table(year)
        month_table = table.months.get(month)
        if month_table is None:
            raise NotFoundError(f"holidays of {year}-{month:02d} not exists")
        if not 1 <= day <= calendar.monthrange(year, month)[1]:
            raise NotFoundError(f"{year}-{month:02d}-{day:02d} is not a valid date")
        return month_table


class HolidayBookHolder:
    """
    持有当前生效的 HolidayBook，支持整体替换。

    读取 book 属性是一次引用读取，无需加锁；swap() 之间用互斥锁串行化。
    """

    def __init__(self, book: HolidayBook | None = None) -> None:
        self._book = book if book is not None else HolidayBook()
        self._lock = threading.Lock()

    @property
    def book(self) -> HolidayBook:
        return self._book

    def swap(self, book: HolidayBook) -> HolidayBook:
        """替换为新快照，返回旧快照。"""
        with self._lock:
            old, self._book = self._book, book
        return old
