from __future__ import annotations

import calendar
from datetime import date, timedelta

from holiday_calendar.core.models import DayKind, YearTable

# 星期编号沿用历史约定：0=周日 .. 6=周六
SUNDAY = 0
SATURDAY = 6
WEEKDAYS = range(0, 7)


def to_python_weekday(weekday: int) -> int:
    """
    将 0=周日..6=周六 的编号转换为 date.weekday() 的 0=周一..6=周日。

    Raises:
        ValueError: weekday 不在 0..6。
    """
    if weekday not in WEEKDAYS:
        raise ValueError(f"weekday 必须在 0..6 之间（0=周日）：{weekday}")
    return (weekday - 1) % 7


def build_year_table(year: int, weekday1: int = SUNDAY, weekday2: int = SATURDAY) -> YearTable:
    """
    生成常规双休（weekday1 != weekday2）或单休（两者相同）的年表骨架。

    遍历 year 年 1 月 1 日至 12 月 31 日的每一天，星期与 weekday1/weekday2
    之一相同即标记为 REST；不在 0..6 的编号不匹配任何日期。

    Args:
        year: 年份，不做范围校验。
        weekday1: 休息日 1（0=周日..6=周六）。
        weekday2: 休息日 2；与 weekday1 相同时按单休生成。

    Returns:
        12 个月表齐全的 YearTable。
    """
    rest_weekdays = {to_python_weekday(w) for w in (weekday1, weekday2) if w in WEEKDAYS}
    table = YearTable.empty(year)

    first = date(year, 1, 1)
    days_of_year = 366 if calendar.isleap(year) else 365
    for offset in range(days_of_year):
        d = first + timedelta(days=offset)
        if d.weekday() in rest_weekdays:
            table.months[d.month][d.day] = DayKind.REST
    return table
