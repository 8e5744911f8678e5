"""放假安排（调休通知）模型。

一条 AdjustmentRecord 对应国务院办公厅通知中的一个节日，例如“2018 年春节”：
- holidays: 调休放假区间（普通休息日）
- legal_holidays: 法定节假日区间
- workdays: 调休上班日（逐日列出，覆盖一切休息标记）
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta


@dataclass(frozen=True, slots=True)
class HolidaySpan:
    """
    连续放假区间：从 (month, start) 起连续 length 天。

    区间可以跨月（按真实公历滚动，闰年由目标年份决定），但不跨年。
    """

    month: int
    start: int
    length: int

    def iter_dates(self, year: int) -> Iterator[date]:
        """
        按公历展开区间内的每一天。

        说明：
        - length <= 0 时不产生任何日期；
        - start 超过当月天数时顺延到下月（如 2 月 30 日 => 3 月 2 日）；
        - 落在 year 之外的日期被丢弃（年初之前跳过，年末之后截断）。

        Raises:
            ValueError: month 不在 1..12。
        """
        if self.length <= 0:
            return
        first = date(year, self.month, 1) + timedelta(days=self.start - 1)
        for offset in range(self.length):
            d = first + timedelta(days=offset)
            if d.year < year:
                continue
            if d.year > year:
                return
            yield d


@dataclass(frozen=True, slots=True)
class WorkDay:
    """调休上班日（单日）。"""

    month: int
    day: int


@dataclass(slots=True)
class AdjustmentRecord:
    """一个节日的放假安排。name 仅用于展示与日志。"""

    year: int
    name: str = ""
    holidays: list[HolidaySpan] = field(default_factory=list)
    legal_holidays: list[HolidaySpan] = field(default_factory=list)
    workdays: list[WorkDay] = field(default_factory=list)
