from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from holiday_calendar.core.errors import YearMismatchError
from holiday_calendar.core.models import AdjustmentRecord, DayKind, HolidaySpan, YearTable


def _resolve(spans: Iterable[HolidaySpan], year: int) -> list[date]:
    return [d for span in spans for d in span.iter_dates(year)]


def apply_adjustment(table: YearTable, record: AdjustmentRecord) -> None:
    """
    将一条放假安排原地叠加到年表。

    处理顺序固定：
        1) holidays 区间逐日标记为 REST；
        2) legal_holidays 区间逐日标记为 STATUTORY（可覆盖第 1 步）；
        3) workdays 逐日删除记录，恢复为工作日（无论此前是什么分类）。

    每一步都是直接覆盖 / 删除，因此同一条记录重复叠加结果不变；
    不同记录之间按调用顺序后写覆盖，不存在“锁定”状态。

    Args:
        table: 目标年表（原地修改）。
        record: 放假安排。

    Raises:
        YearMismatchError: record.year 与 table.year 不一致，年表不变。
        ValueError: 区间月份非法；此时同样不会修改年表。
    """
    if record.year != table.year:
        raise YearMismatchError(table.year, record.year, record.name)

    # 先完成全部日期换算，任何换算错误都发生在修改之前
    rest_days = _resolve(record.holidays, table.year)
    legal_days = _resolve(record.legal_holidays, table.year)

    for d in rest_days:
        table.months[d.month][d.day] = DayKind.REST
    for d in legal_days:
        table.months[d.month][d.day] = DayKind.STATUTORY
    for w in record.workdays:
        month = table.months.get(w.month)
        if month is not None:
            month.pop(w.day, None)


def apply_adjustments(table: YearTable, records: Iterable[AdjustmentRecord]) -> None:
    """按顺序逐条叠加；遇到第一条失败的记录即抛出，之前的记录已生效。"""
    for record in records:
        apply_adjustment(table, record)
