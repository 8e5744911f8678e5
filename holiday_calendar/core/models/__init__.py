"""
领域模型聚合导出。

说明：仅做名称聚合，不引入额外逻辑，便于上层模块统一引用。
"""

from .adjustment import AdjustmentRecord, HolidaySpan, WorkDay
from .day_kind import DayKind
from .year_table import MONTHS, MonthTable, YearTable

__all__ = [
    "DayKind",
    "MonthTable",
    "YearTable",
    "MONTHS",
    "AdjustmentRecord",
    "HolidaySpan",
    "WorkDay",
]
