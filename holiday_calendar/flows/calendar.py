"""节假日时间表的构建与热更新流程。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from holiday_calendar.core.calendar import (
    HolidayBook,
    HolidayBookHolder,
    apply_adjustment,
    build_year_table,
    to_python_weekday,
)
from holiday_calendar.core.config import get_data_dir, get_weekday1, get_weekday2
from holiday_calendar.core.dependency import dependency
from holiday_calendar.core.log import log
from holiday_calendar.core.models import AdjustmentRecord, YearTable
from holiday_calendar.data.loader import DEFAULT_PATTERN, load_records


@dataclass(slots=True)
class LoadCalendarResult:
    """节假日时间表加载结果统计。"""

    book: HolidayBook
    files: list[Path] = field(default_factory=list)
    names: list[str] = field(default_factory=list)

    @property
    def years(self) -> list[int]:
        return self.book.years()

    @property
    def total_records(self) -> int:
        return len(self.files)


def build_tables(
    records: list[AdjustmentRecord],
    *,
    weekday1: int,
    weekday2: int,
) -> dict[int, YearTable]:
    """
    按记录出现顺序构建年表。

    某一年第一次出现时按 (weekday1, weekday2) 生成骨架，随后依次叠加该年的记录，
    同一天后写覆盖。
    """
    tables: dict[int, YearTable] = {}
    for record in records:
        table = tables.get(record.year)
        if table is None:
            table = tables[record.year] = build_year_table(record.year, weekday1, weekday2)
        apply_adjustment(table, record)
    return tables


@dependency
def load_calendar(
    *,
    data_dir: str | Path | None = None,
    weekday1: int | None = None,
    weekday2: int | None = None,
    pattern: str = DEFAULT_PATTERN,
    holiday_holder: HolidayBookHolder | None = None,
) -> LoadCalendarResult:
    """
    从目录读取全部放假安排，构建新的 HolidayBook 并整体替换当前快照。

    启动时调用一次；运行期间再次调用即为热更新（读者不会看到半成品）。

    Args:
        data_dir: 放假安排目录，默认读取 `HOLIDAY_DATA_DIR`。
        weekday1: 休息日 1（0=周日），默认读取配置。
        weekday2: 休息日 2，默认读取配置。
        pattern: 文件匹配模式。
        holiday_holder: 快照持有者（可选，自动注入）。

    Returns:
        LoadCalendarResult。

    Raises:
        FileNotFoundError: 目录不存在。
        ValueError: weekday 不在 0..6（含环境变量配置错误）。
        MalformedInputError: 任一文件非法，此时当前快照保持不变。
    """
    data_dir = data_dir if data_dir is not None else get_data_dir()
    weekday1 = get_weekday1() if weekday1 is None else weekday1
    weekday2 = get_weekday2() if weekday2 is None else weekday2
    for w in (weekday1, weekday2):
        to_python_weekday(w)

    loaded = load_records(data_dir, pattern)
    records = [record for _path, record in loaded]
    tables = build_tables(records, weekday1=weekday1, weekday2=weekday2)

    book = HolidayBook(tables)
    holiday_holder.swap(book)

    log(
        f"[Calendar:load] 加载完成：dir={data_dir} files={len(loaded)} "
        f"years={book.years()} weekdays=({weekday1},{weekday2})"
    )
    return LoadCalendarResult(
        book=book,
        files=[path for path, _record in loaded],
        names=[r.name for r in records],
    )
