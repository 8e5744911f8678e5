"""节假日时间表的错误类型。

核心层只抛出这里定义的类型化异常，不记录日志、不终止进程；
如何转换为退出码或 HTTP 响应由调用方（CLI / 服务层）决定。
"""

from __future__ import annotations


class HolidayCalendarError(Exception):
    """所有节假日相关错误的基类。"""


class YearMismatchError(HolidayCalendarError):
    """放假安排的年份与目标年表不一致，年表保持不变。"""

    def __init__(self, table_year: int, record_year: int, name: str = "") -> None:
        self.table_year = table_year
        self.record_year = record_year
        self.name = name
        label = f"（{name}）" if name else ""
        super().__init__(
            f"the year is not matched: table={table_year} record={record_year}{label}"
        )


class NotFoundError(HolidayCalendarError, LookupError):
    """查询的年 / 月 / 日不存在。"""


class MalformedInputError(HolidayCalendarError, ValueError):
    """放假安排文件无法读取或结构非法（导入阶段发现）。"""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class AllowListError(HolidayCalendarError, ValueError):
    """白名单规则无法解析或操作未知。"""
