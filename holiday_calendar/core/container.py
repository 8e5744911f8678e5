"""
依赖容器模块（Dependency Container）。

职责：
- 集中管理进程级单例（当前生效的节假日快照、IP 白名单）的创建
- 通过 @register 注册，供流程函数自动注入

注意事项：
- @register 的名字必须与流程函数参数名一致
- 本模块在 holiday_calendar/flows/__init__.py 中自动导入
"""

from __future__ import annotations

from holiday_calendar.core.allowlist import AllowList
from holiday_calendar.core.calendar.query import HolidayBookHolder
from holiday_calendar.core.config import get_whitelist_path
from holiday_calendar.core.dependency import register
from holiday_calendar.data.loader import read_allow_list

# ========== 全局单例 ==========

_holiday_holder: HolidayBookHolder | None = None
_allow_list: AllowList | None = None


@register("holiday_holder")
def get_holiday_holder() -> HolidayBookHolder:
    """
    获取当前生效的节假日快照持有者（单例）。

    说明：首次调用时为空快照，需由 load_calendar 流程填充。
    """
    global _holiday_holder
    if _holiday_holder is None:
        _holiday_holder = HolidayBookHolder()
    return _holiday_holder


@register("allow_list")
def get_allow_list() -> AllowList:
    """
    获取 IP 白名单（单例）。

    说明：首次调用时从 `HOLIDAY_WHITELIST` 指向的文件读取。

    Raises:
        FileNotFoundError: 白名单文件不存在。
        AllowListError: 白名单内容非法。
    """
    global _allow_list
    if _allow_list is None:
        _allow_list = read_allow_list(get_whitelist_path())
    return _allow_list


def reset_container() -> None:
    """清空单例（测试与热更新配置后使用）。"""
    global _holiday_holder, _allow_list
    _holiday_holder = None
    _allow_list = None
