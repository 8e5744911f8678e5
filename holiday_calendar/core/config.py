from __future__ import annotations

import os

from holiday_calendar.core.calendar.skeleton import SATURDAY, SUNDAY, WEEKDAYS


def get_data_dir() -> str:
    """
    返回放假安排 JSON 所在目录。

    Returns:
        目录路径；默认 `data`（可由 `HOLIDAY_DATA_DIR` 覆盖）。
    """
    return os.getenv("HOLIDAY_DATA_DIR", "data")


def _get_weekday(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} 必须是 0..6 的整数（0=周日）：{raw}") from exc
    if value not in WEEKDAYS:
        raise ValueError(f"{name} 必须是 0..6 的整数（0=周日）：{raw}")
    return value


def get_weekday1() -> int:
    """返回休息日 1，默认 0（周日，`HOLIDAY_WEEKDAY1`）。"""
    return _get_weekday("HOLIDAY_WEEKDAY1", SUNDAY)


def get_weekday2() -> int:
    """返回休息日 2，默认 6（周六，`HOLIDAY_WEEKDAY2`）。"""
    return _get_weekday("HOLIDAY_WEEKDAY2", SATURDAY)


def get_whitelist_path() -> str:
    """
    返回 IP 白名单文件路径。

    Returns:
        默认 `whitelist.cnf`（可由 `HOLIDAY_WHITELIST` 覆盖）。
    """
    return os.getenv("HOLIDAY_WHITELIST", "whitelist.cnf")


def get_host() -> str:
    """返回 HTTP 监听地址，默认 `0.0.0.0`（`HOLIDAY_HOST`）。"""
    return os.getenv("HOLIDAY_HOST", "0.0.0.0")


def get_port() -> int:
    """返回 HTTP 监听端口，默认 10082（`HOLIDAY_PORT`）。"""
    return int(os.getenv("HOLIDAY_PORT", "10082"))


def get_log_level() -> str:
    """返回日志级别，默认 INFO（`HOLIDAY_LOG_LEVEL`）。"""
    return os.getenv("HOLIDAY_LOG_LEVEL", "INFO").upper()


def enable_reload_endpoint() -> bool:
    """
    是否开放 POST /reload 热更新接口。

    Returns:
        True/False（由 `HOLIDAY_ENABLE_RELOAD=1` 控制，默认开启）。
    """
    return os.getenv("HOLIDAY_ENABLE_RELOAD", "1") == "1"
