from __future__ import annotations

import logging

from holiday_calendar.core.config import get_log_level

_LOGGER_NAME = "holiday_calendar"
_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    初始化根日志配置（CLI / 服务入口调用一次）。

    Args:
        level: 日志级别名称；为空时读取 `HOLIDAY_LOG_LEVEL`。
    """
    logging.basicConfig(level=(level or get_log_level()).upper(), format=_FORMAT)


def log(msg: str, *, level: int = logging.INFO) -> None:
    """流程层 / CLI 使用的简易日志输出，消息自带 `[Tag]` 前缀。"""
    logging.getLogger(_LOGGER_NAME).log(level, msg)
