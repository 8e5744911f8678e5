from __future__ import annotations

from enum import IntEnum


class DayKind(IntEnum):
    """
    单日分类。

    说明：
    - 数值即对外 JSON 中的取值（1=休息日，2=法定假日），与历史数据保持兼容；
    - ORDINARY 不会写入年表，年表中缺失即表示工作日；
    - 数值大小只用于表达“法定 > 休息 > 工作日”的等级，合并时并不按等级取大，
      而是按处理顺序后写覆盖。
    """

    ORDINARY = 0
    REST = 1
    STATUTORY = 2

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_off(self) -> bool:
        """是否为不上班的日子（休息日或法定假日）。"""
        return self is not DayKind.ORDINARY

    @classmethod
    def parse(cls, value: int | str) -> DayKind:
        """
        从数值或名称解析分类。

        Raises:
            ValueError: 无法识别的取值。
        """
        if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"未知的日期分类：{value}") from exc
        return cls(int(value))
