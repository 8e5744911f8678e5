"""
依赖注入装饰器（Dependency Injection）。

职责：
- 通过装饰器自动填充流程函数中值为 None 的可选参数
- 测试时可直接传入替身对象覆盖默认依赖

使用示例：
    # 1. 注册依赖工厂（在 holiday_calendar/core/container.py 中）
    @register("holiday_holder")
    def get_holiday_holder() -> HolidayBookHolder:
        return _holder

    # 2. 在流程函数上使用装饰器
    @dependency
    def load_calendar(
        *,
        data_dir: str | None = None,
        holiday_holder: HolidayBookHolder | None = None,  # 自动注入
    ) -> LoadCalendarResult:
        ...

    # 3. 测试时覆盖依赖
    load_calendar(data_dir=tmp_dir, holiday_holder=HolidayBookHolder())

注意事项：
- 注册名必须与函数参数名完全一致（大小写敏感）
- 仅当参数值为 None 时才会注入
- 注册在 holiday_calendar/flows/__init__.py 中通过导入 container 触发
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable, TypeVar

# 依赖注册表：参数名 -> 工厂函数
_REGISTRY: dict[str, Callable[[], Any]] = {}

T = TypeVar("T")


def register(name: str) -> Callable[[Callable[[], T]], Callable[[], T]]:
    """
    装饰器：将工厂函数注册到依赖注入容器。

    Args:
        name: 注册名称，必须与目标函数的参数名完全一致。
    """

    def decorator(factory_func: Callable[[], T]) -> Callable[[], T]:
        _REGISTRY[name] = factory_func
        return factory_func

    return decorator


def dependency(func: Callable[..., T]) -> Callable[..., T]:
    """
    依赖注入装饰器：调用时为 None 且已注册的参数由工厂函数创建并注入。

    Args:
        func: 需要自动注入依赖的函数。

    Returns:
        包装后的函数。
    """
    sig = inspect.signature(func)

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        bound_args = sig.bind_partial(*args, **kwargs)
        bound_args.apply_defaults()

        for param_name in sig.parameters:
            if param_name in _REGISTRY and bound_args.arguments.get(param_name) is None:
                kwargs[param_name] = _REGISTRY[param_name]()

        return func(*args, **kwargs)

    return wrapper
