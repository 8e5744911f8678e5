from __future__ import annotations

import argparse
import sys
from functools import partial

import uvicorn
from dotenv import load_dotenv

from holiday_calendar.app.server import create_app
from holiday_calendar.core import config
from holiday_calendar.core.calendar import to_python_weekday
from holiday_calendar.core.container import get_allow_list, get_holiday_holder
from holiday_calendar.core.errors import AllowListError, MalformedInputError
from holiday_calendar.core.log import log, setup_logging
from holiday_calendar.data.loader import read_allow_list
from holiday_calendar.flows.calendar import load_calendar


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m holiday_calendar.cli.serve",
        description="节假日查询服务：加载放假安排目录并通过 HTTP 提供查询",
    )
    parser.add_argument("--data-dir", help="放假安排 JSON 目录（默认 HOLIDAY_DATA_DIR 或 data）")
    parser.add_argument("--weekday1", type=int, help="休息日 1，0=周日..6=周六（默认 0）")
    parser.add_argument("--weekday2", type=int, help="休息日 2，与 weekday1 相同为单休（默认 6）")
    parser.add_argument("--whitelist", help="IP 白名单文件（默认 HOLIDAY_WHITELIST 或 whitelist.cnf）")
    parser.add_argument("--host", help="监听地址（默认 0.0.0.0）")
    parser.add_argument("--port", type=int, help="监听端口（默认 10082）")
    parser.add_argument("--log-level", help="日志级别（默认 INFO）")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    启动节假日查询服务。

    Returns:
        退出码：0=正常退出；4=参数或数据错误；5=其他失败。
    """
    load_dotenv()
    args = _parse_args(argv)
    setup_logging(args.log_level)

    try:
        # 1. 解析配置（命令行优先，其次环境变量）
        weekday1 = config.get_weekday1() if args.weekday1 is None else args.weekday1
        weekday2 = config.get_weekday2() if args.weekday2 is None else args.weekday2
        for w in (weekday1, weekday2):
            to_python_weekday(w)
        data_dir = args.data_dir or config.get_data_dir()
        whitelist = args.whitelist or config.get_whitelist_path()

        # 2. 读取白名单与放假安排
        allow_list = read_allow_list(whitelist) if args.whitelist else get_allow_list()
        log(f"[Serve] 白名单已加载：{whitelist} rules={len(allow_list)}")

        holder = get_holiday_holder()
        reload = partial(
            load_calendar,
            data_dir=data_dir,
            weekday1=weekday1,
            weekday2=weekday2,
            holiday_holder=holder,
        )
        reload()
    except FileNotFoundError as err:
        log(f"❌ 文件不存在：{err}")
        return 4
    except (ValueError, AllowListError, MalformedInputError) as err:
        log(f"❌ 配置或数据错误：{err}")
        return 4
    except Exception as err:  # noqa: BLE001
        log(f"❌ 启动失败：{err}")
        return 5

    # 3. 启动服务
    app = create_app(holder, allow_list, reload=reload if config.enable_reload_endpoint() else None)
    host = args.host or config.get_host()
    port = args.port or config.get_port()
    log(f"[Serve] 监听 {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=(args.log_level or config.get_log_level()).lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
