from __future__ import annotations

import argparse
import calendar
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from holiday_calendar.core.calendar import HolidayBook, HolidayBookHolder
from holiday_calendar.core.config import get_data_dir
from holiday_calendar.core.errors import MalformedInputError, NotFoundError
from holiday_calendar.core.models import DayKind, YearTable
from holiday_calendar.data.loader import iter_record_files, read_record
from holiday_calendar.flows.calendar import load_calendar

console = Console()

# 表头按 0=周日..6=周六 排列
_HEADER = ["日", "一", "二", "三", "四", "五", "六"]
_STYLES = {
    DayKind.REST: "green",
    DayKind.STATUTORY: "bold red",
}


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data-dir", help="放假安排 JSON 目录（默认 HOLIDAY_DATA_DIR 或 data）")
    parser.add_argument("--weekday1", type=int, help="休息日 1，0=周日..6=周六")
    parser.add_argument("--weekday2", type=int, help="休息日 2")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m holiday_calendar.cli.calendar",
        description="节假日时间表：查看年表 / 查询单日 / 校验放假安排文件",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="子命令")

    # ========== show 子命令 ==========
    show_parser = subparsers.add_parser("show", help="按月历形式打印年表")
    _add_source_args(show_parser)
    show_parser.add_argument("--year", type=int, required=True, help="年份")
    show_parser.add_argument("--month", type=int, help="月份 1..12（默认全年）")

    # ========== day 子命令 ==========
    day_parser = subparsers.add_parser("day", help="查询某一天是否放假")
    _add_source_args(day_parser)
    day_parser.add_argument("--date", required=True, help="日期 YYYY-MM-DD")

    # ========== check 子命令 ==========
    check_parser = subparsers.add_parser("check", help="校验目录下全部放假安排文件")
    check_parser.add_argument("--data-dir", help="放假安排 JSON 目录")

    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> HolidayBook:
    result = load_calendar(
        data_dir=args.data_dir,
        weekday1=args.weekday1,
        weekday2=args.weekday2,
        holiday_holder=HolidayBookHolder(),
    )
    return result.book


def render_month(table: YearTable, month: int) -> Table:
    """将月表渲染为周日开头的月历。"""
    grid = Table(title=f"{table.year}-{month:02d}", show_lines=False)
    for name in _HEADER:
        grid.add_column(name, justify="right")

    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    for week in cal.monthdayscalendar(table.year, month):
        cells = []
        for d in week:
            if d == 0:
                cells.append("")
                continue
            style = _STYLES.get(table.get(month, d))
            cells.append(f"[{style}]{d}[/{style}]" if style else str(d))
        grid.add_row(*cells)
    return grid


def _do_show(args: argparse.Namespace) -> int:
    """执行 show 命令。"""
    try:
        book = _load(args)
        table = book.get_year(args.year)
        months = [args.month] if args.month else list(range(1, 13))
        for m in months:
            if not 1 <= m <= 12:
                raise NotFoundError(f"month must between 1 and 12: {m}")
            console.print(render_month(table, m))
        console.print(
            f"[dim]休息日 {table.count(DayKind.REST)} 天，法定假日 {table.count(DayKind.STATUTORY)} 天[/dim]"
        )
        return 0
    except NotFoundError as err:
        console.print(f"[red]✗ {escape(str(err))}[/red]")
        return 4
    except (FileNotFoundError, MalformedInputError, ValueError) as err:
        console.print(f"[red]✗ 数据错误：{escape(str(err))}[/red]")
        return 4
    except Exception as err:  # noqa: BLE001
        console.print(f"[red]✗ 失败：{escape(str(err))}[/red]")
        return 5


def _do_day(args: argparse.Namespace) -> int:
    """执行 day 命令。"""
    try:
        target = date.fromisoformat(args.date)
        book = _load(args)
        kind = book.classify(target)
        style = _STYLES.get(kind, "bold")
        console.print(f"{target.isoformat()} [{style}]{kind}[/{style}] ({int(kind)})")
        return 0
    except NotFoundError as err:
        console.print(f"[red]✗ {escape(str(err))}[/red]")
        return 4
    except (FileNotFoundError, MalformedInputError, ValueError) as err:
        console.print(f"[red]✗ 参数或数据错误：{escape(str(err))}[/red]")
        return 4
    except Exception as err:  # noqa: BLE001
        console.print(f"[red]✗ 失败：{escape(str(err))}[/red]")
        return 5


def _do_check(args: argparse.Namespace) -> int:
    """执行 check 命令：逐个文件校验，汇总错误。"""
    data_dir = args.data_dir or get_data_dir()
    try:
        files = iter_record_files(data_dir)
    except FileNotFoundError as err:
        console.print(f"[red]✗ {escape(str(err))}[/red]")
        return 4

    report = Table(title=f"放假安排校验：{data_dir}")
    report.add_column("文件")
    report.add_column("年份", justify="right")
    report.add_column("节日")
    report.add_column("结果")

    failures = 0
    for path in files:
        try:
            record = read_record(path)
        except MalformedInputError as err:
            failures += 1
            report.add_row(str(path), "", "", f"[red]{escape(str(err))}[/red]")
            continue
        report.add_row(str(path), str(record.year), record.name, "[green]OK[/green]")

    console.print(report)
    console.print(f"共 {len(files)} 个文件，失败 {failures} 个")
    return 4 if failures else 0


def main(argv: list[str] | None = None) -> int:
    """
    节假日时间表 CLI。

    Returns:
        退出码：0=成功；4=参数或数据错误；5=其他失败。
    """
    args = _parse_args(argv)

    if args.command == "show":
        return _do_show(args)
    if args.command == "day":
        return _do_day(args)
    if args.command == "check":
        return _do_check(args)

    console.print(f"[red]✗ 未知命令：{args.command}[/red]")
    return 1


if __name__ == "__main__":
    sys.exit(main())
