"""放假安排与白名单文件的读取。"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from holiday_calendar.core.allowlist import AllowList
from holiday_calendar.core.errors import MalformedInputError
from holiday_calendar.core.models import AdjustmentRecord
from holiday_calendar.data.schemas import AnnouncementSchema

DEFAULT_PATTERN = "*.json"


def read_record(path: str | Path) -> AdjustmentRecord:
    """
    读取单个放假安排 JSON 文件。

    Raises:
        MalformedInputError: 文件无法读取、不是合法 JSON 或结构非法。
    """
    file = Path(path)
    try:
        raw = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"无法读取文件：{exc}", source=str(file)) from exc
    try:
        schema = AnnouncementSchema.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedInputError(f"放假安排格式错误：{exc}", source=str(file)) from exc
    return schema.to_record()


def iter_record_files(data_dir: str | Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """
    递归列出目录下匹配 pattern 的文件（跳过目录），按路径排序。

    排序保证了同一目录多次导入时，后写覆盖的结果一致。

    Raises:
        FileNotFoundError: data_dir 不存在或不是目录。
    """
    root = Path(data_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"放假安排目录不存在：{data_dir}")
    return sorted(p for p in root.rglob(pattern) if p.is_file())


def load_records(
    data_dir: str | Path, pattern: str = DEFAULT_PATTERN
) -> list[tuple[Path, AdjustmentRecord]]:
    """
    读取目录下全部放假安排。

    Returns:
        (文件路径, 记录) 列表，顺序同 iter_record_files。

    Raises:
        FileNotFoundError: 目录不存在。
        MalformedInputError: 任一文件非法（整体失败，不做部分导入）。
    """
    return [(path, read_record(path)) for path in iter_record_files(data_dir, pattern)]


def read_allow_list(path: str | Path) -> AllowList:
    """
    读取白名单文件：每行一个 IP 或 CIDR 网段，# 之后为注释。

    Raises:
        FileNotFoundError: 文件不存在。
        AllowListError: 存在无法解析的规则。
    """
    text = Path(path).read_text(encoding="utf-8")
    return AllowList.from_text(text)
