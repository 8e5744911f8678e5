"""Shared fixtures: announcement files on disk and a 2018 table."""

import json
from pathlib import Path

import pytest

from holiday_calendar.core.calendar import build_year_table

REPO_DATA_DIR = Path(__file__).resolve().parents[1] / "data"

SPRING_FESTIVAL_2018 = {
    "year": 2018,
    "name": "春节",
    "holidays": [{"month": 2, "start": 15, "length": 7}],
    "legalholidays": [{"month": 2, "start": 16, "length": 3}],
    "workdays": [{"month": 2, "day": 11}, {"month": 2, "day": 24}],
}

NATIONAL_DAY_2018 = {
    "year": 2018,
    "name": "国庆节",
    "holidays": [{"month": 10, "start": 1, "length": 7}],
    "legalholidays": [{"month": 10, "start": 1, "length": 3}],
    "workdays": [{"month": 9, "day": 29}, {"month": 9, "day": 30}],
}

NEW_YEAR_2019 = {
    "year": 2019,
    "name": "元旦",
    "legalholidays": [{"month": 1, "start": 1, "length": 1}],
}


def write_record(directory: Path, filename: str, payload) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def repo_data_dir() -> Path:
    """The sample 2018 announcements shipped with the repository."""
    return REPO_DATA_DIR


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """A data directory holding the 2018 Spring Festival and National Day records."""
    root = tmp_path / "data"
    write_record(root / "2018", "2018_02_chunjie.json", SPRING_FESTIVAL_2018)
    write_record(root / "2018", "2018_10_guoqing.json", NATIONAL_DAY_2018)
    return root


@pytest.fixture
def table_2018():
    """Plain Saturday/Sunday skeleton for 2018."""
    return build_year_table(2018, 0, 6)
