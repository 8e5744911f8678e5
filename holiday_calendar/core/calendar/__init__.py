from .overlay import apply_adjustment, apply_adjustments
from .query import HolidayBook, HolidayBookHolder
from .skeleton import SATURDAY, SUNDAY, build_year_table, to_python_weekday

__all__ = [
    "build_year_table",
    "apply_adjustment",
    "apply_adjustments",
    "HolidayBook",
    "HolidayBookHolder",
    "to_python_weekday",
    "SUNDAY",
    "SATURDAY",
]
