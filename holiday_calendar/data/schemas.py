"""
放假安排 JSON 文件的 Schema（Pydantic 模型）。

文件格式（字段名与历史数据一致）：
    {
      "year": 2018,
      "name": "春节",
      "holidays": [{"month": 2, "start": 15, "length": 7}],
      "legalholidays": [{"month": 2, "start": 16, "length": 3}],
      "workdays": [{"month": 2, "day": 11}, {"month": 2, "day": 24}]
    }

设计原则：
- 结构错误在导入阶段拦截，核心合并逻辑只接收合法记录
- length = 0 视为无效果的区间，允许存在
- 未知字段忽略
"""

from __future__ import annotations

import calendar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from holiday_calendar.core.models import AdjustmentRecord, HolidaySpan, WorkDay


class SpanSchema(BaseModel):
    """连续放假区间。"""

    model_config = ConfigDict(extra="ignore")

    month: int = Field(..., ge=1, le=12, description="起始月份")
    start: int = Field(..., ge=1, le=31, description="起始日（不含月份）")
    length: int = Field(..., ge=0, le=366, description="放假天数")

    def to_span(self) -> HolidaySpan:
        return HolidaySpan(month=self.month, start=self.start, length=self.length)


class WorkDaySchema(BaseModel):
    """调休上班日。"""

    model_config = ConfigDict(extra="ignore")

    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    def to_workday(self) -> WorkDay:
        return WorkDay(month=self.month, day=self.day)


class AnnouncementSchema(BaseModel):
    """一个节日的放假安排。"""

    model_config = ConfigDict(extra="ignore")

    year: int = Field(..., ge=1, le=9999)
    name: str = ""
    holidays: list[SpanSchema] = Field(default_factory=list)
    legalholidays: list[SpanSchema] = Field(default_factory=list)
    workdays: list[WorkDaySchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_dates(self) -> AnnouncementSchema:
        """起始日 / 调休日必须是该年份中真实存在的日期。"""
        for span in [*self.holidays, *self.legalholidays]:
            last = calendar.monthrange(self.year, span.month)[1]
            if span.start > last:
                raise ValueError(
                    f"{self.year}-{span.month:02d} 只有 {last} 天，start={span.start} 非法"
                )
        for w in self.workdays:
            last = calendar.monthrange(self.year, w.month)[1]
            if w.day > last:
                raise ValueError(f"{self.year}-{w.month:02d} 只有 {last} 天，day={w.day} 非法")
        return self

    def to_record(self) -> AdjustmentRecord:
        return AdjustmentRecord(
            year=self.year,
            name=self.name,
            holidays=[s.to_span() for s in self.holidays],
            legal_holidays=[s.to_span() for s in self.legalholidays],
            workdays=[w.to_workday() for w in self.workdays],
        )

    @classmethod
    def from_record(cls, record: AdjustmentRecord) -> AnnouncementSchema:
        """核心记录转回文件格式（用于导出 / 测试构造数据）。"""
        return cls(
            year=record.year,
            name=record.name,
            holidays=[SpanSchema(month=s.month, start=s.start, length=s.length) for s in record.holidays],
            legalholidays=[
                SpanSchema(month=s.month, start=s.start, length=s.length) for s in record.legal_holidays
            ],
            workdays=[WorkDaySchema(month=w.month, day=w.day) for w in record.workdays],
        )
