"""
查询接口的响应 Schema。

成功响应按 kind 区分三种载荷（整年 / 单月 / 单日），失败响应只有 status 与 msg：
    {"status": "success", "kind": "month", "msg": {"3": 1, "4": 1}}
    {"status": "failed", "msg": "year is empty"}
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class DayInfo(BaseModel):
    year: int
    month: int
    day: int
    kind: int = Field(..., description="0=工作日, 1=休息日, 2=法定假日")
    name: str = Field(..., description="ordinary / rest / statutory")
    override: bool = Field(..., description="该日在年表中是否有显式记录")


class YearPayload(BaseModel):
    status: Literal["success"] = "success"
    kind: Literal["year"] = "year"
    msg: dict


class MonthPayload(BaseModel):
    status: Literal["success"] = "success"
    kind: Literal["month"] = "month"
    msg: dict[str, int]


class DayPayload(BaseModel):
    status: Literal["success"] = "success"
    kind: Literal["day"] = "day"
    msg: DayInfo


HolidayPayload = Annotated[
    Union[YearPayload, MonthPayload, DayPayload],
    Field(discriminator="kind"),
]


class FailedMessage(BaseModel):
    status: Literal["failed"] = "failed"
    msg: str


class WhitelistUpdate(BaseModel):
    """白名单更新请求。"""

    action: Literal["ADD", "UPDATE", "DEL"] = Field(..., description="ADD/UPDATE 合并，DEL 删除")
    rules: str = Field(..., description="规则文本：每行一个 IP 或 CIDR 网段")
