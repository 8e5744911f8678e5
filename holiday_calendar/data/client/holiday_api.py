from __future__ import annotations

from typing import Any

import httpx

from holiday_calendar.core.errors import HolidayCalendarError, NotFoundError
from holiday_calendar.core.log import log
from holiday_calendar.core.models import DayKind, MonthTable, YearTable
from holiday_calendar.core.models.year_table import month_from_dict


class HolidayApiError(HolidayCalendarError):
    """查询服务返回失败或响应无法解析。"""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class HolidayApiClient:
    """
    节假日查询服务客户端。

    职责：
    - 调用 GET /hs 查询整年 / 单月 / 单日
    - 将 `{"status", "kind", "msg"}` 响应还原为核心模型

    设计原则：
    - 使用 httpx 同步 Client，可注入 transport 便于测试；
    - 404 转为 NotFoundError，其余失败统一抛 HolidayApiError。
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:10082",
        *,
        timeout: float = 3.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: 服务地址。
            timeout: 单次请求超时时间（秒）。
            transport: 自定义传输层（测试时传入 httpx.MockTransport）。
        """
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> HolidayApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_year(self, year: int) -> YearTable:
        msg = self._query(expected="year", year=year)
        return YearTable.from_dict(msg)

    def get_month(self, year: int, month: int) -> MonthTable:
        msg = self._query(expected="month", year=year, month=month)
        return month_from_dict(msg)

    def get_day(self, year: int, month: int, day: int) -> DayKind:
        msg = self._query(expected="day", year=year, month=month, day=day)
        return DayKind.parse(msg["kind"])

    def _query(self, *, expected: str, **params: int) -> Any:
        try:
            resp = self._client.get("/hs", params=params)
        except httpx.HTTPError as exc:
            log(f"[HolidayApi] 请求失败：{exc}")
            raise HolidayApiError(f"request failed: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise HolidayApiError(
                f"invalid response body (HTTP {resp.status_code})", status_code=resp.status_code
            ) from exc

        if resp.status_code == 404:
            raise NotFoundError(str(body.get("msg", "not found")))
        if resp.status_code != 200 or body.get("status") != "success":
            raise HolidayApiError(str(body.get("msg", resp.text)), status_code=resp.status_code)
        if body.get("kind") != expected:
            raise HolidayApiError(f"unexpected payload kind: {body.get('kind')!r} (expected {expected})")
        return body["msg"]
