"""
节假日查询 HTTP 服务（FastAPI）。

路由：
- GET  /            存活探测，返回 hello!
- GET  /health      健康检查与已加载年份
- GET  /hs          查询 ?year=Y[&month=M[&day=D]]（白名单）
- GET  /whitelist   查看白名单规则（白名单）
- POST /whitelist   更新白名单（白名单）
- POST /reload      重新加载放假安排目录（白名单，可选）
"""

from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from holiday_calendar import __version__
from holiday_calendar.app.schemas import (
    DayInfo,
    DayPayload,
    FailedMessage,
    MonthPayload,
    WhitelistUpdate,
    YearPayload,
)
from holiday_calendar.core.allowlist import AllowList
from holiday_calendar.core.calendar import HolidayBookHolder
from holiday_calendar.core.errors import AllowListError, MalformedInputError, NotFoundError
from holiday_calendar.core.models.year_table import month_to_dict

logger = logging.getLogger(__name__)

# 反向代理（nginx/apache）转发的客户端地址头；前者为历史部署使用的名称
FORWARD_HEADERS = ("X-Forward-For", "X-Forwarded-For")


class ApiError(Exception):
    """转换为 {"status": "failed", "msg": ...} 响应的错误。"""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def _failed(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=FailedMessage(msg=message).model_dump())


def client_ip(request: Request) -> str | None:
    """优先取转发头中的第一个地址，否则取连接对端地址。"""
    for header in FORWARD_HEADERS:
        forwarded = request.headers.get(header)
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def _parse_int(value: str | None, field: str) -> int | None:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ApiError(400, f"{field} is not a integer") from exc


def create_app(
    holder: HolidayBookHolder,
    allow_list: AllowList,
    *,
    reload: Callable[[], object] | None = None,
) -> FastAPI:
    """
    创建查询服务。

    Args:
        holder: 当前生效的节假日快照持有者；每个请求读取一次快照。
        allow_list: IP 白名单，/hs 与管理接口均需通过校验。
        reload: 热更新回调（通常为绑定了参数的 load_calendar）；为空时不注册 /reload。
    """
    app = FastAPI(title="holiday-calendar", version=__version__, description="节假日查询服务")

    @app.exception_handler(ApiError)
    async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _failed(exc.status_code, exc.message)

    @app.exception_handler(NotFoundError)
    async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _failed(404, str(exc))

    @app.exception_handler(AllowListError)
    async def _allow_list_handler(request: Request, exc: AllowListError) -> JSONResponse:
        return _failed(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "invalid request")
        return _failed(400, f"{field}: {message}" if field else message)

    def verify_client(request: Request) -> str:
        ip = client_ip(request)
        if not allow_list.verify(ip):
            logger.warning("client ip: %s is not allowed (%s)", ip, request.url.path)
            raise ApiError(403, f"client ip: {ip} is not allowed")
        return ip or ""

    @app.get("/", response_class=PlainTextResponse)
    def serve_main() -> str:
        return "hello!"

    @app.get("/health")
    def health() -> dict:
        return {"status": "healthy", "years": holder.book.years()}

    @app.get("/hs", dependencies=[Depends(verify_client)])
    def serve_holidays(
        year: str | None = None,
        month: str | None = None,
        day: str | None = None,
    ) -> JSONResponse:
        y = _parse_int(year, "year")
        if y is None:
            raise ApiError(400, "year is empty")
        m = _parse_int(month, "month")
        d = _parse_int(day, "day")

        book = holder.book
        table = book.get_year(y)
        if m is None:
            if d is not None:
                raise ApiError(400, "month is empty")
            return JSONResponse(YearPayload(msg=table.to_dict()).model_dump())

        if not 1 <= m <= 12:
            raise ApiError(400, "month must between 1 and 12")
        if d is None:
            month_table = book.get_month(y, m)
            return JSONResponse(MonthPayload(msg=month_to_dict(dict(month_table))).model_dump())

        if not 1 <= d <= table.days_in_month(m):
            raise ApiError(400, f"day must between 1 and {table.days_in_month(m)}")
        kind = book.classify_day(y, m, d)
        info = DayInfo(
            year=y,
            month=m,
            day=d,
            kind=int(kind),
            name=str(kind),
            override=book.has_override(y, m, d),
        )
        return JSONResponse(DayPayload(msg=info).model_dump())

    @app.get("/whitelist", dependencies=[Depends(verify_client)])
    def show_whitelist() -> dict:
        return {"status": "success", "msg": allow_list.rules()}

    @app.post("/whitelist")
    def update_whitelist(body: WhitelistUpdate, ip: str = Depends(verify_client)) -> dict:
        allow_list.update(body.action, body.rules)
        logger.info("whitelist %s by %s: %s", body.action, ip, " ".join(body.rules.split()))
        return {"status": "success", "msg": allow_list.rules()}

    if reload is not None:

        @app.post("/reload")
        def reload_calendar(ip: str = Depends(verify_client)) -> dict:
            try:
                reload()
            except (FileNotFoundError, MalformedInputError) as exc:
                logger.error("reload requested by %s failed: %s", ip, exc)
                raise ApiError(500, f"reload failed: {exc}") from exc
            logger.info("holiday calendar reloaded by %s", ip)
            return {"status": "success", "msg": {"years": holder.book.years()}}

    return app
