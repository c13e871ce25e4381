"""
HTTP 요청 로깅 미들웨어

요청마다 request_id를 발급하고 X-Request-ID 헤더로 돌려준다.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.context import clear_context, set_request_id
from app.core.logging import get_logger

logger = get_logger(__name__)

SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """API 요청 로깅 및 request_id 관리"""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        request_id = set_request_id(request.headers.get("X-Request-ID"))
        started = time.perf_counter()
        logger.debug("요청 수신 %s %s", request.method, path)

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "요청 처리 중 예외 %s %s error=%s duration_ms=%s",
                    request.method,
                    path,
                    type(e).__name__,
                    _elapsed_ms(started),
                )
                raise

            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "요청 완료 %s %s status=%d duration_ms=%s",
                request.method,
                path,
                response.status_code,
                _elapsed_ms(started),
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()
