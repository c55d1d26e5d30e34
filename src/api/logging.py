"""Access logging for API requests."""

import logging
import time
from dataclasses import dataclass

from fastapi import Request

logger = logging.getLogger("api.access")


@dataclass
class RequestLog:
    """Captured request/response data for one access log line."""

    method: str = ""
    url: str = ""
    status_code: int = 0
    processing_time_ms: float = 0.0
    referrer: str | None = None

    def format(self) -> str:
        return (
            f"{self.method} {self.url} {self.status_code} - "
            f"{self.processing_time_ms:.3f} ms (via {self.referrer or '-'})"
        )


def log_request(log: RequestLog) -> None:
    """Write one access log line."""
    logger.info(log.format())


async def access_log_middleware(request: Request, call_next):
    """Log method, path, status, latency and referrer of every request."""
    start_time = time.perf_counter()
    url = request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    request_log = RequestLog(
        method=request.method,
        url=url,
        referrer=request.headers.get("referer"),
    )

    # Stays 500 if the handler raises
    request_log.status_code = 500
    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    finally:
        request_log.processing_time_ms = (time.perf_counter() - start_time) * 1000
        log_request(request_log)
