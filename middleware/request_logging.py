"""Request logging middleware that reports Prometheus scrapes separately"""
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp
from logging_config import get_logger


logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests, keeping scrape traffic visible at info level.

    Requests to ``scrape_path`` are logged once they complete with
    ``event_type="scrape_request"`` and a ``scrape_outcome`` of ``ok`` or
    ``failed``. Everything else (health checks, the status page) only
    shows up at debug level.
    """

    def __init__(self, app: ASGIApp, scrape_path: str = "/metrics"):
        super().__init__(app)
        self.scrape_path = scrape_path

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        is_scrape = request.url.path == self.scrape_path
        client_ip = request.client.host if request.client else None
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Scrape request raised" if is_scrape else "HTTP request raised",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_seconds=round(time.time() - start_time, 3),
                client_ip=client_ip,
                scrape_outcome="failed" if is_scrape else None,
                event_type="scrape_request" if is_scrape else "http_request_error",
                exc_info=True
            )
            raise

        duration = round(time.time() - start_time, 3)
        if is_scrape:
            logger.info(
                "Scrape request served",
                path=request.url.path,
                status_code=response.status_code,
                duration_seconds=duration,
                client_ip=client_ip,
                user_agent=request.headers.get("user-agent"),
                scrape_outcome="ok" if response.status_code < 400 else "failed",
                event_type="scrape_request"
            )
        else:
            logger.debug(
                "HTTP request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_seconds=duration,
                client_ip=client_ip,
                event_type="http_request_complete"
            )
        return response
