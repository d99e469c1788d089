from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("urlshort")


class TraceLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get("X-Trace-Id", str(uuid.uuid4()))
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = round((time.time() - start) * 1000, 2)
            logger.exception({"event": "http.request.failed", "trace_id": trace_id, "err": str(e), "ms": duration})
            raise

        duration = round((time.time() - start) * 1000, 2)
        logger.info(
            {
                "event": "http.request",
                "trace_id": trace_id,
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "location": response.headers.get("location"),
                "ms": duration,
            }
        )
        response.headers["X-Trace-Id"] = trace_id
        return response
