import math

from fastapi import Request
from fastapi.responses import JSONResponse

API_PREFIX = "/api/"


async def rate_limit_middleware(request: Request, call_next):
    # static assets are not counted
    if not request.url.path.startswith(API_PREFIX):
        return await call_next(request)

    limiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"
    decision = limiter.hit(client_ip)
    if not decision.allowed:
        retry_after = max(0, math.ceil(decision.reset_at - limiter.now()))
        return JSONResponse(
            status_code=429,
            content={"detail": "Too many requests"},
            headers={"Retry-After": str(retry_after)},
        )
    return await call_next(request)
