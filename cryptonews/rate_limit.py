"""Per-client request limiting: a fixed window with a temporary block."""

from __future__ import annotations

import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from aiohttp import web

from cryptonews.utils import get_current_time_millis

MAX_REQ = 10
ONE_MINUTE_SPAN = 60_000
LIMIT_MESSAGE = "You've reached the request limit, please try again later."


@dataclass
class RequestInfo:
    request_count: int
    first_request_time: int
    block_time: int | None = None


def eval_block_time(request_count: int, now: int) -> int | None:
    """Return when a block ends if the count exceeds the limit, else None."""
    if request_count > MAX_REQ:
        return now + ONE_MINUTE_SPAN
    return None


class RateLimiter:
    """Tracks request counts per client identifier."""

    def __init__(self, clock: Callable[[], int] = get_current_time_millis) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._requests: dict[str, RequestInfo] = {}

    def should_allow_request(self, user_req_id: str) -> bool:
        now = self._clock()
        with self._lock:
            info = self._requests.get(user_req_id)
            if info is None:
                self._requests[user_req_id] = RequestInfo(request_count=1, first_request_time=now)
                return True
            if info.block_time is not None and now <= info.block_time:
                return False
            if now - info.first_request_time <= ONE_MINUTE_SPAN:
                info.request_count += 1
            else:
                info.request_count = 1
                info.first_request_time = now
            info.block_time = eval_block_time(info.request_count, now)
            return info.block_time is None


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def make_rate_limit_middleware(limiter: RateLimiter):
    """Build an aiohttp middleware that applies ``limiter`` to matched routes."""

    @web.middleware
    async def rate_limit(request: web.Request, handler: Handler) -> web.StreamResponse:
        if request.match_info.http_exception is not None:
            return await handler(request)
        ip = request.remote or ""
        user_agent = request.headers.get("User-Agent", "unknown")
        if limiter.should_allow_request(f"{ip}_{user_agent}"):
            return await handler(request)
        print("User is blocked")
        return web.Response(status=429, text=LIMIT_MESSAGE)

    return rate_limit