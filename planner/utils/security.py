"""
Request rate limiting for the public endpoints
"""

import time
from collections import defaultdict
from typing import Optional
from fastapi import Request

from planner.core.config import settings
from planner.core.errors import RateLimited

WINDOW_SECONDS = 60

# client ip -> request times inside the current window
rate_limiter = defaultdict(list)

def _drop_idle_clients(window_start: float) -> None:
    """Forget clients with no request inside the window"""
    idle = [ip for ip, times in rate_limiter.items() if not times or times[-1] <= window_start]
    for ip in idle:
        del rate_limiter[ip]

def rate_limit_check(client_ip: str, limit: Optional[int] = None) -> bool:
    """Sliding one-minute window per client IP"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    now = time.time()
    window_start = now - WINDOW_SECONDS
    _drop_idle_clients(window_start)

    recent = [t for t in rate_limiter.get(client_ip, []) if t > window_start]
    if len(recent) >= limit:
        rate_limiter[client_ip] = recent
        return False

    recent.append(now)
    rate_limiter[client_ip] = recent
    return True

def get_client_ip(request: Request) -> str:
    """Client address, honouring proxy headers"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def enforce_rate_limit(request: Request) -> None:
    """Dependency for public endpoints"""
    if not rate_limit_check(get_client_ip(request)):
        raise RateLimited("Rate limit exceeded. Please try again later.")
