"""
Per-client request throttling for the public apply and analyze endpoints.

Each (client, path) pair keeps a sliding window of request times in process
memory. Every accepted request may end in an LLM call, so the window is what
bounds provider spend from a single caller.
"""
import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Tuple
from fastapi import Request, HTTPException, status

from app.core import config

logger = logging.getLogger(__name__)

# {(client ip, path): deque of accepted request times}
rate_limit_store: Dict[Tuple[str, str], Deque[float]] = defaultdict(deque)


def get_client_ip(request: Request) -> str:
    # first hop of X-Forwarded-For when behind a proxy
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(request: Request, max_requests: int = 10, window_seconds: int = 60) -> None:
    """
    Record the request, or refuse it with 429 once the caller already has
    ``max_requests`` accepted requests to this path within ``window_seconds``.
    A non-positive ``max_requests`` turns throttling off.
    """
    if max_requests <= 0:
        return

    bucket = (get_client_ip(request), request.url.path)
    now = time.monotonic()
    window = rate_limit_store[bucket]

    while window and window[0] <= now - window_seconds:
        window.popleft()

    if len(window) >= max_requests:
        logger.warning(f"Throttled {bucket[0]} on {bucket[1]}: {len(window)} requests in {window_seconds}s")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    window.append(now)


def public_rate_limit(request: Request) -> None:
    """Dependency applying the configured limit to public, LLM-backed endpoints."""
    check_rate_limit(
        request,
        max_requests=config.RATE_LIMIT_REQUESTS,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
    )
