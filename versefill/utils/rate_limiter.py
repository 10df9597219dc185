"""Rate limiting utilities for resolver API calls."""
import time
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

# Global rate limit tracking, keyed by API name
_call_times: Dict[str, List[float]] = {}


def rate_limit_api(api_name: str, max_calls: int, period_seconds: int) -> None:
    """Sliding-window rate limiter for API calls.

    Blocks the calling thread until another call to ``api_name`` is allowed.

    Args:
        api_name: Name of the API ('lookup_api', 'bolls', ...)
        max_calls: Maximum number of calls allowed in the period
        period_seconds: Time period in seconds

    Raises:
        ValueError: If max_calls is not positive
    """
    if max_calls <= 0:
        raise ValueError(f"max_calls must be positive, got {max_calls}")

    now = time.time()

    # Remove old timestamps outside the time window
    call_times = [t for t in _call_times.get(api_name, []) if now - t < period_seconds]

    # Check if we've hit the rate limit
    if len(call_times) >= max_calls:
        wait_time = period_seconds - (now - call_times[0])
        if wait_time > 0:
            logger.info(f"Rate limit hit for {api_name}. Waiting for {wait_time:.2f} seconds.")
            time.sleep(wait_time)
            # Refresh timestamps after wait
            now = time.time()
            call_times = [t for t in call_times if now - t < period_seconds]

    call_times.append(now)
    _call_times[api_name] = call_times


def reset_rate_limits() -> None:
    """Reset all rate limit trackers. Useful for testing."""
    _call_times.clear()
