"""Gladly destination configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_float, optional_env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

GLADLY_TIMEOUT_SECONDS = 10.0
GLADLY_MAX_CALLS_PER_SECOND = 10


@dataclass(frozen=True)
class GladlyConfig:
    """Holds Gladly API settings.

    ``url`` is the organisation base url, e.g. ``https://acme.us-1.gladly.com``.
    ``username`` is an admin email address and ``api_key`` the matching API token;
    together they form the basic auth credentials for every request.
    """

    url: str
    username: str
    api_key: str = field(repr=False)
    resilience: ResilienceConfig = field(repr=False)


def default_gladly_resilience(
    *,
    username: str,
    api_key: str,
    timeout_seconds: float = GLADLY_TIMEOUT_SECONDS,
    max_calls_per_second: int = GLADLY_MAX_CALLS_PER_SECOND,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="gladly",
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=max_calls_per_second, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
        basic_auth=(username, api_key),
    )


def get_gladly_config(*, resilience: ResilienceConfig | None = None) -> GladlyConfig:
    values = require_env_vars(("GLADLY_URL", "GLADLY_USERNAME", "GLADLY_API_KEY"))
    username = values["GLADLY_USERNAME"]
    api_key = values["GLADLY_API_KEY"]
    return GladlyConfig(
        url=values["GLADLY_URL"].rstrip("/"),
        username=username,
        api_key=api_key,
        resilience=resilience
        or default_gladly_resilience(
            username=username,
            api_key=api_key,
            timeout_seconds=optional_env_float("GLADLY_TIMEOUT_SECONDS", GLADLY_TIMEOUT_SECONDS),
            max_calls_per_second=optional_env_int(
                "GLADLY_MAX_CALLS_PER_SECOND", GLADLY_MAX_CALLS_PER_SECOND
            ),
        ),
    )
