"""
Ready-made origin resolvers for whitelisting.

Both return the request Origin header when it is allowed and `False` otherwise,
which disables CORS for that request.
"""

import logging
from typing import Awaitable, Callable, Iterable

from aiohttp.web_request import Request

from cors_policy.core.exceptions import ApiException

logger = logging.getLogger(__name__)


def whitelist_origin(origins: Iterable[str]) -> Callable[[Request], str | bool]:
    allowed = frozenset(origins)

    def resolve(request: Request) -> str | bool:
        origin = request.headers.get("Origin")
        if origin in allowed:
            return origin
        return False

    return resolve


def remote_whitelist_origin(url: str) -> Callable[[Request], Awaitable[str | bool]]:
    """
    Fetch the list of allowed origins from `url` on each request,
    using the application's shared client session (app["csession"]).
    The endpoint must answer with a JSON list of origins.
    """

    async def resolve(request: Request) -> str | bool:
        origin = request.headers.get("Origin")
        async with request.app["csession"].get(url) as res:
            if not res.ok:
                raise ApiException(
                    503,
                    None,
                    "Origin whitelist unavailable",
                    f"Whitelist endpoint answered with status {res.status}",
                )
            allowed = await res.json()
        if not isinstance(allowed, list):
            raise ApiException(
                503,
                None,
                "Origin whitelist unavailable",
                "Whitelist endpoint did not answer with a JSON list of origins",
            )
        if origin in allowed:
            return origin
        logger.debug(f"Origin {origin} not found in remote whitelist")
        return False

    return resolve
