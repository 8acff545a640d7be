from datetime import datetime, timezone

from aiohttp import web
from aiohttp.web_request import Request

from cors_policy import config
from cors_policy.core.exceptions import ApiException


async def check_health(request: Request):
    # a remote whitelist is needed to answer any cross-origin request
    if config.CORS_ORIGIN_WHITELIST_URL:
        async with request.app["csession"].head(config.CORS_ORIGIN_WHITELIST_URL) as res:
            if not res.ok:
                raise ApiException(
                    503,
                    None,
                    "Origin whitelist unavailable",
                    f"Whitelist endpoint answered with status {res.status}",
                )
    start_time = request.app["start_time"]
    current_time = datetime.now(timezone.utc)
    uptime_seconds = (current_time - start_time).total_seconds()
    return web.json_response(
        {"status": "ok", "version": request.app["app_version"], "uptime_seconds": uptime_seconds}
    )
