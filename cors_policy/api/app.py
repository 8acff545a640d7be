"""
Main API application factory.

This module creates the aiohttp application with its routes and middlewares.
"""

import logging
import os
from datetime import datetime, timezone

import sentry_sdk
from aiohttp import ClientSession, web

from cors_policy import config
from cors_policy.core.cors import DECISION_KEY, setup_cors
from cors_policy.core.exceptions import error_middleware
from cors_policy.core.health import check_health
from cors_policy.core.options import CorsOptions
from cors_policy.core.sentry import get_sentry_kwargs
from cors_policy.core.version import get_app_version

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


@routes.get(r"/health/")
async def health_handler(request):
    """Handle health check requests."""
    return await check_health(request)


@routes.route("*", r"/api/cors/")
async def cors_decision_handler(request):
    """Return the CORS decision taken for the current request."""
    decision = request.get(DECISION_KEY)
    return web.json_response(
        {
            "origin": request.headers.get("Origin"),
            "allow_origin": decision.allow_origin if decision else None,
            "allow_credentials": decision.allow_credentials if decision else False,
        }
    )


async def app_factory(options: CorsOptions | None = None):
    """Create and configure the aiohttp application."""

    async def on_startup(app):
        app["csession"] = ClientSession()
        app["start_time"] = datetime.now(timezone.utc)
        app["app_version"] = await get_app_version()

    async def on_cleanup(app):
        await app["csession"].close()

    sentry_sdk.init(**get_sentry_kwargs())

    app = web.Application(middlewares=[error_middleware])
    setup_cors(app, options or CorsOptions.from_config(config))
    app.add_routes(routes)

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    return app


def run():
    """Run the application."""
    logging.basicConfig(level=config.LOG_LEVEL or logging.INFO)
    logger.info(f"Starting CORS policy service on {config.SCHEME}://{config.SERVER_NAME}")
    web.run_app(app_factory(), path=os.environ.get("CORS_POLICY_APP_SOCKET_PATH"))


if __name__ == "__main__":
    run()
