import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer
from aioresponses import aioresponses

from cors_policy import config
from cors_policy.api.app import app_factory
from cors_policy.core.cors import setup_cors
from cors_policy.core.exceptions import error_middleware
from cors_policy.core.options import CorsOptions

ORIGIN = "http://koajs.com"
WHITELIST_URL = "https://example.com/origins.json"


async def hello_handler(request):
    return web.json_response({"foo": "bar"})


@pytest.fixture
def rmock():
    # passthrough for local requests (aiohttp TestServer)
    with aioresponses(passthrough=["http://127.0.0.1"]) as m:
        yield m


@pytest.fixture
def setup():
    """Restore the global configuration after a test overrides it"""
    saved = dict(config.configuration)
    yield config
    config.configuration.clear()
    config.configuration.update(saved)


@pytest_asyncio.fixture
async def cors_client():
    """
    Factory building a test client for an app with the CORS middleware,
    serving `handler` on every path and every method.
    """
    clients = []

    async def make_client(
        handler=hello_handler,
        inner_middlewares=(),
        outer_middlewares=(),
        render_errors=True,
        **options,
    ):
        app = web.Application(
            middlewares=[*([error_middleware] if render_errors else []), *outer_middlewares]
        )
        setup_cors(app, **options)
        app.middlewares.extend(inner_middlewares)
        app.router.add_route("*", "/{tail:.*}", handler)
        client = TestClient(TestServer(app))
        await client.start_server()
        clients.append(client)
        return client

    yield make_client
    for client in clients:
        await client.close()


@pytest_asyncio.fixture
async def fake_client():
    app = await app_factory(CorsOptions())
    async with TestClient(TestServer(app)) as client:
        yield client
