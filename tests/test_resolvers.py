import pytest
from aiohttp.test_utils import make_mocked_request

from cors_policy.core.options import CorsOptions
from cors_policy.core.resolvers import CorsDecision, resolve_decision, resolve_origin
from cors_policy.core.whitelist import whitelist_origin

from .conftest import ORIGIN

pytestmark = pytest.mark.asyncio


def _request(path="/", origin=ORIGIN):
    headers = {"Origin": origin} if origin else {}
    return make_mocked_request("GET", path, headers=headers)


async def test_default_origin_is_request_origin():
    assert await resolve_origin(CorsOptions(), _request()) == ORIGIN


@pytest.mark.parametrize("_origin", ["*", "https://app.example.com"])
async def test_static_origin(_origin):
    assert await resolve_origin(CorsOptions(origin=_origin), _request()) == _origin


@pytest.mark.parametrize("_result", [False, "", None])
async def test_falsy_origin_disables_cors(_result):
    options = CorsOptions(origin=lambda request: _result, credentials=True)
    decision = await resolve_decision(options, _request())
    assert decision == CorsDecision(allow_origin=None, allow_credentials=False)
    assert not decision.enabled


async def test_async_origin():
    async def origin(request):
        return "https://app.example.com" if request.path == "/app" else False

    options = CorsOptions(origin=origin)
    decision = await resolve_decision(options, _request("/app"))
    assert decision.allow_origin == "https://app.example.com"
    assert (await resolve_decision(options, _request("/other"))).allow_origin is None


@pytest.mark.parametrize(
    "_credentials,_expected",
    [
        (True, True),
        (False, False),
        (None, False),
        (lambda request: 1, True),
        (lambda request: 0, False),
    ],
)
async def test_credentials(_credentials, _expected):
    decision = await resolve_decision(CorsOptions(credentials=_credentials), _request())
    assert decision.allow_credentials is _expected


async def test_async_credentials():
    async def credentials(request):
        return request.path != "/forbin"

    options = CorsOptions(credentials=credentials)
    assert (await resolve_decision(options, _request("/"))).allow_credentials is True
    assert (await resolve_decision(options, _request("/forbin"))).allow_credentials is False


async def test_resolver_errors_propagate():
    def origin(request):
        raise LookupError("no whitelist")

    with pytest.raises(LookupError):
        await resolve_decision(CorsOptions(origin=origin), _request())


async def test_whitelist_origin():
    options = CorsOptions(origin=whitelist_origin(["http://koajs.com", "http://localhost:8081"]))
    assert (await resolve_decision(options, _request())).allow_origin == ORIGIN
    decision = await resolve_decision(options, _request(origin="http://evil.com"))
    assert decision.allow_origin is None
