import logging

from aiohttp import web

from cors_policy.core.classifier import is_preflight
from cors_policy.core.exceptions import HeadersError
from cors_policy.core.headers import (
    apply_headers,
    compose_preflight_headers,
    compose_simple_headers,
)
from cors_policy.core.options import CorsOptions
from cors_policy.core.resolvers import CorsDecision, resolve_decision

logger = logging.getLogger(__name__)

# request keys shared with handlers and the response prepare hook
DECISION_KEY = web.RequestKey("cors", CorsDecision)
PENDING_HEADERS_KEY = web.RequestKey("cors_headers", dict)


def cors_middleware(options: CorsOptions | None = None, **kwargs):
    """
    Create a middleware handling CORS headers and the OPTIONS preflight.

    Options are either a CorsOptions instance or keyword arguments accepted by
    CorsOptions.from_mapping (unknown ones are ignored).
    """
    if options is None:
        options = CorsOptions.from_mapping(kwargs)

    @web.middleware
    async def middleware(request, handler):
        # an empty Origin header is handled as a missing one
        if not request.headers.get("Origin"):
            return await handler(request)

        decision = await resolve_decision(options, request)
        request[DECISION_KEY] = decision
        if not decision.enabled:
            logger.debug(f"CORS disabled for {request.method} {request.path}")
            return await handler(request)

        if is_preflight(request.method, request.headers):
            # downstream handlers never run for a preflight
            response = web.Response(status=204)
            apply_headers(
                response.headers, compose_preflight_headers(options, decision, request.headers)
            )
            return response

        cors_headers = compose_simple_headers(options, decision)
        request[PENDING_HEADERS_KEY] = cors_headers
        try:
            response = await handler(request)
        except (web.HTTPException, HeadersError) as e:
            request.pop(PENDING_HEADERS_KEY, None)
            # redirects and other non-error statuses are regular responses
            if options.keep_headers_on_error or _is_success(e):
                apply_headers(e.headers, cors_headers)
            raise
        except Exception:
            # the pending headers are written by on_response_prepare onto the error response
            if options.keep_headers_on_error:
                logger.debug(f"Keeping CORS headers on failed {request.method} {request.path}")
            else:
                request.pop(PENDING_HEADERS_KEY, None)
            raise

        if not response.prepared:
            apply_headers(response.headers, cors_headers, keep_existing=True)
        return response

    return middleware


def _is_success(error: web.HTTPException | HeadersError) -> bool:
    return isinstance(error, web.HTTPException) and error.status < 400


async def on_response_prepare(request, response):
    """
    Apply pending CORS headers to responses prepared outside of the middleware:
    responses streamed by a handler and error responses rendered by the host.
    """
    cors_headers = request.get(PENDING_HEADERS_KEY)
    if cors_headers:
        apply_headers(response.headers, cors_headers, keep_existing=True)


def setup_cors(app: web.Application, options: CorsOptions | None = None, **kwargs):
    """Install the CORS middleware on `app`, with support for streamed responses."""
    middleware = cors_middleware(options, **kwargs)
    app.middlewares.append(middleware)
    app.on_response_prepare.append(on_response_prepare)
    return middleware
