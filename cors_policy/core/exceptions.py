"""
Exception handling for the core module.

Errors are rendered as JSON bodies shaped like {"errors": [{"code", "title", "detail"}]},
where "code" is the Sentry event id when Sentry is configured.
"""

import json
import logging
from typing import Mapping

import sentry_sdk
from aiohttp import web
from multidict import CIMultiDict

from cors_policy import config

logger = logging.getLogger(__name__)


class ApiException(web.HTTPException):
    """Raise an error as an aiohttp exception with a JSON body"""

    def __init__(self, status, error_code, title, detail, headers=None) -> None:
        self.status_code = status
        error_body = {"errors": [{"code": error_code, "title": title, "detail": detail}]}
        super().__init__(
            headers=headers, content_type="application/json", text=json.dumps(error_body)
        )


class HeadersError(Exception):
    """
    An error declaring the response headers it must be rendered with.

    Handlers raise it to set headers (typically Vary) on the error response.
    """

    def __init__(self, message: str = "", headers: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.headers = CIMultiDict(headers or {})


def handle_exception(
    status: int,
    title: str,
    detail: str | dict,
    exc: BaseException | None = None,
    headers: Mapping[str, str] | None = None,
):
    """Report an error to Sentry (when configured) and raise it as an ApiException."""
    event_id = None
    if config.SENTRY_DSN:
        with sentry_sdk.new_scope() as scope:
            scope.set_tags({"status": status, "title": title})
            scope.set_extra("detail", detail)
            event_id = sentry_sdk.capture_exception(exc or Exception(detail))
    raise ApiException(status, event_id, title, detail, headers=headers)


@web.middleware
async def error_middleware(request, handler):
    """
    Render unexpected exceptions as JSON 500 responses.

    aiohttp HTTP exceptions are left untouched. A HeadersError gets its declared headers
    copied onto the rendered response.
    """
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error on {request.method} {request.path}: {e!r}")
        handle_exception(
            500,
            "Internal Server Error",
            "The server encountered an unexpected error",
            exc=e,
            headers=e.headers if isinstance(e, HeadersError) else None,
        )
