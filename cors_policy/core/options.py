"""
CORS policy options.

Options are built once when the middleware is created and never mutated afterwards.
The origin and credentials settings are normalised into resolution strategies:
a `Static` value or a `Dynamic` function called with the current request.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Mapping

from aiohttp.web_request import Request

from .whitelist import remote_whitelist_origin, whitelist_origin

DEFAULT_ALLOW_METHODS = ("GET", "HEAD", "PUT", "POST", "DELETE", "PATCH")

OPTION_ALIASES = {
    "origin": "origin",
    "allow_methods": "allow_methods",
    "allowMethods": "allow_methods",
    "allow_headers": "allow_headers",
    "allowHeaders": "allow_headers",
    "expose_headers": "expose_headers",
    "exposeHeaders": "expose_headers",
    "credentials": "credentials",
    "max_age": "max_age",
    "maxAge": "max_age",
    "keep_headers_on_error": "keep_headers_on_error",
    "keepHeadersOnError": "keep_headers_on_error",
    "secure_context": "secure_context",
    "secureContext": "secure_context",
    "private_network_access": "private_network_access",
    "privateNetworkAccess": "private_network_access",
}


@dataclass(frozen=True)
class Static:
    value: Any

    async def resolve(self, request: Request) -> Any:
        return self.value


@dataclass(frozen=True)
class Dynamic:
    fn: Callable[[Request], Any | Awaitable[Any]]

    async def resolve(self, request: Request) -> Any:
        result = self.fn(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def echo_request_origin(request: Request) -> str | None:
    return request.headers.get("Origin")


def as_strategy(value) -> Static | Dynamic:
    if isinstance(value, (Static, Dynamic)):
        return value
    if callable(value):
        return Dynamic(value)
    return Static(value)


def join_header_list(value: str | Iterable[str] | None) -> str | None:
    """Normalise a header list given as a string or a sequence into its comma-joined form."""
    if not value:
        return None
    if isinstance(value, str):
        return value
    return ",".join(value)


@dataclass(frozen=True)
class CorsOptions:
    origin: Static | Dynamic = field(default_factory=lambda: Dynamic(echo_request_origin))
    allow_methods: str | None = ",".join(DEFAULT_ALLOW_METHODS)
    allow_headers: str | None = None
    expose_headers: str | None = None
    credentials: Static | Dynamic = field(default_factory=lambda: Static(False))
    max_age: str | None = None
    keep_headers_on_error: bool = True
    secure_context: bool = False
    private_network_access: bool = False

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        origin = self.origin
        if origin is None:
            origin = Dynamic(echo_request_origin)
        object.__setattr__(self, "origin", as_strategy(origin))
        object.__setattr__(self, "credentials", as_strategy(self.credentials))
        object.__setattr__(self, "allow_methods", join_header_list(self.allow_methods))
        object.__setattr__(self, "allow_headers", join_header_list(self.allow_headers))
        object.__setattr__(self, "expose_headers", join_header_list(self.expose_headers))
        # numeric strings are accepted as-is, no range validation
        object.__setattr__(self, "max_age", str(self.max_age) if self.max_age else None)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CorsOptions":
        """Build options from snake_case or camelCase keys, unknown keys are ignored."""
        kwargs = {
            OPTION_ALIASES[key]: value for key, value in mapping.items() if key in OPTION_ALIASES
        }
        return cls(**kwargs)

    @classmethod
    def from_config(cls, config) -> "CorsOptions":
        """Build options from the CORS_* keys of a Configurator."""
        if config.CORS_ORIGIN_WHITELIST_URL:
            origin = remote_whitelist_origin(config.CORS_ORIGIN_WHITELIST_URL)
        elif config.CORS_ORIGIN_WHITELIST:
            origin = whitelist_origin(config.CORS_ORIGIN_WHITELIST)
        else:
            origin = config.CORS_ORIGIN or None
        return cls(
            origin=origin,
            allow_methods=config.CORS_ALLOW_METHODS or None,
            allow_headers=config.CORS_ALLOW_HEADERS or None,
            expose_headers=config.CORS_EXPOSE_HEADERS or None,
            credentials=bool(config.CORS_CREDENTIALS),
            max_age=config.CORS_MAX_AGE or None,
            keep_headers_on_error=config.CORS_KEEP_HEADERS_ON_ERROR is not False,
            secure_context=bool(config.CORS_SECURE_CONTEXT),
            private_network_access=bool(config.CORS_PRIVATE_NETWORK_ACCESS),
        )
