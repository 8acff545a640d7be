from dataclasses import dataclass

from aiohttp.web_request import Request

from cors_policy.core.options import CorsOptions


@dataclass(frozen=True)
class CorsDecision:
    allow_origin: str | None
    allow_credentials: bool = False

    @property
    def enabled(self) -> bool:
        return bool(self.allow_origin)


async def resolve_origin(options: CorsOptions, request: Request) -> str | None:
    # False, "" and None all disable CORS for the request
    allow_origin = await options.origin.resolve(request)
    return str(allow_origin) if allow_origin else None


async def resolve_credentials(options: CorsOptions, request: Request) -> bool:
    return bool(await options.credentials.resolve(request))


async def resolve_decision(options: CorsOptions, request: Request) -> CorsDecision:
    """
    Run the origin and credentials resolvers once for this request.

    Credentials are only resolved when an origin is granted.
    Errors raised by user-supplied resolvers are propagated.
    """
    allow_origin = await resolve_origin(options, request)
    if not allow_origin:
        return CorsDecision(allow_origin=None)
    return CorsDecision(
        allow_origin=allow_origin,
        allow_credentials=await resolve_credentials(options, request),
    )
