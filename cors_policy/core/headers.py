"""
Composition of the CORS response headers.

The compose functions return the headers to set, in order, without Vary:
Vary is merged into the target headers by `apply_headers`, never overwritten.
"""

from multidict import CIMultiDict, CIMultiDictProxy

from cors_policy.core.options import CorsOptions
from cors_policy.core.resolvers import CorsDecision
from cors_policy.core.vary import merge_vary

SECURE_CONTEXT_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Embedder-Policy": "require-corp",
}


def _access_headers(options: CorsOptions, decision: CorsDecision) -> dict[str, str]:
    headers = {"Access-Control-Allow-Origin": decision.allow_origin}
    if options.secure_context:
        headers.update(SECURE_CONTEXT_HEADERS)
    if decision.allow_credentials:
        headers["Access-Control-Allow-Credentials"] = "true"
    return headers


def compose_simple_headers(options: CorsOptions, decision: CorsDecision) -> dict[str, str]:
    headers = _access_headers(options, decision)
    if options.expose_headers:
        headers["Access-Control-Expose-Headers"] = options.expose_headers
    return headers


def compose_preflight_headers(
    options: CorsOptions, decision: CorsDecision, request_headers: CIMultiDictProxy
) -> dict[str, str]:
    headers = _access_headers(options, decision)
    if options.allow_methods:
        headers["Access-Control-Allow-Methods"] = options.allow_methods

    allow_headers = options.allow_headers or request_headers.get("Access-Control-Request-Headers")
    if allow_headers:
        headers["Access-Control-Allow-Headers"] = allow_headers

    if options.max_age:
        headers["Access-Control-Max-Age"] = options.max_age

    private_network = "Access-Control-Request-Private-Network" in request_headers
    if options.private_network_access and private_network:
        headers["Access-Control-Allow-Private-Network"] = "true"
    return headers


def apply_headers(
    target: CIMultiDict,
    cors_headers: dict[str, str],
    keep_existing: bool = False,
) -> None:
    """
    Write `cors_headers` into `target` and merge Origin into its Vary header.

    With `keep_existing`, headers already present in `target` are left as they are.
    """
    for name, value in cors_headers.items():
        if keep_existing and name in target:
            continue
        target[name] = value
    target["Vary"] = merge_vary(target.get("Vary"), "Origin")
