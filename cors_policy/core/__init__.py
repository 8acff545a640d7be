"""
Core module for cors_policy.

This module contains the CORS decision engine: options, origin and credentials
resolution, request classification, header composition and the aiohttp middleware.
"""

from .classifier import is_preflight
from .cors import DECISION_KEY, cors_middleware, setup_cors
from .exceptions import ApiException, HeadersError, error_middleware, handle_exception
from .options import CorsOptions, Dynamic, Static
from .resolvers import CorsDecision, resolve_decision
from .vary import merge_vary
from .whitelist import remote_whitelist_origin, whitelist_origin

__all__ = [
    "DECISION_KEY",
    "ApiException",
    "CorsDecision",
    "CorsOptions",
    "Dynamic",
    "HeadersError",
    "Static",
    "cors_middleware",
    "error_middleware",
    "handle_exception",
    "is_preflight",
    "merge_vary",
    "remote_whitelist_origin",
    "resolve_decision",
    "setup_cors",
    "whitelist_origin",
]
