"""
Hypermedia action resolution.

Converts a Siren action plus caller-supplied field values into a concrete
HTTP request.
"""

from .resolver import (
    FieldValueResolver,
    StaticFieldResolver,
    WalletFieldResolver,
    as_resolver,
)
from .converter import HttpRequest, action_to_http_request, resolve_url

__all__ = [
    "FieldValueResolver",
    "StaticFieldResolver",
    "WalletFieldResolver",
    "as_resolver",
    "HttpRequest",
    "action_to_http_request",
    "resolve_url",
]
