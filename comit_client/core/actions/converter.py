"""
Turn a Siren action into a concrete HTTP request.

Pre-filled field values are used verbatim; every other field is asked of
the resolver exactly once. The method decides where values go: query
parameters for GET/DELETE, a JSON or form body for POST/PUT/PATCH.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..errors import ActionResolutionError, InvalidActionError, UnsupportedMethodError
from ...types.siren import HttpMethod, SirenAction
from .resolver import ResolverLike, as_resolver

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class HttpRequest:
    """A fully resolved request, independent of any HTTP client."""

    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None
    content_type: Optional[str] = None

    def httpx_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "method": self.method.value,
            "url": self.url,
            "headers": dict(self.headers),
        }
        if self.params:
            kwargs["params"] = self.params
        if self.body is not None:
            if self.content_type == FORM_CONTENT_TYPE:
                kwargs["data"] = self.body
            else:
                kwargs["json"] = self.body
        return kwargs


def resolve_url(href: str, base_url: Optional[str], action_name: str = "") -> str:
    """
    Resolve ``href`` against ``base_url``.

    Absolute hrefs are kept as-is. Relative ones are appended to the base
    path the way ``httpx.AsyncClient(base_url=...)`` merges request URLs, so
    a node mounted under a path prefix (``http://host/api``) keeps it.
    """
    try:
        url = httpx.URL(href)
        if base_url and url.is_relative_url:
            base = httpx.URL(base_url)
            url = base.copy_with(raw_path=base.raw_path.rstrip(b"/") + b"/" + url.raw_path.lstrip(b"/"))
    except httpx.InvalidURL as exc:
        raise InvalidActionError(action_name, f"invalid href {href!r}: {exc}") from exc

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidActionError(action_name, f"href {href!r} does not resolve to an absolute http(s) URL")
    return str(url)


def parse_method(action: SirenAction) -> HttpMethod:
    try:
        return HttpMethod((action.method or "GET").upper())
    except ValueError:
        raise UnsupportedMethodError(action.name, action.method) from None


async def resolve_fields(action: SirenAction, resolver: ResolverLike = None) -> Dict[str, Any]:
    resolver_ = as_resolver(resolver)
    values: Dict[str, Any] = {}

    for siren_field in action.fields:
        if siren_field.is_prefilled:
            values[siren_field.name] = siren_field.value
            continue

        try:
            value = await resolver_.resolve(siren_field.name, siren_field.hint)
        except Exception as exc:
            raise ActionResolutionError(action.name, siren_field.name, str(exc) or type(exc).__name__) from exc

        if value is None:
            raise ActionResolutionError(action.name, siren_field.name)
        values[siren_field.name] = value

    return values


async def action_to_http_request(
    action: SirenAction,
    resolver: ResolverLike = None,
    base_url: Optional[str] = None,
) -> HttpRequest:
    method = parse_method(action)
    url = resolve_url(action.href, base_url, action.name)
    values = await resolve_fields(action, resolver)

    request = HttpRequest(method=method, url=url)
    if method.has_body:
        content_type = FORM_CONTENT_TYPE if action.type == FORM_CONTENT_TYPE else JSON_CONTENT_TYPE
        request.body = values
        request.content_type = content_type
        request.headers["Content-Type"] = content_type
    elif values:
        request.params = values

    logger.debug(
        "Resolved action %s -> %s %s (%d fields)",
        action.name,
        method.value,
        url,
        len(action.fields),
    )
    return request
