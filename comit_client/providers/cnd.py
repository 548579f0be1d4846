"""
Async client for the COMIT network daemon (cnd) REST API.

Every non-2xx response is turned into a ``Problem`` so callers can match on
``status``/``title``; connection-level failures surface as the underlying
``httpx.RequestError``. Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..core.actions.converter import action_to_http_request
from ..core.actions.resolver import ResolverLike
from ..core.errors import ActionNotAvailableError, IncompletePayloadError, MissingFieldError, Problem
from ..types.payloads import (
    PAYLOAD_MODELS,
    BtcDaiOrderPayload,
    HalbitHerc20Payload,
    HbitHerc20Payload,
    Herc20HalbitPayload,
    Herc20HbitPayload,
    Rfc003Payload,
    SwapPairing,
    WirePayload,
)
from ..types.siren import SirenAction, SwapResource

logger = logging.getLogger(__name__)


def problem_from_response(response: httpx.Response) -> Problem:
    """Build a ``Problem`` from an error response, RFC 7807 body or not."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("title"), str):
        status = body.get("status")
        return Problem(
            status=status if isinstance(status, int) else response.status_code,
            title=body["title"],
            detail=body.get("detail"),
            type=body.get("type"),
        )

    return Problem(
        status=response.status_code,
        title=response.reason_phrase or "HTTP error",
        detail=response.text or None,
    )


def action_from_document(body: Any, name: str, source: Optional[str] = None) -> SirenAction:
    """Read an action descriptor served behind a link."""
    if not isinstance(body, dict) or "href" not in body:
        raise MissingFieldError("href", source)
    return SirenAction.model_validate({"name": name, **body})


class Cnd:
    """
    Facade over one cnd node.

    Holds only its base URL and a lazily created HTTP client, so several
    instances (one per actor) can be driven concurrently.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.cnd_url).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_seconds
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def __repr__(self) -> str:
        return f"Cnd({self.base_url!r})"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
                headers={"Accept": "application/vnd.siren+json, application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "Cnd":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        logger.debug("%s %s", method, url)
        response = await client.request(method, url, **kwargs)
        if response.is_success:
            return response

        problem = problem_from_response(response)
        logger.warning("cnd %s %s failed: %s", method, url, problem.message)
        raise problem

    # =========================================================================
    # Swap creation
    # =========================================================================

    async def _post_for_location(self, path: str, body: Dict[str, Any]) -> str:
        response = await self._request("POST", path, json=body)
        location = response.headers.get("location")
        if not location:
            raise MissingFieldError("location", path)
        logger.info("Created %s at %s", path, location)
        return location

    async def create_swap(self, pairing: SwapPairing, payload: WirePayload) -> str:
        """
        POST a swap payload to the pairing's creation endpoint.

        Returns:
            The swap's URL, taken from the ``Location`` header of the 201 response

        Raises:
            IncompletePayloadError: ``payload`` is not the model for ``pairing``;
                nothing is sent
        """
        pairing = SwapPairing(pairing)
        expected = PAYLOAD_MODELS[pairing]
        if not isinstance(payload, expected):
            raise IncompletePayloadError(
                type(payload).__name__,
                [f"{pairing.path} expects a {expected.__name__}"],
            )
        return await self._post_for_location(pairing.path, payload.to_wire())

    async def create_hbit_herc20(self, payload: HbitHerc20Payload) -> str:
        return await self.create_swap(SwapPairing.HBIT_HERC20, payload)

    async def create_herc20_hbit(self, payload: Herc20HbitPayload) -> str:
        return await self.create_swap(SwapPairing.HERC20_HBIT, payload)

    async def create_halbit_herc20(self, payload: HalbitHerc20Payload) -> str:
        return await self.create_swap(SwapPairing.HALBIT_HERC20, payload)

    async def create_herc20_halbit(self, payload: Herc20HalbitPayload) -> str:
        return await self.create_swap(SwapPairing.HERC20_HALBIT, payload)

    async def create_rfc003(self, payload: Rfc003Payload) -> str:
        return await self.create_swap(SwapPairing.RFC003, payload)

    async def create_btc_dai_order(self, payload: BtcDaiOrderPayload) -> str:
        return await self._post_for_location("/orders/BTC-DAI", payload.to_wire())

    # =========================================================================
    # Resources
    # =========================================================================

    async def fetch(self, path: str) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        response = await self._request("GET", path)
        return response.json()

    async def fetch_swap(self, url: str) -> SwapResource:
        body = await self.fetch(url)
        if not isinstance(body, dict):
            raise MissingFieldError("state", url)
        return SwapResource.from_body(body)

    async def list_swaps(self) -> List[SwapResource]:
        body = await self.fetch("/swaps")
        if not isinstance(body, dict):
            return []

        items = body.get("entities")
        if items is None:
            items = (body.get("_embedded") or {}).get("swaps") or []
        return [SwapResource.from_body(item) for item in items if isinstance(item, dict)]

    async def fetch_action(self, swap: SwapResource, name: str) -> SirenAction:
        """
        Find action ``name`` on ``swap``.

        Embedded Siren actions are used directly; a bare link with that rel is
        followed with a second GET to obtain the full descriptor.
        """
        action = swap.action(name)
        if action is not None:
            return action

        body = await self.follow_link(swap, name)
        return action_from_document(body, name, swap.link(name))

    async def follow_link(self, swap: SwapResource, name: str) -> Any:
        """GET the document behind ``swap``'s ``name`` link."""
        href = swap.link(name)
        if href is None:
            raise ActionNotAvailableError(name, swap.available_actions())
        return await self.fetch(href)

    async def execute_action(
        self,
        action: SirenAction,
        resolver: ResolverLike = None,
    ) -> httpx.Response:
        """
        Proceed with an action on the cnd REST API.

        Args:
            action: The action to perform
            resolver: Supplies values for fields cnd did not pre-fill (usually
                backed by a blockchain wallet)

        Returns:
            The raw response; retrying is the caller's business
        """
        request = await action_to_http_request(action, resolver, base_url=self.base_url)
        return await self._request(**request.httpx_kwargs())

    # =========================================================================
    # Peer-to-peer
    # =========================================================================

    async def _get_info(self) -> Dict[str, Any]:
        body = await self.fetch("/")
        return body if isinstance(body, dict) else {}

    async def get_peer_id(self) -> str:
        info = await self._get_info()
        if not info.get("id"):
            raise MissingFieldError("id", "/")
        return info["id"]

    async def get_peer_listen_addresses(self) -> List[str]:
        info = await self._get_info()
        addresses = info.get("listen_addresses")
        if not isinstance(addresses, list):
            raise MissingFieldError("listen_addresses", "/")
        return [str(address) for address in addresses]

    async def dial(self, other: "Cnd") -> None:
        addresses = await other.get_peer_listen_addresses()
        await self._request("POST", "dial", json={"addresses": addresses})
        logger.info("Dialed %s at %s", other.base_url, addresses)
