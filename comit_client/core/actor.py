"""
Per-participant swap driver.

An ``Actor`` bundles one party's cnd client, wallets and resolver. Build one
per party per test or script and pass it around explicitly; two actors share
nothing and can be driven concurrently with ``asyncio.gather``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ..logging_config import bind_actor
from ..providers.base import WalletProvider
from ..providers.cnd import Cnd, action_from_document
from ..types.payloads import SwapPairing, WirePayload
from ..types.siren import SwapResource
from .actions.resolver import ResolverLike, WalletFieldResolver
from .errors import ActorError
from .ledger_actions import LedgerAction, execute_ledger_action
from .polling.poller import PollConfig, SwapPoller

logger = logging.getLogger(__name__)


class Actor:
    def __init__(
        self,
        name: str,
        cnd: Cnd,
        wallets: Optional[Mapping[str, WalletProvider]] = None,
        resolver: ResolverLike = None,
        poll_config: Optional[PollConfig] = None,
        poller: Optional[SwapPoller] = None,
    ) -> None:
        self.name = name
        self.cnd = cnd
        self.wallets: Dict[str, WalletProvider] = dict(wallets or {})
        self.resolver: ResolverLike = (
            resolver if resolver is not None else WalletFieldResolver(self.wallets)
        )
        self.poller = poller or SwapPoller(cnd, poll_config)
        self.swap_url: Optional[str] = None

    def __repr__(self) -> str:
        return f"Actor({self.name!r}, {self.cnd!r})"

    def _require_swap(self) -> str:
        if not self.swap_url:
            raise ActorError(self.name, "no swap; call create_swap or set swap_url first")
        return self.swap_url

    async def create_swap(self, pairing: SwapPairing, payload: WirePayload) -> str:
        bind_actor(self.name)
        self.swap_url = await self.cnd.create_swap(pairing, payload)
        return self.swap_url

    async def fetch_swap(self) -> SwapResource:
        return await self.cnd.fetch_swap(self._require_swap())

    async def poll_until(self, state: str) -> SwapResource:
        bind_actor(self.name)
        return await self.poller.until(self._require_swap(), state)

    async def execute(self, action_name: str) -> Union[str, httpx.Response]:
        """
        Execute ``action_name`` on the current swap.

        When cnd answers with a ledger action (fund, deploy, redeem, refund),
        it is carried out by the wallet of that ledger and the transaction
        reference is returned; otherwise the daemon's response is returned.
        rfc003 links serve the ledger action itself, which goes straight to
        the wallet without a second request.
        """
        bind_actor(self.name)
        swap = await self.fetch_swap()
        action = swap.action(action_name)
        if action is None:
            document = await self.cnd.follow_link(swap, action_name)
            if LedgerAction.is_ledger_action(document):
                logger.info("%s received %s as a ledger action", self.name, action_name)
                return await self._carry_out(LedgerAction.from_body(document))
            action = action_from_document(document, action_name, swap.link(action_name))

        response = await self.cnd.execute_action(action, self.resolver)
        logger.info("%s executed %s -> %s", self.name, action_name, response.status_code)

        body = _json_or_none(response)
        if not LedgerAction.is_ledger_action(body):
            return response
        return await self._carry_out(LedgerAction.from_body(body), action.ledger)

    async def dial(self, other: "Actor") -> None:
        await self.cnd.dial(other.cnd)

    async def _carry_out(self, ledger_action: LedgerAction, ledger: Optional[str] = None) -> str:
        wallet = self._wallet_for(ledger_action.ledger or ledger)
        return await execute_ledger_action(wallet, ledger_action)

    def _wallet_for(self, ledger: Optional[str]) -> WalletProvider:
        if ledger and ledger in self.wallets:
            return self.wallets[ledger]
        if len(self.wallets) == 1:
            return next(iter(self.wallets.values()))
        raise ActorError(self.name, f"no wallet for ledger {ledger!r}")


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
