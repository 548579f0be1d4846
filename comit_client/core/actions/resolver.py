"""
Field value resolvers.

A resolver supplies values for action fields that cnd did not pre-fill,
typically the caller's own identities (refund/redeem addresses). Resolvers
are passed explicitly to the converter so tests can substitute a
deterministic stub for the wallet-backed one.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ...providers.base import WalletProvider
from ...types.siren import FieldHint, FieldKind

logger = logging.getLogger(__name__)


class FieldValueResolver(ABC):
    """Produces a value for an action field; ``None`` means "no value"."""

    @abstractmethod
    async def resolve(self, name: str, hint: FieldHint) -> Optional[Any]:
        pass


ResolverFn = Callable[[str, FieldHint], Any]
ResolverLike = Union[FieldValueResolver, ResolverFn, None]


class StaticFieldResolver(FieldValueResolver):
    """Resolves from fixed mappings, by field name first and then by kind."""

    def __init__(
        self,
        by_name: Optional[Mapping[str, Any]] = None,
        by_kind: Optional[Mapping[FieldKind, Any]] = None,
    ) -> None:
        self.by_name = dict(by_name or {})
        self.by_kind = dict(by_kind or {})
        self.calls: List[Tuple[str, FieldHint]] = []

    async def resolve(self, name: str, hint: FieldHint) -> Optional[Any]:
        self.calls.append((name, hint))
        if name in self.by_name:
            return self.by_name[name]
        return self.by_kind.get(hint.kind)


class WalletFieldResolver(FieldValueResolver):
    """
    Resolves address fields from the wallet of the field's ledger.

    ``wallets`` is keyed by ledger name ("bitcoin", "ethereum", ...). Fields
    without a ledger tag use ``default_wallet``, or the only wallet when
    exactly one is configured. Non-address fields are only resolved from
    ``defaults`` (by field name); the wallet has nothing to say about them.
    """

    def __init__(
        self,
        wallets: Optional[Mapping[str, WalletProvider]] = None,
        *,
        default_wallet: Optional[WalletProvider] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.wallets: Dict[str, WalletProvider] = dict(wallets or {})
        self.default_wallet = default_wallet
        self.defaults = dict(defaults or {})

    def wallet_for(self, ledger: Optional[str]) -> Optional[WalletProvider]:
        if ledger and ledger in self.wallets:
            return self.wallets[ledger]
        if self.default_wallet is not None:
            return self.default_wallet
        if len(self.wallets) == 1:
            return next(iter(self.wallets.values()))
        return None

    async def resolve(self, name: str, hint: FieldHint) -> Optional[Any]:
        if name in self.defaults:
            return self.defaults[name]
        if hint.kind is not FieldKind.ADDRESS:
            return None

        wallet = self.wallet_for(hint.ledger)
        if wallet is None:
            logger.debug("No wallet configured for field %s (ledger=%s)", name, hint.ledger)
            return None
        return await wallet.get_address()


class _CallableResolver(FieldValueResolver):
    def __init__(self, fn: ResolverFn) -> None:
        self.fn = fn

    async def resolve(self, name: str, hint: FieldHint) -> Optional[Any]:
        value = self.fn(name, hint)
        if inspect.isawaitable(value):
            value = await value
        return value


class _NullResolver(FieldValueResolver):
    async def resolve(self, name: str, hint: FieldHint) -> Optional[Any]:
        return None


def as_resolver(resolver: ResolverLike) -> FieldValueResolver:
    """Adapt a resolver object, a plain (sync or async) callable, or None."""
    if resolver is None:
        return _NullResolver()
    if isinstance(resolver, FieldValueResolver):
        return resolver
    if callable(resolver):
        return _CallableResolver(resolver)
    raise TypeError(f"Not a field value resolver: {resolver!r}")
