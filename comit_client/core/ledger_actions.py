"""Ledger actions cnd hands back for the wallet to carry out."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..providers.base import WalletProvider
from .errors import MissingFieldError, UnsupportedLedgerActionError

logger = logging.getLogger(__name__)


class LedgerActionType(str, Enum):
    BITCOIN_SEND_AMOUNT_TO_ADDRESS = "bitcoin-send-amount-to-address"
    ETHEREUM_DEPLOY_CONTRACT = "ethereum-deploy-contract"


class LedgerAction(BaseModel):
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ledger(self) -> Optional[str]:
        prefix = self.type.split("-", 1)[0]
        return prefix or None

    @classmethod
    def is_ledger_action(cls, body: Any) -> bool:
        if not isinstance(body, dict):
            return False
        if isinstance(body.get("type"), str) and isinstance(body.get("payload"), dict):
            return True
        return _legacy_type(body) is not None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "LedgerAction":
        if isinstance(body.get("type"), str) and isinstance(body.get("payload"), dict):
            return cls.model_validate(body)

        # rfc003 fund links return the instruction directly, without a type tag
        legacy = _legacy_type(body)
        if legacy is LedgerActionType.BITCOIN_SEND_AMOUNT_TO_ADDRESS:
            return cls(type=legacy.value, payload={"to": body["address"], "amount": body["value"]})
        if legacy is LedgerActionType.ETHEREUM_DEPLOY_CONTRACT:
            return cls(
                type=legacy.value,
                payload={"data": body["data"], "amount": body["value"], "gas_limit": body.get("gas_limit")},
            )
        raise MissingFieldError("type")


def _legacy_type(body: Dict[str, Any]) -> Optional[LedgerActionType]:
    if {"data", "value"} <= body.keys():
        return LedgerActionType.ETHEREUM_DEPLOY_CONTRACT
    if {"address", "value"} <= body.keys():
        return LedgerActionType.BITCOIN_SEND_AMOUNT_TO_ADDRESS
    return None


def _required(payload: Dict[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None:
        raise MissingFieldError(key, "ledger action payload")
    return value


async def execute_ledger_action(wallet: WalletProvider, action: LedgerAction) -> str:
    """Carry out ``action`` with ``wallet`` and return the transaction reference."""
    try:
        action_type = LedgerActionType(action.type)
    except ValueError:
        raise UnsupportedLedgerActionError(action.type) from None

    payload = action.payload
    if action_type is LedgerActionType.BITCOIN_SEND_AMOUNT_TO_ADDRESS:
        to = _required(payload, "to")
        amount = int(_required(payload, "amount"))
        logger.info("Sending %s to %s via %s", amount, to, wallet.name)
        return await wallet.send_to_address(to, amount)

    data = _required(payload, "data")
    amount = int(_required(payload, "amount"))
    gas_limit = payload.get("gas_limit")
    logger.info("Deploying contract with value %s via %s", amount, wallet.name)
    return await wallet.deploy_contract(data, amount, int(gas_limit, 0) if isinstance(gas_limit, str) else gas_limit)
