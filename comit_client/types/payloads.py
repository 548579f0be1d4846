"""
Swap creation payloads.

One model per protocol pairing, matching the body cnd expects on the
pairing's creation endpoint. Only presence and shape are checked here; cnd
remains the source of truth for semantic validation (address formats,
expiry ordering, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.errors import IncompletePayloadError


NonEmptyStr = Annotated[str, Field(min_length=1)]


class Role(str, Enum):
    ALICE = "Alice"
    BOB = "Bob"


class SwapPairing(str, Enum):
    """Supported protocol pairings and their creation paths."""

    HBIT_HERC20 = "hbit/herc20"
    HERC20_HBIT = "herc20/hbit"
    HALBIT_HERC20 = "halbit/herc20"
    HERC20_HALBIT = "herc20/halbit"
    RFC003 = "rfc003"

    @property
    def path(self) -> str:
        return f"swaps/{self.value}"


class WirePayload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class Ledger(WirePayload):
    name: NonEmptyStr
    chain_id: Optional[int] = None
    network: Optional[str] = None


class Asset(WirePayload):
    name: NonEmptyStr
    quantity: NonEmptyStr
    token_contract: Optional[str] = None


class Peer(WirePayload):
    peer_id: NonEmptyStr
    address_hint: Optional[str] = None


class HbitParams(WirePayload):
    amount: NonEmptyStr
    network: NonEmptyStr
    final_identity: NonEmptyStr
    absolute_expiry: int = Field(gt=0)


class Herc20Params(WirePayload):
    amount: NonEmptyStr
    token_contract: NonEmptyStr
    identity: NonEmptyStr
    chain_id: int
    absolute_expiry: int = Field(gt=0)


class HalbitParams(WirePayload):
    amount: NonEmptyStr
    network: NonEmptyStr
    identity: NonEmptyStr
    cltv_expiry: int = Field(gt=0)


class HbitHerc20Payload(WirePayload):
    hbit: HbitParams
    herc20: Herc20Params
    role: Role
    peer: Peer


class Herc20HbitPayload(WirePayload):
    herc20: Herc20Params
    hbit: HbitParams
    role: Role
    peer: Peer


class HalbitHerc20Payload(WirePayload):
    halbit: HalbitParams
    herc20: Herc20Params
    role: Role
    peer: Peer


class Herc20HalbitPayload(WirePayload):
    herc20: Herc20Params
    halbit: HalbitParams
    role: Role
    peer: Peer


class Rfc003Payload(WirePayload):
    alpha_ledger: Ledger
    beta_ledger: Ledger
    alpha_asset: Asset
    beta_asset: Asset
    alpha_ledger_refund_identity: Optional[str] = None
    beta_ledger_redeem_identity: Optional[str] = None
    alpha_expiry: Optional[int] = None
    beta_expiry: Optional[int] = None
    peer: Peer

    @model_validator(mode="after")
    def _ethereum_identities(self) -> "Rfc003Payload":
        # cnd derives bitcoin identities itself; ethereum ones must be given.
        missing = []
        if _is_ethereum(self.alpha_ledger) and not self.alpha_ledger_refund_identity:
            missing.append("alpha_ledger_refund_identity")
        if _is_ethereum(self.beta_ledger) and not self.beta_ledger_redeem_identity:
            missing.append("beta_ledger_redeem_identity")
        for side, asset in (("alpha_asset", self.alpha_asset), ("beta_asset", self.beta_asset)):
            if asset.name.lower() == "erc20" and not asset.token_contract:
                missing.append(f"{side}.token_contract")
        if missing:
            raise ValueError(f"missing required fields: {', '.join(missing)}")
        return self

    def to_wire(self) -> Dict[str, Any]:
        data = super().to_wire()
        # Bitcoin-side identities are sent as explicit nulls.
        data.setdefault("alpha_ledger_refund_identity", None)
        data.setdefault("beta_ledger_redeem_identity", None)
        return data


def _is_ethereum(ledger: Ledger) -> bool:
    return ledger.name.lower() == "ethereum"


class OrderSwap(WirePayload):
    role: Role
    bitcoin_address: NonEmptyStr
    ethereum_address: NonEmptyStr


class BtcDaiOrderPayload(WirePayload):
    position: Literal["buy", "sell"]
    quantity: NonEmptyStr
    price: NonEmptyStr
    swap: OrderSwap


P = TypeVar("P", bound=WirePayload)


def _build(model: Type[P], data: Dict[str, Any]) -> P:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors: List[str] = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or model.__name__
            errors.append(f"{location}: {error['msg']}")
        raise IncompletePayloadError(model.__name__, errors) from exc


def build_hbit_herc20(
    hbit: Dict[str, Any] | HbitParams,
    herc20: Dict[str, Any] | Herc20Params,
    role: Role | str,
    peer: Dict[str, Any] | Peer,
) -> HbitHerc20Payload:
    return _build(HbitHerc20Payload, {"hbit": hbit, "herc20": herc20, "role": role, "peer": peer})


def build_herc20_hbit(
    herc20: Dict[str, Any] | Herc20Params,
    hbit: Dict[str, Any] | HbitParams,
    role: Role | str,
    peer: Dict[str, Any] | Peer,
) -> Herc20HbitPayload:
    return _build(Herc20HbitPayload, {"herc20": herc20, "hbit": hbit, "role": role, "peer": peer})


def build_halbit_herc20(
    halbit: Dict[str, Any] | HalbitParams,
    herc20: Dict[str, Any] | Herc20Params,
    role: Role | str,
    peer: Dict[str, Any] | Peer,
) -> HalbitHerc20Payload:
    return _build(HalbitHerc20Payload, {"halbit": halbit, "herc20": herc20, "role": role, "peer": peer})


def build_herc20_halbit(
    herc20: Dict[str, Any] | Herc20Params,
    halbit: Dict[str, Any] | HalbitParams,
    role: Role | str,
    peer: Dict[str, Any] | Peer,
) -> Herc20HalbitPayload:
    return _build(Herc20HalbitPayload, {"herc20": herc20, "halbit": halbit, "role": role, "peer": peer})


def build_rfc003(
    *,
    alpha_ledger: Dict[str, Any] | Ledger,
    beta_ledger: Dict[str, Any] | Ledger,
    alpha_asset: Dict[str, Any] | Asset,
    beta_asset: Dict[str, Any] | Asset,
    peer: Dict[str, Any] | Peer,
    alpha_ledger_refund_identity: Optional[str] = None,
    beta_ledger_redeem_identity: Optional[str] = None,
    alpha_expiry: Optional[int] = None,
    beta_expiry: Optional[int] = None,
) -> Rfc003Payload:
    return _build(
        Rfc003Payload,
        {
            "alpha_ledger": alpha_ledger,
            "beta_ledger": beta_ledger,
            "alpha_asset": alpha_asset,
            "beta_asset": beta_asset,
            "alpha_ledger_refund_identity": alpha_ledger_refund_identity,
            "beta_ledger_redeem_identity": beta_ledger_redeem_identity,
            "alpha_expiry": alpha_expiry,
            "beta_expiry": beta_expiry,
            "peer": peer,
        },
    )


def build_btc_dai_order(
    position: str,
    quantity: str,
    price: str,
    swap: Dict[str, Any] | OrderSwap,
) -> BtcDaiOrderPayload:
    return _build(
        BtcDaiOrderPayload,
        {"position": position, "quantity": quantity, "price": price, "swap": swap},
    )


PAYLOAD_MODELS: Dict[SwapPairing, Type[WirePayload]] = {
    SwapPairing.HBIT_HERC20: HbitHerc20Payload,
    SwapPairing.HERC20_HBIT: Herc20HbitPayload,
    SwapPairing.HALBIT_HERC20: HalbitHerc20Payload,
    SwapPairing.HERC20_HALBIT: Herc20HalbitPayload,
    SwapPairing.RFC003: Rfc003Payload,
}
