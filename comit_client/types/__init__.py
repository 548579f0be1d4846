from .siren import FieldHint, FieldKind, HttpMethod, SirenAction, SirenField, SwapResource
from .payloads import (
    Asset,
    BtcDaiOrderPayload,
    HalbitHerc20Payload,
    HalbitParams,
    HbitHerc20Payload,
    HbitParams,
    Herc20HalbitPayload,
    Herc20HbitPayload,
    Herc20Params,
    Ledger,
    OrderSwap,
    Peer,
    Rfc003Payload,
    Role,
    SwapPairing,
    build_btc_dai_order,
    build_halbit_herc20,
    build_hbit_herc20,
    build_herc20_halbit,
    build_herc20_hbit,
    build_rfc003,
)

__all__ = [
    "HttpMethod",
    "FieldKind",
    "FieldHint",
    "SirenField",
    "SirenAction",
    "SwapResource",
    "Ledger",
    "Asset",
    "Peer",
    "Role",
    "SwapPairing",
    "HbitParams",
    "Herc20Params",
    "HalbitParams",
    "HbitHerc20Payload",
    "Herc20HbitPayload",
    "HalbitHerc20Payload",
    "Herc20HalbitPayload",
    "Rfc003Payload",
    "OrderSwap",
    "BtcDaiOrderPayload",
    "build_hbit_herc20",
    "build_herc20_hbit",
    "build_halbit_herc20",
    "build_herc20_halbit",
    "build_rfc003",
    "build_btc_dai_order",
]
