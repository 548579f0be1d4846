"""Client library and test harness for the COMIT network daemon (cnd) REST API."""

from .config import Settings, settings
from .core.errors import (
    ActionNotAvailableError,
    ActionResolutionError,
    ActorError,
    CndClientError,
    IncompletePayloadError,
    InvalidActionError,
    MissingFieldError,
    PollTimeoutError,
    Problem,
    UnsupportedLedgerActionError,
    UnsupportedMethodError,
)
from .types import FieldHint, FieldKind, HttpMethod, SirenAction, SirenField, SwapPairing, SwapResource
from .providers.base import WalletProvider
from .core.actions import (
    FieldValueResolver,
    HttpRequest,
    StaticFieldResolver,
    WalletFieldResolver,
    action_to_http_request,
    as_resolver,
)
from .providers.cnd import Cnd, problem_from_response
from .core.polling import PollConfig, SwapPoller, poll_until_state
from .core.ledger_actions import LedgerAction, execute_ledger_action
from .core.actor import Actor

__all__ = [
    "Settings",
    "settings",
    # Errors
    "CndClientError",
    "Problem",
    "MissingFieldError",
    "InvalidActionError",
    "UnsupportedMethodError",
    "ActionResolutionError",
    "ActionNotAvailableError",
    "PollTimeoutError",
    "IncompletePayloadError",
    "UnsupportedLedgerActionError",
    "ActorError",
    # Hypermedia
    "HttpMethod",
    "FieldKind",
    "FieldHint",
    "SirenField",
    "SirenAction",
    "SwapResource",
    "SwapPairing",
    # Actions
    "FieldValueResolver",
    "StaticFieldResolver",
    "WalletFieldResolver",
    "as_resolver",
    "HttpRequest",
    "action_to_http_request",
    # Client
    "Cnd",
    "problem_from_response",
    "WalletProvider",
    "PollConfig",
    "SwapPoller",
    "poll_until_state",
    "LedgerAction",
    "execute_ledger_action",
    "Actor",
]
