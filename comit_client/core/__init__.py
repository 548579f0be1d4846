from .errors import (
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

__all__ = [
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
]
