"""
Error taxonomy for the cnd client.

Transport failures are left as ``httpx.RequestError`` and never wrapped.
Everything else raised by this package derives from ``CndClientError``:

- Problem: a well-formed RFC 7807 error body returned by cnd
- MissingFieldError: a success response that lacks an expected field
- ActionResolutionError: a field of an action could not be given a value
- PollTimeoutError: a target state was not observed within the budget
"""

from typing import Any, Dict, List, Optional, Sequence


class CndClientError(Exception):
    """Base class for every error raised by the client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Problem(CndClientError):
    """
    A problem response (RFC 7807) from cnd.

    Exposes ``status``, ``title`` and ``detail`` so callers can match on them
    instead of parsing strings.
    """

    def __init__(
        self,
        status: int,
        title: str,
        detail: Optional[str] = None,
        type: Optional[str] = None,
    ):
        message = f"{status} {title}" if not detail else f"{status} {title}: {detail}"
        super().__init__(message)
        self.status = status
        self.title = title
        self.detail = detail
        self.type = type

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status, "title": self.title}
        if self.detail is not None:
            data["detail"] = self.detail
        if self.type is not None:
            data["type"] = self.type
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Problem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = CndClientError.__hash__

    def __repr__(self) -> str:
        return f"Problem({self.to_dict()!r})"


class MissingFieldError(CndClientError):
    """A success response whose body lacks a field the client depends on."""

    def __init__(self, field: str, resource: Optional[str] = None):
        where = f" in response from {resource}" if resource else ""
        super().__init__(f"{field} field not present{where}")
        self.field = field
        self.resource = resource


class InvalidActionError(CndClientError):
    """The action descriptor itself cannot be turned into a request."""

    def __init__(self, action: str, reason: str):
        super().__init__(f"Invalid action '{action}': {reason}")
        self.action = action
        self.reason = reason


class UnsupportedMethodError(InvalidActionError):
    def __init__(self, action: str, method: str):
        super().__init__(action, f"unsupported HTTP method {method!r}")
        self.method = method


class ActionResolutionError(CndClientError):
    """No value could be obtained for a field of an action."""

    def __init__(self, action: str, field: str, reason: str = "resolver returned no value"):
        super().__init__(f"Failed to resolve field '{field}' of action '{action}': {reason}")
        self.action = action
        self.field = field
        self.reason = reason


class ActionNotAvailableError(CndClientError):
    """The swap does not currently expose the requested action."""

    def __init__(self, name: str, available: Sequence[str] = ()):
        listed = ", ".join(sorted(available)) or "none"
        super().__init__(f"Action '{name}' is not available (available: {listed})")
        self.name = name
        self.available: List[str] = list(available)


class PollTimeoutError(CndClientError):
    """A swap did not reach the target state within the polling budget."""

    def __init__(
        self,
        url: str,
        target: str,
        last_state: Optional[str],
        elapsed_s: float,
    ):
        super().__init__(
            f"Swap {url} did not reach state {target!r} within {elapsed_s:.2f}s "
            f"(last observed state: {last_state!r})"
        )
        self.url = url
        self.target = target
        self.last_state = last_state
        self.elapsed_s = elapsed_s


class IncompletePayloadError(CndClientError):
    """A swap payload is structurally incomplete and was not submitted."""

    def __init__(self, payload: str, errors: Sequence[str]):
        super().__init__(f"Incomplete {payload} payload: {'; '.join(errors)}")
        self.payload = payload
        self.errors: List[str] = list(errors)


class UnsupportedLedgerActionError(CndClientError):
    def __init__(self, action_type: str):
        super().__init__(f"Unsupported ledger action type: {action_type!r}")
        self.action_type = action_type


class ActorError(CndClientError):
    """An actor was asked for something it is not set up to do."""

    def __init__(self, actor: str, message: str):
        super().__init__(f"{actor}: {message}")
        self.actor = actor
