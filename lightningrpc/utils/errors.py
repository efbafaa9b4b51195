"""Exception classes raised by the lightningd RPC client."""
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..jsonrpc.models import JSONRPCError


class ErrorKind(str, Enum):
    """Closed set of failure kinds a caller can match on."""

    JSON = "json"
    RPC = "rpc"
    NO_ERROR_OR_RESULT = "no_error_or_result"
    NONCE_MISMATCH = "nonce_mismatch"
    IO = "io"
    CONFIG = "config"


class LightningRPCError(Exception):
    """Base exception for lightningd RPC errors."""

    kind: ErrorKind


class DecodeError(LightningRPCError):
    """Wire payload or result does not have the expected shape.

    The underlying pydantic or json error is kept as ``__cause__``.
    """

    kind = ErrorKind.JSON


class EncodeError(LightningRPCError):
    """A request or response cannot be written as strict JSON (e.g. NaN)."""

    kind = ErrorKind.JSON


class RpcError(LightningRPCError):
    """The daemon answered with an error object."""

    kind = ErrorKind.RPC

    def __init__(self, error: "JSONRPCError"):
        super().__init__(error)
        self.error = error

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def data(self) -> Any:
        return self.error.data

    def __str__(self) -> str:
        return f"RPC error {self.error.code}: {self.error.message}"


class NoErrorOrResult(LightningRPCError):
    """The daemon answered with neither a result nor an error."""

    kind = ErrorKind.NO_ERROR_OR_RESULT

    def __init__(self, message: str = "Response contained neither a result nor an error"):
        super().__init__(message)


class NonceMismatch(LightningRPCError):
    """The reply id does not match the id of the request it answers."""

    kind = ErrorKind.NONCE_MISMATCH

    def __init__(self, expected: Any, received: Any):
        super().__init__(expected, received)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        return f"Response id {self.received!r} does not match request id {self.expected!r}"


class TransportError(LightningRPCError):
    """Socket-level failure talking to the daemon."""

    kind = ErrorKind.IO


class ConfigError(LightningRPCError):
    """Invalid or unreadable client configuration."""

    kind = ErrorKind.CONFIG
