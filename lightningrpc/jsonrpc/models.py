"""JSON-RPC 2.0 request/response models."""
import functools
import json
from typing import Any, Dict, Optional, Union, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..utils.errors import DecodeError, EncodeError, NoErrorOrResult, RpcError

JSONRPC_VERSION = "2.0"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_json(data: Union[bytes, str]) -> Any:
    """Parse strict JSON, raising DecodeError for anything the daemon could send wrong."""
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Invalid JSON: {e}") from e


def _dump_json(wire: Dict[str, Any]) -> bytes:
    try:
        return json.dumps(wire, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodeError(f"Cannot encode as JSON: {e}") from e


@functools.lru_cache(maxsize=256)
def _cached_adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def type_adapter(type_: Any) -> TypeAdapter:
    """TypeAdapter for ``type_``, reused across calls when the type is hashable."""
    try:
        hash(type_)
    except TypeError:
        return TypeAdapter(type_)
    return _cached_adapter(type_)


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(min_length=1, strict=True)
    params: Any = None
    id: Any = None
    jsonrpc: Optional[Literal["2.0"]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Wire object for this request; ``jsonrpc`` is left out when unset."""
        wire = {"method": self.method, "params": self.params, "id": self.id}
        if self.jsonrpc is not None:
            wire["jsonrpc"] = self.jsonrpc
        return wire

    def to_json(self) -> bytes:
        return _dump_json(self.to_wire())

    @classmethod
    def from_wire(cls, value: Any) -> "JSONRPCRequest":
        """Decode a request from an already-parsed JSON value.

        Raises:
            DecodeError: If the value is not an object or ``method`` is
                missing, not a string, or empty.
        """
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Malformed request: {e}") from e

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "JSONRPCRequest":
        return cls.from_wire(load_json(data))


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error model."""

    model_config = ConfigDict(frozen=True)

    code: int = Field(strict=True)
    message: str = Field(strict=True)
    data: Any = None

    def to_wire(self) -> Dict[str, Any]:
        wire = {"code": self.code, "message": self.message}
        if self.data is not None:
            wire["data"] = self.data
        return wire


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response model.

    ``result`` and ``error`` are kept exactly as the daemon sent them. A
    well-formed reply carries at most one of them; a reply with neither is
    a valid "no result" state that callers can tell apart from an error
    through ``is_none()`` and ``NoErrorOrResult``.
    """

    model_config = ConfigDict(frozen=True)

    result: Any = None
    error: Optional[JSONRPCError] = None
    id: Any = None
    jsonrpc: Optional[Literal["2.0"]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Wire object for this response; unset optional fields are left out."""
        wire: Dict[str, Any] = {}
        if self.result is not None:
            wire["result"] = self.result
        if self.error is not None:
            wire["error"] = self.error.to_wire()
        wire["id"] = self.id
        if self.jsonrpc is not None:
            wire["jsonrpc"] = self.jsonrpc
        return wire

    def to_json(self) -> bytes:
        return _dump_json(self.to_wire())

    @classmethod
    def from_wire(cls, value: Any) -> "JSONRPCResponse":
        """Decode a response from an already-parsed JSON value.

        ``result`` is not interpreted here; it stays an opaque JSON value
        until one of the extraction methods asks for a concrete type.

        Raises:
            DecodeError: If the value is not an object, the error object is
                malformed, or ``jsonrpc`` is not "2.0".
        """
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Malformed response: {e}") from e

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "JSONRPCResponse":
        return cls.from_wire(load_json(data))

    def result_as(self, type_: Any = Any) -> Any:
        """Extract the result from a response.

        The error field is always checked first, so a reply carrying both an
        error and a result raises the error. Validation uses pydantic's lax
        mode, so e.g. "123" is accepted for ``int``; pass a strict type
        (``StrictInt``, ``Annotated[..., Strict()]``) to refuse coercion.

        Args:
            type_: Type to validate the result into (e.g. ``list[str]`` or a
                pydantic model). Defaults to the raw JSON value.

        Returns:
            The result validated as ``type_``

        Raises:
            RpcError: If the daemon returned an error object
            DecodeError: If the result cannot be validated as ``type_``
            NoErrorOrResult: If neither result nor error is present
        """
        self.check_error()
        if self.result is None:
            raise NoErrorOrResult()
        try:
            return type_adapter(type_).validate_python(self.result)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode result: {e}") from e

    def into_result(self, type_: Any = Any) -> Any:
        """Extract the result on the terminal path of a call.

        Same outcomes as ``result_as()``. Models are frozen, so no copy of
        the response is taken either way.
        """
        return self.result_as(type_)

    def check_error(self) -> None:
        """Raise the RPC error, if there was one, without looking at the result."""
        if self.error is not None:
            raise RpcError(self.error)

    def is_none(self) -> bool:
        """Whether the ``result`` field is empty."""
        return self.result is None


class ErrorCode:
    """JSON-RPC 2.0 standard error codes and lightningd application codes."""

    # Standard JSON-RPC 2.0 error codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # lightningd application error codes
    LIGHTNINGD = -1
    PAY_IN_PROGRESS = 200
    PAY_RHASH_ALREADY_USED = 201
    PAY_UNPARSEABLE_ONION = 202
    PAY_DESTINATION_PERM_FAIL = 203
    PAY_TRY_OTHER_ROUTE = 204
    PAY_ROUTE_NOT_FOUND = 205
    PAY_ROUTE_TOO_EXPENSIVE = 206
    PAY_INVOICE_EXPIRED = 207
    PAY_NO_SUCH_PAYMENT = 208
    PAY_UNSPECIFIED_ERROR = 209
    PAY_STOPPED_RETRYING = 210
    FUND_CANNOT_AFFORD = 300
    FUND_OUTPUT_IS_DUST = 301
    CONNECT_NO_KNOWN_ADDRESS = 400
    CONNECT_ALL_ADDRESSES_FAILED = 401
    INVOICE_LABEL_ALREADY_EXISTS = 900
    INVOICE_PREIMAGE_ALREADY_EXISTS = 901
