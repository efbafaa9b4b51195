"""RPC binding to the c-lightning daemon over its JSON-RPC 2.0 socket.

Most callers want the high-level ``LightningRPC``. Requests and responses
can also be built and decoded by hand with ``JSONRPCRequest`` and
``JSONRPCResponse`` and sent through ``UnixSocketClient``.
"""
from .client import UnixSocketClient
from .config import ClientConfig, load_config
from .jsonrpc import JSONRPCError, JSONRPCRequest, JSONRPCResponse
from .lightning_rpc import LightningRPC
from .utils.errors import (
    ConfigError,
    DecodeError,
    EncodeError,
    ErrorKind,
    LightningRPCError,
    NoErrorOrResult,
    NonceMismatch,
    RpcError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "JSONRPCError",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "LightningRPC",
    "LightningRPCError",
    "NoErrorOrResult",
    "NonceMismatch",
    "RpcError",
    "TransportError",
    "UnixSocketClient",
    "load_config",
]
