"""JSON-RPC 2.0 data model for talking to lightningd."""
from .models import (
    JSONRPC_VERSION,
    JSONRPCRequest,
    JSONRPCResponse,
    JSONRPCError,
    ErrorCode,
)

__all__ = [
    "JSONRPC_VERSION",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    "ErrorCode",
]
