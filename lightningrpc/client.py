"""Unix domain socket client for the lightningd JSON-RPC interface."""
import codecs
import logging
import re
import socket
import threading
from typing import Any, List, Optional

from .jsonrpc.models import JSONRPC_VERSION, JSONRPCRequest, JSONRPCResponse, load_json
from .utils.errors import DecodeError, NonceMismatch, TransportError

logger = logging.getLogger(__name__)

RECV_CHUNK_SIZE = 65536


class UnixSocketClient:
    """Sends JSON-RPC 2.0 requests to lightningd over its RPC socket."""

    def __init__(self, socket_path: str, timeout: Optional[float] = 30):
        """Initialize the client.

        Args:
            socket_path: Path of the lightningd RPC socket
                (e.g., ~/.lightning/lightning-rpc)
            timeout: Socket timeout in seconds, or None to block
        """
        self.socket_path = socket_path
        self.timeout = timeout
        self._nonce = 0
        self._nonce_lock = threading.Lock()
        logger.info(f"Created lightningd RPC client for {socket_path}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Nothing to release; each call uses its own connection."""

    def next_id(self) -> int:
        """Get next request ID for JSON-RPC."""
        with self._nonce_lock:
            nonce = self._nonce
            self._nonce += 1
        return nonce

    def build_request(self, method: str, params: Any = None) -> JSONRPCRequest:
        """Build a request carrying the next id and the 2.0 version tag."""
        return JSONRPCRequest(
            method=method,
            params=params if params is not None else {},
            id=self.next_id(),
            jsonrpc=JSONRPC_VERSION,
        )

    def send_request(self, request: JSONRPCRequest) -> JSONRPCResponse:
        """Send a request and wait for the daemon's reply.

        Args:
            request: Request to send

        Returns:
            Decoded response, not yet checked for an RPC error

        Raises:
            TransportError: If the socket cannot be used or closes early
            DecodeError: If the reply is not a well-formed response
            NonceMismatch: If the reply id differs from the request id
        """
        payload = request.to_json()
        logger.debug(f"Sending {request.method} (id={request.id!r}) to {self.socket_path}")

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect(self.socket_path)
                sock.sendall(payload)
                reply = _read_json_value(sock)
        except OSError as e:
            logger.error(f"Transport error during {request.method} call: {e}")
            raise TransportError(f"Cannot talk to lightningd at {self.socket_path}: {e}") from e

        response = JSONRPCResponse.from_wire(reply)
        logger.debug(f"Received reply for id={response.id!r}")

        if type(response.id) is not type(request.id) or response.id != request.id:
            raise NonceMismatch(request.id, response.id)
        return response

    def call(self, method: str, params: Any = None, result_type: Any = Any) -> Any:
        """Make a JSON-RPC call and extract its result.

        Args:
            method: lightningd method name (e.g., "getinfo")
            params: Method parameters
            result_type: Type to decode the result into

        Returns:
            The decoded result

        Raises:
            RpcError: If lightningd returned an error object
        """
        request = self.build_request(method, params)
        return self.send_request(request).into_result(result_type)


class _ReplyScanner:
    """Finds where the top-level JSON object of a reply ends.

    Tracks bracket depth and string state across chunks so each byte is
    looked at once; the buffered text is parsed a single time when the
    closing brace arrives.
    """

    _TOKEN = re.compile(r'\\.|\\\Z|["{}\[\]]', re.DOTALL)

    def __init__(self):
        self.depth = 0
        self.in_string = False
        self.started = False
        self._skip_next = False

    def feed(self, text: str) -> int:
        """Scan the next piece of text.

        Returns:
            Index just past the end of the top-level object within ``text``,
            or -1 if the object is not complete yet

        Raises:
            DecodeError: If the reply does not start with a JSON object
        """
        if not text:
            return -1
        pos = 0
        if not self.started:
            stripped = text.lstrip()
            if not stripped:
                return -1
            if stripped[0] != "{":
                raise DecodeError(f"Reply does not start with a JSON object: {stripped[:40]!r}")
            self.started = True
            pos = len(text) - len(stripped)
        elif self._skip_next:
            self._skip_next = False
            pos = 1

        for match in self._TOKEN.finditer(text, pos):
            token = match.group()
            if token[0] == "\\":
                # escape split across chunks
                if len(token) == 1:
                    self._skip_next = True
                continue
            if token == '"':
                self.in_string = not self.in_string
            elif self.in_string:
                continue
            elif token in "{[":
                self.depth += 1
            else:
                self.depth -= 1
                if self.depth == 0:
                    return match.end()
        return -1


def _read_json_value(sock: socket.socket) -> Any:
    """Read from the socket until one complete JSON object has arrived.

    lightningd does not delimit replies, so the end of the reply is found by
    bracket matching. A reply that does not start with ``{`` fails at once
    with DecodeError; one that starts as an object but never completes on an
    open connection ends in the socket timeout (TransportError).
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    scanner = _ReplyScanner()
    parts: List[str] = []
    while True:
        chunk = sock.recv(RECV_CHUNK_SIZE)
        try:
            text = decoder.decode(chunk, final=not chunk)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Reply is not valid UTF-8: {e}") from e
        if not chunk:
            if scanner.started or text.strip():
                raise DecodeError(f"Connection closed mid-reply after {sum(map(len, parts))} characters")
            raise ConnectionError("Connection closed before any reply was received")

        end = scanner.feed(text)
        if end < 0:
            parts.append(text)
            continue
        parts.append(text[:end])
        return load_json("".join(parts))
