"""Shared fixtures: a fake lightningd listening on a Unix socket."""
import json
import os
import shutil
import socket
import tempfile
import threading
import time

import pytest


class FakeDaemon:
    """Answers one JSON request per connection using ``handler``.

    ``handler`` receives the decoded request and returns a dict to send as
    JSON, raw bytes to send verbatim, or None to hang up without replying.
    Replies are written in ``chunks`` separate pieces, ``chunk_delay`` seconds
    apart, and the connection stays open ``hold`` seconds after the reply.
    """

    def __init__(self, path):
        self.path = path
        self.requests = []
        self.chunks = 1
        self.chunk_delay = 0.01
        self.hold = 0
        self.handler = lambda request: {
            "result": {},
            "id": request.get("id"),
            "jsonrpc": "2.0",
        }
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._server.bind(path)
        self._server.listen(5)
        self._server.settimeout(0.1)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            with conn:
                self._handle(conn)

    def _handle(self, conn):
        decoder = json.JSONDecoder()
        buf = b""
        while True:
            chunk = conn.recv(4096)
            if not chunk:
                return
            buf += chunk
            try:
                request, _ = decoder.raw_decode(buf.decode("utf-8"))
                break
            except ValueError:
                continue

        self.requests.append(request)
        reply = self.handler(request)
        if reply is None:
            return
        payload = reply if isinstance(reply, bytes) else json.dumps(reply).encode("utf-8")

        size = max(1, -(-len(payload) // self.chunks))
        try:
            for start in range(0, len(payload), size):
                conn.sendall(payload[start:start + size])
                if self.chunks > 1 and self.chunk_delay:
                    time.sleep(self.chunk_delay)
        except OSError:
            # client hung up early
            return
        if self.hold:
            self._stop.wait(self.hold)

    def close(self):
        self._stop.set()
        self._thread.join(timeout=2)
        self._server.close()


@pytest.fixture
def socket_dir():
    """Short temporary directory; Unix socket paths are length-limited."""
    path = tempfile.mkdtemp(prefix="lrpc")
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def fake_daemon(socket_dir):
    """Start a fake lightningd for the duration of a test."""
    daemon = FakeDaemon(os.path.join(socket_dir, "lightning-rpc"))
    yield daemon
    daemon.close()
