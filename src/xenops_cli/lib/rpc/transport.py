# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""JSON request/response over xenopsd's Unix domain socket.

One connection per call: the request is a single JSON object terminated by a
newline, the reply a single JSON object terminated by a newline or EOF::

    -> {"method": "VM.shutdown", "params": ["<uuid>", 30.0], "id": 1}
    <- {"result": null, "error": null, "id": 1}

Only the connect is bounded by a timeout; once connected the call blocks
until xenopsd replies, since power transitions may legitimately take long.
"""

from __future__ import annotations

import itertools
import json
import socket
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from ..core.errors import DaemonUnreachable, error_from_wire

_RECV_SIZE = 65536


class Transport(Protocol):
    def call(self, method: str, params: list[Any]) -> Any: ...


class UnixSocketTransport:
    """Blocking JSON-RPC transport over an ``AF_UNIX`` stream socket."""

    def __init__(
        self,
        path: Path,
        connect_timeout: float,
        trace: Callable[[str], None] | None = None,
    ) -> None:
        self.path = Path(path)
        self.connect_timeout = connect_timeout
        self._trace = trace
        self._ids = itertools.count(1)

    def call(self, method: str, params: list[Any]) -> Any:
        """Send one request and return its ``result``.

        Raises DaemonUnreachable on any socket or framing failure, and the
        matching DaemonError subclass when xenopsd reports an error.
        """
        request_id = next(self._ids)
        request = json.dumps(
            {"method": method, "params": params, "id": request_id}, default=str
        )
        self._emit(f"-> {self.path}: {request}")

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as s:
                s.settimeout(self.connect_timeout)
                s.connect(str(self.path))
                s.settimeout(None)
                s.sendall(request.encode("utf-8") + b"\n")
                raw = _read_reply(s)
        except OSError as e:
            raise DaemonUnreachable(f"cannot talk to xenopsd at {self.path}: {e}") from e

        if not raw.strip():
            raise DaemonUnreachable(f"xenopsd at {self.path} closed the connection without a reply")
        self._emit(f"<- {raw.decode('utf-8', 'replace').strip()}")

        try:
            reply = json.loads(raw)
        except ValueError as e:
            raise DaemonUnreachable(f"malformed reply from xenopsd: {e}") from e
        if not isinstance(reply, dict):
            raise DaemonUnreachable("malformed reply from xenopsd: expected a JSON object")

        reply_id = reply.get("id")
        if reply_id != request_id:
            raise DaemonUnreachable(
                f"malformed reply from xenopsd: id {reply_id!r} does not answer request {request_id}"
            )

        error = reply.get("error")
        if error is not None:
            raise error_from_wire(error)
        return reply.get("result")

    def _emit(self, line: str) -> None:
        if self._trace is not None:
            self._trace(line)


def _read_reply(sock: socket.socket) -> bytes:
    """Read until the first newline or EOF."""
    chunks: list[bytes] = []
    while True:
        chunk = sock.recv(_RECV_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
        if b"\n" in chunk:
            break
    return b"".join(chunks).split(b"\n", 1)[0]
