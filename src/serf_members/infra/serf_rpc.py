"""Serf IPC client — msgpack over a plain TCP stream.

This module is the **only** place in the codebase that touches sockets
or imports ``msgpack``.  All socket and decoding errors are caught here
and re-raised as typed :class:`~serf_members.exceptions.SerfMembersError`
subclasses — nothing raw escapes the infrastructure boundary.

Wire format
-----------
Every request is a msgpack map ``{"Command": str, "Seq": int}``,
optionally followed by a body map.  Every response is a header map
``{"Seq": int, "Error": str}``, followed by a body map for commands
that return data.  A session always starts with ``handshake``.
"""

from __future__ import annotations

import logging
import socket
from types import ModuleType, TracebackType
from typing import Any

from serf_members.exceptions import ConnectionError, EnvironmentError, RequestError
from serf_members.utils import IPC_VERSION

logger = logging.getLogger(__name__)

_RECV_SIZE = 4096


def _load_msgpack() -> ModuleType:
    """Return the ``msgpack`` module or raise ``EnvironmentError``."""
    try:
        import msgpack
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "msgpack is not installed. Install with: pip install msgpack",
        ) from exc
    return msgpack


def parse_rpc_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6]:port``) into its parts.

    Raises
    ------
    ConnectionError
        When *address* has no usable host or port.
    """
    host, sep, raw_port = address.strip().rpartition(":")
    host = host.strip("[]")
    if not sep or not host or not raw_port.isdigit() or int(raw_port) > 0xFFFF:
        raise ConnectionError(
            f"Invalid RPC address: {address!r}",
            hint="Use host:port, e.g. -rpc-addr=127.0.0.1:7373",
        )
    return host, int(raw_port)


class SerfRPCClient:
    """A single-use connection to a Serf agent's RPC listener.

    Usage::

        with SerfRPCClient("127.0.0.1:7373") as client:
            raw_members = client.members()

    The socket is opened by :meth:`connect` (called on ``__enter__``)
    and released by :meth:`close` on every exit path.
    """

    def __init__(self, address: str, *, auth_key: str | None = None) -> None:
        self.address: str = address
        self._auth_key: str | None = auth_key
        self._sock: socket.socket | None = None
        self._msgpack: ModuleType | None = None
        self._unpacker: Any = None
        self._seq: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> SerfRPCClient:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Open the socket and complete the handshake (and auth, if set).

        Raises
        ------
        ConnectionError
            When the socket cannot be opened or the agent refuses the
            handshake or the auth key.  The socket is closed first.
        """
        msgpack = _load_msgpack()
        host, port = parse_rpc_address(self.address)

        logger.debug("Connecting to Serf agent at %s:%d", host, port)
        try:
            self._sock = socket.create_connection((host, port))
        except OSError as exc:
            raise ConnectionError(
                f"Error connecting to Serf agent: {exc}",
                hint=f"Is the agent running and listening on {self.address}?",
            ) from exc

        self._msgpack = msgpack
        self._unpacker = msgpack.Unpacker(raw=False)

        try:
            self._request("handshake", {"Version": IPC_VERSION})
            logger.debug("Handshake complete (IPC version %d)", IPC_VERSION)
            if self._auth_key:
                self._request("auth", {"AuthKey": self._auth_key})
                logger.debug("Authenticated with RPC auth key")
        except RequestError as exc:
            self.close()
            raise ConnectionError(
                f"Error connecting to Serf agent: {exc}",
                hint=exc.hint,
            ) from exc

    def close(self) -> None:
        """Release the socket.  Safe to call more than once."""
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        sock.close()
        logger.debug("Closed connection to %s", self.address)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def members(self) -> list[dict[str, Any]]:
        """Issue one ``members`` request and return the raw records.

        Raises
        ------
        RequestError
            When the agent rejects the request, the stream fails, or the
            reply does not carry a ``Members`` list.
        """
        body = self._request("members", expect_body=True)
        members = body.get("Members") if isinstance(body, dict) else None
        if not isinstance(members, list):
            raise RequestError("Error retrieving members: malformed response from agent.")
        logger.debug("Agent returned %d member(s)", len(members))
        return members

    # ------------------------------------------------------------------
    # Framing
    # ------------------------------------------------------------------

    def _request(
        self,
        command: str,
        body: dict[str, Any] | None = None,
        *,
        expect_body: bool = False,
    ) -> Any:
        """Send *command* and read its response header (and body)."""
        if self._sock is None or self._msgpack is None:
            raise RequestError(f"Cannot send {command!r}: not connected.")

        seq = self._seq
        self._seq += 1

        payload = self._msgpack.packb({"Command": command, "Seq": seq})
        if body is not None:
            payload += self._msgpack.packb(body)

        try:
            self._sock.sendall(payload)
        except OSError as exc:
            raise RequestError(f"Error sending {command} request: {exc}") from exc

        header = self._read_object()
        if not isinstance(header, dict):
            raise RequestError(f"Malformed {command} response header from agent.")
        if header.get("Seq") != seq:
            raise RequestError(
                f"Out-of-order {command} response: expected seq {seq}, "
                f"got {header.get('Seq')!r}.",
            )
        error = header.get("Error") or ""
        if error:
            raise RequestError(f"Agent rejected {command} request: {error}")

        if expect_body:
            return self._read_object()
        return None

    def _read_object(self) -> Any:
        """Block until one complete msgpack object has been received."""
        if self._sock is None or self._msgpack is None:
            raise RequestError("Cannot read reply: not connected.")
        while True:
            try:
                return next(self._unpacker)
            except StopIteration:
                pass
            except (ValueError, self._msgpack.exceptions.UnpackException) as exc:
                raise RequestError(f"Undecodable reply from agent: {exc}") from exc

            try:
                data = self._sock.recv(_RECV_SIZE)
            except OSError as exc:
                raise RequestError(f"Error reading from agent: {exc}") from exc
            if not data:
                raise RequestError("Serf agent closed the connection unexpectedly.")
            self._unpacker.feed(data)
