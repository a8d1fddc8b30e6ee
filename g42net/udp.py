"""A UDP socket bound on all IPv4 interfaces, for carrying tunnel traffic."""

from __future__ import annotations

import logging
import socket
from typing import Tuple

_log = logging.getLogger(__name__)

Address = Tuple[str, int]


class UdpWrapper:
    """A UDP socket listening on ``listen_port`` of every IPv4 address.

    Binding failures surface as :class:`OSError`. The object can be used
    as a context manager and passed to :func:`select.select`.
    """

    def __init__(self, listen_port: int) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind(("0.0.0.0", listen_port))
        except OSError:
            self._sock.close()
            raise
        _log.debug("UDP socket bound on port %d", listen_port)

    def send_data(self, dst_address: Address, data: bytes) -> None:
        """Send ``data`` as one datagram to the ``(host, port)`` pair ``dst_address``."""
        host, port = dst_address
        self._sock.sendto(bytes(data), (host, port))

    def receive_data(self, bufsize: int) -> Tuple[bytes, Address]:
        """Receive one datagram of at most ``bufsize`` bytes.

        Returns the payload and the ``(host, port)`` it came from.
        """
        data, from_address = self._sock.recvfrom(bufsize)
        if not (isinstance(from_address, tuple) and len(from_address) == 2):
            raise RuntimeError("Data arrived from unknown socket address type")
        host, port = from_address
        return data, (host, port)

    def fileno(self) -> int:
        """Return the socket's file descriptor, or -1 once closed."""
        return self._sock.fileno()

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        self._sock.close()

    def __enter__(self) -> "UdpWrapper":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()