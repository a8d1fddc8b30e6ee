"""Virtual TUN network devices used to carry the tunnel's IPv6 traffic."""

from __future__ import annotations

import abc
import errno as errno_mod
import logging
import os
import select
import socket
import struct
import sys
from typing import Optional

_log = logging.getLogger(__name__)

_TUN_PATH = "/dev/net/tun"
_IFNAME_TEMPLATE = b"galaxy%d"
_IFNAMSIZ = 16
_ADDRESS_SIZE = 16
_ADDRESS_PREFIX = b"\xfd\x42"

_TUNSETIFF = 0x400454CA
_IFF_TUN = 0x0001
_IFF_UP = 0x0001
_IFF_RUNNING = 0x0040
_SIOCGIFFLAGS = 0x8913
_SIOCSIFFLAGS = 0x8914
_SIOCSIFADDR = 0x8916
_SIOCSIFMTU = 0x8922

# Wait at most 500 microseconds when polling the device for data.
_POLL_TIMEOUT = 0.0005


class TunError(RuntimeError):
    """Base class of errors raised while setting up a TUN device."""


class TunDevTunError(TunError):
    """The TUN device itself could not be opened."""


class TunIpError(TunError):
    """An IP address could not be configured on the device."""


class TunMtuError(TunError):
    """The MTU could not be configured on the device."""


def _syserr_text(code: str, err: Optional[int]) -> str:
    if err is None:
        return f"[Code={code}]"
    return f"[Code={code} errno={os.strerror(err)}]"


def _ifreq(name: str, flags: int = 0) -> bytes:
    return struct.pack("16sH22x", name.encode(), flags)


class TunDevice(abc.ABC):
    """A virtual network card that carries IPv6 packets.

    ``ifr_name`` holds the interface name once known, and ``ip6_ok``
    tells whether an IPv6 address was configured successfully.
    """

    def __init__(self) -> None:
        self.ifr_name = ""
        self.ip6_ok = False
        _log.debug("Creating new general TUN device class")

    def init(self) -> None:
        """Prepare the device for use; call before anything else."""

    @abc.abstractmethod
    def set_ipv6_address(self, binary_address: bytes, prefix_len: int) -> None:
        """Assign the 16-byte IPv6 address with the given prefix length."""

    @abc.abstractmethod
    def set_mtu(self, mtu: int) -> None:
        """Set the MTU; the IPv6 address must be set first."""

    @abc.abstractmethod
    def incoming_message(self) -> bool:
        """Return True when the device has data ready to be read."""

    @abc.abstractmethod
    def read(self, count: int) -> bytes:
        """Read one packet of at most ``count`` bytes."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write one packet and return the number of bytes written."""

    def get_tun_fd(self) -> int:
        """Return the file descriptor of the device, where there is one."""
        raise RuntimeError("Trying to get tun_fd of a basic generic tun device.")


class EmptyTunDevice(TunDevice):
    """A device that does nothing, for platforms without TUN support."""

    def init(self) -> None:
        """Nothing to prepare."""

    def set_ipv6_address(self, binary_address: bytes, prefix_len: int) -> None:
        """Accept and ignore the address."""

    def set_mtu(self, mtu: int) -> None:
        """Ignore the MTU, with a warning."""
        _log.warning("Called set_mtu on empty device")

    def incoming_message(self) -> bool:
        """Never has data."""
        return False

    def read(self, count: int) -> bytes:
        """Always reads nothing."""
        return b""

    def write(self, data: bytes) -> int:
        """Discard the data; nothing is written."""
        return 0


class LinuxTunDevice(TunDevice):
    """A TUN device driven through the Linux ``/dev/net/tun`` driver."""

    def __init__(self) -> None:
        super().__init__()
        self._tun_fd = -1

    def init(self) -> None:
        """Open the TUN driver file."""
        _log.info("Opening TUN file (Linux driver) %s", _TUN_PATH)
        try:
            self._tun_fd = os.open(_TUN_PATH, os.O_RDWR)
        except OSError as exc:
            raise TunDevTunError(_syserr_text("open_fd", exc.errno)) from exc
        _log.info("TUN file opened as fd %d", self._tun_fd)

    def get_tun_fd(self) -> int:
        """Return the descriptor of the open device."""
        if self._tun_fd < 0:
            raise RuntimeError("Using not ready (m_tun_fd) tuntap device")
        return self._tun_fd

    def fileno(self) -> int:
        return self.get_tun_fd()

    def set_ipv6_address(self, binary_address: bytes, prefix_len: int) -> None:
        """Create the interface and give it an ``fd42::/16`` IPv6 address."""
        address = bytes(binary_address)
        if len(address) != _ADDRESS_SIZE:
            raise ValueError(f"IPv6 address must be {_ADDRESS_SIZE} bytes, got {len(address)}")
        if address[:2] != _ADDRESS_PREFIX:
            raise ValueError("IPv6 address must start with fd42")
        fd = self.get_tun_fd()

        import fcntl

        request = struct.pack("16sH22x", _IFNAME_TEMPLATE, _IFF_TUN)
        try:
            result = fcntl.ioctl(fd, _TUNSETIFF, request)
        except OSError as exc:
            raise TunIpError(_syserr_text("ioctl", exc.errno)) from exc
        name = result[:_IFNAMSIZ].split(b"\0", 1)[0].decode()

        _log.debug("Setting IP address on %s prefix=%d", name, prefix_len)
        self._add_address(name, address, prefix_len)
        self.ifr_name = name
        self.ip6_ok = True
        _log.info("IP address is fully configured on %s", name)

    @staticmethod
    def _add_address(name: str, address: bytes, prefix_len: int) -> None:
        import fcntl

        try:
            ifindex = socket.if_nametoindex(name)
        except OSError as exc:
            raise TunIpError(_syserr_text("socketForIfName_ioctl", exc.errno)) from exc
        try:
            sock = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
        except OSError as exc:
            raise TunIpError(_syserr_text("socket_open", exc.errno)) from exc
        with sock:
            try:
                flags_raw = fcntl.ioctl(sock, _SIOCGIFFLAGS, _ifreq(name))
                (flags,) = struct.unpack_from("H", flags_raw, _IFNAMSIZ)
                if flags & (_IFF_UP | _IFF_RUNNING) != (_IFF_UP | _IFF_RUNNING):
                    fcntl.ioctl(sock, _SIOCSIFFLAGS, _ifreq(name, flags | _IFF_UP | _IFF_RUNNING))
            except OSError as exc:
                raise TunIpError(_syserr_text("checkInterfaceUp_ioctl", exc.errno)) from exc
            try:
                fcntl.ioctl(sock, _SIOCSIFADDR, struct.pack("16sIi", address, prefix_len, ifindex))
            except OSError as exc:
                if exc.errno != errno_mod.EEXIST:
                    raise TunIpError(_syserr_text("ioctl", exc.errno)) from exc

    def set_mtu(self, mtu: int) -> None:
        """Set the MTU of the configured interface."""
        if not self.ip6_ok:
            raise RuntimeError("Can not set MTU - card not configured (ipv6)")
        import fcntl

        _log.debug("Setting MTU=%d on card: %s", mtu, self.ifr_name)
        try:
            sock = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
        except OSError as exc:
            raise TunMtuError(_syserr_text("socket_open", exc.errno)) from exc
        with sock:
            request = struct.pack("16si20x", self.ifr_name.encode(), mtu)
            try:
                fcntl.ioctl(sock, _SIOCSIFMTU, request)
            except OSError as exc:
                raise TunMtuError(_syserr_text("ioctl", exc.errno)) from exc
        _log.info("MTU configured to %d on card %s", mtu, self.ifr_name)

    def incoming_message(self) -> bool:
        """Poll the device briefly; return True if a packet waits."""
        fd = self.get_tun_fd()
        readable, _, _ = select.select([fd], [], [], _POLL_TIMEOUT)
        return bool(readable)

    def read(self, count: int) -> bytes:
        """Read one packet of at most ``count`` bytes."""
        fd = self.get_tun_fd()
        try:
            return os.read(fd, count)
        except OSError as exc:
            raise RuntimeError("Read from tun error") from exc

    def write(self, data: bytes) -> int:
        """Write one packet; return the number of bytes written."""
        fd = self.get_tun_fd()
        try:
            return os.write(fd, bytes(data))
        except OSError as exc:
            raise RuntimeError("Write to tun error") from exc

    def close(self) -> None:
        """Close the device; closing twice is harmless."""
        if self._tun_fd >= 0:
            fd, self._tun_fd = self._tun_fd, -1
            os.close(fd)

    def __enter__(self) -> "LinuxTunDevice":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def create_tun_device() -> TunDevice:
    """Return the TUN device class that suits the running platform."""
    if sys.platform.startswith("linux"):
        return LinuxTunDevice()
    return EmptyTunDevice()