"""Framing helpers for the headers that TAP and utun devices put around IPv6 packets.

Packets handled by the tunnel carry a 4-byte leading header (as Linux TUN
frames do); these functions convert between that layout and what TAP
(Ethernet) and utun devices expect.
"""

from __future__ import annotations

TUN_HEADER_SIZE = 4
ETH_HEADER_SIZE = 14
TAP_READ_OFFSET = 10
MAC_SIZE = 6

ETHERTYPE_IPV6 = b"\x86\xdd"
SOURCE_MAC = b"\xfc\x00\x00\x00\x00\x00"
UTUN_READ_HEADER = b"\x00\x00\x86\xdd"
UTUN_WRITE_HEADER = b"\x00\x00\x00\x1e"


def _require_tun_header(packet: bytes) -> bytes:
    data = bytes(packet)
    if len(data) < TUN_HEADER_SIZE:
        raise ValueError(
            f"packet must hold at least the {TUN_HEADER_SIZE}-byte header, got {len(data)} bytes"
        )
    return data


def build_ethernet_frame(dst_mac: bytes, packet: bytes) -> bytes:
    """Wrap a packet in an Ethernet frame for a TAP device.

    The packet's 4-byte header is dropped and replaced by a 14-byte
    Ethernet header: ``dst_mac``, a fixed source MAC and the IPv6 ethertype.
    """
    mac = bytes(dst_mac)
    if len(mac) != MAC_SIZE:
        raise ValueError(f"MAC address must be {MAC_SIZE} bytes, got {len(mac)}")
    data = _require_tun_header(packet)
    return mac + SOURCE_MAC + ETHERTYPE_IPV6 + data[TUN_HEADER_SIZE:]


def strip_tap_header(frame: bytes) -> bytes:
    """Turn an Ethernet frame read from a TAP device into a tunnel packet.

    The first 10 bytes are dropped, so the last 4 bytes of the Ethernet
    header become the packet's 4-byte header.
    """
    data = bytes(frame)
    if len(data) <= TAP_READ_OFFSET:
        raise ValueError(f"frame must be longer than {TAP_READ_OFFSET} bytes, got {len(data)}")
    return data[TAP_READ_OFFSET:]


def add_utun_read_header(packet: bytes) -> bytes:
    """Replace the leading 4 bytes of a packet read from utun with ``00 00 86 DD``."""
    data = _require_tun_header(packet)
    return UTUN_READ_HEADER + data[TUN_HEADER_SIZE:]


def add_utun_write_header(packet: bytes) -> bytes:
    """Replace the leading 4 bytes of a packet bound for utun with ``00 00 00 1E``."""
    data = _require_tun_header(packet)
    return UTUN_WRITE_HEADER + data[TUN_HEADER_SIZE:]