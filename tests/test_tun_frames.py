import pytest

from g42net.tun_frames import (
    add_utun_read_header,
    add_utun_write_header,
    build_ethernet_frame,
    strip_tap_header,
)

DST_MAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])
PACKET = b"\xaa\xbb\xcc\xdd" + bytes(range(60))


def test_ethernet_frame_layout():
    frame = build_ethernet_frame(DST_MAC, PACKET)
    assert frame[:6] == DST_MAC
    assert frame[6:12] == b"\xfc\x00\x00\x00\x00\x00"
    assert frame[12:14] == b"\x86\xdd"
    assert frame[14:] == PACKET[4:]


def test_ethernet_frame_length():
    frame = build_ethernet_frame(DST_MAC, PACKET)
    assert len(frame) == 14 + len(PACKET) - 4


def test_ethernet_frame_accepts_bytearray():
    assert build_ethernet_frame(bytearray(DST_MAC), bytearray(PACKET)) == build_ethernet_frame(
        DST_MAC, PACKET
    )


@pytest.mark.parametrize("mac", [b"", b"\x02\x00\x00", DST_MAC + b"\x00"])
def test_ethernet_frame_bad_mac(mac):
    with pytest.raises(ValueError):
        build_ethernet_frame(mac, PACKET)


def test_ethernet_frame_short_packet():
    with pytest.raises(ValueError):
        build_ethernet_frame(DST_MAC, b"\x00\x00\x86")


def test_strip_tap_header_drops_ten_bytes():
    frame = bytes(range(30))
    assert strip_tap_header(frame) == frame[10:]


def test_strip_of_built_frame_matches_utun_read_header():
    frame = build_ethernet_frame(DST_MAC, PACKET)
    assert strip_tap_header(frame) == add_utun_read_header(PACKET)


@pytest.mark.parametrize("size", [0, 5, 10])
def test_strip_tap_header_too_short(size):
    with pytest.raises(ValueError):
        strip_tap_header(bytes(size))


def test_utun_read_header():
    result = add_utun_read_header(PACKET)
    assert result[:4] == b"\x00\x00\x86\xdd"
    assert result[4:] == PACKET[4:]
    assert len(result) == len(PACKET)


def test_utun_write_header():
    result = add_utun_write_header(PACKET)
    assert result[:4] == b"\x00\x00\x00\x1e"
    assert result[4:] == PACKET[4:]


def test_utun_headers_do_not_modify_input():
    original = bytearray(PACKET)
    add_utun_write_header(original)
    add_utun_read_header(original)
    assert bytes(original) == PACKET


def test_utun_headers_short_packet():
    with pytest.raises(ValueError):
        add_utun_read_header(b"\x00")
    with pytest.raises(ValueError):
        add_utun_write_header(b"")