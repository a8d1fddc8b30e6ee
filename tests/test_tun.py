import errno
import os
import sys
from unittest import mock

import pytest

from g42net import tun
from g42net.tun import (
    EmptyTunDevice,
    LinuxTunDevice,
    TunDevice,
    TunDevTunError,
    TunError,
    TunIpError,
    TunMtuError,
    create_tun_device,
)

GALAXY_ADDRESS = bytes([0xFD, 0x42]) + bytes(14)


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


def test_error_hierarchy():
    for cls in (TunDevTunError, TunIpError, TunMtuError):
        assert issubclass(cls, TunError)
    assert issubclass(TunError, RuntimeError)
    with mock.patch.object(tun.os, "open", side_effect=OSError(errno.ENOENT, "missing")):
        dev = LinuxTunDevice()
        with pytest.raises(TunError) as excinfo:
            dev.init()
    assert isinstance(excinfo.value, RuntimeError)
    assert isinstance(excinfo.value, TunDevTunError)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        TunDevice()


def test_empty_device_behaviour():
    dev = EmptyTunDevice()
    dev.init()
    dev.set_ipv6_address(GALAXY_ADDRESS, 16)
    dev.set_mtu(1304)
    assert dev.incoming_message() is False
    assert dev.read(100) == b""
    assert dev.write(b"abc") == 0
    assert dev.ifr_name == ""
    assert dev.ip6_ok is False


def test_empty_device_has_no_fd():
    with pytest.raises(RuntimeError, match="generic tun device"):
        EmptyTunDevice().get_tun_fd()


def test_linux_fd_before_init_raises():
    dev = LinuxTunDevice()
    with pytest.raises(RuntimeError, match="not ready"):
        dev.get_tun_fd()


def test_linux_set_mtu_before_address_raises():
    dev = LinuxTunDevice()
    with pytest.raises(RuntimeError, match="card not configured"):
        dev.set_mtu(1304)


def test_linux_init_failure_raises_devtun_error():
    with mock.patch.object(tun.os, "open", side_effect=OSError(errno.ENOENT, "missing")):
        dev = LinuxTunDevice()
        with pytest.raises(TunDevTunError, match="open_fd"):
            dev.init()


@pytest.mark.parametrize(
    "address",
    [bytes(16), bytes([0xFD, 0x43]) + bytes(14), GALAXY_ADDRESS[:15]],
)
def test_linux_rejects_bad_address(address):
    dev = LinuxTunDevice()
    with pytest.raises(ValueError):
        dev.set_ipv6_address(address, 16)
    assert dev.ip6_ok is False


def test_linux_read_and_poll(pipe):
    r, w = pipe
    with mock.patch.object(tun.os, "open", return_value=r):
        dev = LinuxTunDevice()
        dev.init()
    assert dev.get_tun_fd() == r
    assert dev.incoming_message() is False
    os.write(w, b"packet")
    assert dev.incoming_message() is True
    assert dev.read(100) == b"packet"
    dev.close()
    with pytest.raises(RuntimeError):
        dev.get_tun_fd()


def test_linux_write(pipe):
    r, w = pipe
    with mock.patch.object(tun.os, "open", return_value=w):
        with LinuxTunDevice() as dev:
            dev.init()
            assert dev.write(b"hello") == 5
    assert os.read(r, 100) == b"hello"


def test_linux_write_error_raises(pipe):
    r, w = pipe
    with mock.patch.object(tun.os, "open", return_value=r):
        dev = LinuxTunDevice()
        dev.init()
    with mock.patch.object(tun.os, "write", side_effect=OSError(errno.EIO, "io")):
        with pytest.raises(RuntimeError, match="Write to tun error"):
            dev.write(b"x")
    dev.close()


def test_create_tun_device_linux():
    with mock.patch.object(sys, "platform", "linux"):
        dev = create_tun_device()
    assert isinstance(dev, LinuxTunDevice)
    assert dev.ifr_name == ""
    assert dev.ip6_ok is False
    with pytest.raises(RuntimeError, match="not ready"):
        dev.get_tun_fd()


def test_create_tun_device_other_platform():
    with mock.patch.object(sys, "platform", "darwin"):
        dev = create_tun_device()
    assert isinstance(dev, EmptyTunDevice)
    assert dev.incoming_message() is False
    assert dev.read(10) == b""
    assert dev.write(b"data") == 0