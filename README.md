# g42net

Small building blocks for a node of an IPv6 mesh overlay network.

## Modules

- `g42net.strjoin`
  - `join_string(*args)` concatenates the `str()` forms of its arguments.
  - `join_string_sep(first, *args)` joins them with `", "`.
- `g42net.counter` — `Counter(tick_len, is_main)` counts packets and bytes over
  the whole run and over a time window.
  - Call `tick(nbytes, out)` once for each packet.
  - It writes a statistics line to `out` on the first packet.
  - After that it looks at the clock every 1000th packet. Once the window has
    lasted `tick_len` seconds, it writes a line and starts a new window.
  - `tick` returns `True` when it wrote a line.
  - `report(out)` writes the line straight away.
  - A main counter (`is_main=True`) also reports the totals.
- `g42net.xint` — immutable integers that raise `OverflowError` instead of
  wrapping.
  - The types are `XInt` (signed, 64-bit magnitude), `UXInt` (unsigned 64-bit),
    `XBigInt` and `UXBigInt` (1024-bit magnitude).
  - They can be built from ints, floats, checked integers, or strings in decimal,
    `0x` hexadecimal or leading-zero octal.
  - Division truncates toward zero.
  - A result takes the type of the left operand.
  - `overflow_impossible_in_assign(target, value)` tells whether a value fits a
    checked type or instance.
  - `xsize(obj)` returns `len(obj)` as a `UXInt`.
- `g42net.udp` — `UdpWrapper(listen_port)`, an IPv4 UDP socket bound on all
  addresses.
  - `send_data(dst_address, data)` sends one datagram to a `(host, port)` pair.
  - `receive_data(bufsize)` returns `(payload, (host, port))`.
  - It also has `fileno()`, so it works with `select`, and `close()`.
  - It can be used as a context manager.
- `g42net.tun_frames` — conversions between packets that carry a 4-byte leading
  header and the framing that TAP and utun devices use:
  - `build_ethernet_frame(dst_mac, packet)`
  - `strip_tap_header(frame)`
  - `add_utun_read_header(packet)`
  - `add_utun_write_header(packet)`
- `g42net.tun` — TUN device classes.
  - The abstract base is `TunDevice`.
  - `LinuxTunDevice` is driven through `/dev/net/tun`. It has `close()` and is a
    context manager.
  - `EmptyTunDevice` does nothing.
  - `create_tun_device()` returns a `LinuxTunDevice` on Linux and an
    `EmptyTunDevice` elsewhere.
  - Setup failures raise `TunDevTunError`, `TunIpError` or `TunMtuError`. All
    three are subclasses of `TunError`.
  - `set_ipv6_address` accepts only 16-byte addresses starting with `fd42`.

## Example

```python
import sys
from g42net.counter import Counter
from g42net.xint import UXInt

stats = Counter(tick_len=5, is_main=True)
stats.tick(1500, sys.stdout)

total = UXInt(2**64 - 2)
total += 1      # fine
total += 1      # raises OverflowError
```

Setting up a real TUN device on Linux needs root or `CAP_NET_ADMIN`:

```python
from g42net.tun import create_tun_device

dev = create_tun_device()
dev.init()
dev.set_ipv6_address(bytes.fromhex("fd42" + "00" * 14), 16)
dev.set_mtu(1304)
```

## What it does not do

This is a library of parts, not a running node:

- It has no command-line program.
- It does no peer management, routing or encryption.
- It has no TUN device classes for macOS or Windows. Only the frame helpers in
  `g42net.tun_frames` cover their header layouts.

## Tests

```
pip install .[test]
pytest
```