"""Building blocks for an IPv6 mesh overlay node: TUN devices, UDP transport, frame helpers, traffic counters and checked integers."""

__version__ = "0.1.0"