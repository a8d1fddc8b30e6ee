"""Packet and byte counter that periodically reports throughput."""

from __future__ import annotations

import time
from typing import TextIO

_K = 1000.0
_MI = 1024.0 * 1024.0
_GI = 1024.0 * _MI
_EPSILON = 1.0
_CHECK_EVERY = 1000


def _now() -> int:
    return int(time.time())


class Counter:
    """Counts packets and bytes, overall and within a time window.

    ``tick_len`` is the window length in seconds and also how often
    statistics get reported by :meth:`tick`.
    """

    def __init__(self, tick_len: int, is_main: bool) -> None:
        self.tick_len = tick_len
        self.is_main = is_main
        self.pck_all = 0
        self.pck_w = 0
        self.bytes_all = 0
        self.bytes_w = 0
        now = _now()
        self.time_first = now
        self.time_ws = now
        self.time_last = now

    def add(self, nbytes: int) -> None:
        """Count one packet of ``nbytes`` bytes."""
        self.pck_all += 1
        self.pck_w += 1
        self.bytes_all += nbytes
        self.bytes_w += nbytes

    def tick(self, nbytes: int, out: TextIO) -> bool:
        """Count a packet and report to ``out`` when due; return whether it reported."""
        self.add(nbytes)

        due = self.pck_all == 1
        if self.pck_all % _CHECK_EVERY == 0:
            self.time_last = _now()
            if self.time_last >= self.time_ws + self.tick_len:
                due = True

        if due:
            self.report(out)
            self.time_last = _now()
            self.time_ws = self.time_last
            self.pck_w = 0
            self.bytes_w = 0
        return due

    def report(self, out: TextIO) -> None:
        """Write the current statistics as one line to ``out``."""
        time_all = max(_EPSILON, float(self.time_last - self.time_first))
        time_w = max(_EPSILON, float(self.time_last - self.time_ws))

        avg_bytes_all = self.bytes_all / time_all
        avg_pck_all = self.pck_all / time_all
        avg_bytes_w = self.bytes_w / time_w
        avg_pck_w = self.pck_w / time_w

        if self.is_main:
            out.write(
                f"{self.bytes_all / _GI:6.3f}GiB; "
                f"Speed: {avg_pck_all / _K:9.3f} Kpck/s "
                f",  {avg_bytes_all * 8 / _MI:9.3f} Mib/s "
                f" = {avg_bytes_all / _MI:9.3f} MiB/s ; "
            )
        out.write(
            f"Window {time_w:.3f}s: {avg_pck_w / 1000:9.3f} Kpck/s "
            f",  {avg_bytes_w * 8 / _MI:9.3f} Mib/s "
            f" = {avg_bytes_w / _MI:9.3f} MiB/s ) \n"
        )