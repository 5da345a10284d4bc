"""Memory, disk and load-average metrics of the host probe."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from healthprobe.host_metrics import HostMetric, HostOutputError
from healthprobe.host_threshold import (
    DEFAULT_DISK_THRESHOLD,
    DEFAULT_LOAD_THRESHOLD,
    DEFAULT_MEM_THRESHOLD,
    ResourceUsage,
    Threshold,
    str_float,
    str_int,
)

__all__ = ["Mem", "Disks", "Load"]

log = logging.getLogger(__name__)

_LOAD_KEYS = ("m1", "m5", "m15")


@dataclass
class Mem(HostMetric):
    """Memory usage as reported by ``free -m``."""

    used: int = 0
    total: int = 0
    usage: float = 0.0
    tag: str = ""
    threshold: float = 0.0

    def name(self) -> str:
        return "mem"

    def command(self) -> str:
        return r"""free -m | awk 'NR==2{printf "%s %s %.2f\n", $3,$2,$3*100/$2 }'"""

    def output_lines(self) -> int:
        return 1

    def configure(self, server: Any) -> None:
        if server.threshold.mem == 0:
            server.threshold.mem = DEFAULT_MEM_THRESHOLD
            log.debug(
                "[%s / %s] Memory threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                server.threshold.mem,
            )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.mem

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise HostOutputError("invalid memory output")
        fields = lines[0].split(" ")
        if len(fields) < 3:
            raise HostOutputError("invalid memory output")
        self.used = str_int(fields[0])
        self.total = str_int(fields[1])
        self.usage = str_float(fields[2])

    def usage_info(self) -> str:
        return f"Memory: {self.usage:.2f}%"

    def check_threshold(self) -> tuple[bool, str]:
        if self.threshold > 0 and self.threshold <= self.usage / 100:
            return False, "Memory threshold alert!"
        return True, ""


@dataclass
class Disks(HostMetric):
    """Usage of the monitored mount points as reported by ``df``."""

    mount: list[str] = field(default_factory=list)
    usage: list[ResourceUsage] = field(default_factory=list)
    threshold: float = 0.0

    def name(self) -> str:
        return "disk"

    def command(self) -> str:
        return (
            "df -h "
            + " ".join(self.mount)
            + r""" 2>/dev/null | awk '(NR>1){printf "%d %d %s %s\n", $3,$2,$5,$6}'"""
        )

    def output_lines(self) -> int:
        return len(self.mount)

    def configure(self, server: Any) -> None:
        if not server.disks:
            server.disks = ["/"]
        self.mount = list(server.disks)
        self.usage = [ResourceUsage() for _ in self.mount]
        if server.threshold.disk == 0:
            server.threshold.disk = DEFAULT_DISK_THRESHOLD
            log.debug(
                "[%s / %s] Disk threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                server.threshold.disk,
            )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.disk

    def parse(self, lines: list[str]) -> None:
        if len(lines) != self.output_lines():
            raise HostOutputError("invalid disk output")
        parsed = []
        for line in lines:
            fields = line.split(" ")
            if len(fields) < 4:
                raise HostOutputError("invalid disk output")
            parsed.append(
                ResourceUsage(
                    used=str_int(fields[0]),
                    total=str_int(fields[1]),
                    usage=str_float(fields[2][:-1]),
                    tag=fields[3],
                )
            )
        self.usage = parsed

    def usage_info(self) -> str:
        return "Disk: " + ", ".join(f"`{d.tag}` {d.usage:.2f}%" for d in self.usage)

    def check_threshold(self) -> tuple[bool, str]:
        low = [
            d.tag
            for d in self.usage
            if self.threshold > 0 and self.threshold <= d.usage / 100
        ]
        if low:
            return False, f"Disk Space threshold alert! - [{', '.join(low)}]"
        return True, ""


def _per_core(value: float, core: int) -> float:
    if core != 0:
        return value / core
    if value > 0:
        return math.inf
    if value < 0:
        return -math.inf
    return math.nan


@dataclass
class Load(HostMetric):
    """One, five and fifteen minute load averages and the number of cores."""

    core: int = 0
    metrics: dict[str, float] = field(default_factory=dict)
    threshold: dict[str, float] | None = None

    def name(self) -> str:
        return "load"

    def command(self) -> str:
        return (
            "grep -c ^processor /proc/cpuinfo;\n"
            "cat /proc/loadavg | awk '{print $1,$2,$3}';"
        )

    def output_lines(self) -> int:
        return 2

    def configure(self, server: Any) -> None:
        self.metrics = {}
        load = server.threshold.load
        if load is None:
            server.threshold.load = {key: DEFAULT_LOAD_THRESHOLD for key in _LOAD_KEYS}
            log.debug(
                "[%s / %s] All of load average threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                DEFAULT_LOAD_THRESHOLD,
            )
        else:
            for key, value in list(load.items()):
                load[key.lower()] = value
            for key in _LOAD_KEYS:
                if key not in load:
                    load[key] = DEFAULT_LOAD_THRESHOLD
                    log.debug(
                        "[%s / %s] Load average threshold for %s is not set, "
                        "using default value: %.2f",
                        server.probe_kind,
                        server.probe_name,
                        key,
                        load[key],
                    )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.load

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise HostOutputError("invalid load average output")
        self.core = str_int(lines[0])
        fields = lines[1].split(" ")
        if len(fields) < 3:
            raise HostOutputError("invalid load average output")
        for key, text in zip(_LOAD_KEYS, fields):
            self.metrics[key] = str_float(text)

    def usage_info(self) -> str:
        return "Load: " + "/".join(f"{v:.2f}" for v in self.metrics.values())

    def check_threshold(self) -> tuple[bool, str]:
        limits = self.threshold or {}
        for key, value in self.metrics.items():
            if _per_core(value, self.core) > limits.get(key, 0.0):
                return False, f"Load Average threshold {key} alert! - {value:.2f}"
        return True, ""