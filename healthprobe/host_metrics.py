"""Host metric interface and the basic-information and CPU metrics."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from healthprobe.host_threshold import (
    DEFAULT_CPU_THRESHOLD,
    Threshold,
    first,
    str_float,
    str_int,
)

__all__ = ["HostOutputError", "HostMetric", "Basic", "CPU"]

log = logging.getLogger(__name__)


class HostOutputError(ValueError):
    """The command output of a host metric could not be parsed."""


class HostMetric(ABC):
    """A metric collected from a host by running a shell command.

    ``configure`` receives the server being probed; it must provide
    ``threshold`` (a Threshold), ``probe_kind`` and ``probe_name``.
    """

    @abstractmethod
    def name(self) -> str:
        """Name of the metric."""

    @abstractmethod
    def command(self) -> str:
        """Shell command that prints the metric."""

    @abstractmethod
    def output_lines(self) -> int:
        """Number of output lines the command prints."""

    @abstractmethod
    def configure(self, server: Any) -> None:
        """Apply the server's settings, filling in default thresholds."""

    @abstractmethod
    def set_threshold(self, threshold: Threshold) -> None:
        """Take this metric's threshold from *threshold*."""

    @abstractmethod
    def parse(self, lines: list[str]) -> None:
        """Parse the command output; raise HostOutputError if malformed."""

    @abstractmethod
    def usage_info(self) -> str:
        """Human-readable usage summary, or an empty string."""

    @abstractmethod
    def check_threshold(self) -> tuple[bool, str]:
        """Return ``(ok, message)`` after comparing usage with the threshold."""


@dataclass
class Basic(HostMetric):
    """Host name, operating system and number of cores."""

    host_name: str = ""
    os: str = ""
    core: int = 0

    def name(self) -> str:
        return "basic"

    def command(self) -> str:
        return (
            "hostname;\n"
            + r"awk -F= '/^NAME/{print $2}' /etc/os-release | tr -d '\"';"
            + "\ngrep -c ^processor /proc/cpuinfo;"
        )

    def output_lines(self) -> int:
        return 3

    def configure(self, server: Any) -> None:
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        pass

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise HostOutputError("invalid basic output")
        self.host_name = lines[0]
        self.os = lines[1]
        self.core = str_int(lines[2])

    def usage_info(self) -> str:
        return ""

    def check_threshold(self) -> tuple[bool, str]:
        return True, ""


@dataclass
class CPU(HostMetric):
    """CPU time percentages as reported by ``top``."""

    user: float = 0.0
    sys: float = 0.0
    nice: float = 0.0
    idle: float = 0.0
    wait: float = 0.0
    hard: float = 0.0
    soft: float = 0.0
    steal: float = 0.0
    threshold: float = 0.0

    def name(self) -> str:
        return "cpu"

    def command(self) -> str:
        return """top -b -n 1 | grep Cpu | awk -F ":" '{print $2}'"""

    def output_lines(self) -> int:
        return 1

    def configure(self, server: Any) -> None:
        if server.threshold.cpu == 0:
            server.threshold.cpu = DEFAULT_CPU_THRESHOLD
            log.debug(
                "[%s / %s] CPU threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                server.threshold.cpu,
            )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.cpu

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise HostOutputError("invalid cpu output")
        fields = lines[0].split(",")
        if len(fields) < 8:
            raise HostOutputError("invalid cpu output")
        (
            self.user,
            self.sys,
            self.nice,
            self.idle,
            self.wait,
            self.hard,
            self.soft,
            self.steal,
        ) = (str_float(first(f)) for f in fields[:8])

    def usage_info(self) -> str:
        return f"CPU: {100 - self.idle:.2f}%"

    def check_threshold(self) -> tuple[bool, str]:
        if self.threshold > 0 and self.threshold <= (100 - self.idle) / 100:
            return False, "CPU threshold alert!"
        return True, ""