"""Host probe server: combines the host metrics, parses their output and checks thresholds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from healthprobe.host_metrics import CPU, Basic, HostMetric, HostOutputError
from healthprobe.host_resources import Disks, Load, Mem
from healthprobe.host_threshold import Threshold, add_message
from healthprobe.textcheck import check_empty

__all__ = ["Info", "HostServer"]

log = logging.getLogger(__name__)


@dataclass
class Info:
    """Everything collected from one host."""

    basic: Basic = field(default_factory=Basic)
    cpu: CPU = field(default_factory=CPU)
    memory: Mem = field(default_factory=Mem)
    disks: Disks = field(default_factory=Disks)
    load: Load = field(default_factory=Load)

    def metrics(self) -> list[HostMetric]:
        """The metrics of this host, in the order their output is printed."""
        return [self.basic, self.cpu, self.memory, self.disks, self.load]


@dataclass
class HostServer:
    """One monitored host and the combined command that collects its metrics."""

    probe_name: str = ""
    threshold: Threshold = field(default_factory=Threshold)
    disks: list[str] = field(default_factory=list)
    probe_kind: str = ""
    probe_tag: str = ""
    command: str = ""
    endpoint: str = ""
    info: Info = field(default_factory=Info)

    _metrics: list[HostMetric] = field(default_factory=list, init=False, repr=False)
    _output_lines: int = field(default=0, init=False, repr=False)

    @property
    def output_lines(self) -> int:
        """Total number of output lines the combined command prints."""
        return self._output_lines

    def configure(self) -> None:
        """Configure every metric and build the combined shell command."""
        self.probe_kind = "host"
        self.probe_tag = "server"

        self._metrics = self.info.metrics()
        self._output_lines = 0
        commands = []
        for metric in self._metrics:
            metric.configure(self)
            commands.append(metric.command() + "\n")
            self._output_lines += metric.output_lines()
            log.debug(
                "[%s / %s] - metric [%s] configured!",
                self.probe_kind,
                self.probe_name,
                metric.name(),
            )
        self.command = "".join(commands)
        log.debug("[%s / %s]\n%s", self.probe_kind, self.probe_name, self.command)
        self.endpoint = str(self.threshold)

    def parse_host_info(self, output: str) -> Info:
        """Parse the combined command output into the host info.

        Raises HostOutputError when the output is malformed.
        """
        lines = output.split("\n")
        if len(lines) < self._output_lines:
            raise HostOutputError("invalid output lines")

        position = 0
        for metric in self._metrics:
            count = metric.output_lines()
            metric.parse(lines[position : position + count])
            position += count
        return self.info

    def usage(self) -> str:
        """Usage summary of all metrics."""
        *head, last = self._metrics
        parts = "".join(u + " - " for u in (m.usage_info() for m in head) if u)
        return " ( " + parts + last.usage_info() + " )"

    def check_threshold(self) -> tuple[bool, str]:
        """Check every metric against its threshold."""
        status = True
        message = ""
        for metric in self._metrics:
            ok, text = metric.check_threshold()
            if not ok:
                status = False
                message = add_message(message, text)
        if not message:
            message = "Fine!"
        return status, message + self.usage()

    def evaluate(self, output: str) -> tuple[bool, str]:
        """Parse the command output and check the thresholds."""
        log.debug("[%s / %s] - %s", self.probe_kind, self.probe_name, check_empty(output))
        try:
            info = self.parse_host_info(output)
        except HostOutputError as exc:
            log.error("[%s / %s] %s", self.probe_kind, self.probe_name, exc)
            return False, f"Parse the output failed: {exc}"
        log.debug("[%s / %s] - %r", self.probe_kind, self.probe_name, info)
        return self.check_threshold()