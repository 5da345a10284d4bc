"""Timing of the phases of an HTTP request: DNS, connect, TLS, send, wait, transfer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

__all__ = ["TraceStats", "to_ms"]

log = logging.getLogger(__name__)


def to_ms(seconds: float) -> float:
    """Convert a duration in seconds to milliseconds."""
    return seconds * 1000.0


def _since(start: float | None) -> float:
    """Seconds elapsed since *start*; an unset start gives 0.0."""
    if start is None:
        return 0.0
    return time.time() - start


@dataclass
class TraceStats:
    """Start times (epoch seconds, None if unset) and durations (seconds) of a request."""

    kind: str = ""
    tag: str = ""
    name: str = ""

    conn_start_at: float | None = None
    conn_took: float = 0.0
    dns_start_at: float | None = None
    dns_took: float = 0.0
    send_start_at: float | None = None
    send_took: float = 0.0
    tls_start_at: float | None = None
    tls_took: float = 0.0
    total_start_at: float | None = None
    total_took: float = 0.0
    transfer_start_at: float | None = None
    transfer_took: float = 0.0
    wait_start_at: float | None = None
    wait_took: float = 0.0

    def _prefix(self) -> str:
        return f"[{self.kind} {self.tag} {self.name}]"

    def get_conn(self, host_port: str) -> None:
        """A connection is requested: the total time starts."""
        self.total_start_at = time.time()
        log.debug("%s - total - start get connection to %s", self._prefix(), host_port)

    def dns_start(self, host: str) -> None:
        """Name resolution starts."""
        self.dns_start_at = time.time()
        log.debug("%s - dns - start resolve %s", self._prefix(), host)

    def dns_done(self, addrs: list[str], error: Exception | None) -> None:
        """Name resolution finished."""
        self.dns_took = _since(self.dns_start_at)
        if error is not None:
            return
        log.debug(
            "%s - dns - resolve ip %s, time %.3fms", self._prefix(), addrs, to_ms(self.dns_took)
        )

    def connect_start(self, network: str, addr: str) -> None:
        """A dial starts; only the first dial sets the start time."""
        if self.conn_start_at is None:
            self.conn_start_at = time.time()
        log.debug("%s - conn - start %s connect to %s", self._prefix(), network, addr)

    def connect_done(self, network: str, addr: str, error: Exception | None) -> None:
        """A dial finished."""
        self.conn_took = _since(self.conn_start_at)
        if error is not None:
            return
        log.debug(
            "%s - conn - %s connection created to %s. time: %.3fms",
            self._prefix(),
            network,
            addr,
            to_ms(self.conn_took),
        )

    def tls_start(self) -> None:
        """The TLS handshake starts."""
        self.tls_start_at = time.time()
        log.debug("%s - tls - start negotiation", self._prefix())

    def tls_done(self, server_name: str, error: Exception | None) -> None:
        """The TLS handshake finished."""
        self.tls_took = _since(self.tls_start_at)
        if error is not None:
            return
        log.debug(
            "%s - tls - negotiated to %r, time: %.3fms",
            self._prefix(),
            server_name,
            to_ms(self.tls_took),
        )

    def got_conn(self, reused: bool, was_idle: bool, idle_time: float) -> None:
        """A connection was obtained; only logged."""
        log.debug(
            "%s - connection established. reused: %s idle: %s idle time: %dms",
            self._prefix(),
            reused,
            was_idle,
            int(idle_time * 1000),
        )

    def wrote_header_field(self, key: str, value: list[str]) -> None:
        """A header field was written; only the first one sets the send start."""
        if self.send_start_at is None:
            self.send_start_at = time.time()
        log.debug("%s - send - start write header field %s %s", self._prefix(), key, value)

    def wrote_headers(self) -> None:
        """All headers were written."""
        self.send_took = _since(self.send_start_at)
        log.debug("%s - send - headers written, time: %.3fms", self._prefix(), to_ms(self.send_took))

    def wrote_request(self, error: Exception | None) -> None:
        """The request was written: waiting for the response starts."""
        self.wait_start_at = time.time()
        log.debug("%s - wait - start write request", self._prefix())

    def got_first_response_byte(self) -> None:
        """The first response byte arrived: waiting ends and transfer starts."""
        self.wait_took = _since(self.wait_start_at)
        self.transfer_start_at = time.time()
        log.debug("%s - transfer - start transfer the response", self._prefix())
        log.debug(
            "%s - wait - got first response byte, time: %.3fms",
            self._prefix(),
            to_ms(self.wait_took),
        )

    def put_idle_conn(self, error: Exception | None) -> None:
        """The connection went back to the idle pool: the trace is done."""
        self.done()

    def done(self) -> None:
        """Finish the trace and report it."""
        self.total_took = _since(self.total_start_at)
        self.transfer_took = _since(self.transfer_start_at)
        log.debug("%s - transfer - done, time: %.3fms", self._prefix(), to_ms(self.transfer_took))
        log.debug("%s - total - done , time: %.3fms", self._prefix(), to_ms(self.total_took))
        self.report()

    def report(self) -> None:
        """Log a table of all phase durations in milliseconds."""
        prefix = self._prefix()
        log.debug("%s ======================== Trace Stats ======================", prefix)
        log.debug("%s DNS\tConnect\tTLS\tSend\tWait\tTrans\tTotal", prefix)
        log.debug(
            "%s %.2f\t%.2f\t%.2f\t%.2f\t%.2f\t%.2f\t%.2f",
            prefix,
            to_ms(self.dns_took),
            to_ms(self.conn_took),
            to_ms(self.tls_took),
            to_ms(self.send_took),
            to_ms(self.wait_took),
            to_ms(self.transfer_took),
            to_ms(self.total_took),
        )
        log.debug("%s ===========================================================", prefix)