"""Thresholds and shared parsing helpers of the host probe."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass

__all__ = [
    "DEFAULT_CPU_THRESHOLD",
    "DEFAULT_MEM_THRESHOLD",
    "DEFAULT_DISK_THRESHOLD",
    "DEFAULT_LOAD_THRESHOLD",
    "Threshold",
    "ResourceUsage",
    "first",
    "str_float",
    "str_int",
    "add_message",
]

DEFAULT_CPU_THRESHOLD = 0.8
DEFAULT_MEM_THRESHOLD = 0.8
DEFAULT_DISK_THRESHOLD = 0.95
DEFAULT_LOAD_THRESHOLD = 0.8

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")


@dataclass
class Threshold:
    """Alert thresholds of a host; zero or missing means "use the default"."""

    cpu: float = 0.0
    mem: float = 0.0
    disk: float = 0.0
    load: dict[str, float] | None = None

    def __str__(self) -> str:
        load = "/".join(f"{v:.2f}" for v in (self.load or {}).values())
        return f"CPU: {self.cpu:.2f}, Mem: {self.mem:.2f}, Disk: {self.disk:.2f}, Load: {load}"


@dataclass
class ResourceUsage:
    """Used and total amount of a resource with its usage percentage."""

    used: int = 0
    total: int = 0
    usage: float = 0.0
    tag: str = ""


def first(text: str) -> str:
    """Return the first space-separated field of the stripped text."""
    return text.strip().split(" ")[0]


def str_float(text: str) -> float:
    """Parse a single-precision number; unparsable text gives 0.0."""
    try:
        value = float(text.strip())
    except ValueError:
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def str_int(text: str) -> int:
    """Parse a decimal 32-bit integer; unparsable text gives 0, overflow saturates."""
    stripped = text.strip()
    if not _DECIMAL_INT.fullmatch(stripped):
        return 0
    return max(_INT32_MIN, min(_INT32_MAX, int(stripped)))


def add_message(msg: str, message: str) -> str:
    """Join two messages with ``" | "`` when both are non-empty."""
    if not msg or not message:
        return message
    return f"{msg} | {message}"