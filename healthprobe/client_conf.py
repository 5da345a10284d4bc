"""Configuration of the native-client probes: driver types and connection options."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import yaml

__all__ = [
    "ClientConfigError",
    "DriverType",
    "ClientOptions",
    "driver_to_yaml",
    "driver_from_yaml",
    "driver_to_json",
    "driver_from_json",
]

_ENUM_LABEL = "Client Driver"
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")


class ClientConfigError(ValueError):
    """A client probe is not configured correctly."""


class DriverType(IntEnum):
    """The kind of server a native-client probe talks to."""

    UNKNOWN = 0
    MYSQL = 1
    REDIS = 2
    MEMCACHE = 3
    KAFKA = 4
    MONGO = 5
    POSTGRESQL = 6
    ZOOKEEPER = 7

    def __str__(self) -> str:
        return _DRIVER_NAMES[self]

    @classmethod
    def parse(cls, name: str) -> DriverType:
        """Return the driver with this name, or UNKNOWN if there is none."""
        return _DRIVERS_BY_NAME.get(name, cls.UNKNOWN)


_DRIVER_NAMES: dict[DriverType, str] = {
    DriverType.MYSQL: "mysql",
    DriverType.REDIS: "redis",
    DriverType.MEMCACHE: "memcache",
    DriverType.KAFKA: "kafka",
    DriverType.MONGO: "mongo",
    DriverType.POSTGRESQL: "postgres",
    DriverType.ZOOKEEPER: "zookeeper",
    DriverType.UNKNOWN: "unknown",
}

_DRIVERS_BY_NAME: dict[str, DriverType] = {name: d for d, name in _DRIVER_NAMES.items()}


def _as_driver(driver: Any) -> DriverType:
    if isinstance(driver, DriverType):
        return driver
    try:
        return DriverType(driver)
    except (ValueError, TypeError):
        raise ClientConfigError(f"{driver!r} is not a valid {_ENUM_LABEL}") from None


def _from_name(value: Any) -> DriverType:
    if not isinstance(value, str):
        raise ClientConfigError(f"{value!r} is not a valid {_ENUM_LABEL}")
    try:
        return _DRIVERS_BY_NAME[value]
    except KeyError:
        raise ClientConfigError(f"{value!r} is not a valid {_ENUM_LABEL}") from None


def driver_to_yaml(driver: Any) -> str:
    """Serialise a driver as a YAML document."""
    return f"{_as_driver(driver)}\n"


def driver_from_yaml(text: str) -> DriverType:
    """Read a driver from a YAML document; raise ClientConfigError if it is not one."""
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ClientConfigError(f"invalid {_ENUM_LABEL}: {exc}") from exc
    return _from_name(value)


def driver_to_json(driver: Any) -> str:
    """Serialise a driver as a JSON string."""
    return json.dumps(str(_as_driver(driver)))


def driver_from_json(text: str) -> DriverType:
    """Read a driver from a JSON string; raise ClientConfigError if it is not one."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ClientConfigError(f"invalid {_ENUM_LABEL}: {exc}") from exc
    return _from_name(value)


def _split_host_port(address: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port``; raise ValueError with the reason."""
    colon = address.rfind(":")
    if colon < 0:
        raise ValueError("missing port in address")
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError("missing ']' in address")
        if end + 1 == len(address):
            raise ValueError("missing port in address")
        if end + 1 != colon:
            if address[end + 1] == ":":
                raise ValueError("too many colons in address")
            raise ValueError("missing port in address")
        host = address[1:end]
        if "[" in address[1:end] or "]" in address[end + 1 :]:
            raise ValueError("unexpected '[' or ']' in address")
    else:
        host = address[:colon]
        if ":" in host:
            raise ValueError("too many colons in address")
        if "[" in host or "]" in host:
            raise ValueError("unexpected '[' or ']' in address")
    return host, address[colon + 1 :]


def _atoi(text: str) -> int | None:
    if not _DECIMAL_INT.fullmatch(text):
        return None
    value = int(text)
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


@dataclass
class ClientOptions:
    """Connection options shared by every native-client probe."""

    host: str = ""
    driver: DriverType = DriverType.UNKNOWN
    username: str = ""
    password: str = ""
    data: dict[str, str] = field(default_factory=dict)
    probe_name: str = ""

    def check(self) -> None:
        """Validate host, port and driver; raise ClientConfigError on the first problem."""
        try:
            _, port = _split_host_port(self.host)
        except ValueError as exc:
            raise ClientConfigError(
                f"Invalid Host: {self.host}. address {self.host}: {exc}"
            ) from None
        number = _atoi(port)
        if number is None or number < 1 or number > 65535:
            raise ClientConfigError(f"Invalid Port: {port}")
        if self.driver == DriverType.UNKNOWN:
            raise ClientConfigError("Unknown driver")