"""Validation of the data specifications that client probes verify on a server."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

__all__ = [
    "DataSpecError",
    "mysql_query",
    "postgres_query",
    "mongo_db_collection",
    "mongo_filter",
    "check_mysql_data",
    "check_postgres_data",
    "check_mongo_data",
    "memcache_validate",
]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")


class DataSpecError(ValueError):
    """A data specification of a client probe is malformed."""


def _is_int(text: str) -> bool:
    if not _DECIMAL_INT.fullmatch(text):
        return False
    return _INT64_MIN <= int(text) <= _INT64_MAX


def _sql_fields(spec: str) -> tuple[str, str, str, str, str]:
    if not spec.strip():
        raise DataSpecError("Empty SQL data")
    fields = spec.split(":")
    if len(fields) != 5:
        raise DataSpecError(
            f"Invalid SQL data - [{spec}]. (syntax: database:table:field:key:value)"
        )
    db, table, column, key, value = fields
    if not _is_int(value):
        raise DataSpecError(f"Invalid SQL data - [{spec}], the value must be int")
    return db, table, column, key, value


def mysql_query(spec: str) -> str:
    """Turn ``database:table:column:key:value`` into a MySQL SELECT statement."""
    db, table, column, key, value = _sql_fields(spec)
    return f"SELECT {column} FROM {db}.{table} WHERE {key} = {value}"


def postgres_query(spec: str) -> tuple[str, str]:
    """Turn ``database:table:column:key:value`` into ``(database, SELECT statement)``."""
    db, table, column, key, value = _sql_fields(spec)
    return db, f"SELECT {column} FROM {table} WHERE {key} = {value}"


def mongo_db_collection(spec: str) -> tuple[str, str]:
    """Split ``database:collection`` into its two names."""
    if not spec.strip():
        raise DataSpecError("Database Collection name is empty")
    fields = spec.split(":")
    if len(fields) != 2:
        raise DataSpecError(f"Invalid Format - [{spec}] (syntax: database.collection) ")
    return fields[0], fields[1]


def mongo_filter(text: str) -> dict[str, Any]:
    """Parse a JSON query document used to look up a MongoDB record."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataSpecError(f"invalid JSON input; {exc}") from exc
    if not isinstance(document, dict):
        raise DataSpecError("invalid JSON input; the query must be a document")
    return document


def check_mysql_data(data: Mapping[str, str]) -> None:
    """Validate every key of the MySQL data specification."""
    for key in data:
        mysql_query(key)


def check_postgres_data(data: Mapping[str, str]) -> None:
    """Validate every key of the PostgreSQL data specification."""
    for key in data:
        postgres_query(key)


def check_mongo_data(data: Mapping[str, str]) -> None:
    """Validate every collection name and query document of the MongoDB data."""
    for key, value in data.items():
        mongo_db_collection(key)
        mongo_filter(value)


def _text(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def memcache_validate(
    expected: Mapping[str, str], items: Mapping[str, bytes | str]
) -> tuple[bool, str]:
    """Compare fetched memcache items with the expected values.

    An expected value that is blank only requires the key to be present.
    """
    if len(items) != len(expected):
        return False, f"Number of fetched keys {len(items)} expected {len(expected)}"
    for key, raw in items.items():
        want = expected.get(key, "")
        if not want.strip():
            continue
        got = _text(raw)
        if got != want:
            return False, f"Memcache value for key {key} returned {got}, expected {want}"
    return True, "Memcache key values match successfully"