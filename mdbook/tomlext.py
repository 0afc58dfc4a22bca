"""Dotted-key access to nested TOML tables held as plain dictionaries."""

from __future__ import annotations

from typing import Any

__all__ = ["split_key", "read_key", "insert_key", "delete_key"]


def split_key(key: str) -> tuple[str, str] | None:
    """Split ``key`` at its first dot, or return ``None`` if it has no dot."""
    head, dot, tail = key.partition(".")
    if not dot:
        return None
    return head, tail


def read_key(table: Any, key: str) -> Any | None:
    """Read the value at a dotted ``key``, or ``None`` if it is absent."""
    if not isinstance(table, dict):
        return None
    parts = split_key(key)
    if parts is None:
        return table.get(key)
    head, tail = parts
    if head not in table:
        return None
    return read_key(table[head], tail)


def insert_key(table: Any, key: str, value: Any) -> dict:
    """Insert ``value`` at a dotted ``key`` and return the table.

    Anything along the way that is not a table is replaced by an empty table,
    so a non-table ``table`` argument yields a fresh dictionary.
    """
    if not isinstance(table, dict):
        table = {}
    parts = split_key(key)
    if parts is None:
        table[key] = value
    else:
        head, tail = parts
        table[head] = insert_key(table.get(head), tail, value)
    return table


def delete_key(table: Any, key: str) -> Any | None:
    """Remove and return the value at a dotted ``key``, or ``None`` if absent."""
    if not isinstance(table, dict):
        return None
    parts = split_key(key)
    if parts is None:
        return table.pop(key, None)
    head, tail = parts
    if head not in table:
        return None
    return delete_key(table[head], tail)