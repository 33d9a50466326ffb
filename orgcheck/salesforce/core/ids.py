"""Salesforce identifier helpers."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")

CASE_SENSITIVE_ID_LENGTH = 18
CASE_SAFE_ID_LENGTH = 15


def case_safe_id(record_id: str | None) -> str | None:
    """Reduce an 18-character id to its 15-character form.

    Any other length (or a missing id) is returned unchanged, so the function
    is idempotent.

    Examples:
        >>> case_safe_id("0013000000abcdeAAA")
        '0013000000abcde'
        >>> case_safe_id("0013000000abcde")
        '0013000000abcde'
    """
    if record_id and len(record_id) == CASE_SENSITIVE_ID_LENGTH:
        return record_id[:CASE_SAFE_ID_LENGTH]
    return record_id


def chunk(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive groups of at most ``size`` items.

    A non-positive size yields nothing.
    """
    if size <= 0:
        return
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def chunk_quoted(ids: Sequence[str], size: int) -> Iterator[str]:
    """Yield groups of ids rendered for a SOQL ``IN (...)`` clause.

    Examples:
        >>> list(chunk_quoted(["a", "b", "c"], 2))
        ["'a','b'", "'c'"]
    """
    for group in chunk(ids, size):
        yield ",".join(f"'{record_id}'" for record_id in group)
