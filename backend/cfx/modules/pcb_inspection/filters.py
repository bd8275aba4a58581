"""Externalization policy for inspection tree payloads.

The in-memory model always holds real lists. What reaches the external
representation is decided here, per field, when a node is encoded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar

ItemT = TypeVar("ItemT")

FieldPredicate = Callable[[Any], bool]


def is_non_empty(value: Any) -> bool:
    """Emit only collections that hold at least one item."""
    return value is not None and len(value) > 0


def present(items: Iterable[ItemT | None]) -> Iterator[ItemT]:
    """Iterate ``items`` skipping ``None`` entries appended after parsing."""
    return (item for item in items if item is not None)


def drop_null_items(items: list[Any]) -> list[Any]:
    return list(present(items))


def coerce_collection(value: Any) -> Any:
    """Parse-side counterpart: an absent or null collection reads as empty."""
    if value is None:
        return []
    if isinstance(value, list):
        return drop_null_items(value)
    return value


def apply_field_filters(
    payload: dict[str, Any],
    predicates: Mapping[str, FieldPredicate],
) -> dict[str, Any]:
    """Drop every key whose predicate rejects its value."""
    for key, predicate in predicates.items():
        if key in payload and not predicate(payload[key]):
            del payload[key]
    return payload
