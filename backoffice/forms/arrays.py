"""List helpers for multi-value form fields. None of them mutate their input."""
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def safe_append(item: T, items: List[T]) -> List[T]:
    return items if item in items else [*items, item]


def remove_item(item: T, items: Iterable[T]) -> List[T]:
    return [element for element in items if element != item]


def contains(item: T, items: Iterable[T]) -> bool:
    return item in items


def ensure_array(value: Optional[List[T]]) -> List[T]:
    return value if isinstance(value, list) else []


def arrays_equal(first: List[T], second: List[T]) -> bool:
    """Same items regardless of order."""
    if len(first) != len(second):
        return False
    return sorted(first, key=str) == sorted(second, key=str)
