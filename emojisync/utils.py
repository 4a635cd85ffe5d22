from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunks(items: Sequence[T], size: int) -> List[Sequence[T]]:
    """Split ``items`` into consecutive slices of at most ``size`` elements."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [items[i:i + size] for i in range(0, len(items), size)]
