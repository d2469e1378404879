from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, List, Tuple


def group_rows(
    rows: Iterable[Any],
    key: Callable[[Any], Hashable],
    child: Callable[[Any], Any],
) -> Dict[Hashable, Tuple[Any, List[Any]]]:
    """
    Group flat joined rows by parent key.

    Returns {key: (first_row, [child, ...])} in first-seen key order. A row
    whose child value is None (the parent side of an empty LEFT JOIN) still
    registers its parent but adds nothing to the list, so a parent with no
    children maps to an empty list.
    """
    groups: Dict[Hashable, Tuple[Any, List[Any]]] = {}
    for row in rows:
        k = key(row)
        if k not in groups:
            groups[k] = (row, [])
        value = child(row)
        if value is not None:
            groups[k][1].append(value)
    return groups
