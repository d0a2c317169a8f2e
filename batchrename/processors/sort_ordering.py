"""File ordering strategies applied before numbering."""

import re

from batchrename.models.files import SourceFile
from batchrename.models.template import SortStrategy


_DIGIT_RUNS = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """Build a sort key that compares digit runs by value and text runs case-insensitively.

    Each run becomes a `(kind, value)` pair with digits (kind 0) ordering before text
    (kind 1) at the same position. Tuple comparison makes a shorter run sequence that
    is a prefix of a longer one sort first.

    Examples:
        "IMG_2.jpg" -> ((1, "img_"), (0, 2), (1, ".jpg"))
    """
    key = []
    for run in _DIGIT_RUNS.split(name):
        if not run:
            continue
        if run.isdecimal():
            key.append((0, int(run)))
        else:
            key.append((1, run.casefold()))
    return tuple(key)


def order_files(files: list[SourceFile], strategy: SortStrategy) -> list[SourceFile]:
    """Order files by the given strategy.

    All strategies are stable: files that compare equal keep their input order.

    Args:
        files: Files in selection order.
        strategy: Ordering to apply.

    Returns:
        A new list; the input is not modified.
    """
    if strategy is SortStrategy.NATURAL:
        return sorted(files, key=lambda f: natural_key(f.name))
    if strategy is SortStrategy.DATE_MODIFIED:
        return sorted(files, key=lambda f: f.last_modified, reverse=True)
    if strategy is SortStrategy.SIZE:
        return sorted(files, key=lambda f: f.size_bytes, reverse=True)
    return list(files)
