"""Canonical display order for personnel.

Category rank first (RSI, ARSI, HC, PC, then anything unknown), then the
employee code in natural order so that "PC 9" sorts before "PC 10".
"""

from __future__ import annotations

import re
from typing import Iterable, Union

from ..core.constants import UNKNOWN_CATEGORY_RANK
from ..core.enums import Category
from .model import Personnel

CATEGORY_RANK: dict[Category, int] = {
    Category.RSI: 1,
    Category.ARSI: 2,
    Category.HC: 3,
    Category.PC: 4,
}

_RUNS = re.compile(r"(\d+)")


def category_rank(category: Union[Category, str, None]) -> int:
    try:
        known = Category(category)
    except ValueError:
        return UNKNOWN_CATEGORY_RANK
    return CATEGORY_RANK[known]


_SPACE, _PUNCT, _DIGIT, _LETTER = range(4)


def _char_class(ch: str) -> int:
    if ch.isspace():
        return _SPACE
    if ch.isalpha():
        return _LETTER
    return _PUNCT


def natural_key(code: str) -> tuple:
    """Collation-style key: whitespace < punctuation < digits < letters.

    A digit run is one element compared by value ("PC 9" < "PC 10"); letters
    compare case-insensitively.
    """
    parts = []
    for i, run in enumerate(_RUNS.split(code or "")):
        if not run:
            continue
        if i % 2:
            parts.append((_DIGIT, int(run), ""))
        else:
            parts.extend((_char_class(ch), 0, ch.casefold()) for ch in run)
    return tuple(parts)


def ranking_key(person: Personnel) -> tuple:
    # Raw code breaks ties ("PC 01" vs "PC 1"); swapcase puts lowercase first.
    return (
        category_rank(person.category),
        natural_key(person.employee_id),
        person.employee_id.swapcase(),
    )


def rank_personnel(personnel: Iterable[Personnel]) -> list[Personnel]:
    return sorted(personnel, key=ranking_key)
