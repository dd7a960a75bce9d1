"""
Da Xian (大限) decade cycles.

Direction follows the same rule as BaZi luck pillars:
  Yang year + Male   → forward
  Yin year  + Female → forward
  Yang year + Female → reverse
  Yin year  + Male   → reverse

Forward charts start at age 1 and walk the palaces in branch order (子 → 亥);
reverse charts start at age 10 and walk from 亥 back to 子. Each palace
holds one 10-year window.
"""

import dataclasses
import logging
from typing import Optional, Sequence

from zwds.birth import Gender


logger = logging.getLogger(__name__)

FORWARD_START_AGE = 1
REVERSE_START_AGE = 10
DECADE_YEARS = 10


def is_forward(gender: Gender, year_stem_index: int) -> bool:
    is_yang_year = year_stem_index % 2 == 0
    return (is_yang_year and gender is Gender.MALE) or (not is_yang_year and gender is Gender.FEMALE)


def decade_windows(gender: Gender, year_stem_index: int) -> list[tuple[int, int]]:
    """(start_age, end_age) for each branch slot 0-11."""
    forward = is_forward(gender, year_stem_index)
    start = FORWARD_START_AGE if forward else REVERSE_START_AGE
    windows = []
    for branch in range(12):
        step = branch if forward else 11 - branch
        age_start = start + step * DECADE_YEARS
        windows.append((age_start, age_start + DECADE_YEARS - 1))
    return windows


def assign_da_xian(palaces: Sequence, gender: Gender, year_stem_index: int) -> tuple:
    """
    Return copies of `palaces` with their `da_xian` window filled in.

    Args:
        palaces: 12 palaces indexed by branch slot
        gender: chart gender
        year_stem_index: year stem index 0-9

    Stars and names are untouched.
    """
    if len(palaces) != 12:
        raise ValueError(f"Expected 12 palaces, got {len(palaces)}")
    windows = decade_windows(gender, year_stem_index)
    logger.debug("Da Xian %s from age %d",
                 "forward" if is_forward(gender, year_stem_index) else "reverse",
                 min(w[0] for w in windows))
    return tuple(dataclasses.replace(palace, da_xian=windows[palace.branch.index])
                 for palace in palaces)


def nominal_age(birth_year: int, year: int) -> int:
    """虛歲: 1 in the birth year, +1 every calendar year."""
    return year - birth_year + 1


def palace_for_age(palaces: Sequence, age: int) -> Optional[object]:
    """Palace whose Da Xian window contains `age`, or None if outside all windows."""
    for palace in palaces:
        if palace.da_xian and palace.da_xian[0] <= age <= palace.da_xian[1]:
            return palace
    return None
