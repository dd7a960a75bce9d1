"""
Heavenly Stems and Earthly Branches.

Handles:
- Canonical stem / branch tables and label lookups
- Year stem-branch from the solar year
- Clock hour (or branch label) to hour branch
- Day pillar (Julian Day sexagenary cycle) and hour pillar (Five Rats)
- Palace stems (Five Tigers)

Every lookup that receives a label outside the canonical sets raises
InvalidPositionError.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union

import swisseph as swe

from zwds.errors import InvalidPositionError


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"

    @property
    def chinese(self) -> str:
        return "陽" if self is Polarity.YANG else "陰"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return self.chinese


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    zodiac: str  # 生肖 character
    element: Element
    polarity: Polarity
    index: int  # 0-11 in the cycle

    def __str__(self):
        return self.chinese


@dataclass(frozen=True)
class StemBranch:
    stem: HeavenlyStem
    branch: EarthlyBranch

    @property
    def label(self) -> str:
        return f"{self.stem.chinese}{self.branch.chinese}"

    def __str__(self):
        return self.label

    def to_dict(self):
        return {
            "label": self.label,
            "stem": self.stem.chinese,
            "branch": self.branch.chinese,
            "pinyin": f"{self.stem.pinyin} {self.branch.pinyin}",
        }


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = [
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
]

EARTHLY_BRANCHES = [
    EarthlyBranch("子", "Zi", "Rat", "鼠", Element.WATER, Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", "牛", Element.EARTH, Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", "虎", Element.WOOD, Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", "兔", Element.WOOD, Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", "龍", Element.EARTH, Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", "蛇", Element.FIRE, Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", "馬", Element.FIRE, Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", "羊", Element.EARTH, Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", "猴", Element.METAL, Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", "雞", Element.METAL, Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", "狗", Element.EARTH, Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", "豬", Element.WATER, Polarity.YIN, 11),
]

# Lookup helpers
STEM_BY_CHINESE = {s.chinese: s for s in HEAVENLY_STEMS}
STEM_BY_PINYIN = {s.pinyin.lower(): s for s in HEAVENLY_STEMS}
BRANCH_BY_CHINESE = {b.chinese: b for b in EARTHLY_BRANCHES}
BRANCH_BY_PINYIN = {b.pinyin.lower(): b for b in EARTHLY_BRANCHES}


def stem_of(label: Union[str, int, HeavenlyStem]) -> HeavenlyStem:
    """
    Resolve a stem from its Chinese character, pinyin or cycle index.

    Raises:
        InvalidPositionError: label is not one of the ten stems
    """
    if isinstance(label, HeavenlyStem):
        return label
    if isinstance(label, int) and not isinstance(label, bool):
        if 0 <= label < 10:
            return HEAVENLY_STEMS[label]
        raise InvalidPositionError(f"Stem index must be 0-9, got {label}")
    if isinstance(label, str):
        stem = STEM_BY_CHINESE.get(label.strip()) or STEM_BY_PINYIN.get(label.strip().lower())
        if stem is not None:
            return stem
    raise InvalidPositionError(f"Unknown heavenly stem: {label!r}")


def branch_of(label: Union[str, int, EarthlyBranch]) -> EarthlyBranch:
    """
    Resolve a branch from its Chinese character, pinyin or cycle index.

    Raises:
        InvalidPositionError: label is not one of the twelve branches
    """
    if isinstance(label, EarthlyBranch):
        return label
    if isinstance(label, int) and not isinstance(label, bool):
        if 0 <= label < 12:
            return EARTHLY_BRANCHES[label]
        raise InvalidPositionError(f"Branch index must be 0-11, got {label}")
    if isinstance(label, str):
        branch = BRANCH_BY_CHINESE.get(label.strip()) or BRANCH_BY_PINYIN.get(label.strip().lower())
        if branch is not None:
            return branch
    raise InvalidPositionError(f"Unknown earthly branch: {label!r}")


# ============================================================
# YEAR / DAY / HOUR
# ============================================================

def year_stem_branch(year: int) -> StemBranch:
    """
    Stem-branch of a solar year.

    The chart takes its year pillar from the Gregorian year number itself,
    not from Li Chun or lunar new year.
    """
    # Year 4 CE was Jia Zi, the start of the cycle
    return StemBranch(
        stem=HEAVENLY_STEMS[(year - 4) % 10],
        branch=EARTHLY_BRANCHES[(year - 4) % 12],
    )


def zodiac_animal(year: int) -> str:
    """生肖 character for a solar year."""
    return EARTHLY_BRANCHES[(year - 4) % 12].zodiac


def hour_branch(hour: Union[int, str, EarthlyBranch]) -> EarthlyBranch:
    """
    Map a birth hour to its two-hour branch slot.

    Accepts a 0-23 clock hour (int or digit string) or a branch label
    ("子", "子時", "Zi").

    23:00-00:59 = Zi (Rat)      = branch 0
    01:00-02:59 = Chou (Ox)     = branch 1
    03:00-04:59 = Yin (Tiger)   = branch 2
    ...
    21:00-22:59 = Hai (Pig)     = branch 11
    """
    if isinstance(hour, EarthlyBranch):
        return hour
    if isinstance(hour, str):
        text = hour.strip()
        if text.isdigit():
            hour = int(text)
        else:
            if text.endswith(("時", "时")):
                text = text[:-1]
            return branch_of(text)
    if isinstance(hour, bool) or not isinstance(hour, int):
        raise InvalidPositionError(f"Hour must be a clock hour or branch label, got {hour!r}")
    if not 0 <= hour <= 23:
        raise InvalidPositionError(f"Clock hour must be 0-23, got {hour}")
    return EARTHLY_BRANCHES[((hour + 1) // 2) % 12]


def day_stem_branch(day: date) -> StemBranch:
    """
    Day pillar from the Julian Day Number.

    The JDN is taken at noon so int() lands on the civil day;
    (jdn + 49) % 60 gives the sexagenary index, e.g. 1990-03-15 = 己卯.
    """
    jdn = int(swe.julday(day.year, day.month, day.day, 12.0))
    sexagenary = (jdn + 49) % 60
    return StemBranch(
        stem=HEAVENLY_STEMS[sexagenary % 10],
        branch=EARTHLY_BRANCHES[sexagenary % 12],
    )


# Five Rats: stem of the Zi hour for each day stem
_ZI_START_STEMS = {
    0: 0, 5: 0,   # Jia/Ji day → Jia Zi hour
    1: 2, 6: 2,   # Yi/Geng day → Bing Zi hour
    2: 4, 7: 4,   # Bing/Xin day → Wu Zi hour
    3: 6, 8: 6,   # Ding/Ren day → Geng Zi hour
    4: 8, 9: 8,   # Wu/Gui day → Ren Zi hour
}

# Five Tigers: stem of the Yin palace/month for each year stem
_TIGER_START_STEMS = {
    0: 2, 5: 2,   # Jia/Ji year → Bing Tiger
    1: 4, 6: 4,   # Yi/Geng year → Wu Tiger
    2: 6, 7: 6,   # Bing/Xin year → Geng Tiger
    3: 8, 8: 8,   # Ding/Ren year → Ren Tiger
    4: 0, 9: 0,   # Wu/Gui year → Jia Tiger
}


def hour_stem_branch(day_stem_index: int, branch_index: int) -> StemBranch:
    """Hour pillar using the Five Rats rule."""
    stem_index = (_ZI_START_STEMS[day_stem_index] + branch_index) % 10
    return StemBranch(stem=HEAVENLY_STEMS[stem_index], branch=EARTHLY_BRANCHES[branch_index])


def palace_stem(year_stem_index: int, branch_index: int) -> HeavenlyStem:
    """
    Stem attached to the palace sitting on `branch_index`.

    Palaces take the month stems of the Five Tigers rule: the Yin (寅) palace
    gets the Tiger stem of the year, and the stems run on from there.
    Zi and Chou come after Hai, so they continue the cycle.
    """
    months_from_tiger = (branch_index - 2) % 12
    return HEAVENLY_STEMS[(_TIGER_START_STEMS[year_stem_index] + months_from_tiger) % 10]


# Quick verification
if __name__ == "__main__":
    print(f"1990: {year_stem_branch(1990)} ({zodiac_animal(1990)})")
    print(f"1990-03-15 day pillar: {day_stem_branch(date(1990, 3, 15))}")
    for h in (0, 1, 12, 23):
        print(f"{h:02d}:00 → {hour_branch(h)}")
    print("Palace stems for a Geng year:",
          " ".join(f"{palace_stem(6, i)}{EARTHLY_BRANCHES[i]}" for i in range(12)))
