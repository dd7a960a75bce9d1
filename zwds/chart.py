"""
Zi Wei Dou Shu natal chart construction.

Handles:
- Life / Body palace anchors from lunar month and hour branch
- Five Elements Bureau and the Ziwei anchor
- Palace names rotated from the Life Palace, palace stems (Five Tigers)
- Placement of the 32 stars in four tiers, with year-stem transformations
- Da Xian windows
- Chart header (dates, zodiac, bureau, yin-yang gender, age)

Design principle: build_chart is a pure function of its arguments.
Nothing is cached and no input is mutated.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from zwds.birth import BirthInput, Gender
from zwds.decade import assign_da_xian
from zwds.errors import InvalidPositionError
from zwds.lunar import LunarDate, solar_to_lunar
from zwds.stems import (
    EARTHLY_BRANCHES, EarthlyBranch, HeavenlyStem, StemBranch,
    branch_of, day_stem_branch, hour_branch, hour_stem_branch, palace_stem,
    stem_of, year_stem_branch,
)
from zwds.tables import (
    BUREAU_BY_STEM_GROUP, STAR_PINYIN, STARS_BY_TIER, TIER_OF_STAR, ZIWEI_BY_BUREAU,
    FiveElementsBureau, StarTier, star_positions,
)
from zwds.transformations import Transformation, transformations_for_stem


logger = logging.getLogger(__name__)


# ============================================================
# PALACE NAMES
# ============================================================

@dataclass(frozen=True)
class PalaceRole:
    chinese: str
    english: str
    offset: int  # branches after the Life Palace

    def __str__(self):
        return self.chinese


PALACE_ROLES = [
    PalaceRole("命宮", "Life", 0),
    PalaceRole("父母宮", "Parents", 1),
    PalaceRole("福德宮", "Wellbeing", 2),
    PalaceRole("田宅宮", "Property", 3),
    PalaceRole("官祿宮", "Career", 4),
    PalaceRole("交友宮", "Friends", 5),
    PalaceRole("遷移宮", "Travel", 6),
    PalaceRole("疾厄宮", "Health", 7),
    PalaceRole("財帛宮", "Wealth", 8),
    PalaceRole("子女宮", "Children", 9),
    PalaceRole("夫妻宮", "Spouse", 10),
    PalaceRole("兄弟宮", "Siblings", 11),
]

ROLE_BY_NAME = {r.chinese: r for r in PALACE_ROLES}
ROLE_BY_NAME.update({r.english.lower(): r for r in PALACE_ROLES})

LIFE_PALACE = "命宮"
HEALTH_PALACE = "疾厄宮"
PARENTS_PALACE = "父母宮"


def palace_role(name: str) -> PalaceRole:
    """Resolve a palace by Chinese or English name."""
    role = ROLE_BY_NAME.get(name) or ROLE_BY_NAME.get(name.lower())
    if role is None:
        raise InvalidPositionError(f"Unknown palace name: {name!r}")
    return role


# ============================================================
# CHART DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Star:
    name: str
    tier: StarTier
    transformation: Optional[Transformation] = None

    @property
    def label(self) -> str:
        """Name with its transformation suffix, e.g. 太陽化祿."""
        return self.name + (self.transformation.value if self.transformation else "")

    @property
    def pinyin(self) -> str:
        return STAR_PINYIN[self.name]

    def to_dict(self):
        return {
            "name": self.name,
            "pinyin": self.pinyin,
            "tier": self.tier.value,
            "transformation": self.transformation.value if self.transformation else None,
        }


@dataclass(frozen=True)
class Palace:
    branch: EarthlyBranch
    stem: HeavenlyStem
    name: PalaceRole
    is_body: bool
    major: tuple
    malefic: tuple
    minor: tuple
    lucky: tuple
    da_xian: Optional[tuple[int, int]] = None

    @property
    def stars(self) -> tuple:
        """All stars: major, malefic, minor, lucky."""
        return self.major + self.malefic + self.minor + self.lucky

    @property
    def star_names(self) -> list[str]:
        return [s.name for s in self.stars]

    @property
    def label(self) -> str:
        return f"{self.stem.chinese}{self.branch.chinese}"

    @property
    def da_xian_label(self) -> Optional[str]:
        if self.da_xian is None:
            return None
        return f"{self.da_xian[0]}-{self.da_xian[1]}"

    def to_dict(self):
        return {
            "branch": self.branch.chinese,
            "stem": self.stem.chinese,
            "label": self.label,
            "name": self.name.chinese,
            "english_name": self.name.english,
            "is_body": self.is_body,
            "stars": {
                StarTier.MAJOR.value: [s.to_dict() for s in self.major],
                StarTier.MALEFIC.value: [s.to_dict() for s in self.malefic],
                StarTier.MINOR.value: [s.to_dict() for s in self.minor],
                StarTier.LUCKY.value: [s.to_dict() for s in self.lucky],
            },
            "star_all": [s.label for s in self.stars],
            "da_xian": self.da_xian_label,
        }


@dataclass(frozen=True)
class ChartData:
    birth: BirthInput
    lunar: LunarDate
    year: StemBranch
    day: StemBranch
    hour: StemBranch
    bureau: FiveElementsBureau
    life_branch: int
    body_branch: int
    ziwei_branch: int
    palaces: tuple  # 12 Palace, indexed by branch
    age: int

    @property
    def name(self) -> str:
        return self.birth.name

    @property
    def solar_date(self) -> str:
        b = self.birth
        return f"{b.year}年{b.month}月{b.day}日{self.hour.branch.chinese}時"

    @property
    def lunar_date(self) -> str:
        leap = "閏" if self.lunar.is_leap else ""
        return f"{self.year.label}年{leap}{self.lunar.month}月{self.lunar.day}日{self.hour.branch.chinese}時"

    @property
    def zodiac(self) -> str:
        return f"{self.year.branch.zodiac}【{self.year.label}】"

    @property
    def five_element(self) -> str:
        return self.bureau.chinese

    @property
    def yin_yang_gender(self) -> str:
        return f"{self.year.stem.polarity.chinese}{self.birth.gender.chinese}"

    @property
    def life_palace(self) -> Palace:
        return self.palaces[self.life_branch]

    @property
    def body_palace(self) -> Palace:
        return self.palaces[self.body_branch]

    def palace(self, name: str) -> Palace:
        """Palace by Chinese or English name, e.g. "疾厄宮" or "Health"."""
        role = palace_role(name)
        return self.palaces[(self.life_branch + role.offset) % 12]

    def find_star(self, star_name: str) -> Optional[Palace]:
        """Palace holding `star_name`, or None."""
        for palace in self.palaces:
            if star_name in palace.star_names:
                return palace
        return None

    def to_dict(self):
        return {
            "name": self.name,
            "age": self.age,
            "birth": self.birth.to_dict(),
            "solar_date": self.solar_date,
            "lunar_date": self.lunar_date,
            "lunar": self.lunar.to_dict(),
            "zodiac": self.zodiac,
            "five_element": self.five_element,
            "yin_yang_gender": self.yin_yang_gender,
            "pillars": {
                "year": self.year.to_dict(),
                "day": self.day.to_dict(),
                "hour": self.hour.to_dict(),
            },
            "life_palace": EARTHLY_BRANCHES[self.life_branch].chinese,
            "body_palace": EARTHLY_BRANCHES[self.body_branch].chinese,
            "ziwei": EARTHLY_BRANCHES[self.ziwei_branch].chinese,
            "palaces": [p.to_dict() for p in self.palaces],
        }


# ============================================================
# ANCHORS
# ============================================================

def life_palace_branch(lunar_month: int, hour_index: int) -> int:
    """Count from 寅 forward to the birth month, then back by the hour."""
    return (12 - hour_index + 1 + lunar_month) % 12


def body_palace_branch(lunar_month: int, hour_index: int) -> int:
    """Count from 寅 forward to the birth month, then forward by the hour."""
    return (lunar_month + hour_index + 1) % 12


def bureau_for(year_stem_index: int, life_branch: int) -> FiveElementsBureau:
    """Na Yin element of the Life Palace stem-branch pair."""
    return BUREAU_BY_STEM_GROUP[year_stem_index % 5][life_branch // 2]


def ziwei_branch_for(bureau: FiveElementsBureau, lunar_day: int) -> int:
    if not 1 <= lunar_day <= 30:
        raise ValueError(f"Lunar day must be 1-30, got {lunar_day}")
    return ZIWEI_BY_BUREAU[bureau][lunar_day - 1]


def role_at(life_branch: int, branch_index: int) -> PalaceRole:
    return PALACE_ROLES[(branch_index - life_branch) % 12]


def completed_years(birth: date, today: date) -> int:
    return today.year - birth.year - (
        1 if (today.month, today.day) < (birth.month, birth.day) else 0
    )


# ============================================================
# STAR PLACEMENT
# ============================================================

def place_stars(ziwei: int, year_stem: int, year_branch: int, lunar_month: int,
                hour: int) -> list[dict[StarTier, tuple]]:
    """
    Stars for each branch slot, grouped by tier.

    Within a tier, stars keep the canonical table order. Transformation
    tags come from the year stem. Duplicate names within a palace tier
    are collapsed.
    """
    positions = star_positions(ziwei, year_stem, year_branch, lunar_month, hour)
    transformed = {name: t for t, name in transformations_for_stem(year_stem).items()}

    slots = [{tier: [] for tier in StarTier} for _ in range(12)]
    for tier, names in STARS_BY_TIER.items():
        for name in names:
            slot = slots[positions[name]][tier]
            if any(s.name == name for s in slot):
                continue
            slot.append(Star(name, TIER_OF_STAR[name], transformed.get(name)))

    return [{tier: tuple(stars) for tier, stars in slot.items()} for slot in slots]


# ============================================================
# CHART BUILDING
# ============================================================

def _resolve_year_pillar(pillar: Union[StemBranch, str]) -> StemBranch:
    """Accept a StemBranch or a two-character label like "庚午"."""
    if isinstance(pillar, StemBranch):
        return pillar
    if isinstance(pillar, str) and len(pillar.strip()) == 2:
        text = pillar.strip()
        return StemBranch(stem_of(text[0]), branch_of(text[1]))
    raise InvalidPositionError(f"Year pillar must be a stem-branch pair, got {pillar!r}")


def build_chart(lunar_date: LunarDate, hour: Union[int, str, EarthlyBranch],
                gender: Union[Gender, str], birth: BirthInput,
                year_pillar: Union[StemBranch, str, None] = None,
                as_of: Optional[date] = None) -> ChartData:
    """
    Build the 12-palace chart.

    Args:
        lunar_date: birth date on the lunar calendar
        hour: clock hour 0-23 or branch label
        gender: "M" / "F" or Gender
        birth: solar birth input, carried into the header
        year_pillar: stem-branch of the birth year (default: from the solar year)
        as_of: date the age is computed against (default: today)

    Raises:
        InvalidPositionError: hour or year stem/branch label is not canonical
    """
    hour_br = hour_branch(hour)
    year_pillar = _resolve_year_pillar(year_pillar or year_stem_branch(birth.year))
    gender = Gender.parse(gender)
    stem, branch = year_pillar.stem, year_pillar.branch

    life = life_palace_branch(lunar_date.month, hour_br.index)
    body = body_palace_branch(lunar_date.month, hour_br.index)
    bureau = bureau_for(stem.index, life)
    ziwei = ziwei_branch_for(bureau, lunar_date.day)
    logger.debug("Life %s, Body %s, %s, Ziwei %s",
                 EARTHLY_BRANCHES[life], EARTHLY_BRANCHES[body], bureau.chinese, EARTHLY_BRANCHES[ziwei])

    stars = place_stars(ziwei, stem.index, branch.index, lunar_date.month, hour_br.index)
    palaces = tuple(
        Palace(
            branch=EARTHLY_BRANCHES[i],
            stem=palace_stem(stem.index, i),
            name=role_at(life, i),
            is_body=(i == body),
            major=stars[i][StarTier.MAJOR],
            malefic=stars[i][StarTier.MALEFIC],
            minor=stars[i][StarTier.MINOR],
            lucky=stars[i][StarTier.LUCKY],
        )
        for i in range(12)
    )
    palaces = assign_da_xian(palaces, gender, stem.index)

    day = day_stem_branch(birth.solar_date)
    return ChartData(
        birth=birth,
        lunar=lunar_date,
        year=year_pillar,
        day=day,
        hour=hour_stem_branch(day.stem.index, hour_br.index),
        bureau=bureau,
        life_branch=life,
        body_branch=body,
        ziwei_branch=ziwei,
        palaces=palaces,
        age=completed_years(birth.solar_date, as_of or date.today()),
    )


def compute_chart(birth: BirthInput, as_of: Optional[date] = None) -> ChartData:
    """
    Full pipeline: solar birth input → lunar date → chart.

    The year pillar comes from the solar year, so a birth in January
    takes the new year's stem even though the lunar year has not turned.
    """
    lunar = solar_to_lunar(birth.year, birth.month, birth.day)
    logger.debug("%s → lunar %s", birth.solar_date.isoformat(), lunar)
    return build_chart(lunar, birth.branch, birth.gender, birth,
                       year_pillar=year_stem_branch(birth.year), as_of=as_of)
