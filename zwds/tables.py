"""
Star placement tables.

Every table is an explicit lookup keyed by a named dimension (Ziwei branch,
Tianfu branch, year stem, year branch, lunar month, hour branch) and yields
a branch index 0-11. Shapes are checked once at import.

Tiers:
- major: 14 stars of the Ziwei and Tianfu groups
- malefic: 6 stars keyed by year stem, year-branch group × hour, or hour
- lucky: 7 stars keyed by hour, lunar month or year stem
- minor: 5 stars keyed by year branch
"""

from enum import Enum


# ============================================================
# STAR NAMES
# ============================================================

class StarTier(Enum):
    MAJOR = "major"
    MALEFIC = "malefic"
    MINOR = "minor"
    LUCKY = "lucky"


ZIWEI_GROUP = ("紫微", "天機", "太陽", "武曲", "天同", "廉貞")
TIANFU_GROUP = ("天府", "太陰", "貪狼", "巨門", "天相", "天梁", "七殺", "破軍")
MAJOR_STARS = ZIWEI_GROUP + TIANFU_GROUP
MALEFIC_STARS = ("擎羊", "陀羅", "火星", "鈴星", "天空", "地劫")
MINOR_STARS = ("天馬", "龍池", "鳳閣", "紅鸞", "天喜")
LUCKY_STARS = ("文昌", "文曲", "左輔", "右弼", "天魁", "天鉞", "祿存")

STARS_BY_TIER = {
    StarTier.MAJOR: MAJOR_STARS,
    StarTier.MALEFIC: MALEFIC_STARS,
    StarTier.MINOR: MINOR_STARS,
    StarTier.LUCKY: LUCKY_STARS,
}

TIER_OF_STAR = {name: tier for tier, names in STARS_BY_TIER.items() for name in names}

STAR_PINYIN = {
    "紫微": "Zi Wei", "天機": "Tian Ji", "太陽": "Tai Yang", "武曲": "Wu Qu",
    "天同": "Tian Tong", "廉貞": "Lian Zhen", "天府": "Tian Fu", "太陰": "Tai Yin",
    "貪狼": "Tan Lang", "巨門": "Ju Men", "天相": "Tian Xiang", "天梁": "Tian Liang",
    "七殺": "Qi Sha", "破軍": "Po Jun",
    "擎羊": "Qing Yang", "陀羅": "Tuo Luo", "火星": "Huo Xing", "鈴星": "Ling Xing",
    "天空": "Tian Kong", "地劫": "Di Jie",
    "天馬": "Tian Ma", "龍池": "Long Chi", "鳳閣": "Feng Ge", "紅鸞": "Hong Luan",
    "天喜": "Tian Xi",
    "文昌": "Wen Chang", "文曲": "Wen Qu", "左輔": "Zuo Fu", "右弼": "You Bi",
    "天魁": "Tian Kui", "天鉞": "Tian Yue", "祿存": "Lu Cun",
}


# ============================================================
# FIVE ELEMENTS BUREAU
# ============================================================

class FiveElementsBureau(Enum):
    WATER_2 = 2
    WOOD_3 = 3
    METAL_4 = 4
    EARTH_5 = 5
    FIRE_6 = 6

    @property
    def chinese(self) -> str:
        return {
            FiveElementsBureau.WATER_2: "水二局",
            FiveElementsBureau.WOOD_3: "木三局",
            FiveElementsBureau.METAL_4: "金四局",
            FiveElementsBureau.EARTH_5: "土五局",
            FiveElementsBureau.FIRE_6: "火六局",
        }[self]

    @property
    def english(self) -> str:
        element, number = self.name.split("_")
        return f"{element.capitalize()} {number}"


_W, _F, _E, _M, _T = (FiveElementsBureau.WATER_2, FiveElementsBureau.FIRE_6,
                      FiveElementsBureau.EARTH_5, FiveElementsBureau.METAL_4,
                      FiveElementsBureau.WOOD_3)

# [year stem % 5][life branch // 2]: Na Yin element of the Life Palace stem-branch
BUREAU_BY_STEM_GROUP = (
    (_W, _F, _T, _E, _M, _F),  # Jia / Ji
    (_F, _E, _M, _T, _W, _E),  # Yi / Geng
    (_E, _T, _W, _M, _F, _T),  # Bing / Xin
    (_T, _M, _F, _W, _E, _M),  # Ding / Ren
    (_M, _W, _E, _F, _T, _W),  # Wu / Gui
)

# [bureau][lunar day - 1] → Ziwei branch
ZIWEI_BY_BUREAU = {
    FiveElementsBureau.WATER_2: (1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8,
                                 9, 9, 10, 10, 11, 11, 0, 0, 1, 1, 2, 2, 3, 3, 4),
    FiveElementsBureau.FIRE_6: (9, 6, 11, 4, 1, 2, 10, 7, 0, 5, 2, 3, 11, 8, 1,
                                6, 3, 4, 0, 9, 2, 7, 4, 5, 1, 10, 3, 8, 5, 6),
    FiveElementsBureau.EARTH_5: (6, 11, 4, 1, 2, 7, 0, 5, 2, 3, 8, 1, 6, 3, 4,
                                 9, 2, 7, 4, 5, 10, 3, 8, 5, 6, 11, 4, 9, 6, 7),
    FiveElementsBureau.WOOD_3: (4, 1, 2, 5, 2, 3, 6, 3, 4, 7, 4, 5, 8, 5, 6,
                                9, 6, 7, 10, 7, 8, 11, 8, 9, 0, 9, 10, 1, 10, 11),
    FiveElementsBureau.METAL_4: (11, 4, 1, 2, 0, 5, 2, 3, 1, 6, 3, 4, 2, 7, 4,
                                 5, 3, 8, 5, 6, 4, 9, 6, 7, 5, 10, 7, 8, 6, 11),
}


# ============================================================
# MAJOR STARS
# ============================================================

# [star][ziwei branch]; 天府 mirrors 紫微 across the Yin-Shen axis
ZIWEI_GROUP_TABLE = {
    "紫微": (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
    "天機": (11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10),
    "太陽": (9, 10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8),
    "武曲": (8, 9, 10, 11, 0, 1, 2, 3, 4, 5, 6, 7),
    "天同": (7, 8, 9, 10, 11, 0, 1, 2, 3, 4, 5, 6),
    "廉貞": (4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3),
}

TIANFU_BY_ZIWEI = (4, 3, 2, 1, 0, 11, 10, 9, 8, 7, 6, 5)

# [star][tianfu branch]
TIANFU_GROUP_TABLE = {
    "天府": (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
    "太陰": (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0),
    "貪狼": (2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1),
    "巨門": (3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2),
    "天相": (4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3),
    "天梁": (5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3, 4),
    "七殺": (6, 7, 8, 9, 10, 11, 0, 1, 2, 3, 4, 5),
    "破軍": (10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
}


# ============================================================
# AUXILIARY STARS
# ============================================================

# [star][year stem]
YEAR_STEM_TABLE = {
    "祿存": (2, 3, 5, 6, 5, 6, 8, 9, 11, 0),
    "擎羊": (3, 4, 6, 7, 6, 7, 9, 10, 0, 1),
    "陀羅": (1, 2, 4, 5, 4, 5, 7, 8, 10, 11),
    "天魁": (1, 0, 11, 11, 1, 0, 1, 6, 3, 3),
    "天鉞": (7, 8, 9, 9, 7, 8, 7, 2, 5, 5),
}

# [star][hour branch]
HOUR_TABLE = {
    "文昌": (10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 11),
    "文曲": (4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3),
    "天空": (11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
    "地劫": (11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10),
}

# [star][lunar month - 1]
MONTH_TABLE = {
    "左輔": (4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3),
    "右弼": (10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 11),
}

# [star][year branch % 4][hour branch]
# groups: 0 申子辰, 1 巳酉丑, 2 寅午戌, 3 亥卯未
YEAR_GROUP_HOUR_TABLE = {
    "火星": (
        (2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1),
        (3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2),
        (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0),
        (9, 10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8),
    ),
    "鈴星": (
        (10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
        (10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
        (3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2),
        (10, 11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    ),
}

# [star][year branch]
YEAR_BRANCH_TABLE = {
    "天馬": (2, 11, 8, 5, 2, 11, 8, 5, 2, 11, 8, 5),
    "龍池": (4, 5, 6, 7, 8, 9, 10, 11, 0, 1, 2, 3),
    "鳳閣": (10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 11),
    "紅鸞": (3, 2, 1, 0, 11, 10, 9, 8, 7, 6, 5, 4),
    "天喜": (9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 11, 10),
}


# ============================================================
# POSITION LOOKUP
# ============================================================

def star_positions(ziwei: int, year_stem: int, year_branch: int,
                   lunar_month: int, hour: int) -> dict[str, int]:
    """
    Branch index of every star for one chart.

    Args:
        ziwei: Ziwei branch (0-11)
        year_stem: year stem index (0-9)
        year_branch: year branch index (0-11)
        lunar_month: 1-12
        hour: hour branch index (0-11)
    """
    tianfu = TIANFU_BY_ZIWEI[ziwei]
    positions = {}
    for name, row in ZIWEI_GROUP_TABLE.items():
        positions[name] = row[ziwei]
    for name, row in TIANFU_GROUP_TABLE.items():
        positions[name] = row[tianfu]
    for name, row in YEAR_STEM_TABLE.items():
        positions[name] = row[year_stem]
    for name, row in HOUR_TABLE.items():
        positions[name] = row[hour]
    for name, row in MONTH_TABLE.items():
        positions[name] = row[lunar_month - 1]
    for name, rows in YEAR_GROUP_HOUR_TABLE.items():
        positions[name] = rows[year_branch % 4][hour]
    for name, row in YEAR_BRANCH_TABLE.items():
        positions[name] = row[year_branch]
    return positions


# ============================================================
# SHAPE VALIDATION
# ============================================================

def _check_row(table_name: str, key, row, length: int) -> None:
    if len(row) != length:
        raise ValueError(f"{table_name}[{key}] has {len(row)} entries, expected {length}")
    bad = [v for v in row if not 0 <= v <= 11]
    if bad:
        raise ValueError(f"{table_name}[{key}] has branch values outside 0-11: {bad}")


def validate_tables() -> None:
    """Check every table's dimensions and value range. Raises ValueError."""
    if len(BUREAU_BY_STEM_GROUP) != 5 or any(len(row) != 6 for row in BUREAU_BY_STEM_GROUP):
        raise ValueError("BUREAU_BY_STEM_GROUP must be 5 x 6")
    for bureau in FiveElementsBureau:
        _check_row("ZIWEI_BY_BUREAU", bureau.name, ZIWEI_BY_BUREAU[bureau], 30)
    _check_row("TIANFU_BY_ZIWEI", "-", TIANFU_BY_ZIWEI, 12)
    for name, table, length in (
        ("ZIWEI_GROUP_TABLE", ZIWEI_GROUP_TABLE, 12),
        ("TIANFU_GROUP_TABLE", TIANFU_GROUP_TABLE, 12),
        ("YEAR_STEM_TABLE", YEAR_STEM_TABLE, 10),
        ("HOUR_TABLE", HOUR_TABLE, 12),
        ("MONTH_TABLE", MONTH_TABLE, 12),
        ("YEAR_BRANCH_TABLE", YEAR_BRANCH_TABLE, 12),
    ):
        for key, row in table.items():
            _check_row(name, key, row, length)
    for key, rows in YEAR_GROUP_HOUR_TABLE.items():
        if len(rows) != 4:
            raise ValueError(f"YEAR_GROUP_HOUR_TABLE[{key}] must have 4 year-branch groups")
        for group, row in enumerate(rows):
            _check_row("YEAR_GROUP_HOUR_TABLE", f"{key}][{group}", row, 12)

    placed = (set(ZIWEI_GROUP_TABLE) | set(TIANFU_GROUP_TABLE) | set(YEAR_STEM_TABLE)
              | set(HOUR_TABLE) | set(MONTH_TABLE) | set(YEAR_GROUP_HOUR_TABLE)
              | set(YEAR_BRANCH_TABLE))
    if placed != set(TIER_OF_STAR):
        raise ValueError(f"Placement tables and star tiers disagree: {sorted(placed ^ set(TIER_OF_STAR))}")


validate_tables()
