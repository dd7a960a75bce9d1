"""
Four Transformations (四化).

Handles:
- Stem → (化祿, 化權, 化科, 化忌) star table
- Transformation of a single star under a stem
- Self-transformation (自化): a palace's own stem transforming its stars
- Opposite-palace influence: a palace's stem transforming the stars
  across the chart from it

The chart-level functions take anything shaped like ChartData (a
`palaces` sequence of 12 palaces indexed by branch).
"""

from enum import Enum
from typing import Optional, Union

from zwds.errors import InvalidPositionError, UnknownStemError
from zwds.stems import HeavenlyStem, stem_of


class Transformation(Enum):
    LU = "化祿"
    QUAN = "化權"
    KE = "化科"
    JI = "化忌"

    @property
    def short(self) -> str:
        return self.value[1]

    @property
    def english(self) -> str:
        return {
            Transformation.LU: "Fortune",
            Transformation.QUAN: "Power",
            Transformation.KE: "Fame",
            Transformation.JI: "Obstacle",
        }[self]


# stem → stars taking (祿, 權, 科, 忌)
FOUR_TRANSFORMATIONS = {
    "甲": ("廉貞", "破軍", "武曲", "太陽"),
    "乙": ("天機", "天梁", "紫微", "太陰"),
    "丙": ("天同", "天機", "文昌", "廉貞"),
    "丁": ("太陰", "天同", "天機", "巨門"),
    "戊": ("貪狼", "太陰", "右弼", "天機"),
    "己": ("武曲", "貪狼", "天梁", "文曲"),
    "庚": ("太陽", "武曲", "太陰", "天同"),
    "辛": ("巨門", "太陽", "文曲", "文昌"),
    "壬": ("天梁", "紫微", "左輔", "武曲"),
    "癸": ("破軍", "巨門", "太陰", "貪狼"),
}


def transformations_for_stem(stem: Union[str, int, HeavenlyStem]) -> dict[Transformation, str]:
    """
    Stars transformed by a heavenly stem.

    Args:
        stem: Chinese character, pinyin, index 0-9 or HeavenlyStem

    Returns:
        {Transformation.LU: star, QUAN: star, KE: star, JI: star}

    Raises:
        UnknownStemError: stem is not one of the ten
    """
    try:
        resolved = stem_of(stem)
    except InvalidPositionError as e:
        raise UnknownStemError(str(e)) from e
    return dict(zip(Transformation, FOUR_TRANSFORMATIONS[resolved.chinese]))


def transformation_of(star_name: str, stem: Union[str, int, HeavenlyStem]) -> Optional[Transformation]:
    """Transformation the stem gives to `star_name`, or None."""
    for transformation, name in transformations_for_stem(stem).items():
        if name == star_name:
            return transformation
    return None


def _transformed_stars(stem: HeavenlyStem, palace) -> list[dict]:
    hits = []
    for star in palace.stars:
        transformation = transformation_of(star.name, stem)
        if transformation is not None:
            hits.append({"star": star.name, "transformation": transformation.value})
    return hits


def self_transformations(chart) -> list[dict]:
    """
    Stars transformed by the stem of the palace they sit in (自化).

    Returns one entry per palace with at least one hit:
        {"palace": name, "branch": branch, "stem": stem, "stars": [...]}
    """
    results = []
    for palace in chart.palaces:
        hits = _transformed_stars(palace.stem, palace)
        if hits:
            results.append({
                "palace": palace.name.chinese,
                "branch": palace.branch.chinese,
                "stem": palace.stem.chinese,
                "stars": hits,
            })
    return results


def opposite_influences(chart) -> list[dict]:
    """
    Stars in the opposite palace transformed by this palace's stem.

    Returns entries of the form:
        {"palace": name, "stem": stem, "opposite_palace": name, "stars": [...]}
    """
    results = []
    for palace in chart.palaces:
        opposite = chart.palaces[(palace.branch.index + 6) % 12]
        hits = _transformed_stars(palace.stem, opposite)
        if hits:
            results.append({
                "palace": palace.name.chinese,
                "stem": palace.stem.chinese,
                "opposite_palace": opposite.name.chinese,
                "stars": hits,
            })
    return results
