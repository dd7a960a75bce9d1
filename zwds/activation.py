"""
Yearly activation (流年) and the destiny compass.

Handles:
- Palace activated in a calendar year: (year - base_year) mod 12
- The chart's year-stem Four Transformations located in the chart,
  with a canned reading per (palace, transformation)
- Nominal age and the Da Xian palace covering it
- Decade Four Transformations: the Da Xian palace stem's stars located
  in the chart, read per (target palace, transformation)
- The destiny compass: one record per age over a range

Design principle: every function here is a projection of a finished
ChartData. Nothing is written back to the chart.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from zwds.config import get_settings
from zwds.decade import nominal_age, palace_for_age
from zwds.texts import DESCRIPTION_PLACEHOLDER, DESTINY_DESCRIPTIONS
from zwds.transformations import Transformation, transformations_for_stem


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Activation:
    transformation: Transformation
    star: str
    palace: Optional[object]  # Palace holding the star, None if not placed
    description: str

    def to_dict(self):
        return {
            "transformation": self.transformation.value,
            "star": self.star,
            "palace": self.palace.name.chinese if self.palace else None,
            "branch": self.palace.branch.chinese if self.palace else None,
            "description": self.description,
        }


@dataclass(frozen=True)
class YearDestinyRecord:
    year: int
    age: int
    activated_palace: object
    decade_palace: Optional[object]
    activations: dict  # Transformation → Activation
    decade_activations: dict = field(default_factory=dict)  # from the decade palace stem

    def to_dict(self):
        return {
            "year": self.year,
            "age": self.age,
            "activated_palace": {
                "name": self.activated_palace.name.chinese,
                "english_name": self.activated_palace.name.english,
                "branch": self.activated_palace.branch.chinese,
            },
            "decade_palace": {
                "name": self.decade_palace.name.chinese,
                "stem": self.decade_palace.stem.chinese,
                "da_xian": self.decade_palace.da_xian_label,
            } if self.decade_palace else None,
            "activations": {t.value: a.to_dict() for t, a in self.activations.items()},
            "decade_activations": {t.value: a.to_dict() for t, a in self.decade_activations.items()},
        }


def activated_palace_index(year: int, base_year: Optional[int] = None) -> int:
    """Branch slot activated in `year`; slot 0 in the base year."""
    if base_year is None:
        base_year = get_settings().activation_base_year
    return (year - base_year) % 12


def describe(palace_name: str, transformation: Transformation,
             descriptions: Optional[dict] = None) -> str:
    """Canned reading for a transformation landing in a palace."""
    table = DESTINY_DESCRIPTIONS if descriptions is None else descriptions
    text = table.get((palace_name, transformation))
    if text is None:
        logger.warning("No description for %s %s, using placeholder", palace_name, transformation.value)
        return DESCRIPTION_PLACEHOLDER
    return text


def activation_for_year(chart, year: int, base_year: Optional[int] = None,
                        descriptions: Optional[dict] = None) -> YearDestinyRecord:
    """
    Resolve the activated palace and transformations for a calendar year.

    Args:
        chart: ChartData
        year: calendar year
        base_year: year whose activated slot is 0 (default from settings)
        descriptions: override for the (palace, transformation) text table

    Returns:
        YearDestinyRecord
    """
    index = activated_palace_index(year, base_year)
    age = nominal_age(chart.birth.year, year)
    decade_palace = palace_for_age(chart.palaces, age)
    return YearDestinyRecord(
        year=year,
        age=age,
        activated_palace=chart.palaces[index],
        decade_palace=decade_palace,
        activations=_locate_transformations(chart, chart.year.stem, descriptions),
        decade_activations=decade_activations(chart, decade_palace, descriptions) if decade_palace else {},
    )


def _locate_transformations(chart, stem, descriptions: Optional[dict] = None) -> dict:
    activations = {}
    for transformation, star in transformations_for_stem(stem).items():
        palace = chart.find_star(star)
        if palace is None:
            logger.warning("Transformed star %s is not placed in the chart", star)
            description = DESCRIPTION_PLACEHOLDER
        else:
            description = describe(palace.name.chinese, transformation, descriptions)
        activations[transformation] = Activation(transformation, star, palace, description)
    return activations


def decade_activations(chart, palace, descriptions: Optional[dict] = None) -> dict:
    """
    Four Transformations of a Da Xian palace's own stem.

    Each transformed star is located in the chart and read by the palace
    it lands in, e.g. a 己 decade palace sends 化祿 to wherever 武曲 sits.

    Returns:
        dict of Transformation → Activation
    """
    return _locate_transformations(chart, palace.stem, descriptions)


def destiny_compass(chart, start_age: Optional[int] = None, end_age: Optional[int] = None,
                    base_year: Optional[int] = None) -> list[YearDestinyRecord]:
    """
    One YearDestinyRecord per nominal age from start_age to end_age inclusive.

    Defaults come from settings (18-100).
    """
    settings = get_settings()
    start_age = settings.compass_start_age if start_age is None else start_age
    end_age = settings.compass_end_age if end_age is None else end_age
    if start_age < 1 or end_age < start_age:
        raise ValueError(f"Invalid age range {start_age}-{end_age}")

    return [
        activation_for_year(chart, chart.birth.year + age - 1, base_year)
        for age in range(start_age, end_age + 1)
    ]
