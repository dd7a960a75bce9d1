"""
Health hints from the Health Palace (疾厄宮).

Stars in the Health Palace map to body parts through a static table;
each affected part gets a canned tip. An empty Health Palace falls back
to the Parents Palace (父母宮) and the result says so.
"""

import logging
from dataclasses import dataclass, field

from zwds.chart import HEALTH_PALACE, PARENTS_PALACE
from zwds.texts import HEALTH_TIP_PLACEHOLDER, HEALTH_TIPS, STAR_BODY_PARTS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthTip:
    body_part: str
    chinese_name: str
    english_name: str
    description: str
    associated_stars: tuple

    def to_dict(self):
        return {
            "body_part": self.body_part,
            "chinese_name": self.chinese_name,
            "english_name": self.english_name,
            "description": self.description,
            "associated_stars": list(self.associated_stars),
        }


@dataclass(frozen=True)
class HealthAnalysisResult:
    affected_body_parts: list[str] = field(default_factory=list)
    health_tips: list[HealthTip] = field(default_factory=list)
    stars_in_health_palace: list[str] = field(default_factory=list)
    used_parents_palace: bool = False

    def to_dict(self):
        return {
            "affected_body_parts": self.affected_body_parts,
            "health_tips": [t.to_dict() for t in self.health_tips],
            "stars_in_health_palace": self.stars_in_health_palace,
            "used_parents_palace": self.used_parents_palace,
        }


def analyze_health(chart) -> HealthAnalysisResult:
    """
    Body parts and tips for the stars in the Health Palace.

    Body parts keep first-seen order across the palace's stars.
    """
    palace = chart.palace(HEALTH_PALACE)
    used_parents = False
    if not palace.stars:
        logger.info("Health Palace is empty, reading the Parents Palace instead")
        palace = chart.palace(PARENTS_PALACE)
        used_parents = True

    star_names = palace.star_names
    stars_by_part = {}
    for star in star_names:
        for part in STAR_BODY_PARTS.get(star, ()):
            stars_by_part.setdefault(part, []).append(star)

    tips = []
    for part, stars in stars_by_part.items():
        if part in HEALTH_TIPS:
            english, description = HEALTH_TIPS[part]
        else:
            logger.warning("No health tip for body part %s, using placeholder", part)
            english, description = part, HEALTH_TIP_PLACEHOLDER
        tips.append(HealthTip(
            body_part=part,
            chinese_name=part,
            english_name=english,
            description=description,
            associated_stars=tuple(stars),
        ))

    return HealthAnalysisResult(
        affected_body_parts=list(stars_by_part),
        health_tips=tips,
        stars_in_health_palace=star_names,
        used_parents_palace=used_parents,
    )
