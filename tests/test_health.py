import dataclasses
import logging

from zwds.chart import Star
from zwds.health import analyze_health
from zwds.tables import StarTier
from zwds.texts import HEALTH_TIPS, STAR_BODY_PARTS


def _with_palace(chart, branch_index, **stars):
    palaces = list(chart.palaces)
    palaces[branch_index] = dataclasses.replace(palaces[branch_index], **stars)
    return dataclasses.replace(chart, palaces=tuple(palaces))


EMPTY = dict(major=(), malefic=(), minor=(), lucky=())


class TestAnalyzeHealth:

    def test_golden_health_palace(self, golden_chart):
        # Given: 疾厄宮 in 申 holds 天同, 天梁, 天馬, 祿存
        result = analyze_health(golden_chart)

        # Then
        assert result.used_parents_palace is False
        assert result.stars_in_health_palace == ["天同", "天梁", "天馬", "祿存"]
        assert result.affected_body_parts == ["耳", "膀胱", "關節"]
        ears = result.health_tips[0]
        assert ears.english_name == "Ears"
        assert ears.associated_stars == ("天同",)
        assert ears.body_part == "耳"
        assert ears.description == HEALTH_TIPS["耳"][1]

    def test_shared_body_part_collects_stars(self, golden_chart):
        # Given: 文昌 and 天梁 both touch the joints
        chart = _with_palace(golden_chart, 8, major=(Star("天梁", StarTier.MAJOR),), malefic=(), minor=(),
                             lucky=(Star("文昌", StarTier.LUCKY),))

        # When
        result = analyze_health(chart)

        # Then
        joints = next(t for t in result.health_tips if t.chinese_name == "關節")
        assert joints.associated_stars == ("天梁", "文昌")
        assert result.affected_body_parts == ["關節", "神經系統"]

    def test_empty_health_palace_falls_back_to_parents(self, golden_chart):
        # Given: Health Palace (申) emptied; Parents Palace (寅) given 太陽
        chart = _with_palace(golden_chart, 8, **EMPTY)
        chart = _with_palace(chart, 2, major=(Star("太陽", StarTier.MAJOR),))

        # When
        result = analyze_health(chart)

        # Then
        assert result.used_parents_palace is True
        assert result.stars_in_health_palace == ["太陽"]
        assert result.affected_body_parts == list(STAR_BODY_PARTS["太陽"])

    def test_both_palaces_empty(self, golden_chart):
        # Golden Parents Palace is already empty
        result = analyze_health(_with_palace(golden_chart, 8, **EMPTY))
        assert result.used_parents_palace is True
        assert result.affected_body_parts == []
        assert result.health_tips == []

    def test_missing_tip_uses_placeholder(self, golden_chart, monkeypatch, caplog):
        monkeypatch.delitem(HEALTH_TIPS, "耳")
        with caplog.at_level(logging.WARNING, logger="zwds.health"):
            result = analyze_health(golden_chart)
        ears = result.health_tips[0]
        assert ears.chinese_name == "耳"
        assert "No health tip" in caplog.text

    def test_every_mapped_part_has_a_tip(self):
        parts = {part for parts in STAR_BODY_PARTS.values() for part in parts}
        assert parts <= set(HEALTH_TIPS)

    def test_to_dict(self, golden_chart):
        data = analyze_health(golden_chart).to_dict()
        assert data["used_parents_palace"] is False
        assert data["health_tips"][0]["associated_stars"] == ["天同"]
