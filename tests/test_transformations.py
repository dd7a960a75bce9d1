import pytest

from zwds.errors import UnknownStemError
from zwds.stems import HEAVENLY_STEMS
from zwds.tables import LUCKY_STARS, MAJOR_STARS
from zwds.transformations import (
    Transformation, opposite_influences, self_transformations, transformation_of,
    transformations_for_stem,
)


class TestFourTransformations:

    @pytest.mark.parametrize("stem", HEAVENLY_STEMS, ids=lambda s: s.pinyin)
    def test_four_distinct_stars_per_stem(self, stem):
        result = transformations_for_stem(stem)
        assert list(result) == [Transformation.LU, Transformation.QUAN, Transformation.KE, Transformation.JI]
        assert len(set(result.values())) == 4
        assert set(result.values()) <= set(MAJOR_STARS) | set(LUCKY_STARS)

    def test_geng(self):
        assert transformations_for_stem("庚") == {
            Transformation.LU: "太陽",
            Transformation.QUAN: "武曲",
            Transformation.KE: "太陰",
            Transformation.JI: "天同",
        }

    def test_lookup_by_pinyin_and_index(self):
        assert transformations_for_stem("Jia") == transformations_for_stem(0) == transformations_for_stem("甲")

    @pytest.mark.parametrize("bad", ["子", "X", 10])
    def test_unknown_stem(self, bad):
        with pytest.raises(UnknownStemError):
            transformations_for_stem(bad)

    def test_transformation_of(self):
        assert transformation_of("廉貞", "甲") is Transformation.LU
        assert transformation_of("紫微", "甲") is None

    def test_short_and_english_names(self):
        assert Transformation.JI.short == "忌"
        assert Transformation.LU.english == "Fortune"


class TestPalaceStemOverlays:
    """自化 and opposite-palace influence on the golden chart"""

    def test_self_transformation(self, golden_chart):
        # 己丑 Life Palace holds no 己 stars; 乙酉 Wealth holds none of 天機/天梁/紫微/太陰;
        # 丙戌 Children holds 文昌, which 丙 turns into 化科
        result = {entry["branch"]: entry for entry in self_transformations(golden_chart)}
        assert result["戌"]["stars"] == [{"star": "文昌", "transformation": "化科"}]
        assert "丑" not in result

    def test_opposite_influence(self, golden_chart):
        # 甲申 Health Palace faces 寅 (empty); 戊子 Siblings faces 午 (巨門): no hit
        # 庚辰 Property faces 戌 holding 太陽 → 化祿
        result = {entry["palace"]: entry for entry in opposite_influences(golden_chart)}
        assert result["田宅宮"]["opposite_palace"] == "子女宮"
        assert {"star": "太陽", "transformation": "化祿"} in result["田宅宮"]["stars"]
        assert "疾厄宮" not in result
