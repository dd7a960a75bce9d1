from datetime import date

import pytest

from zwds.errors import InvalidPositionError
from zwds.stems import (
    branch_of, day_stem_branch, hour_branch, hour_stem_branch, palace_stem,
    stem_of, year_stem_branch, zodiac_animal,
)


class TestYearStemBranch:

    @pytest.mark.parametrize("year, label, animal", [
        (1984, "甲子", "鼠"),
        (1990, "庚午", "馬"),
        (2025, "乙巳", "蛇"),
        (1900, "庚子", "鼠"),
    ])
    def test_cycle(self, year, label, animal):
        assert year_stem_branch(year).label == label
        assert zodiac_animal(year) == animal

    def test_repeats_every_sixty_years(self):
        assert year_stem_branch(1930) == year_stem_branch(1990)


class TestHourBranch:

    @pytest.mark.parametrize("hour, expected", [
        (23, "子"), (0, "子"), (1, "丑"), (2, "丑"), (3, "寅"),
        (11, "午"), (12, "午"), (21, "亥"), (22, "亥"),
    ])
    def test_clock_hours(self, hour, expected):
        assert hour_branch(hour).chinese == expected

    @pytest.mark.parametrize("label", ["子", "子時", "Zi", "zi", " 子 "])
    def test_labels(self, label):
        assert hour_branch(label).index == 0

    def test_digit_string(self):
        assert hour_branch("13").chinese == "未"

    @pytest.mark.parametrize("bad", [24, -1, "Foo", "甲", 3.5, None, True])
    def test_invalid(self, bad):
        with pytest.raises(InvalidPositionError):
            hour_branch(bad)


class TestLookups:

    def test_stem_by_any_label(self):
        assert stem_of("庚") is stem_of("Geng") is stem_of(6)

    def test_branch_by_any_label(self):
        assert branch_of("午") is branch_of("wu") is branch_of(6)

    @pytest.mark.parametrize("bad", ["X", 10, -1, ""])
    def test_unknown_stem(self, bad):
        with pytest.raises(InvalidPositionError):
            stem_of(bad)

    @pytest.mark.parametrize("bad", ["X", 12, ""])
    def test_unknown_branch(self, bad):
        with pytest.raises(InvalidPositionError):
            branch_of(bad)


class TestPillars:

    @pytest.mark.parametrize("day, expected", [
        (date(1949, 10, 1), "甲子"),
        (date(2000, 1, 1), "戊午"),
        (date(1990, 1, 1), "丙寅"),
        (date(1990, 3, 15), "己卯"),
        (date(1986, 6, 19), "甲午"),
    ])
    def test_day_pillar(self, day, expected):
        assert day_stem_branch(day).label == expected

    def test_day_pillar_advances_one_per_day(self):
        # 癸亥 is followed by 甲子
        assert day_stem_branch(date(1949, 9, 30)).label == "癸亥"

    def test_hour_pillar_five_rats(self):
        # 丙 day → 戊子 hour
        assert hour_stem_branch(2, 0).label == "戊子"
        # 甲 day → 甲子 hour
        assert hour_stem_branch(0, 0).label == "甲子"

    def test_palace_stems_five_tigers(self):
        # Geng year: 寅 palace takes 戊, 子 and 丑 continue after 亥
        labels = [palace_stem(6, i).chinese for i in range(12)]
        assert labels == ["戊", "己", "戊", "己", "庚", "辛", "壬", "癸", "甲", "乙", "丙", "丁"]

    def test_palace_stems_jia_year(self):
        assert palace_stem(0, 2).chinese == "丙"
        assert palace_stem(5, 2).chinese == "丙"
