import dataclasses

import pytest

from zwds.birth import Gender
from zwds.decade import assign_da_xian, decade_windows, is_forward, nominal_age, palace_for_age


class TestDirection:

    @pytest.mark.parametrize("gender, stem, forward", [
        (Gender.MALE, 6, True),     # 庚 yang
        (Gender.FEMALE, 6, False),
        (Gender.MALE, 7, False),    # 辛 yin
        (Gender.FEMALE, 7, True),
    ])
    def test_rule(self, gender, stem, forward):
        assert is_forward(gender, stem) is forward


class TestWindows:

    def test_forward_covers_1_to_120(self):
        windows = decade_windows(Gender.MALE, 0)
        assert windows[0] == (1, 10)
        assert windows[11] == (111, 120)
        ages = sorted(age for start, end in windows for age in range(start, end + 1))
        assert ages == list(range(1, 121))

    def test_reverse_covers_10_to_129(self):
        windows = decade_windows(Gender.FEMALE, 0)
        assert windows[11] == (10, 19)
        assert windows[0] == (120, 129)
        ages = sorted(age for start, end in windows for age in range(start, end + 1))
        assert ages == list(range(10, 130))

    def test_golden_female_is_reverse(self, golden_chart):
        # Given: same birth, female
        palaces = assign_da_xian(golden_chart.palaces, Gender.FEMALE, 6)

        # Then: stars untouched, windows reversed
        assert [p.stars for p in palaces] == [p.stars for p in golden_chart.palaces]
        assert palaces[11].da_xian_label == "10-19"
        assert palaces[0].da_xian_label == "120-129"

    def test_assign_returns_new_palaces(self, golden_chart):
        cleared = tuple(dataclasses.replace(p, da_xian=None) for p in golden_chart.palaces)
        assigned = assign_da_xian(cleared, Gender.MALE, 6)
        assert all(p.da_xian is None for p in cleared)
        assert assigned == golden_chart.palaces

    def test_needs_twelve_palaces(self, golden_chart):
        with pytest.raises(ValueError):
            assign_da_xian(golden_chart.palaces[:11], Gender.MALE, 6)


class TestAgeLookup:

    def test_nominal_age(self):
        assert nominal_age(1990, 1990) == 1
        assert nominal_age(1990, 2025) == 36

    def test_palace_for_age(self, golden_chart):
        assert palace_for_age(golden_chart.palaces, 36).branch.chinese == "卯"
        assert palace_for_age(golden_chart.palaces, 1).branch.chinese == "子"
        assert palace_for_age(golden_chart.palaces, 121) is None
