import pytest

from zwds.config import Settings, get_settings
from zwds.tables import (
    BUREAU_BY_STEM_GROUP, LUCKY_STARS, MAJOR_STARS, MALEFIC_STARS, MINOR_STARS, STAR_PINYIN,
    TIER_OF_STAR, YEAR_STEM_TABLE, FiveElementsBureau, star_positions, validate_tables,
)


class TestSettings:

    def test_defaults(self):
        settings = get_settings()
        assert settings == Settings()
        assert settings.activation_base_year == 2025
        assert (settings.compass_start_age, settings.compass_end_age) == (18, 100)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ZWDS_COMPASS_START_AGE", "20")
        monkeypatch.setenv("ZWDS_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.compass_start_age == 20
        assert settings.log_level == "DEBUG"

    def test_invalid_integer(self, monkeypatch):
        monkeypatch.setenv("ZWDS_ACTIVATION_BASE_YEAR", "soon")
        with pytest.raises(ValueError, match="ZWDS_ACTIVATION_BASE_YEAR"):
            Settings.from_env()

    def test_inverted_age_range(self, monkeypatch):
        monkeypatch.setenv("ZWDS_COMPASS_START_AGE", "90")
        monkeypatch.setenv("ZWDS_COMPASS_END_AGE", "80")
        with pytest.raises(ValueError):
            Settings.from_env()


class TestTables:

    def test_tables_validate(self):
        validate_tables()

    def test_star_counts(self):
        assert (len(MAJOR_STARS), len(LUCKY_STARS), len(MALEFIC_STARS), len(MINOR_STARS)) == (14, 7, 6, 5)
        assert len(TIER_OF_STAR) == 32
        assert set(STAR_PINYIN) == set(TIER_OF_STAR)

    def test_qing_yang_and_tuo_luo_flank_lu_cun(self):
        for stem in range(10):
            lu_cun = YEAR_STEM_TABLE["祿存"][stem]
            assert YEAR_STEM_TABLE["擎羊"][stem] == (lu_cun + 1) % 12
            assert YEAR_STEM_TABLE["陀羅"][stem] == (lu_cun - 1) % 12

    def test_every_bureau_reachable(self):
        assert {b for row in BUREAU_BY_STEM_GROUP for b in row} == set(FiveElementsBureau)

    def test_star_positions_cover_all_stars(self):
        positions = star_positions(ziwei=1, year_stem=6, year_branch=6, lunar_month=12, hour=0)
        assert set(positions) == set(TIER_OF_STAR)
        assert positions["天馬"] == 8
        assert positions["火星"] == 1

    def test_bureau_labels(self):
        assert FiveElementsBureau.FIRE_6.chinese == "火六局"
        assert FiveElementsBureau.WOOD_3.english == "Wood 3"
