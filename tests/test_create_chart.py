import json
from datetime import date

import pytest

from zwds.create_chart import (
    birth_input_for, chart_from_saved, chart_payload, compute_and_save_chart, load_user_chart,
)
from zwds.errors import InvalidBirthInputError
from zwds.generate_context import generate_reading_context, main as context_main


class TestBirthInputFor:

    def test_direct_hour(self):
        birth, lmt = birth_input_for("Alex", "1990-01-01", "male", hour="子")
        assert (birth.year, birth.month, birth.day, birth.branch.chinese) == (1990, 1, 1, "子")
        assert lmt is None

    def test_clock_time_without_coordinates(self):
        birth, lmt = birth_input_for("Alex", "1990-01-01", "M", birth_time="13:40")
        assert birth.branch.chinese == "未"
        assert lmt is None

    def test_lmt_shifts_hour_branch(self):
        # 01:10 China time at 108.37°E is 00:23 LMT: 子 instead of 丑
        birth, lmt = birth_input_for("Alex", "1990-01-01", "M", birth_time="01:10",
                                     longitude=108.37, utc_offset=8)
        assert birth.branch.chinese == "子"
        assert lmt["lmt_correction_minutes"] == pytest.approx(-46.52)

    def test_needs_hour_or_time(self):
        with pytest.raises(InvalidBirthInputError):
            birth_input_for("Alex", "1990-01-01", "M")

    def test_bad_date_format(self):
        with pytest.raises(InvalidBirthInputError):
            birth_input_for("Alex", "01/01/1990", "M", hour=0)


class TestSaveAndLoad:

    def test_round_trip(self, tmp_path, golden_chart):
        # When
        summary = compute_and_save_chart("Golden User", "1990-01-01", "M", hour="子", chart_dir=tmp_path)

        # Then
        path = tmp_path / "golden_user.json"
        assert summary["path"] == str(path)
        assert summary["five_element"] == "火六局"
        with open(path, encoding="utf-8") as f:
            saved = json.load(f)
        assert saved["ziwei"]["lunar_date"] == "庚午年12月5日子時"
        assert load_user_chart("Golden User", tmp_path) == saved

        chart = chart_from_saved(saved, as_of=date(2025, 6, 1))
        assert chart.palaces == golden_chart.palaces

    def test_chart_dir_from_environment(self, tmp_path, monkeypatch):
        from zwds.config import get_settings

        monkeypatch.setenv("ZWDS_CHART_DIR", str(tmp_path / "charts"))
        get_settings.cache_clear()
        summary = compute_and_save_chart("env", "1990-01-01", "F", hour=3)
        assert summary["path"] == str(tmp_path / "charts" / "env.json")

    def test_missing_chart(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_user_chart("nobody", tmp_path)


class TestPayloads:

    def test_chart_payload_sections(self, golden_chart):
        payload = chart_payload(golden_chart, 2025)
        assert set(payload) == {"chart", "activation", "health", "self_transformations", "opposite_influences"}
        assert payload["activation"]["year"] == 2025
        json.dumps(payload, ensure_ascii=False)

    def test_reading_context(self, tmp_path):
        compute_and_save_chart("alex", "1990-01-01", "M", hour="子", chart_dir=tmp_path)

        context = generate_reading_context("alex", 2025, span=2, chart_dir=tmp_path)

        assert [y["year"] for y in context["years"]] == [2025, 2026]
        assert context["current_decade"]["da_xian"] == "31-40"
        assert context["chart_summary"]["five_element"] == "火六局"
        assert context["health"]["used_parents_palace"] is False

    def test_reading_context_span(self, tmp_path):
        with pytest.raises(ValueError):
            generate_reading_context("alex", 2025, span=0, chart_dir=tmp_path)


class TestContextCli:

    def test_prints_context(self, tmp_path, capsys):
        compute_and_save_chart("alex", "1990-01-01", "M", hour="子", chart_dir=tmp_path)

        exit_code = context_main(["--user", "alex", "--year", "2025", "--chart-dir", str(tmp_path)])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["years"][0]["decade_activations"]["化忌"]["star"] == "文曲"

    def test_missing_chart_exits_with_2(self, tmp_path, capsys):
        exit_code = context_main(["--user", "nobody", "--chart-dir", str(tmp_path)])

        assert exit_code == 2
        assert "error:" in capsys.readouterr().err

    def test_bad_span_exits_with_2(self, tmp_path, capsys):
        compute_and_save_chart("alex", "1990-01-01", "M", hour="子", chart_dir=tmp_path)

        exit_code = context_main(["--user", "alex", "--span", "0", "--chart-dir", str(tmp_path)])

        assert exit_code == 2
