import json

from zwds.run import main


class TestCli:

    def test_prints_chart_json(self, capsys):
        exit_code = main(["--birth-date", "1990-01-01", "--hour", "子", "--gender", "M", "--year", "2025"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["chart"]["five_element"] == "火六局"
        assert output["activation"]["activated_palace"]["branch"] == "子"
        assert "destiny_compass" not in output

    def test_compass(self, capsys):
        main(["--birth-date", "1990-01-01", "--hour", "0", "--gender", "male", "--compass"])
        output = json.loads(capsys.readouterr().out)
        assert len(output["destiny_compass"]) == 83

    def test_save(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        main(["--name", "cli user", "--birth-date", "1990-01-01", "--hour", "子", "--gender", "F", "--save"])
        output = json.loads(capsys.readouterr().out)
        assert (tmp_path / "chart_data" / "cli_user.json").exists()
        assert output["saved"]["path"].endswith("cli_user.json")

    def test_bad_input_exits_with_2(self, capsys):
        exit_code = main(["--birth-date", "1850-01-01", "--hour", "子", "--gender", "M"])
        assert exit_code == 2
        assert "error:" in capsys.readouterr().err

    def test_save_needs_name(self, capsys):
        exit_code = main(["--birth-date", "1990-01-01", "--hour", "子", "--gender", "M", "--save"])
        assert exit_code == 2
