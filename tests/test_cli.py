"""Tests for the promptexpand command line."""

import yaml

from promptexpand.__main__ import _main


class TestCli:
    """Tests for _main()."""

    def test_brackets(self, capsys):
        assert _main(["A [red, blue] car"]) == 0
        assert capsys.readouterr().out.splitlines() == ["A red car", "A blue car"]

    def test_invalid_exit_code(self, capsys):
        assert _main(["A [red"]) == 1
        assert "Missing closing bracket" in capsys.readouterr().err

    def test_catalog_and_cost(self, tmp_path, capsys):
        p = tmp_path / "wc.yml"
        p.write_text("hero: [knight, wizard]\n")
        assert _main(["_hero_ waves", "--catalog", str(p), "--cost", "1/2"]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["knight waves", "wizard waves"]
        assert "cost: 1 (2 x 0.5)" in captured.err

    def test_execution(self, capsys):
        assert _main(["base | [a, b] | end", "--execution"]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["base", "a", "end"]
        assert "3-step pipeline" in captured.err

    def test_validate(self, capsys):
        assert _main(["a | b", "--validate"]) == 0
        assert capsys.readouterr().out.strip() == "valid"
        assert _main(["a || b", "--validate"]) == 1
        assert "Double pipes" in capsys.readouterr().out

    def test_yaml_dump(self, capsys):
        assert _main(["[a, b]", "--yaml", "--cost", "2"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["result"]["units"] == ["a", "b"]
        assert data["cost"]["total_cost"] == 4.0

    def test_bad_config(self, tmp_path, capsys):
        p = tmp_path / "cfg.yml"
        p.write_text("nope: 1\n")
        assert _main(["x", "--config", str(p)]) == 2

    def test_bad_cost(self, capsys):
        assert _main(["x", "--cost", "abc"]) == 2
