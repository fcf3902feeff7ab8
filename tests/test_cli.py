"""
Tests for the schema-formats command line.
"""

import json

import pytest

from schema_formats.cli import main


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv("SCHEMA_FORMATS_CONFIG", raising=False)
    monkeypatch.delenv("SCHEMA_FORMATS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SCHEMA_FORMATS_PRINT_LEVEL", raising=False)


def run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestCheck:

    def test_valid(self, capsys):
        assert run(["check", "email", "a@b.com"]) == 0
        assert capsys.readouterr().out.splitlines() == ["a@b.com: valid"]

    def test_invalid_sets_exit_code(self, capsys):
        assert run(["check", "uuid", "123e4567-e89b-12d3-a456-426614174000", "nope"]) == 1
        assert capsys.readouterr().out.splitlines() == [
            "123e4567-e89b-12d3-a456-426614174000: valid",
            "nope: invalid",
        ]

    def test_unknown_format(self, capsys):
        assert run(["check", "x-custom", "anything"]) == 0
        assert "anything: unknown format" in capsys.readouterr().out

    def test_json_values(self, capsys):
        assert run(["check", "email", "--json", "5", '"a@b.com"']) == 1
        assert capsys.readouterr().out.splitlines() == ["5: invalid", "a@b.com: valid"]

    def test_bad_json_value(self, capsys):
        assert run(["check", "email", "--json", "{oops"]) == 2
        assert "not valid JSON" in capsys.readouterr().err

    def test_json_output(self, capsys):
        assert run(["--output", "json", "check", "date", "2024-02-29", "2023-02-29"]) == 1
        output = json.loads(capsys.readouterr().out)
        assert output["format"] == "date"
        assert output["known"] is True
        assert output["invalid"] == 1
        assert output["results"] == [
            {"value": "2024-02-29", "result": "satisfied"},
            {"value": "2023-02-29", "result": "violated"},
        ]

    def test_verbose_json_output_stays_parseable(self, capsys):
        assert run(["-v", "--output", "json", "check", "uuid", "nope"]) == 1
        captured = capsys.readouterr()
        assert json.loads(captured.out)["invalid"] == 1
        assert "Registered format checker" in captured.err


class TestList:

    def test_human(self, capsys):
        assert run(["list"]) == 0
        names = capsys.readouterr().out.splitlines()
        assert "email" in names and "relative-json-pointer" in names
        assert names == sorted(names)

    def test_json(self, capsys):
        assert run(["--output", "json", "list"]) == 0
        assert "uuid" in json.loads(capsys.readouterr().out)["formats"]


class TestConfig:

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "formats.yaml"
        path.write_text('formats:\n  sku: "[A-Z]{3}-[0-9]{4}"\nremove:\n  - regex\n', encoding="utf-8")

        assert run(["--config", str(path), "check", "sku", "ABC-1234", "abc"]) == 1
        assert capsys.readouterr().out.splitlines() == ["ABC-1234: valid", "abc: invalid"]

        assert run(["--config", str(path), "list"]) == 0
        names = capsys.readouterr().out.splitlines()
        assert "sku" in names
        assert "regex" not in names

    def test_config_from_environment(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "formats.yaml"
        path.write_text("aliases:\n  url: uri\n", encoding="utf-8")
        monkeypatch.setenv("SCHEMA_FORMATS_CONFIG", str(path))

        assert run(["check", "url", "example.com"]) == 1
        assert capsys.readouterr().out.splitlines() == ["example.com: invalid"]

    def test_broken_config(self, tmp_path, capsys):
        assert run(["--config", str(tmp_path / "missing.yaml"), "list"]) == 2
        assert "not found" in capsys.readouterr().err

    def test_config_does_not_touch_default_registry(self, tmp_path):
        from schema_formats import default_registry

        path = tmp_path / "formats.yaml"
        path.write_text("remove:\n  - email\n", encoding="utf-8")
        assert run(["--config", str(path), "list"]) == 0
        assert default_registry.has("email")
