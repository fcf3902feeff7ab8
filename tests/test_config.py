"""
Tests for format configuration files and runtime settings.
"""

import logging
import textwrap

import pytest

from schema_formats import ConfigurationError, PatternChecker
from schema_formats.config import (
    FormatConfig,
    FormatsSettings,
    apply_format_config,
    load_format_config,
    parse_format_config,
)


@pytest.fixture
def write_config(tmp_path):
    def _write(content, name="formats.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


class TestLoadFormatConfig:

    def test_full_document(self, write_config):
        path = write_config("""
            formats:
              sku: "[A-Z]{3}-[0-9]{4}"
            aliases:
              url: uri
            remove:
              - regex
        """)
        config = load_format_config(path)
        assert config.formats == {"sku": "[A-Z]{3}-[0-9]{4}"}
        assert config.aliases == {"url": "uri"}
        assert config.remove == ["regex"]
        assert config.source == path

    def test_empty_document(self, write_config):
        config = load_format_config(write_config(""))
        assert config == FormatConfig(source=config.source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_format_config(tmp_path / "missing.yaml")

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not a file"):
            load_format_config(tmp_path)

    def test_bad_yaml(self, write_config):
        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_format_config(write_config("formats: [unclosed"))

    def test_invalid_pattern(self, write_config):
        path = write_config("""
            formats:
              broken: "["
        """)
        with pytest.raises(ConfigurationError, match="broken"):
            load_format_config(path)


class TestParseFormatConfig:

    @pytest.mark.parametrize("data, fragment", [
        (["not", "a", "mapping"], "root must be a mapping"),
        ({"formatz": {}}, "unknown section"),
        ({"formats": ["a"]}, "'formats' must be a mapping"),
        ({"formats": {"a": 1}}, "must be a string"),
        ({"aliases": {"": "uri"}}, "non-empty strings"),
        ({"remove": "regex"}, "'remove' must be a list"),
        ({"remove": [1]}, "'remove' must be a list"),
    ])
    def test_shape_errors(self, data, fragment):
        with pytest.raises(ConfigurationError, match=fragment):
            parse_format_config(data)

    def test_none_is_empty(self):
        assert parse_format_config(None) == FormatConfig()


class TestApplyFormatConfig:

    def test_apply(self, registry):
        config = FormatConfig(
            formats={"sku": "[A-Z]{3}-[0-9]{4}"},
            aliases={"url": "uri", "product-code": "sku"},
            remove=["regex"],
        )
        assert apply_format_config(config, registry) is registry

        assert isinstance(registry.get("sku"), PatternChecker)
        assert registry.is_format("sku", "ABC-1234")
        assert not registry.is_format("sku", "abc-1234")
        assert registry.get("url") is registry.get("uri")
        assert registry.is_format("product-code", "XYZ-0000")
        assert not registry.has("regex")

    def test_alias_to_unknown_format(self, registry):
        with pytest.raises(ConfigurationError, match="unknown format 'nope'"):
            apply_format_config(FormatConfig(aliases={"x": "nope"}), registry)

    def test_remove_unknown_is_noop(self, registry):
        before = registry.names()
        apply_format_config(FormatConfig(remove=["no-such-format"]), registry)
        assert registry.names() == before


class TestFormatsSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SCHEMA_FORMATS_LOG_LEVEL", "SCHEMA_FORMATS_PRINT_LEVEL", "SCHEMA_FORMATS_CONFIG"):
            monkeypatch.delenv(name, raising=False)
        settings = FormatsSettings.from_env()
        assert settings == FormatsSettings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_FORMATS_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCHEMA_FORMATS_PRINT_LEVEL", "error")
        monkeypatch.setenv("SCHEMA_FORMATS_CONFIG", "/etc/formats.yaml")
        settings = FormatsSettings.from_env()
        assert settings.log_level == "debug"
        assert settings.print_level == "error"
        assert settings.config_file == "/etc/formats.yaml"

    def test_set_logging(self):
        FormatsSettings(log_level="debug", print_level="error").set_logging()
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert max(handler.level for handler in root.handlers) == logging.ERROR

    def test_unknown_level_falls_back(self):
        FormatsSettings(log_level="chatty").set_logging()
        assert logging.getLogger().level == logging.INFO
