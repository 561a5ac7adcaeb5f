"""
Tests for Configuration
"""

import pytest
from pydantic import ValidationError

from markup_guard.config import EscaperConfig, GuardConfig, PurifierConfig, load_config

ENV_VARS = [
    "MARKUP_GUARD_CHARSET",
    "MARKUP_GUARD_MAX_ITERATIONS",
    "MARKUP_GUARD_ALLOWED_SCHEMES",
    "MARKUP_GUARD_LOCALE",
    "MARKUP_GUARD_LOCALE_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestConfigModels:
    """Tests for configuration models."""

    def test_defaults(self):
        config = GuardConfig()
        assert config.purifier.max_iterations == 100
        assert config.purifier.charset == "utf-8"
        assert config.escaper.allowed_schemes == ["http", "https"]
        assert config.escaper.double_encode is True
        assert config.translation.locale == "en"
        assert config.translation.default_domain == "markup_guard"

    def test_charset_normalized(self):
        assert EscaperConfig(charset="UTF8").charset == "utf-8"
        assert PurifierConfig(charset="latin-1").charset == "iso8859-1"

    def test_unknown_charset_rejected(self):
        with pytest.raises(ValidationError):
            EscaperConfig(charset="no-such-charset")

    def test_iteration_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            PurifierConfig(max_iterations=0)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config == GuardConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "markup_guard.yaml"
        path.write_text(
            "purifier:\n"
            "  max_iterations: 10\n"
            "  tables:\n"
            "    naughty_html: [blink, marquee]\n"
            "escaper:\n"
            "  allowed_schemes: [http, https, mailto]\n"
            "translation:\n"
            "  locale: fr\n"
        )

        config = load_config(path)

        assert config.purifier.max_iterations == 10
        assert config.purifier.tables.naughty_html == ("blink", "marquee")
        assert config.escaper.allowed_schemes == ["http", "https", "mailto"]
        assert config.translation.locale == "fr"

    def test_default_path(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "markup_guard.yaml").write_text("escaper:\n  double_encode: false\n")

        assert load_config().escaper.double_encode is False

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GuardConfig()

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "markup_guard.yaml"
        path.write_text("purifier:\n  max_iterations: 10\n")
        monkeypatch.setenv("MARKUP_GUARD_MAX_ITERATIONS", "25")
        monkeypatch.setenv("MARKUP_GUARD_CHARSET", "latin-1")
        monkeypatch.setenv("MARKUP_GUARD_ALLOWED_SCHEMES", "HTTP, mailto,")
        monkeypatch.setenv("MARKUP_GUARD_LOCALE", "de")
        monkeypatch.setenv("MARKUP_GUARD_LOCALE_DIR", str(tmp_path))

        config = load_config(path)

        assert config.purifier.max_iterations == 25
        assert config.purifier.charset == "iso8859-1"
        assert config.escaper.charset == "iso8859-1"
        assert config.escaper.allowed_schemes == ["http", "mailto"]
        assert config.translation.locale == "de"
        assert config.translation.locale_dir == str(tmp_path)

    def test_invalid_yaml_values_rejected(self, tmp_path):
        path = tmp_path / "markup_guard.yaml"
        path.write_text("purifier:\n  tables:\n    never_allowed_regex: ['(unclosed']\n")

        with pytest.raises(ValidationError):
            load_config(path)
