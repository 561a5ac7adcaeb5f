"""
Tests for Translation Lookup
"""

import pytest

from markup_guard.config import TranslationConfig
from markup_guard.hooks.filters import FilterHookManager
from markup_guard.i18n.translation import Translator


@pytest.fixture
def hooks():
    return FilterHookManager()


@pytest.fixture
def translator(hooks, tmp_path):
    return Translator(TranslationConfig(locale="fr", locale_dir=str(tmp_path)), hooks)


class TestTranslator:
    """Tests for Translator class."""

    def test_unknown_domain_returns_msgid(self, translator):
        assert translator.translate("Hello") == "Hello"
        assert translator.translate("Hello", "other") == "Hello"

    def test_load_textdomain(self, translator, write_mo):
        path = write_mo("app.mo", {"Hello": "Bonjour"})

        assert translator.load_textdomain("app", path) is True
        assert translator.translate("Hello", "app") == "Bonjour"
        assert translator.translate("Missing", "app") == "Missing"

    def test_default_domain(self, translator, write_mo):
        translator.load_textdomain("markup_guard", write_mo("core.mo", {"Hello": "Salut"}))
        assert translator.translate("Hello") == "Salut"

    def test_missing_file(self, translator, tmp_path):
        assert translator.load_textdomain("app", tmp_path / "missing.mo") is False
        assert "app" not in translator.catalogs

    def test_later_catalog_falls_back_to_earlier(self, translator, write_mo):
        translator.load_textdomain("app", write_mo("base.mo", {"Hello": "Bonjour", "Bye": "Au revoir"}))
        translator.load_textdomain("app", write_mo("extra.mo", {"Hello": "Salut"}))

        assert translator.translate("Hello", "app") == "Salut"
        assert translator.translate("Bye", "app") == "Au revoir"

    def test_load_default_textdomain(self, translator, write_mo):
        write_mo("app-fr.mo", {"Hello": "Bonjour"})

        assert translator.load_default_textdomain("app") is True
        assert translator.translate("Hello", "app") == "Bonjour"

    def test_load_default_textdomain_without_directory(self, hooks):
        translator = Translator(TranslationConfig(), hooks)
        assert translator.load_default_textdomain("app") is False

    def test_core_locale_filter(self, translator, hooks, write_mo):
        write_mo("app-de.mo", {"Hello": "Hallo"})
        hooks.add_filter("core_locale", lambda locale: "de")

        assert translator.load_core_locale() == "de"
        assert translator.load_default_textdomain("app") is True
        assert translator.translate("Hello", "app") == "Hallo"

    def test_override_filter_claims_load(self, translator, hooks, tmp_path):
        hooks.add_filter("override_load_textdomain", lambda override, domain, path: True)

        assert translator.load_textdomain("app", tmp_path / "missing.mo") is True
        assert "app" not in translator.catalogs

    def test_load_action_and_mofile_filter(self, translator, hooks, write_mo, tmp_path):
        real = write_mo("real.mo", {"Hello": "Bonjour"})
        announced = []
        hooks.add_action("load_textdomain", lambda domain, path: announced.append((domain, path)))
        hooks.add_filter("load_textdomain_mofile", lambda path, domain: str(real))

        requested = tmp_path / "requested.mo"
        assert translator.load_textdomain("app", requested) is True
        assert announced == [("app", str(requested))]
        assert translator.translate("Hello", "app") == "Bonjour"
