# tests/cli/i18n/test_i18n.py
"""
Tests for cli/i18n - Internationalization module

Tests cover:
- Translation function (t)
- Language context management
- Message registry
- Format string interpolation
- Message completeness
"""

import re

import pytest

from cli.i18n import DEFAULT_LANG, SUPPORTED_LANGS, get_lang, set_lang, t
from cli.i18n.messages import MESSAGES, register_messages

# =============================================================================
# Language Context Tests
# =============================================================================


class TestLanguageContext:
    """Test language context management"""

    def test_default_language(self):
        """Default language is English"""
        assert DEFAULT_LANG == "en"

    def test_supported_languages(self):
        assert SUPPORTED_LANGS == ("ko", "en")

    def test_set_lang(self):
        set_lang("ko")
        assert get_lang() == "ko"
        set_lang("en")
        assert get_lang() == "en"

    def test_set_lang_invalid(self):
        """Invalid language falls back to English"""
        set_lang("fr")
        assert get_lang() == "en"


# =============================================================================
# Translation Function Tests
# =============================================================================


class TestTranslationFunction:
    """Test t() function"""

    def test_translate_current_language(self):
        assert t("nav.no_item_selected") == "No item selected"
        set_lang("ko")
        assert t("nav.no_item_selected") == "선택된 항목이 없습니다"

    def test_language_override(self):
        assert t("ui.loading", lang="ko") != t("ui.loading", lang="en")

    def test_unsupported_override_uses_default(self):
        assert t("ui.loading", lang="fr") == t("ui.loading", lang="en")

    def test_interpolation(self):
        assert t("ui.items_count", count=5) == "5 items"
        assert t("ui.items_count", lang="ko", count=5) == "5개 항목"
        assert t("nav.action_failed", name="Start", error="boom") == "Action 'Start' failed: boom"

    def test_missing_kwargs_leave_template(self):
        """Missing format arguments do not raise"""
        assert t("ui.items_count", other=1) == "{count} items"

    def test_partial_interpolation(self):
        """Supplied placeholders are filled, unknown ones kept"""
        register_messages("test_only", {"pair": {"ko": "{a}/{b}", "en": "{a}/{b}"}})
        try:
            assert t("test_only.pair", a="x") == "x/{b}"
        finally:
            MESSAGES.pop("test_only.pair")

    def test_resource_placeholder(self):
        assert t("nav.resource_not_found", resource="buckets") == "Resource buckets not found"
        assert t("cli.unknown_resource", resource="bogus") == "Unknown resource: bogus"

    def test_key_is_a_valid_placeholder_name(self):
        """A 'key' parameter does not collide with the message id argument"""
        register_messages("test_only", {"keyed": {"ko": "키 {key}", "en": "key {key}"}})
        try:
            assert t("test_only.keyed", key="K") == "key K"
        finally:
            MESSAGES.pop("test_only.keyed")

    def test_unknown_key(self):
        assert t("nonexistent.key") == "nonexistent.key"

    def test_fallback_to_default_language(self):
        register_messages("test_only", {"partial": {"en": "English only"}})
        try:
            assert t("test_only.partial", lang="ko") == "English only"
        finally:
            MESSAGES.pop("test_only.partial")


# =============================================================================
# Message Completeness Tests
# =============================================================================


class TestMessageCompleteness:
    """Every registered message has both languages with matching placeholders"""

    @pytest.mark.parametrize("namespace", ["nav", "ui", "cli"])
    def test_namespace_registered(self, namespace):
        assert any(key.startswith(f"{namespace}.") for key in MESSAGES)

    def test_all_messages_have_both_languages(self):
        for key, value in MESSAGES.items():
            assert value.get("ko"), f"{key} missing ko"
            assert value.get("en"), f"{key} missing en"

    def test_placeholders_match(self):
        pattern = re.compile(r"\{(\w+)\}")
        for key, value in MESSAGES.items():
            assert set(pattern.findall(value["ko"])) == set(pattern.findall(value["en"])), key
