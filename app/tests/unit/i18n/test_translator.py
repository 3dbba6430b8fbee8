"""Tests for lokal.i18n.translator module."""

from decimal import Decimal

import pytest

from lokal.i18n import (
    DefaultLanguageMissing,
    InvalidPluralCount,
    LanguageTag,
    Localizer,
    MessageDefinition,
    MessageNotFound,
    MissingTemplateValue,
    TranslationRequest,
    Translator,
    UnsupportedRequestShape,
)
from tests.factories import make_catalog, make_translator

EN = LanguageTag.parse("en")
ZH = LanguageTag.parse("zh")


class TestLocalizer:
    """Tests for Localizer."""

    def test_merges_default_language(self):
        """Messages missing from the language come from the default."""
        localizer = Localizer(make_catalog(), ZH, EN)
        assert localizer.languages == (ZH, EN)
        assert localizer.get_definition("Hello").other == "你好"
        assert localizer.get_definition("OnlyDefault").other == "default only"
        assert localizer.has_message("OnlyDefault")
        assert not localizer.has_message("Missing")

    def test_default_language_consults_itself_only(self):
        localizer = Localizer(make_catalog(), EN, EN)
        assert localizer.languages == (EN,)

    def test_building_twice_gives_same_view(self):
        """Two localizers over the same inputs render identically."""
        catalog = make_catalog()
        first = Localizer(catalog, ZH, EN)
        second = Localizer(catalog, ZH, EN)

        assert first.message_ids == second.message_ids
        for message_id in first.message_ids:
            request = TranslationRequest(message_id, {"Name": "Nick"}, plural_count=2)
            assert first.localize(request) == second.localize(request)

    def test_fallback_plural_uses_found_language(self):
        """Plural variants found in the default use the default's rules."""
        catalog = make_catalog(
            {"en": {"Cats": {"one": "one cat", "other": "cats"}}, "zh": {"Hello": "你好"}}
        )
        localizer = Localizer(catalog, ZH, EN)
        result = localizer.localize(TranslationRequest("Cats", plural_count=1))
        assert result.text == "one cat"


class TestTranslatorInit:
    """Tests for Translator construction."""

    def test_missing_default_language(self):
        """A catalog without the default language is rejected."""
        with pytest.raises(DefaultLanguageMissing) as exc_info:
            make_translator(default_language="fr")
        assert exc_info.value.language == "fr"
        assert set(exc_info.value.available) == {"en", "zh"}

    def test_seals_catalog(self):
        catalog = make_catalog()
        Translator(catalog, EN)
        assert catalog.sealed

    def test_available_languages(self):
        translator = make_translator()
        assert translator.get_available_languages() == [EN, ZH]


class TestTranslate:
    """Tests for Translator.translate()."""

    @pytest.fixture
    def translator(self):
        return make_translator()

    def test_known_message(self, translator):
        """A known id renders non-empty text without error."""
        text, error, warnings = translator.translate("zh", "Hello")
        assert text == "你好"
        assert error is None
        assert warnings == ()

    def test_language_tag_argument(self, translator):
        assert translator.translate(ZH, "Hello").text == "你好"

    def test_missing_message_returns_id(self, translator):
        """An unknown id returns the id and MessageNotFound."""
        result = translator.translate("en", "No.Such.Message")
        assert result.text == "No.Such.Message"
        assert isinstance(result.error, MessageNotFound)
        assert not result.ok

    def test_falls_back_to_default_language(self, translator):
        """Ids missing from the language render in the default language."""
        result = translator.translate("zh", "OnlyDefault")
        assert result.text == "default only"
        assert result.ok

    def test_none_language_means_default(self, translator):
        assert translator.translate(None, "Hello").text == "hello"

    def test_unparsable_language_means_default(self, translator):
        assert translator.translate("not a tag!", "Hello").text == "hello"

    def test_language_outside_catalog_means_default(self, translator):
        assert translator.translate("fr", "Hello").text == "hello"

    def test_regional_language_uses_base(self, translator):
        """A regional tag uses the catalog's base language."""
        assert translator.translate("zh-TW", "Hello").text == "你好"

    @pytest.mark.parametrize(
        "count,expected",
        [(1, "1 cat"), (2, "2 cats"), (0, "0 cats"), ("1", "1 cat"), ("1.0", "1.0 cats")],
    )
    def test_english_plurals(self, translator, count, expected):
        """English selects one for 1 and other otherwise."""
        request = TranslationRequest("Cats", {"Count": count}, plural_count=count)
        assert translator.translate("en", request).text == expected

    def test_plural_count_injected(self):
        """PluralCount is available to templates unless supplied."""
        translator = make_translator(
            {"en": {"Items": {"one": "{{.PluralCount}} item", "other": "{{.PluralCount}} items"}}}
        )
        assert (
            translator.must_translate("en", TranslationRequest("Items", plural_count=3))
            == "3 items"
        )
        request = TranslationRequest("Items", {"PluralCount": "three"}, plural_count=3)
        assert translator.must_translate("en", request) == "three items"

    def test_no_plural_count_uses_other(self, translator):
        """Without a count the default text is used."""
        request = TranslationRequest("Cats", {"Count": "some"})
        assert translator.translate("en", request).text == "some cats"

    def test_invalid_plural_count(self, translator):
        """A non-numeric count returns the id and InvalidPluralCount."""
        request = TranslationRequest("Cats", plural_count="many")
        result = translator.translate("en", request)
        assert result.text == "Cats"
        assert isinstance(result.error, InvalidPluralCount)

    @pytest.mark.parametrize(
        "count", [float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), "inf"]
    )
    def test_non_finite_plural_count(self, translator, count):
        """Non-finite counts are reported, never raised."""
        request = TranslationRequest("Cats", {"Count": count}, plural_count=count)
        result = translator.translate("en", request)
        assert result.text == "Cats"
        assert isinstance(result.error, InvalidPluralCount)

    def test_large_plural_count(self, translator):
        request = TranslationRequest("Cats", {"Count": 10**30}, plural_count=10**30)
        assert translator.translate("en", request).text == f"{10**30} cats"

    def test_literal_braces_in_text(self):
        """Single-brace text renders as written, without warnings."""
        translator = make_translator({"en": {"Help": "Use {id} in JSON like {\"a\": 1}"}})
        result = translator.translate("en", "Help")
        assert result.text == 'Use {id} in JSON like {"a": 1}'
        assert result.warnings == ()

    def test_missing_template_value(self, translator):
        """Missing placeholders render as <no value> with a warning."""
        result = translator.translate("en", "HelloName")
        assert result.text == "hello <no value>"
        assert result.ok
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], MissingTemplateValue)
        assert result.warnings[0].placeholder == "Name"

    def test_template_data(self, translator):
        request = TranslationRequest("HelloName", {"Name": "Nick"})
        assert translator.translate("zh", request).text == "你好Nick"

    @pytest.mark.parametrize("message", [42, None, {"id": "Hello"}])
    def test_unsupported_request_shape(self, translator, message):
        """Anything but an id or TranslationRequest yields an empty string."""
        result = translator.translate("en", message)
        assert result.text == ""
        assert isinstance(result.error, UnsupportedRequestShape)

    def test_empty_text_returns_id(self):
        """A message whose text renders empty returns the id."""
        translator = make_translator({"en": {"Empty": ""}})
        assert translator.translate("en", "Empty").text == "Empty"

    def test_custom_delimiters(self):
        catalog = make_catalog({"en": {}})
        catalog.add_messages(
            EN,
            [
                MessageDefinition(
                    id="Custom", other="hi <<.Name>>", left_delim="<<", right_delim=">>"
                )
            ],
        )
        translator = Translator(catalog, EN)
        request = TranslationRequest("Custom", {"Name": "Nick"})
        assert translator.must_translate("en", request) == "hi Nick"

    def test_must_translate_discards_error(self, translator):
        assert translator.must_translate("en", "Missing") == "Missing"


class TestLocalizerCache:
    """Tests for localizer caching and catalog publishing."""

    def test_localizer_is_cached(self):
        translator = make_translator()
        assert translator.localizer_for(ZH) is translator.localizer_for(ZH)

    def test_outside_languages_share_localizer(self):
        """Languages outside the catalog reuse an existing localizer."""
        translator = make_translator()
        assert translator.localizer_for(LanguageTag.parse("fr")) is translator.localizer_for(EN)
        assert translator.localizer_for(LanguageTag.parse("zh-Hant")) is translator.localizer_for(ZH)
        assert translator.localizer_for(None) is translator.localizer_for(EN)

    def test_publish_replaces_catalog(self):
        """publish() swaps in a new catalog and drops cached localizers."""
        translator = make_translator()
        old = translator.localizer_for(ZH)

        translator.publish(make_catalog({"en": {"Hello": "hi"}, "zh": {"Hello": "您好"}}))

        assert translator.must_translate("zh", "Hello") == "您好"
        assert translator.must_translate("en", "Hello") == "hi"
        assert translator.localizer_for(ZH) is not old

    def test_publish_rejects_catalog_without_default(self):
        """A failed publish keeps the current catalog."""
        translator = make_translator()
        with pytest.raises(DefaultLanguageMissing):
            translator.publish(make_catalog({"zh": {"Hello": "你好"}}))
        assert translator.must_translate("en", "Hello") == "hello"

    def test_has_message_has_no_fallback(self):
        translator = make_translator()
        assert translator.has_message(EN, "OnlyDefault")
        assert not translator.has_message(ZH, "OnlyDefault")
