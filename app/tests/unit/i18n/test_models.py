"""Tests for lokal.i18n.models module."""

import pytest

from lokal.i18n import (
    LanguageTag,
    MessageDefinition,
    MessageNotFound,
    PluralCategory,
    TranslationRequest,
    TranslationResult,
)
from tests.factories.i18n import make_message_definition


class TestLanguageTag:
    """Tests for LanguageTag value type."""

    def test_parse_simple_language(self):
        """parse() accepts a bare language subtag."""
        tag = LanguageTag.parse("en")
        assert tag.language == "en"
        assert tag.region is None
        assert str(tag) == "en"

    def test_parse_normalizes_case(self):
        """parse() normalizes language, script and region casing."""
        tag = LanguageTag.parse("ZH-hans-cn")
        assert tag.language == "zh"
        assert tag.script == "Hans"
        assert tag.region == "CN"
        assert str(tag) == "zh-Hans-CN"

    def test_parse_accepts_underscore(self):
        """parse() accepts POSIX-style separators."""
        assert LanguageTag.parse("en_US") == LanguageTag.parse("en-US")

    def test_parse_numeric_region(self):
        """parse() accepts UN M.49 region codes."""
        tag = LanguageTag.parse("es-419")
        assert tag.region == "419"

    @pytest.mark.parametrize("value", ["", "  ", "hello", "e", "en-", "en--US", "123"])
    def test_parse_rejects_invalid(self, value):
        """parse() raises ValueError for malformed or unknown tags."""
        with pytest.raises(ValueError):
            LanguageTag.parse(value)

    def test_try_parse_returns_none_on_failure(self):
        """try_parse() yields None instead of raising."""
        assert LanguageTag.try_parse("not a tag") is None
        assert LanguageTag.try_parse(None) is None
        assert LanguageTag.try_parse("uk") == LanguageTag("uk")

    def test_equality_is_exact(self):
        """Tags with different regions are not equal."""
        assert LanguageTag.parse("en") != LanguageTag.parse("en-US")

    def test_tag_is_immutable(self):
        """LanguageTag cannot be mutated once parsed."""
        tag = LanguageTag.parse("en")
        with pytest.raises(AttributeError):
            tag.language = "fr"

    def test_base(self):
        """base reduces a tag to its language."""
        assert LanguageTag.parse("pt-BR").base == LanguageTag.parse("pt")

    def test_babel_identifiers(self):
        """babel_identifiers() lists most specific identifiers first."""
        tag = LanguageTag.parse("zh-Hant-TW")
        assert tag.babel_identifiers() == ["zh_Hant_TW", "zh_Hant", "zh_TW", "zh"]


class TestMessageDefinition:
    """Tests for MessageDefinition."""

    def test_from_raw_string(self):
        """from_raw() turns a string into the default text."""
        definition = MessageDefinition.from_raw("Hello", "hello")
        assert definition.id == "Hello"
        assert definition.other == "hello"
        assert definition.variants == {"other": "hello"}

    def test_from_raw_plural_mapping(self):
        """from_raw() reads plural variants and metadata."""
        definition = MessageDefinition.from_raw(
            "Cats",
            {
                "description": "Cat count",
                "one": "{{.Count}} cat",
                "other": "{{.Count}} cats",
            },
        )
        assert definition.one == "{{.Count}} cat"
        assert definition.other == "{{.Count}} cats"
        assert definition.description == "Cat count"

    def test_from_raw_custom_delimiters(self):
        """from_raw() keeps leftdelim/rightdelim."""
        definition = MessageDefinition.from_raw(
            "Hello", {"leftdelim": "<<", "rightdelim": ">>", "other": "hi <<.Name>>"}
        )
        assert definition.left_delim == "<<"
        assert definition.right_delim == ">>"

    def test_from_raw_rejects_non_string_values(self):
        """from_raw() raises ValueError for non-string plural values."""
        with pytest.raises(ValueError):
            MessageDefinition.from_raw("Cats", {"other": 3})

    def test_from_raw_rejects_other_types(self):
        """from_raw() raises ValueError for lists and numbers."""
        with pytest.raises(ValueError):
            MessageDefinition.from_raw("Hello", ["hello"])

    def test_variant_selects_category(self):
        """variant() returns the text of the requested category."""
        definition = make_message_definition("Cats", other="cats", one="cat")
        assert definition.variant(PluralCategory.ONE) == "cat"

    def test_variant_falls_back_to_other(self):
        """variant() falls back to other for missing categories."""
        definition = make_message_definition("Cats", other="cats", one="cat")
        assert definition.variant(PluralCategory.FEW) == "cats"
        assert definition.variant(None) == "cats"

    def test_is_message_mapping(self):
        """Mappings with reserved string keys are messages, others namespaces."""
        assert MessageDefinition.is_message_mapping({"other": "x"})
        assert MessageDefinition.is_message_mapping({"description": "d"})
        assert not MessageDefinition.is_message_mapping({"created": "x"})
        assert not MessageDefinition.is_message_mapping({"other": {"nested": "x"}})


class TestTranslationModels:
    """Tests for TranslationRequest and TranslationResult."""

    def test_request_defaults(self):
        """TranslationRequest has no data and no plural count by default."""
        request = TranslationRequest("Hello")
        assert request.template_data is None
        assert request.plural_count is None

    def test_result_unpacks_like_a_tuple(self):
        """TranslationResult unpacks into text, error and warnings."""
        error = MessageNotFound("Missing", "en")
        text, err, warnings = TranslationResult("Missing", error)
        assert text == "Missing"
        assert err is error
        assert warnings == ()

    def test_result_ok(self):
        """ok is True only without an error."""
        assert TranslationResult("hello").ok
        assert not TranslationResult("x", MessageNotFound("x", "en")).ok
