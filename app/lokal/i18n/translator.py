"""Translation service for retrieving and rendering localized messages.

The Translator owns a sealed MessageCatalog and a cache of per-language
Localizers. A Localizer merges one language's messages over the default
language's messages, so anything missing from the requested language falls
back to default-language text.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional, Union

from lokal.i18n.catalog import MessageCatalog
from lokal.i18n.exceptions import (
    DefaultLanguageMissing,
    InvalidPluralCount,
    MessageNotFound,
    MissingTemplateValue,
    UnsupportedRequestShape,
)
from lokal.i18n.models import (
    LanguageTag,
    MessageDefinition,
    TranslationRequest,
    TranslationResult,
)
from lokal.i18n.plurals import plural_category
from lokal.i18n.resolvers import LanguageNegotiator
from lokal.i18n.templates import render
from lokal.logging import get_module_logger

logger = get_module_logger()

PLURAL_COUNT_KEY = "PluralCount"

Message = Union[str, TranslationRequest]


class Localizer:
    """Per-language view of a catalog with default-language fallback.

    Built from two immutable inputs, so building it twice for the same
    language gives the same view.

    Attributes:
        language: Language this view renders for.
        languages: Languages consulted, requested first.
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        language: LanguageTag,
        default_language: LanguageTag,
    ):
        self.language = language
        if language == default_language:
            self.languages: tuple[LanguageTag, ...] = (language,)
        else:
            self.languages = (language, default_language)

        merged: dict[str, tuple[LanguageTag, MessageDefinition]] = {}
        for lang in reversed(self.languages):
            for message_id, definition in catalog.messages(lang).items():
                merged[message_id] = (lang, definition)
        self._messages = MappingProxyType(merged)

    def get_definition(self, message_id: str) -> Optional[MessageDefinition]:
        entry = self._messages.get(message_id)
        return entry[1] if entry else None

    def has_message(self, message_id: str) -> bool:
        return message_id in self._messages

    @property
    def message_ids(self) -> list[str]:
        return list(self._messages)

    def localize(self, request: TranslationRequest) -> TranslationResult:
        """Render a translation request.

        Args:
            request: Message id, template data and optional plural count.

        Returns:
            TranslationResult. Unknown messages and invalid plural counts
            yield the message id and an error.
        """
        message_id = request.message_id
        entry = self._messages.get(message_id)
        if entry is None:
            logger.debug(
                "translation_not_found",
                message_id=message_id,
                language=str(self.language),
            )
            return TranslationResult(
                message_id, MessageNotFound(message_id, str(self.language))
            )

        found_in, definition = entry
        category = None
        if request.plural_count is not None:
            try:
                # The plural rule of the language the text was found in
                category = plural_category(found_in, request.plural_count)
            except (ValueError, OverflowError):
                logger.warning(
                    "invalid_plural_count",
                    message_id=message_id,
                    plural_count=repr(request.plural_count),
                )
                return TranslationResult(
                    message_id, InvalidPluralCount(message_id, request.plural_count)
                )

        template = definition.variant(category)
        if not template:
            return TranslationResult(message_id)

        data: dict[str, Any] = dict(request.template_data or {})
        if request.plural_count is not None:
            data.setdefault(PLURAL_COUNT_KEY, request.plural_count)

        rendered = render(
            template, data, definition.left_delim, definition.right_delim
        )
        warnings = tuple(
            MissingTemplateValue(message_id, name) for name in rendered.missing
        )
        if warnings:
            logger.debug(
                "missing_template_value",
                message_id=message_id,
                placeholders=list(rendered.missing),
            )

        if found_in != self.language:
            logger.debug(
                "used_fallback_translation",
                message_id=message_id,
                requested_language=str(self.language),
                fallback_language=str(found_in),
            )

        if not rendered.text:
            return TranslationResult(message_id, None, warnings)
        return TranslationResult(rendered.text, None, warnings)


@dataclass(frozen=True)
class _State:
    catalog: MessageCatalog
    negotiator: LanguageNegotiator
    localizers: dict


class Translator:
    """Translates message ids into rendered text for a language.

    Localizers are built lazily on first use per language and never
    evicted; requested languages outside the catalog share the localizer of
    their closest catalog language, or the default one.

    Attributes:
        default_language: Language used when nothing better matches.
    """

    def __init__(self, catalog: MessageCatalog, default_language: LanguageTag):
        """Initialize Translator and publish the catalog.

        Args:
            catalog: Fully built catalog; sealed by this call.
            default_language: Fallback language; must be in the catalog.

        Raises:
            DefaultLanguageMissing: If the catalog has no default-language messages.
        """
        self.default_language = default_language
        self._state = self._build_state(catalog)
        logger.info(
            "initialized_translator",
            default_language=str(default_language),
            languages=[str(lang) for lang in catalog.languages],
        )

    def _build_state(self, catalog: MessageCatalog) -> _State:
        if not catalog.has_language(self.default_language):
            raise DefaultLanguageMissing(
                str(self.default_language), [str(lang) for lang in catalog.languages]
            )
        catalog.seal()
        default = Localizer(catalog, self.default_language, self.default_language)
        return _State(
            catalog=catalog,
            negotiator=LanguageNegotiator(catalog.languages, self.default_language),
            localizers={self.default_language: default},
        )

    def publish(self, catalog: MessageCatalog) -> None:
        """Replace the catalog with a freshly built one.

        The new catalog and an empty localizer cache are swapped in with a
        single assignment; calls already running finish on the old state.

        Raises:
            DefaultLanguageMissing: If the new catalog lacks the default language.
        """
        self._state = self._build_state(catalog)
        logger.info(
            "catalog_published",
            languages=[str(lang) for lang in catalog.languages],
            message_count=len(catalog),
        )

    @property
    def catalog(self) -> MessageCatalog:
        return self._state.catalog

    @property
    def negotiator(self) -> LanguageNegotiator:
        return self._state.negotiator

    def get_available_languages(self) -> list[LanguageTag]:
        """Languages present in the catalog."""
        return self._state.catalog.languages

    def localizer_for(self, language: Optional[LanguageTag] = None) -> Localizer:
        """Get or build the Localizer for a language.

        Args:
            language: Requested language; None means the default.

        Returns:
            Cached Localizer.
        """
        state = self._state
        target = self.default_language
        if language is not None:
            target = state.negotiator.closest(language) or self.default_language

        localizer = state.localizers.get(target)
        if localizer is None:
            built = Localizer(state.catalog, target, self.default_language)
            # First stored wins; a racing build is equivalent.
            localizer = state.localizers.setdefault(target, built)
            logger.debug("localizer_built", language=str(target))
        return localizer

    def translate(
        self,
        language: Optional[Union[LanguageTag, str]],
        message: Message,
    ) -> TranslationResult:
        """Translate a message id or request into a language.

        Never raises for per-call problems: the result always carries
        displayable text, plus an error when something went wrong.

        Args:
            language: Target language (tag or tag string); None or an
                unparsable string means the default language.
            message: Message id, or TranslationRequest for template data
                and pluralization.

        Returns:
            TranslationResult(text, error, warnings).

        Example:
            text, err, _ = translator.translate("en", "Hello")
            text = translator.translate(
                "uk",
                TranslationRequest("PersonCats", {"Name": "Nick"}, plural_count=2),
            ).text
        """
        if isinstance(message, str):
            request = TranslationRequest(message_id=message)
        elif isinstance(message, TranslationRequest):
            request = message
        else:
            logger.warning("unsupported_translation_request", type=type(message).__name__)
            return TranslationResult("", UnsupportedRequestShape(message))

        if isinstance(language, str):
            parsed = LanguageTag.try_parse(language)
            if parsed is None:
                logger.debug("invalid_language_requested", language=language)
            language = parsed

        return self.localizer_for(language).localize(request)

    def must_translate(
        self,
        language: Optional[Union[LanguageTag, str]],
        message: Message,
    ) -> str:
        """Translate and return only the text, discarding any error."""
        return self.translate(language, message).text

    def has_message(self, language: LanguageTag, message_id: str) -> bool:
        """Check if a message is defined in the language itself (no fallback)."""
        return self._state.catalog.get_definition(language, message_id) is not None
