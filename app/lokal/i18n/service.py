"""Translation service for request-handling code.

Provides a class-based interface to the i18n system for dependency
injection and testing, plus a request-scoped RequestLocalization that
carries the resolved language explicitly down to translate calls.

Usage:
    service = create_translation_service(config)

    # In a request handler
    signals = RequestSignals(
        headers=request.headers,
        cookies=request.cookies,
        query=request.query_params,
    )
    localization = service.localization_for(signals)
    return localization.must_tr("Hello")
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from lokal.i18n.catalog import MessageCatalog
from lokal.i18n.models import LanguageTag, TranslationResult
from lokal.i18n.resolvers import LocaleResolver, RequestSignals
from lokal.i18n.translator import Message, Translator
from lokal.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class RequestLocalization:
    """Translation helpers bound to one request's resolved language.

    Attributes:
        language: Language resolved for the request.
        translator: Translator the calls delegate to.
    """

    language: LanguageTag
    translator: Translator

    def tr(self, message: Message) -> TranslationResult:
        """Translate into the request language."""
        return self.translator.translate(self.language, message)

    def must_tr(self, message: Message) -> str:
        """Translate into the request language, discarding any error."""
        return self.translator.must_translate(self.language, message)


class TranslationService:
    """Class-based translation service.

    Thin facade over a Translator and a LocaleResolver.
    """

    def __init__(
        self,
        translator: Translator,
        resolver: Optional[LocaleResolver] = None,
        reloader: Optional[Callable[[], MessageCatalog]] = None,
    ):
        """Initialize translation service.

        Args:
            translator: Translator with a loaded catalog.
            resolver: Request language resolver; default providers when omitted.
            reloader: Builds a fresh catalog for ``reload``.
        """
        self._translator = translator
        self._resolver = resolver or LocaleResolver()
        self._reloader = reloader

    def translate(
        self,
        language: Optional[Union[LanguageTag, str]],
        message: Message,
    ) -> TranslationResult:
        """Translate a message; the default language when ``language`` is None."""
        return self._translator.translate(language, message)

    def must_translate(
        self,
        language: Optional[Union[LanguageTag, str]],
        message: Message,
    ) -> str:
        """Translate a message, discarding any error."""
        return self._translator.must_translate(language, message)

    def resolve_language(self, signals: RequestSignals) -> LanguageTag:
        """Resolve a request's language from its signals."""
        return self._resolver.resolve(signals, self._translator.negotiator)

    def localization_for(self, signals: RequestSignals) -> RequestLocalization:
        """Resolve the request language and bind translation helpers to it."""
        return RequestLocalization(
            language=self.resolve_language(signals), translator=self._translator
        )

    def get_available_languages(self) -> list[LanguageTag]:
        return self._translator.get_available_languages()

    def reload(self) -> None:
        """Rebuild the catalog from its sources and publish it.

        The current catalog keeps serving if the rebuild fails.

        Raises:
            RuntimeError: If the service has no reloader.
            InitializationError: If the rebuild fails.
        """
        if self._reloader is None:
            raise RuntimeError("TranslationService was created without a reloader")
        self._translator.publish(self._reloader())
        logger.info("reloaded_all_translations")

    @property
    def translator(self) -> Translator:
        """Access underlying Translator instance."""
        return self._translator

    @property
    def resolver(self) -> LocaleResolver:
        return self._resolver
