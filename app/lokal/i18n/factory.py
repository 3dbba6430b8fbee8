"""Factory functions for creating i18n components.

Builds catalogs, translators and services from an I18nConfig. Any
initialization error propagates: a partially loaded engine is never
returned.
"""

from typing import Optional

from lokal.configuration import I18nSettings
from lokal.i18n.catalog import MessageCatalog
from lokal.i18n.config import I18nConfig
from lokal.i18n.formats import FormatRegistry
from lokal.i18n.resolvers import LocaleResolver
from lokal.i18n.service import TranslationService
from lokal.i18n.translator import Translator
from lokal.logging import get_module_logger

logger = get_module_logger()


def build_catalog(config: I18nConfig) -> MessageCatalog:
    """Load every configured source into a new catalog.

    Args:
        config: Engine configuration.

    Returns:
        Unsealed MessageCatalog with all sources merged in order.

    Raises:
        InitializationError: On any bad file name, format, or file content.
    """
    catalog = MessageCatalog(formats=FormatRegistry(config.format_overrides))
    for source in config.sources:
        catalog.add_source(source)

    logger.info(
        "catalog_built",
        source_count=len(config.sources),
        languages=[str(lang) for lang in catalog.languages],
        message_count=len(catalog),
    )
    return catalog


def create_translator(config: I18nConfig) -> Translator:
    """Create a Translator with a fully loaded catalog.

    Raises:
        InitializationError: If loading fails or the default language has
            no messages.

    Usage:
        translator = create_translator(
            I18nConfig(default_language="en", sources=[DirectorySource("locales")])
        )
        translator.must_translate("en", "Hello")
    """
    return Translator(build_catalog(config), config.default_language)


def create_translation_service(
    config: Optional[I18nConfig] = None,
    settings: Optional[I18nSettings] = None,
) -> TranslationService:
    """Create a TranslationService.

    Args:
        config: Engine configuration. Built from settings when omitted.
        settings: I18nSettings used when no config is given; the application
            settings when both are omitted.

    Returns:
        Configured TranslationService.
    """
    if config is None:
        if settings is None:
            from lokal.configuration import settings as app_settings

            settings = app_settings.i18n
        config = I18nConfig.from_settings(settings)

    translator = create_translator(config)
    resolver = LocaleResolver(config.providers, config.language_key)
    service = TranslationService(
        translator, resolver, reloader=lambda: build_catalog(config)
    )
    logger.info(
        "translation_service_created",
        default_language=str(config.default_language),
        language_key=config.language_key,
        provider_count=len(config.providers),
    )
    return service
