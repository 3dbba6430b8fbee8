"""i18n system - message catalogs, language negotiation and rendering.

Loads locale-tagged message files from one or more sources into a catalog,
negotiates the best catalog language for a request, and renders messages
with CLDR plural selection and placeholder substitution.

Main components:
- models: LanguageTag, MessageDefinition, TranslationRequest, TranslationResult
- formats: FormatRegistry of message file deserializers
- sources: DirectorySource, ArchiveSource, PackageSource and the walker
- catalog: MessageCatalog
- translator: Localizer and Translator
- resolvers: LanguageNegotiator, LocaleResolver and request providers
- config / factory / service: wiring for applications
"""

from lokal.i18n.catalog import MessageCatalog, parse_message_definitions
from lokal.i18n.config import I18nConfig
from lokal.i18n.exceptions import (
    DefaultLanguageMissing,
    I18nError,
    InitializationError,
    InvalidLocaleFilename,
    InvalidMessageFile,
    InvalidPluralCount,
    MessageNotFound,
    MissingTemplateValue,
    SourceUnreadable,
    TranslationError,
    UnsupportedFormat,
    UnsupportedRequestShape,
)
from lokal.i18n.factory import (
    build_catalog,
    create_translation_service,
    create_translator,
)
from lokal.i18n.formats import FormatRegistry
from lokal.i18n.models import (
    LanguageTag,
    MessageDefinition,
    MessageFile,
    PluralCategory,
    TranslationRequest,
    TranslationResult,
)
from lokal.i18n.plurals import plural_category
from lokal.i18n.resolvers import (
    ACCEPT_LANGUAGE,
    LanguageNegotiator,
    LocaleResolver,
    RequestSignals,
    cookie_provider,
    form_provider,
    header_provider,
    parse_accept_language,
    post_form_provider,
    query_provider,
)
from lokal.i18n.service import RequestLocalization, TranslationService
from lokal.i18n.sources import (
    ArchiveSource,
    DirectorySource,
    MessageSource,
    PackageSource,
    parse_locale_filename,
)
from lokal.i18n.templates import NO_VALUE
from lokal.i18n.translator import Localizer, Translator

__all__ = [
    # Models
    "LanguageTag",
    "MessageDefinition",
    "MessageFile",
    "PluralCategory",
    "TranslationRequest",
    "TranslationResult",
    # Errors
    "I18nError",
    "InitializationError",
    "InvalidLocaleFilename",
    "UnsupportedFormat",
    "SourceUnreadable",
    "InvalidMessageFile",
    "DefaultLanguageMissing",
    "TranslationError",
    "MessageNotFound",
    "UnsupportedRequestShape",
    "InvalidPluralCount",
    "MissingTemplateValue",
    # Loading
    "FormatRegistry",
    "MessageSource",
    "DirectorySource",
    "ArchiveSource",
    "PackageSource",
    "parse_locale_filename",
    "MessageCatalog",
    "parse_message_definitions",
    # Rendering
    "Localizer",
    "Translator",
    "plural_category",
    "NO_VALUE",
    # Negotiation
    "ACCEPT_LANGUAGE",
    "LanguageNegotiator",
    "LocaleResolver",
    "RequestSignals",
    "parse_accept_language",
    "header_provider",
    "cookie_provider",
    "query_provider",
    "form_provider",
    "post_form_provider",
    # Wiring
    "I18nConfig",
    "TranslationService",
    "RequestLocalization",
    "build_catalog",
    "create_translator",
    "create_translation_service",
]
