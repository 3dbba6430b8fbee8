"""Explicit engine configuration.

Enumerates every recognized engine option and validates them once, at
construction.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lokal.configuration import I18nSettings
from lokal.i18n.formats import UnmarshalFunc, normalize_format
from lokal.i18n.models import LanguageTag
from lokal.i18n.resolvers import (
    DEFAULT_LANGUAGE_KEY,
    DEFAULT_PROVIDERS,
    PROVIDERS,
    LanguageProvider,
)
from lokal.i18n.sources import DirectorySource, MessageSource


class I18nConfig(BaseModel):
    """Configuration for one localization engine.

    Attributes:
        default_language: Language used when nothing better matches; must
            be present in the loaded catalog.
        sources: Message sources, merged in order (later wins).
        format_overrides: Deserializers by format tag, taking precedence
            over the built-in ones.
        language_providers: Request language providers in priority order.
        language_key: Cookie/query/form key the providers read.

    Example:
        config = I18nConfig(
            default_language="zh",
            sources=[DirectorySource("locales")],
            format_overrides={"yaml": yaml.safe_load},
        )
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    default_language: LanguageTag
    sources: list[MessageSource]
    format_overrides: dict[str, Callable[[bytes], Any]] = Field(default_factory=dict)
    language_providers: list[Callable[..., Any]] = Field(
        default_factory=lambda: list(DEFAULT_PROVIDERS)
    )
    language_key: str = DEFAULT_LANGUAGE_KEY

    @field_validator("default_language", mode="before")
    @classmethod
    def parse_default_language(cls, v: Any) -> Any:
        """Accept tag strings for the default language."""
        if isinstance(v, str):
            return LanguageTag.parse(v)
        return v

    @field_validator("sources")
    @classmethod
    def validate_sources(cls, v: list[MessageSource]) -> list[MessageSource]:
        """Require at least one source."""
        if not v:
            raise ValueError("At least one message source is required")
        return v

    @field_validator("format_overrides")
    @classmethod
    def validate_format_overrides(
        cls, v: dict[str, UnmarshalFunc]
    ) -> dict[str, UnmarshalFunc]:
        """Normalize format tags."""
        return {normalize_format(format_tag): fn for format_tag, fn in v.items()}

    @field_validator("language_key")
    @classmethod
    def validate_language_key(cls, v: str) -> str:
        """Require a non-empty key."""
        if not v.strip():
            raise ValueError("language_key must not be empty")
        return v.strip()

    @classmethod
    def from_settings(cls, settings: I18nSettings, **overrides: Any) -> "I18nConfig":
        """Build a config from environment settings.

        Each SOURCE_DIRS entry becomes a DirectorySource; PROVIDERS names
        select the built-in providers.

        Args:
            settings: I18nSettings instance.
            **overrides: Fields replacing the settings-derived values.

        Returns:
            Validated I18nConfig.
        """
        values: dict[str, Any] = {
            "default_language": settings.DEFAULT_LANGUAGE,
            "sources": [DirectorySource(path) for path in settings.SOURCE_DIRS],
            "language_providers": [PROVIDERS[name] for name in settings.PROVIDERS],
            "language_key": settings.LANGUAGE_KEY,
        }
        values.update(overrides)
        return cls(**values)

    @property
    def providers(self) -> list[LanguageProvider]:
        return list(self.language_providers)
