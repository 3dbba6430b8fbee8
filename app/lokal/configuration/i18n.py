"""Localization engine settings."""

import json
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from lokal.configuration.base import LokalSettings

PROVIDER_NAMES = ("header", "cookie", "query", "form", "post_form")


class I18nSettings(LokalSettings):
    """Localization engine configuration.

    Environment Variables:
        I18N_DEFAULT_LANGUAGE: Language used when nothing better matches (default: en)
        I18N_LANGUAGE_KEY: Cookie/query/form key holding the language (default: lang)
        I18N_SOURCE_DIRS: Message directories, JSON list or comma-separated
        I18N_PROVIDERS: Ordered language providers to consult

    Example:
        ```python
        from lokal.configuration import settings

        default = settings.i18n.DEFAULT_LANGUAGE
        dirs = settings.i18n.SOURCE_DIRS
        ```
    """

    DEFAULT_LANGUAGE: str = Field(default="en", alias="I18N_DEFAULT_LANGUAGE")
    LANGUAGE_KEY: str = Field(default="lang", alias="I18N_LANGUAGE_KEY")
    SOURCE_DIRS: Annotated[list[str], NoDecode] = Field(default_factory=list, alias="I18N_SOURCE_DIRS")
    PROVIDERS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(PROVIDER_NAMES), alias="I18N_PROVIDERS"
    )

    @field_validator("SOURCE_DIRS", "PROVIDERS", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> Any:
        """Accept comma-separated strings in addition to JSON lists."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("PROVIDERS")
    @classmethod
    def validate_providers(cls, v: list[str]) -> list[str]:
        """Reject provider names that are not known."""
        unknown = [name for name in v if name not in PROVIDER_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown language providers: {unknown}. Expected any of {PROVIDER_NAMES}"
            )
        return v
