"""Core data structures for the i18n system.

Defines language tags, message definitions, translation requests and results.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Mapping, NamedTuple, Optional

from babel import localedata

from lokal.i18n.exceptions import MissingTemplateValue, TranslationError

_TAG_PATTERN = re.compile(
    r"^(?P<language>[a-z]{2,3}|[a-z]{5,8})"
    r"(?:-(?P<script>[a-z]{4}))?"
    r"(?:-(?P<region>[a-z]{2}|[0-9]{3}))?"
    r"(?P<variants>(?:-(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3}))*)"
    r"(?P<extensions>(?:-[0-9a-wy-z](?:-[a-z0-9]{2,8})+)*(?:-x(?:-[a-z0-9]{1,8})+)?)$"
)


@lru_cache(maxsize=512)
def _is_known_language(language: str) -> bool:
    return localedata.exists(language)


class PluralCategory(str, Enum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


PLURAL_KEYS = frozenset(category.value for category in PluralCategory)
RESERVED_KEYS = PLURAL_KEYS | {"id", "description", "hash", "leftdelim", "rightdelim"}


@dataclass(frozen=True)
class LanguageTag:
    """A normalized BCP 47 language tag (e.g., "en", "zh-Hans", "en-US").

    Equality is exact tag equality. Closeness ("en-US" vs "en") is decided
    by the negotiator, never by the tag itself.

    Attributes:
        language: Primary language subtag, lower-case ("en").
        script: Optional script subtag, title-case ("Hans").
        region: Optional region subtag, upper-case ("US") or UN M.49 digits.
        variants: Variant subtags, lower-case.
        extensions: Extension and private-use tail, lower-case ("u-ca-buddhist").
    """

    language: str
    script: Optional[str] = None
    region: Optional[str] = None
    variants: tuple[str, ...] = ()
    extensions: str = ""

    def __str__(self) -> str:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        if self.extensions:
            parts.append(self.extensions)
        return "-".join(parts)

    @classmethod
    def parse(cls, value: str) -> "LanguageTag":
        """Parse and normalize a language tag string.

        Underscores are accepted as separators ("en_US"). The primary
        language must be known to CLDR.

        Args:
            value: Tag string (e.g., "en-US", "zh-hans", "uk").

        Returns:
            Parsed LanguageTag.

        Raises:
            ValueError: If the value is not a well-formed tag of a known language.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid language tag: {value!r}")

        match = _TAG_PATTERN.match(value.strip().replace("_", "-").lower())
        if match is None:
            raise ValueError(f"Invalid language tag: {value!r}")

        language = match.group("language")
        if not _is_known_language(language):
            raise ValueError(f"Unknown language in tag: {value!r}")

        script = match.group("script")
        region = match.group("region")
        variants = tuple(v for v in match.group("variants").split("-") if v)
        return cls(
            language=language,
            script=script.title() if script else None,
            region=region.upper() if region else None,
            variants=variants,
            extensions=match.group("extensions").lstrip("-"),
        )

    @classmethod
    def try_parse(cls, value: Optional[str]) -> Optional["LanguageTag"]:
        """Parse a tag, returning None for empty or malformed input."""
        if not value:
            return None
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def base(self) -> "LanguageTag":
        """Tag reduced to its primary language (e.g., "en" from "en-US")."""
        return LanguageTag(language=self.language)

    def babel_identifiers(self) -> list[str]:
        """Babel locale identifiers to try, most specific first."""
        identifiers = []
        if self.script and self.region:
            identifiers.append(f"{self.language}_{self.script}_{self.region}")
        if self.script:
            identifiers.append(f"{self.language}_{self.script}")
        if self.region:
            identifiers.append(f"{self.language}_{self.region}")
        identifiers.append(self.language)
        return identifiers


@dataclass(frozen=True)
class MessageDefinition:
    """A translatable message for one language.

    Holds the default ("other") text and optional per-plural-category
    variants, each a template with named placeholders.

    Attributes:
        id: Message identifier, unique within a language.
        other: Default text, also the fallback for missing plural variants.
        zero, one, two, few, many: Plural category variants.
        description: Note for translators; never rendered.
        hash: Source hash carried through from message files.
        left_delim: Custom opening placeholder delimiter.
        right_delim: Custom closing placeholder delimiter.
    """

    id: str
    other: Optional[str] = None
    zero: Optional[str] = None
    one: Optional[str] = None
    two: Optional[str] = None
    few: Optional[str] = None
    many: Optional[str] = None
    description: Optional[str] = None
    hash: Optional[str] = None
    left_delim: Optional[str] = None
    right_delim: Optional[str] = None

    def variant(self, category: Optional[PluralCategory] = None) -> Optional[str]:
        """Get template text for a plural category.

        Falls back to "other" when the category has no text.

        Args:
            category: Plural category, or None for the default text.

        Returns:
            Template text, or None if the message has no text at all.
        """
        if category is not None:
            text = getattr(self, category.value)
            if text is not None:
                return text
        return self.other

    @property
    def variants(self) -> dict[str, str]:
        """All plural texts present in this message."""
        return {
            key: getattr(self, key)
            for key in (c.value for c in PluralCategory)
            if getattr(self, key) is not None
        }

    @staticmethod
    def is_message_mapping(raw: Mapping[str, Any]) -> bool:
        """Check if a mapping describes a message rather than a namespace.

        A mapping is a message when any reserved key holds a string.
        """
        return any(
            key in RESERVED_KEYS and isinstance(value, str)
            for key, value in raw.items()
        )

    @classmethod
    def from_raw(cls, message_id: str, raw: Any) -> "MessageDefinition":
        """Build a definition from a deserialized entry.

        Args:
            message_id: Identifier the entry was stored under.
            raw: Either a string (default text) or a mapping of reserved keys.

        Returns:
            MessageDefinition instance.

        Raises:
            ValueError: If the entry is neither a string nor a message mapping.
        """
        if isinstance(raw, str):
            return cls(id=message_id, other=raw)

        if not isinstance(raw, Mapping):
            raise ValueError(
                f"message '{message_id}' must be a string or mapping, "
                f"got {type(raw).__name__}"
            )

        values: dict[str, Optional[str]] = {}
        for key, value in raw.items():
            if key not in RESERVED_KEYS:
                continue
            if value is not None and not isinstance(value, str):
                raise ValueError(
                    f"message '{message_id}' key '{key}' must be a string, "
                    f"got {type(value).__name__}"
                )
            values[key] = value

        return cls(
            id=values.get("id") or message_id,
            other=values.get("other"),
            zero=values.get("zero"),
            one=values.get("one"),
            two=values.get("two"),
            few=values.get("few"),
            many=values.get("many"),
            description=values.get("description"),
            hash=values.get("hash"),
            left_delim=values.get("leftdelim"),
            right_delim=values.get("rightdelim"),
        )


@dataclass(frozen=True)
class TranslationRequest:
    """A structured translation request.

    Attributes:
        message_id: Message to render.
        template_data: Placeholder values by name.
        plural_count: Count selecting the plural variant; None disables
            plural selection.
    """

    message_id: str
    template_data: Optional[Mapping[str, Any]] = None
    plural_count: Any = None


class TranslationResult(NamedTuple):
    """Outcome of a translate call.

    ``text`` is always displayable: the rendered message, the message id
    when the message is unknown, or "" for an unsupported request shape.
    """

    text: str
    error: Optional[TranslationError] = None
    warnings: tuple[MissingTemplateValue, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MessageFile:
    """A leaf file found while walking a message source.

    Attributes:
        path: Path relative to the source root, "/"-separated.
        format: Format tag taken from the final extension ("json").
        language: Language parsed from the segment before the extension.
        data: Raw file contents.
        source: Name of the source the file came from.
    """

    path: str
    format: str
    language: LanguageTag
    data: bytes = field(repr=False)
    source: str = ""
