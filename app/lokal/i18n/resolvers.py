"""Language negotiation and request language resolution.

Providers read a raw language signal from one place in a request (header,
cookie, query string, form). The LocaleResolver tries providers in order;
the first one yielding a tag wins, otherwise the default language applies.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from lokal.i18n.models import LanguageTag
from lokal.logging import get_module_logger

logger = get_module_logger()

ACCEPT_LANGUAGE = "Accept-Language"
DEFAULT_LANGUAGE_KEY = "lang"


@dataclass(frozen=True)
class LanguagePreference:
    """One entry of an Accept-Language header."""

    tag: LanguageTag
    quality: float = 1.0


def parse_accept_language(header: Optional[str]) -> list[LanguagePreference]:
    """Parse an Accept-Language header into ranked preferences.

    Highest quality first; ties keep header order. Wildcards, malformed
    tags and entries with q=0 are dropped. An unparsable quality counts
    as 1.0.

    Args:
        header: Header value (e.g., "zh;q=0.9, en;q=0.8").

    Returns:
        Ranked list of LanguagePreference.
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        pieces = part.split(";")
        lang_range = pieces[0].strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0

        if quality <= 0:
            continue

        tag = LanguageTag.try_parse(lang_range)
        if tag is None:
            logger.debug("invalid_accept_language_entry", entry=lang_range)
            continue
        preferences.append(LanguagePreference(tag=tag, quality=quality))

    # sorted() is stable, so equal qualities keep header order
    return sorted(preferences, key=lambda p: p.quality, reverse=True)


class LanguageNegotiator:
    """Matches requested languages against the languages of a catalog.

    An exact match wins; otherwise tags sharing the primary language match
    ("pt-BR" requested, "pt" available, or the reverse).

    Attributes:
        available: Catalog languages, in catalog order.
        default: Language returned when nothing matches.
    """

    def __init__(self, available: Iterable[LanguageTag], default: LanguageTag):
        self.available = list(available)
        self.default = default

    @staticmethod
    def matches_language(
        requested: LanguageTag,
        available: LanguageTag,
        strict: bool = False,
    ) -> bool:
        """Check if an available language matches a requested one.

        Args:
            requested: Requested language tag (e.g., "en-US").
            available: Available language tag (e.g., "en").
            strict: If True, requires exact match. If False, allows language-only match.

        Returns:
            True if languages match.
        """
        if requested == available:
            return True
        if strict:
            return False
        return requested.language == available.language

    def closest(self, requested: LanguageTag) -> Optional[LanguageTag]:
        """Best available language for one requested tag, or None."""
        if requested in self.available:
            return requested

        base = requested.base
        if base in self.available:
            return base

        for available in self.available:
            if self.matches_language(requested, available):
                return available
        return None

    def negotiate(
        self, preferences: Iterable[LanguagePreference]
    ) -> Optional[LanguageTag]:
        """First ranked preference present in the catalog.

        Returns:
            Matching catalog language, or None when unresolved.
        """
        for preference in preferences:
            match = self.closest(preference.tag)
            if match is not None:
                return match
        return None

    def best_match(self, accept_language: Optional[str]) -> LanguageTag:
        """Negotiate an Accept-Language header, falling back to the default."""
        match = self.negotiate(parse_accept_language(accept_language))
        return match if match is not None else self.default


def _first(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _get_ci(mapping: Mapping[str, Any], key: str) -> Optional[str]:
    value = mapping.get(key)
    if value is None:
        lowered = key.lower()
        for name, candidate in mapping.items():
            if name.lower() == lowered:
                value = candidate
                break
    return _first(value)


@dataclass(frozen=True)
class RequestSignals:
    """Language signals extracted from a request by the transport layer.

    Attributes:
        headers: Request headers (looked up case-insensitively).
        cookies: Cookie values.
        query: Query string parameters.
        form: Form values (query and body, as the framework merges them).
        post_form: Body-only form values.
    """

    headers: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    form: Mapping[str, Any] = field(default_factory=dict)
    post_form: Mapping[str, Any] = field(default_factory=dict)


LanguageProvider = Callable[
    [str, RequestSignals, LanguageNegotiator], Optional[LanguageTag]
]


def header_provider(
    key: str, signals: RequestSignals, negotiator: LanguageNegotiator
) -> Optional[LanguageTag]:
    """Best catalog language from the Accept-Language header.

    Always reads Accept-Language; ``key`` is not used.
    """
    preferences = parse_accept_language(_get_ci(signals.headers, ACCEPT_LANGUAGE))
    return negotiator.negotiate(preferences)


def cookie_provider(
    key: str, signals: RequestSignals, negotiator: LanguageNegotiator
) -> Optional[LanguageTag]:
    """Language tag from the cookie named ``key``."""
    return LanguageTag.try_parse(_first(signals.cookies.get(key)))


def query_provider(
    key: str, signals: RequestSignals, negotiator: LanguageNegotiator
) -> Optional[LanguageTag]:
    """Language tag from the query parameter ``key``."""
    return LanguageTag.try_parse(_first(signals.query.get(key)))


def form_provider(
    key: str, signals: RequestSignals, negotiator: LanguageNegotiator
) -> Optional[LanguageTag]:
    """Language tag from the form field ``key``."""
    return LanguageTag.try_parse(_first(signals.form.get(key)))


def post_form_provider(
    key: str, signals: RequestSignals, negotiator: LanguageNegotiator
) -> Optional[LanguageTag]:
    """Language tag from the body-only form field ``key``."""
    return LanguageTag.try_parse(_first(signals.post_form.get(key)))


PROVIDERS: Mapping[str, LanguageProvider] = {
    "header": header_provider,
    "cookie": cookie_provider,
    "query": query_provider,
    "form": form_provider,
    "post_form": post_form_provider,
}

DEFAULT_PROVIDERS: tuple[LanguageProvider, ...] = tuple(PROVIDERS.values())


class LocaleResolver:
    """Resolves a request's language from its signals.

    Providers are tried in order on every call; nothing is cached between
    requests.

    Attributes:
        providers: Providers in priority order.
        language_key: Key passed to providers (cookie/query/form name).
    """

    def __init__(
        self,
        providers: Optional[Sequence[LanguageProvider]] = None,
        language_key: str = DEFAULT_LANGUAGE_KEY,
    ):
        self.providers = tuple(providers) if providers is not None else DEFAULT_PROVIDERS
        self.language_key = language_key

    def resolve(
        self, signals: RequestSignals, negotiator: LanguageNegotiator
    ) -> LanguageTag:
        """Resolve the language for a request.

        Args:
            signals: Request signals.
            negotiator: Negotiator for the current catalog.

        Returns:
            First provider result, or the negotiator's default.
        """
        for provider in self.providers:
            tag = provider(self.language_key, signals, negotiator)
            if tag is not None:
                logger.debug(
                    "language_resolved",
                    provider=getattr(provider, "__name__", repr(provider)),
                    language=str(tag),
                )
                return tag

        logger.debug("no_language_signal", default=str(negotiator.default))
        return negotiator.default
