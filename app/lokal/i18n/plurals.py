"""CLDR plural category selection.

Rules come from Babel's CLDR data. Languages unknown to CLDR use the root
rule, which maps every count to "other".
"""

from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.plural import PluralRule

from lokal.i18n.models import LanguageTag, PluralCategory

ROOT_RULE = PluralRule({})


@lru_cache(maxsize=256)
def plural_rule_for(language: LanguageTag) -> PluralRule:
    """Get the CLDR plural rule for a language.

    Tries the most specific locale first ("pt-PT" before "pt").

    Args:
        language: Language to look up.

    Returns:
        Babel PluralRule.
    """
    for identifier in language.babel_identifiers():
        try:
            return Locale.parse(identifier).plural_form
        except (UnknownLocaleError, ValueError):
            continue
    return ROOT_RULE


def to_plural_operand(count: Any) -> int | Decimal:
    """Convert a plural count into a number usable by CLDR rules.

    Integers pass through. Floats and numeric strings become Decimals so
    visible fraction digits are kept ("1.0" selects "other" in English).

    Raises:
        ValueError: If the count is not numeric or not finite.
    """
    if isinstance(count, bool):
        raise ValueError(f"Plural count must be numeric, got {count!r}")
    if isinstance(count, int):
        return count
    if isinstance(count, Decimal):
        value = count
    elif isinstance(count, float):
        value = Decimal(repr(count))
    elif isinstance(count, str):
        try:
            value = Decimal(count.strip())
        except InvalidOperation:
            raise ValueError(f"Plural count must be numeric, got {count!r}") from None
    else:
        raise ValueError(f"Plural count must be numeric, got {type(count).__name__}")

    if not value.is_finite():
        raise ValueError(f"Plural count must be finite, got {count!r}")
    return value


def plural_category(language: LanguageTag, count: Any) -> PluralCategory:
    """Select the plural category of a count for a language.

    Args:
        language: Language whose rules apply.
        count: int, float, Decimal or numeric string.

    Returns:
        PluralCategory.

    Raises:
        ValueError: If the count is not numeric.

    Example:
        >>> plural_category(LanguageTag.parse("en"), 1)
        <PluralCategory.ONE: 'one'>
        >>> plural_category(LanguageTag.parse("uk"), 2)
        <PluralCategory.FEW: 'few'>
    """
    operand = to_plural_operand(count)
    return PluralCategory(plural_rule_for(language)(operand))
