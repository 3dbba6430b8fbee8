"""Exceptions for the i18n system.

Initialization errors abort engine construction: a half-built catalog is
never served. Translation errors are returned next to a displayable string
and are never raised out of ``Translator.translate``.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            translator = create_translator(config)
        except I18nError as e:
            logger.error("i18n_init_failed", error=str(e))
    """

    pass


class InitializationError(I18nError):
    """Base for errors that make the engine unusable.

    Raised while sources are walked and merged into the catalog.
    """

    pass


class InvalidLocaleFilename(InitializationError):
    """Raised when a message file name does not carry a parsable language.

    Example:
        >>> parse_locale_filename("hello.json")
        Traceback (most recent call last):
        ...
        InvalidLocaleFilename: hello.json: 'hello' is not a valid language tag
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class UnsupportedFormat(InitializationError):
    """Raised when no deserializer is registered for a format tag."""

    def __init__(self, format_tag: str, path: Optional[str] = None):
        self.format_tag = format_tag
        self.path = path
        location = f" (file {path})" if path else ""
        super().__init__(f"Unsupported message format '{format_tag}'{location}")


class SourceUnreadable(InitializationError):
    """Raised when a source root or one of its files cannot be read."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read {location}: {reason}")


class InvalidMessageFile(InitializationError):
    """Raised when a message file fails to deserialize or has a bad shape."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid message file {path}: {reason}")


class DefaultLanguageMissing(InitializationError):
    """Raised when the catalog holds no messages for the default language."""

    def __init__(self, language: str, available: Optional[list] = None):
        self.language = language
        self.available = available or []
        super().__init__(
            f"No messages loaded for default language {language} "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class TranslationError(I18nError):
    """Base for recoverable, per-call translation errors."""

    pass


class MessageNotFound(TranslationError):
    """Message id is unknown for the requested language and the default."""

    def __init__(self, message_id: str, language: str):
        self.message_id = message_id
        self.language = language
        super().__init__(f"Message '{message_id}' not found for language {language}")


class UnsupportedRequestShape(TranslationError):
    """The translate call received neither a message id nor a TranslationRequest."""

    def __init__(self, value: object):
        self.value_type = type(value).__name__
        super().__init__(f"Unsupported translation request of type {self.value_type}")


class InvalidPluralCount(TranslationError):
    """The plural count is not a number or numeric string."""

    def __init__(self, message_id: str, count: object):
        self.message_id = message_id
        self.count = count
        super().__init__(f"Invalid plural count {count!r} for message '{message_id}'")


class MissingTemplateValue(TranslationError):
    """A placeholder had no value in the template data.

    Reported as a warning on the result; the placeholder renders as
    ``<no value>`` and the rest of the message is still produced.
    """

    def __init__(self, message_id: str, placeholder: str):
        self.message_id = message_id
        self.placeholder = placeholder
        super().__init__(
            f"No value for placeholder '{placeholder}' in message '{message_id}'"
        )
