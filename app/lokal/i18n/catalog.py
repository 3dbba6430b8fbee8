"""Message catalog keyed by language.

Accumulates message definitions from one or more sources. Sources added
later override earlier ones for the same message id; within one source,
files are merged in lexical path order.
"""

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from lokal.i18n.exceptions import InvalidMessageFile
from lokal.i18n.formats import FormatRegistry
from lokal.i18n.models import LanguageTag, MessageDefinition, MessageFile
from lokal.i18n.sources import MessageSource, parse_locale_filename
from lokal.logging import get_module_logger

logger = get_module_logger()


def parse_message_definitions(document: Any, path: str) -> list[MessageDefinition]:
    """Turn a deserialized message document into definitions.

    Supported shapes:

        {"Hello": "hello"}
        {"Cats": {"one": "{{.Count}} cat", "other": "{{.Count}} cats"}}
        {"incident": {"created": "Incident created"}}   -> id "incident.created"
        [{"id": "Hello", "other": "hello"}]

    Args:
        document: Output of a format deserializer.
        path: File path, for error reporting.

    Returns:
        Message definitions in document order.

    Raises:
        InvalidMessageFile: If the document or an entry has an invalid shape.
    """
    definitions: list[MessageDefinition] = []

    if isinstance(document, list):
        for index, entry in enumerate(document):
            if not isinstance(entry, Mapping) or not isinstance(entry.get("id"), str):
                raise InvalidMessageFile(path, f"list entry {index} has no string 'id'")
            definitions.append(_definition(entry["id"], entry, path))
        return definitions

    if not isinstance(document, Mapping):
        raise InvalidMessageFile(
            path, f"expected a mapping of messages, got {type(document).__name__}"
        )

    _collect(document, "", path, definitions)
    return definitions


def _collect(
    document: Mapping[str, Any],
    prefix: str,
    path: str,
    definitions: list[MessageDefinition],
) -> None:
    for key, value in document.items():
        message_id = f"{prefix}{key}"
        if isinstance(value, Mapping) and not MessageDefinition.is_message_mapping(value):
            _collect(value, f"{message_id}.", path, definitions)
        else:
            definitions.append(_definition(message_id, value, path))


def _definition(message_id: Any, raw: Any, path: str) -> MessageDefinition:
    try:
        return MessageDefinition.from_raw(str(message_id), raw)
    except ValueError as e:
        raise InvalidMessageFile(path, str(e)) from e


class MessageCatalog:
    """In-memory message definitions for every loaded language.

    A catalog is built once, then sealed. Sealed catalogs refuse further
    additions, so readers never see a partially merged state.

    Attributes:
        formats: FormatRegistry used to deserialize message files.
        sources: Names of the sources merged so far, in order.
    """

    def __init__(self, formats: Optional[FormatRegistry] = None):
        """Initialize an empty catalog.

        Args:
            formats: Format registry; a registry with only JSON by default.
        """
        self.formats = formats or FormatRegistry()
        self.sources: list[str] = []
        self._messages: dict[LanguageTag, dict[str, MessageDefinition]] = {}
        self._sealed = False

    def add_source(self, source: MessageSource) -> int:
        """Walk a source and merge all of its message files.

        Deserializers attached to the source are registered explicitly
        before walking.

        Args:
            source: Source to load.

        Returns:
            Number of files merged.

        Raises:
            InitializationError: On any bad file name, format or file content.
        """
        self._check_writable()
        for format_tag, fn in source.unmarshalers.items():
            self.formats.register(format_tag, fn)

        count = source.walk(self.add_file)
        self.sources.append(source.name)
        logger.info(
            "source_merged",
            source=source.name,
            file_count=count,
            language_count=len(self._messages),
        )
        return count

    def add_file(self, message_file: MessageFile) -> int:
        """Deserialize one message file and merge its messages.

        Returns:
            Number of messages merged.
        """
        document = self.formats.unmarshal(
            message_file.format, message_file.data, message_file.path
        )
        definitions = parse_message_definitions(document, message_file.path)
        self.add_messages(message_file.language, definitions)
        logger.debug(
            "message_file_loaded",
            path=message_file.path,
            source=message_file.source,
            language=str(message_file.language),
            message_count=len(definitions),
        )
        return len(definitions)

    def add_file_bytes(self, data: bytes, path: str) -> int:
        """Merge raw file bytes, taking language and format from the path.

        Useful for custom sources that fetch message files themselves.

        Args:
            data: File contents.
            path: File path following the ``<name>.<language>.<format>`` rule.

        Returns:
            Number of messages merged.
        """
        language, format_tag = parse_locale_filename(path)
        return self.add_file(
            MessageFile(path=path, format=format_tag, language=language, data=data)
        )

    def add_messages(
        self, language: LanguageTag, definitions: Iterable[MessageDefinition]
    ) -> None:
        """Merge definitions for a language, overwriting existing ids."""
        self._check_writable()
        messages = self._messages.setdefault(language, {})
        for definition in definitions:
            messages[definition.id] = definition

    def get_definition(
        self, language: LanguageTag, message_id: str
    ) -> Optional[MessageDefinition]:
        """Look up a definition. No fallback to other languages."""
        return self._messages.get(language, {}).get(message_id)

    def has_language(self, language: LanguageTag) -> bool:
        return language in self._messages

    def messages(self, language: LanguageTag) -> Mapping[str, MessageDefinition]:
        """Read-only view of all definitions for a language."""
        return MappingProxyType(self._messages.get(language, {}))

    @property
    def languages(self) -> list[LanguageTag]:
        """Loaded languages, in the order they were first seen."""
        return list(self._messages)

    def seal(self) -> None:
        """Mark the catalog read-only."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_writable(self) -> None:
        if self._sealed:
            raise RuntimeError("Catalog is sealed; build a new catalog to reload")

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())
