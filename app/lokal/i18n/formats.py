"""Format registry mapping format tags to deserializers.

A deserializer turns raw file bytes into a mapping of message id to raw
message entry. JSON is registered up front; YAML and TOML are registered
automatically the first time a file with that extension is seen, unless a
custom deserializer was registered for the tag first.
"""

import json
import tomllib
from typing import Any, Callable, Mapping, Optional

import yaml

from lokal.i18n.exceptions import InvalidMessageFile, UnsupportedFormat
from lokal.logging import get_module_logger

logger = get_module_logger()

UnmarshalFunc = Callable[[bytes], Any]


def unmarshal_json(data: bytes) -> Any:
    """Deserialize JSON message bytes (a UTF-8 BOM is tolerated)."""
    return json.loads(data.decode("utf-8-sig"))


def unmarshal_yaml(data: bytes) -> Any:
    """Deserialize YAML message bytes. An empty document yields {}."""
    return yaml.safe_load(data) or {}


def unmarshal_toml(data: bytes) -> Any:
    """Deserialize TOML message bytes."""
    return tomllib.loads(data.decode("utf-8-sig"))


WELL_KNOWN_FORMATS: Mapping[str, UnmarshalFunc] = {
    "json": unmarshal_json,
    "yaml": unmarshal_yaml,
    "yml": unmarshal_yaml,
    "toml": unmarshal_toml,
}


def normalize_format(format_tag: str) -> str:
    """Normalize a format tag and check that it is usable.

    Raises:
        ValueError: If the tag is empty or contains a dot.
    """
    normalized = (format_tag or "").strip().lower()
    if not normalized or "." in normalized:
        raise ValueError(f"Invalid format tag: {format_tag!r}")
    return normalized


class FormatRegistry:
    """Maps format tags ("json", "yaml", "toml") to deserializers.

    Explicit registrations always take precedence over automatic
    well-known registrations.

    Attributes:
        explicit: Format tags registered through ``register``.
    """

    def __init__(self, overrides: Optional[Mapping[str, UnmarshalFunc]] = None):
        """Initialize the registry with JSON and optional overrides.

        Args:
            overrides: Custom deserializers by format tag.
        """
        self._funcs: dict[str, UnmarshalFunc] = {"json": unmarshal_json}
        self.explicit: set[str] = set()
        for format_tag, fn in (overrides or {}).items():
            self.register(format_tag, fn)

    def register(self, format_tag: str, fn: UnmarshalFunc) -> None:
        """Associate a format tag with a deserializer.

        Args:
            format_tag: Format tag (e.g., "yaml").
            fn: Callable taking bytes and returning a message mapping.

        Raises:
            TypeError: If fn is not callable.
        """
        if not callable(fn):
            raise TypeError(f"Deserializer for '{format_tag}' must be callable")
        format_tag = normalize_format(format_tag)
        self._funcs[format_tag] = fn
        self.explicit.add(format_tag)
        logger.debug("format_registered", format=format_tag)

    def ensure(self, format_tag: str) -> bool:
        """Register a well-known deserializer for a tag if none is set.

        Returns:
            True if a deserializer is available for the tag afterwards.
        """
        format_tag = format_tag.lower()
        if format_tag in self._funcs:
            return True
        fn = WELL_KNOWN_FORMATS.get(format_tag)
        if fn is None:
            return False
        self._funcs[format_tag] = fn
        logger.debug("format_auto_registered", format=format_tag)
        return True

    def get(self, format_tag: str, path: Optional[str] = None) -> UnmarshalFunc:
        """Look up the deserializer for a tag.

        Raises:
            UnsupportedFormat: If no deserializer is registered or well known.
        """
        if not self.ensure(format_tag):
            raise UnsupportedFormat(format_tag, path)
        return self._funcs[format_tag.lower()]

    def unmarshal(self, format_tag: str, data: bytes, path: str) -> Any:
        """Deserialize file bytes with the deserializer for the tag.

        Args:
            format_tag: Format tag of the file.
            data: Raw file contents.
            path: File path, for error reporting.

        Returns:
            Deserialized document.

        Raises:
            UnsupportedFormat: If the format has no deserializer.
            InvalidMessageFile: If the deserializer fails.
        """
        fn = self.get(format_tag, path)
        try:
            return fn(data)
        except (ValueError, TypeError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error(
                "message_file_parse_error", path=path, format=format_tag, error=str(e)
            )
            raise InvalidMessageFile(path, str(e)) from e

    @property
    def formats(self) -> list[str]:
        """Currently registered format tags."""
        return sorted(self._funcs)
