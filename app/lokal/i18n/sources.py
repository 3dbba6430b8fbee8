"""Message sources and the recursive source walker.

A source is any hierarchical tree of message files: a local directory, a
zip archive, or resources shipped inside an importable package. Files are
named ``<name>.<language>.<format>`` or ``<language>.<format>``.

Usage:
    source = DirectorySource("locales")
    source.walk(lambda f: print(f.path, f.language, f.format))
"""

import zipfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Callable, ContextManager, Iterator, Mapping, Optional

from lokal.i18n.exceptions import InvalidLocaleFilename, SourceUnreadable
from lokal.i18n.formats import UnmarshalFunc, normalize_format
from lokal.i18n.models import LanguageTag, MessageFile
from lokal.logging import get_module_logger

logger = get_module_logger()

PathFilter = Callable[[str], bool]
Visitor = Callable[[MessageFile], None]


def skip_extensionless(path: str) -> bool:
    """Default path filter: skip files without an extension.

    Marker files ("LICENSE") and dotfiles (".gitkeep") are skipped.

    Returns:
        True if the path should be skipped.
    """
    return PurePosixPath(path).suffix == ""


def parse_locale_filename(path: str) -> tuple[LanguageTag, str]:
    """Derive language and format from a message file name.

    The format is the final dot-delimited segment, the language the segment
    immediately before it.

    Args:
        path: File path or name (e.g., "sub/hello.en-US.json").

    Returns:
        Tuple of (LanguageTag, format tag).

    Raises:
        InvalidLocaleFilename: If the name has no language segment or the
            segment is not a valid language tag.
    """
    name = PurePosixPath(path).name
    parts = name.split(".")
    if len(parts) < 2 or not parts[-1]:
        raise InvalidLocaleFilename(path, "file name has no format extension")

    language = parts[-2]
    try:
        tag = LanguageTag.parse(language)
    except ValueError:
        raise InvalidLocaleFilename(
            path, f"'{language}' is not a valid language tag"
        ) from None

    try:
        format_tag = normalize_format(parts[-1])
    except ValueError as e:
        raise InvalidLocaleFilename(path, str(e)) from None
    return tag, format_tag


class MessageSource(ABC):
    """Abstract base for hierarchical message file trees.

    Subclasses provide the root of the tree; walking, filtering and file
    name parsing are shared.

    Attributes:
        root_path: Sub-directory to start walking from ("" for the root).
        path_filter: Predicate returning True for paths to skip.
        unmarshalers: Deserializers registered explicitly before this
            source is loaded.
    """

    def __init__(
        self,
        root_path: str = "",
        path_filter: Optional[PathFilter] = None,
        unmarshalers: Optional[Mapping[str, UnmarshalFunc]] = None,
    ):
        self.root_path = root_path.strip("/")
        self.path_filter = path_filter or skip_extensionless
        self.unmarshalers = dict(unmarshalers or {})

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name used in logs and errors."""

    @abstractmethod
    def open_root(self) -> ContextManager[Traversable]:
        """Context manager yielding the traversable root of the tree.

        Raises:
            SourceUnreadable: If the tree cannot be opened.
        """

    def walk(self, visit: Visitor) -> int:
        """Visit every message file in the tree.

        Entries are visited in lexical order so that repeated builds merge
        identically. Any error, from file name parsing or from ``visit``,
        aborts the walk.

        Args:
            visit: Callback receiving each MessageFile.

        Returns:
            Number of files visited.

        Raises:
            InvalidLocaleFilename: If a file name has no valid language.
            SourceUnreadable: If the root or a file cannot be read.
        """
        with self.open_root() as root:
            start = root.joinpath(self.root_path) if self.root_path else root
            if not start.is_dir():
                raise SourceUnreadable(
                    self._location(self.root_path), "root is not a directory"
                )
            count = self._walk_dir(start, self.root_path, visit)

        logger.info("source_walked", source=self.name, file_count=count)
        return count

    def files(self) -> list[MessageFile]:
        """Collect every message file in the tree."""
        found: list[MessageFile] = []
        self.walk(found.append)
        return found

    def _walk_dir(self, directory: Traversable, prefix: str, visit: Visitor) -> int:
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            raise SourceUnreadable(self._location(prefix), str(e)) from e

        count = 0
        for entry in entries:
            path = f"{prefix}/{entry.name}" if prefix else entry.name
            if entry.is_dir():
                count += self._walk_dir(entry, path, visit)
                continue

            if self.path_filter(path):
                logger.debug("message_file_skipped", source=self.name, path=path)
                continue

            language, format_tag = parse_locale_filename(path)
            try:
                data = entry.read_bytes()
            except OSError as e:
                raise SourceUnreadable(self._location(path), str(e)) from e

            visit(
                MessageFile(
                    path=path,
                    format=format_tag,
                    language=language,
                    data=data,
                    source=self.name,
                )
            )
            count += 1
        return count

    def _location(self, path: str) -> str:
        return f"{self.name}:{path}" if path else self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class DirectorySource(MessageSource):
    """Message files under a local directory."""

    def __init__(self, directory: str | Path, **kwargs):
        """Initialize a directory source.

        Args:
            directory: Path to the directory holding message files.
            **kwargs: root_path, path_filter, unmarshalers.

        Raises:
            SourceUnreadable: If the directory does not exist.
        """
        super().__init__(**kwargs)
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise SourceUnreadable(str(self.directory), "directory not found")

    @property
    def name(self) -> str:
        return str(self.directory)

    @contextmanager
    def open_root(self) -> Iterator[Traversable]:
        yield self.directory


class ArchiveSource(MessageSource):
    """Message files inside a zip archive."""

    def __init__(self, archive: str | Path, **kwargs):
        """Initialize an archive source.

        Args:
            archive: Path to the zip file.
            **kwargs: root_path, path_filter, unmarshalers.
        """
        super().__init__(**kwargs)
        self.archive = Path(archive)

    @property
    def name(self) -> str:
        return str(self.archive)

    @contextmanager
    def open_root(self) -> Iterator[Traversable]:
        try:
            archive = zipfile.ZipFile(self.archive)
        except (OSError, zipfile.BadZipFile) as e:
            raise SourceUnreadable(self.name, str(e)) from e
        with archive:
            yield zipfile.Path(archive)


class PackageSource(MessageSource):
    """Message files shipped as resources of an importable package."""

    def __init__(self, package: str, **kwargs):
        """Initialize a package resource source.

        Args:
            package: Dotted package name (e.g., "myapp.locales").
            **kwargs: root_path, path_filter, unmarshalers.
        """
        super().__init__(**kwargs)
        self.package = package

    @property
    def name(self) -> str:
        return f"package:{self.package}"

    @contextmanager
    def open_root(self) -> Iterator[Traversable]:
        try:
            root = resources.files(self.package)
        except (ModuleNotFoundError, TypeError) as e:
            raise SourceUnreadable(self.name, str(e)) from e
        yield root
