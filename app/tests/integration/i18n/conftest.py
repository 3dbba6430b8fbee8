"""Fixtures for end-to-end localization over the shipped locale trees."""

import shutil
import zipfile

import pytest

from lokal.i18n import ArchiveSource, DirectorySource, I18nConfig


@pytest.fixture
def lan2_archive(tmp_path, fixture_locales):
    """The lan2 tree packed into a zip archive."""
    archive = tmp_path / "lan2.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in sorted((fixture_locales / "lan2").iterdir()):
            zf.write(path, arcname=path.name)
    return archive


@pytest.fixture
def layered_config(lan2_archive, fixture_locales):
    """lan2 (archive) overlaid by lan1 (directory), default language zh."""
    return I18nConfig(
        default_language="zh",
        sources=[
            ArchiveSource(lan2_archive),
            DirectorySource(fixture_locales / "lan1"),
        ],
    )


@pytest.fixture
def writable_lan1(tmp_path, fixture_locales):
    """Copy of the lan1 tree that tests may modify."""
    target = tmp_path / "lan1"
    shutil.copytree(fixture_locales / "lan1", target)
    return target
