"""Feature-level fixtures for i18n system tests.

Builds temporary locale trees for loader and translator scenarios.
"""

import json

import pytest
import yaml

from lokal.i18n import DirectorySource


def _write(root, relative_path, content):
    """Write text or bytes under root, creating parent directories."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write_file():
    """Helper writing a file under a root directory."""
    return _write


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create a temporary directory with sample message files.

    Returns a directory structure like:
    - hello.en.json
    - hello.zh.json
    - incident/incident.en.yaml
    - incident/incident.fr.yaml
    """
    root = tmp_path / "locales"
    _write(root, "hello.en.json", json.dumps({"Hello": "hello"}))
    _write(
        root, "hello.zh.json", json.dumps({"Hello": "你好"}, ensure_ascii=False)
    )
    _write(
        root,
        "incident/incident.en.yaml",
        yaml.dump(
            {
                "incident": {
                    "created": "Incident {{.IncidentID}} created",
                    "resolved": "Incident {{.IncidentID}} resolved",
                },
                "Cats": {"one": "{{.Count}} cat", "other": "{{.Count}} cats"},
            }
        ),
    )
    _write(
        root,
        "incident/incident.fr.yaml",
        yaml.dump(
            {"incident": {"created": "Incident {{.IncidentID}} créé"}},
            allow_unicode=True,
        ),
    )
    return root


@pytest.fixture
def directory_source(temp_translations_dir):
    """DirectorySource over the temporary translations directory."""
    return DirectorySource(temp_translations_dir)


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_en": "en",
        "specific_en_us": "en-US",
        "with_quality": "en-US,en;q=0.9,fr;q=0.8",
        "multiple": "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7",
        "wildcard": "en-US,en;q=0.9,*;q=0.8",
        "invalid_quality": "en;q=invalid,fr",
    }
