"""Pytest configuration and fixtures for apppack tests"""

import json
import logging
import sys
from pathlib import Path
from typing import List

import pytest

# Ensure src directory is in Python path before any imports
project_root = Path(__file__).resolve().parent.parent
src_path = project_root / "src"

if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from apppack.linter import LintWarning  # noqa: E402

VALID_MANIFEST = {
    "name": "Sample App",
    "default_locale": "en",
    "author": {"name": "Jane Doe", "email": "jane@example.com"},
    "location": "ticket_sidebar",
}

CLEAN_SOURCE = "(function() {\n  return {};\n}());\n"


class FakeLinter:
    """Linter stand-in that returns canned warnings and records calls."""

    def __init__(self, warnings: List[LintWarning] = None):
        self.warnings = list(warnings or [])
        self.calls: List[str] = []

    def lint(self, source: str) -> List[LintWarning]:
        self.calls.append(source)
        return list(self.warnings)


@pytest.fixture
def fake_linter():
    return FakeLinter()


@pytest.fixture
def app_dir(tmp_path):
    """A complete, valid app package directory."""
    root = tmp_path / "app"
    root.mkdir()
    (root / "manifest.json").write_text(json.dumps(VALID_MANIFEST), encoding="utf-8")
    (root / "app.js").write_text(CLEAN_SOURCE, encoding="utf-8")

    templates = root / "templates"
    templates.mkdir()
    (templates / "layout.hdbs").write_text("<div>{{x}}</div>\n", encoding="utf-8")

    translations = root / "translations"
    translations.mkdir()
    (translations / "en.json").write_text(
        json.dumps({"a": "1", "b": {"c": "2"}}), encoding="utf-8"
    )
    (translations / "fr.json").write_text(json.dumps({"b": {"c": "deux"}}), encoding="utf-8")

    assets = root / "assets"
    (assets / "img").mkdir(parents=True)
    (assets / "logo.png").write_bytes(b"\x89PNG")
    (assets / "img" / "icon.png").write_bytes(b"\x89PNG")

    return root


@pytest.fixture
def make_linter():
    """Factory for FakeLinter instances with canned warnings."""
    return FakeLinter


@pytest.fixture
def valid_manifest():
    return json.loads(json.dumps(VALID_MANIFEST))


@pytest.fixture(autouse=True)
def reset_apppack_logger():
    """Drop handlers installed by configure_logging so they never outlive a test."""
    yield
    logger = logging.getLogger("apppack")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
