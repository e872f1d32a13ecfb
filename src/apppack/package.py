"""
App Package Validator

Validates an app package directory before it is packaged and exposes the
metadata the packaging step needs.

Expected layout:
    manifest.json          required
    app.js                 required for validation
    templates/*.hdbs       optional
    translations/*.json    optional, <default_locale>.json required once read
    assets/**              optional

Usage:
    package = Package("path/to/app")
    package.validate()          # raises AppValidationError on the first failure

    package.author              # {"name": ..., "email": ...}
    package.translations["fr"]  # default locale merged with fr.json

Derived values are computed on first access and cached on the instance.
Instances are not safe to share across threads.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import (
    InvalidJSONError,
    JSHintError,
    MissingManifestError,
    MissingManifestKeysError,
    MissingSourceError,
)
from .linter import LINTER_OPTIONS, JSHintLinter, Linter
from .utils import chomp, deep_merge, load_json_file

logger = logging.getLogger(__name__)


MANIFEST_FILENAME = "manifest.json"
SOURCE_FILENAME = "app.js"
TEMPLATES_DIR = "templates"
TEMPLATE_EXTENSION = ".hdbs"
TRANSLATIONS_DIR = "translations"
TRANSLATION_EXTENSION = ".json"
ASSETS_DIR = "assets"

# Order matters: it is the order keys are reported in MissingManifestKeysError
REQUIRED_MANIFEST_KEYS = ("default_locale", "author")


class Package:
    """
    Validator and metadata accessor for one app package directory.

    Checks run by validate(), in order:
    1. manifest.json exists
    2. manifest has default_locale and author
    3. app.js exists
    4. app.js lints clean
    """

    def __init__(self, directory: Union[str, Path], linter: Optional[Linter] = None):
        """
        Initialize package.

        Args:
            directory: Package root directory
            linter: Linter used for app.js (defaults to JSHintLinter with LINTER_OPTIONS)
        """
        self.directory = Path(directory)
        self.source_path = self.directory / SOURCE_FILENAME
        self.manifest_path = self.directory / MANIFEST_FILENAME
        self._linter = linter

        self._manifest: Optional[Dict[str, Any]] = None
        self._src: Optional[str] = None
        self._templates: Optional[Dict[str, str]] = None
        self._translations: Optional[Dict[str, Dict[str, Any]]] = None
        self._assets: Optional[List[str]] = None

    def __repr__(self) -> str:
        return f"Package({str(self.directory)!r})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> bool:
        """
        Run every check, raising on the first failure.

        Returns:
            True when the package is valid

        Raises:
            MissingManifestError, MissingManifestKeysError,
            MissingSourceError, JSHintError
        """
        logger.info(f"[Package] Validating {self.directory}")

        self.validate_presence_of_manifest()
        self.validate_required_manifest_fields()
        self.validate_presence_of_source()
        self.validate_jshint_on_source()

        logger.info(f"[Package] {self.directory} is valid")
        return True

    def validate_presence_of_manifest(self) -> None:
        if not self.manifest_path.is_file():
            logger.debug(f"[Package] Missing {self.manifest_path}")
            raise MissingManifestError(str(self.manifest_path))

    def validate_presence_of_source(self) -> None:
        if not self.source_path.is_file():
            logger.debug(f"[Package] Missing {self.source_path}")
            raise MissingSourceError(str(self.source_path))

    def validate_required_manifest_fields(self) -> None:
        manifest = self.manifest
        missing = [key for key in REQUIRED_MANIFEST_KEYS if manifest.get(key) is None]

        if missing:
            logger.debug(f"[Package] Manifest missing keys: {missing}")
            raise MissingManifestKeysError(missing)

    def validate_jshint_on_source(self) -> None:
        warnings = self.linter.lint(self.src)
        if warnings:
            logger.debug(f"[Package] app.js has {len(warnings)} lint warning(s)")
            raise JSHintError(warnings)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def linter(self) -> Linter:
        if self._linter is None:
            self._linter = JSHintLinter(LINTER_OPTIONS)
        return self._linter

    @property
    def manifest(self) -> Dict[str, Any]:
        """Parsed manifest.json.

        Raises:
            MissingManifestError: If manifest.json does not exist
            InvalidJSONError: If it is not a JSON object
        """
        if self._manifest is None:
            if not self.manifest_path.is_file():
                raise MissingManifestError(str(self.manifest_path))

            data = load_json_file(self.manifest_path)
            if not isinstance(data, dict):
                raise InvalidJSONError(str(self.manifest_path), "expected a JSON object")
            self._manifest = data
        return self._manifest

    @property
    def src(self) -> str:
        if self._src is None:
            # Undecodable bytes become U+FFFD so linting still sees every line
            self._src = self.source_path.read_text(encoding="utf-8", errors="replace")
        return self._src

    @property
    def name(self) -> Optional[str]:
        return self.manifest.get("name")

    @property
    def default_locale(self) -> Optional[str]:
        return self.manifest.get("default_locale")

    @property
    def author(self) -> Dict[str, Optional[str]]:
        author = self.manifest.get("author") or {}
        if not isinstance(author, dict):
            raise InvalidJSONError(str(self.manifest_path), "author must be an object")
        return {"name": author.get("name"), "email": author.get("email")}

    @property
    def templates(self) -> Dict[str, str]:
        """Template name (file stem) to content, one trailing newline removed."""
        if self._templates is None:
            templates: Dict[str, str] = {}
            for path in self._list_dir(TEMPLATES_DIR, TEMPLATE_EXTENSION):
                templates[path.stem] = chomp(path.read_text(encoding="utf-8", errors="replace"))
            self._templates = templates
        return self._templates

    @property
    def translations(self) -> Dict[str, Dict[str, Any]]:
        """Locale code to translation tree, each merged over the default locale.

        The returned mapping is the instance cache; use translation() for a
        copy that is safe to modify.

        Raises:
            FileNotFoundError: If translations/<default_locale>.json does not exist
        """
        if self._translations is None:
            default_locale = self.default_locale
            translations_dir = self.directory / TRANSLATIONS_DIR
            default_path = translations_dir / f"{default_locale}{TRANSLATION_EXTENSION}"
            default_translations = self._load_translation(default_path)

            translations: Dict[str, Dict[str, Any]] = {}
            for path in self._list_dir(TRANSLATIONS_DIR, TRANSLATION_EXTENSION):
                locale = path.stem
                if locale == default_locale:
                    translations[locale] = default_translations
                else:
                    translations[locale] = deep_merge(
                        default_translations, self._load_translation(path)
                    )

            logger.debug(f"[Package] Loaded translations for {sorted(translations)}")
            self._translations = translations
        return self._translations

    def translation(self, locale: str) -> Optional[Dict[str, Any]]:
        """Copy of one locale's merged tree; edits do not reach the cache."""
        tree = self.translations.get(locale)
        return copy.deepcopy(tree) if tree is not None else None

    @property
    def locales(self) -> List[str]:
        return list(self.translations.keys())

    @property
    def assets(self) -> List[str]:
        """Every file under assets/, as forward-slash paths relative to the package root."""
        if self._assets is None:
            assets_dir = self.directory / ASSETS_DIR
            assets: List[str] = []
            if assets_dir.is_dir():
                for path in assets_dir.rglob("*"):
                    relative = path.relative_to(self.directory)
                    # Skip dotfiles and anything inside dot-directories
                    if any(part.startswith(".") for part in relative.parts):
                        continue
                    if path.is_file():
                        assets.append(relative.as_posix())
            self._assets = sorted(assets)
        return self._assets

    def path_to(self, file: Union[str, Path]) -> Path:
        return self.directory / file

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _list_dir(self, subdir: str, extension: str) -> List[Path]:
        """Files directly inside subdir with the given extension, sorted by name."""
        directory = self.directory / subdir
        if not directory.is_dir():
            return []
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix == extension and not p.name.startswith(".")
        )

    def _load_translation(self, path: Path) -> Dict[str, Any]:
        data = load_json_file(path)
        if not isinstance(data, dict):
            raise InvalidJSONError(str(path), "expected a JSON object")
        return data
