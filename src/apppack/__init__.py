"""apppack - validation and metadata access for app package directories."""

__version__ = "0.1.0"

from .exceptions import (
    AppPackError,
    AppValidationError,
    InvalidJSONError,
    JSHintError,
    LinterError,
    LinterUnavailableError,
    MissingManifestError,
    MissingManifestKeysError,
    MissingSourceError,
    ValidationErrorKind,
)
from .linter import LINTER_OPTIONS, JSHintLinter, Linter, LinterOptions, LintWarning
from .package import Package

__all__ = [
    "AppPackError",
    "AppValidationError",
    "InvalidJSONError",
    "JSHintError",
    "JSHintLinter",
    "LINTER_OPTIONS",
    "Linter",
    "LinterError",
    "LinterOptions",
    "LinterUnavailableError",
    "LintWarning",
    "MissingManifestError",
    "MissingManifestKeysError",
    "MissingSourceError",
    "Package",
    "ValidationErrorKind",
]
