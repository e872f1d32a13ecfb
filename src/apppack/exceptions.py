"""Custom exceptions for apppack."""

from enum import Enum
from typing import Any, Dict, List, Optional


class AppPackError(Exception):
    """Base exception for all apppack errors."""

    pass


class ValidationErrorKind(str, Enum):
    """Stable symbolic key for each package validation failure."""

    MISSING_MANIFEST = "missing_manifest"
    MISSING_SOURCE = "missing_source"
    MISSING_MANIFEST_KEYS = "missing_manifest_keys"
    JSHINT_ERROR = "jshint_error"


class AppValidationError(AppPackError):
    """Raised when a package fails one of the validation checks.

    Every instance carries its ``kind`` so callers can branch on the failure
    without matching on the exception class, and an optional ``detail`` payload.
    """

    def __init__(self, kind: ValidationErrorKind, message: str, detail: Any = None):
        """
        Initialize validation error.

        Args:
            kind: Which check failed
            message: Human readable message
            detail: Optional structured payload for programmatic handling
        """
        super().__init__(message)
        self.kind = kind
        self.detail = detail

    @property
    def key(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "message": str(self), "detail": self.detail}


class MissingManifestError(AppValidationError):
    def __init__(self, path: Optional[str] = None):
        message = "Could not find manifest.json"
        if path:
            message = f"{message} at {path}"
        super().__init__(ValidationErrorKind.MISSING_MANIFEST, message)


class MissingSourceError(AppValidationError):
    def __init__(self, path: Optional[str] = None):
        message = "Could not find app.js"
        if path:
            message = f"{message} at {path}"
        super().__init__(ValidationErrorKind.MISSING_SOURCE, message)


class MissingManifestKeysError(AppValidationError):
    """Raised when required manifest keys are null or absent.

    ``detail`` is the comma-joined list of missing keys, e.g. ``"default_locale,author"``.
    """

    def __init__(self, missing_keys: List[str]):
        self.missing_keys = list(missing_keys)
        joined = ",".join(self.missing_keys)
        super().__init__(ValidationErrorKind.MISSING_MANIFEST_KEYS, joined, detail=joined)


class JSHintError(AppValidationError):
    """Raised when the linter reports at least one warning for app.js.

    ``detail`` holds one record per warning: ``{"line", "reason", "formatted"}``.
    """

    def __init__(self, warnings):
        self.warnings = list(warnings)
        errors = [
            {
                "line": w.line,
                "reason": w.reason,
                "formatted": f"L{w.line}: {w.reason}",
            }
            for w in self.warnings
        ]
        count = len(errors)
        message = f"JSHint reported {count} warning{'s' if count != 1 else ''} in app.js"
        super().__init__(ValidationErrorKind.JSHINT_ERROR, message, detail=errors)

    @property
    def errors(self) -> List[Dict[str, Any]]:
        return self.detail


class InvalidJSONError(AppPackError):
    """Raised when a manifest or translation file is not the expected JSON."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid JSON in {path}: {reason}")
        self.path = path
        self.reason = reason


class LinterError(AppPackError):
    """Raised when the linter itself fails, as opposed to reporting warnings."""

    pass


class LinterUnavailableError(LinterError):
    """Raised when the linter executable cannot be found."""

    pass
