"""
JavaScript linting for app.js.

The validator only depends on the ``Linter`` protocol; ``JSHintLinter`` is the
default implementation and shells out to the ``jshint`` CLI (Node.js) with a
fixed option set.

Usage:
    linter = JSHintLinter(LINTER_OPTIONS)
    for warning in linter.lint(source):
        print(f"L{warning.line}: {warning.reason}")
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .config import settings
from .exceptions import LinterError, LinterUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class LintWarning:
    """Single finding reported by the linter."""

    line: int
    reason: str
    character: Optional[int] = None


@dataclass(frozen=True)
class LinterOptions:
    """Option set handed to the linter.

    Attributes:
        enforcing: Options that make the linter stricter
        relaxing: Options that suppress specific warnings
        predef: Global identifiers assumed to exist in the app runtime
    """

    enforcing: Dict[str, bool] = field(default_factory=dict)
    relaxing: Dict[str, bool] = field(default_factory=dict)
    predef: tuple = ()

    def to_jshintrc(self) -> Dict[str, Any]:
        """Render the options as a .jshintrc mapping."""
        config: Dict[str, Any] = {}
        config.update(self.enforcing)
        config.update(self.relaxing)
        config["predef"] = list(self.predef)
        return config


LINTER_OPTIONS = LinterOptions(
    # noarg: prohibit arguments.caller / arguments.callee
    # undef: prohibit use of undeclared variables
    enforcing={"noarg": True, "undef": True},
    # eqnull: allow `== null`
    # laxcomma: allow comma-first style
    relaxing={"eqnull": True, "laxcomma": True},
    predef=(
        "_",
        "console",
        "services",
        "helpers",
        "alert",
        "JSON",
        "Base64",
        "clearInterval",
        "clearTimeout",
        "setInterval",
        "setTimeout",
    ),
)


class Linter(Protocol):
    """Anything that can lint a JavaScript source string."""

    def lint(self, source: str) -> List[LintWarning]:
        """
        Lint source text.

        Args:
            source: JavaScript source

        Returns:
            Warnings in report order; empty when the source is clean
        """
        ...


# jshint "unix" reporter: <file>:<line>:<col>: <reason>
_UNIX_REPORT_LINE = re.compile(r"^(?P<file>.*?):(?P<line>\d+):(?P<col>\d+): (?P<reason>.*)$")

# jshint exits 2 when it reported warnings, 0 when clean
_EXIT_CLEAN = 0
_EXIT_WARNINGS = 2


def parse_unix_report(output: str) -> List[LintWarning]:
    """Parse jshint unix-reporter output into warnings.

    Summary lines such as ``3 errors`` are ignored.
    """
    warnings: List[LintWarning] = []
    for raw in output.splitlines():
        match = _UNIX_REPORT_LINE.match(raw.strip())
        if not match:
            continue
        warnings.append(
            LintWarning(
                line=int(match.group("line")),
                reason=match.group("reason"),
                character=int(match.group("col")),
            )
        )
    return warnings


class JSHintLinter:
    """
    Linter backed by the jshint command line tool.

    The options are written to a temporary .jshintrc and the source is fed on
    stdin, so nothing is written next to the package being validated.
    """

    def __init__(
        self,
        options: LinterOptions = LINTER_OPTIONS,
        command: Optional[str] = None,
        timeout: Optional[int] = None,
        filename: str = "app.js",
    ):
        """
        Initialize linter.

        Args:
            options: Linter options (defaults to LINTER_OPTIONS)
            command: jshint executable (defaults to settings.jshint_command)
            timeout: Seconds before the run is aborted (defaults to settings.jshint_timeout)
            filename: Name reported for stdin input
        """
        self.options = options
        self.command = command or settings.jshint_command
        self.timeout = timeout if timeout is not None else settings.jshint_timeout
        self.filename = filename

    def lint(self, source: str) -> List[LintWarning]:
        fd, config_path = tempfile.mkstemp(prefix="apppack-", suffix=".jshintrc")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.options.to_jshintrc(), f)

            cmd = [
                self.command,
                "--config",
                config_path,
                "--reporter",
                "unix",
                "--filename",
                self.filename,
                "-",
            ]
            logger.debug(f"[JSHint] Running: {' '.join(cmd)}")

            try:
                result = subprocess.run(
                    cmd,
                    input=source,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    timeout=self.timeout,
                    check=False,
                )
            except FileNotFoundError as e:
                raise LinterUnavailableError(
                    f"jshint executable not found: {self.command!r} "
                    "(install it with `npm install -g jshint` or set APPPACK_JSHINT_COMMAND)"
                ) from e
            except subprocess.TimeoutExpired as e:
                raise LinterError(f"jshint timed out after {self.timeout}s") from e
        finally:
            try:
                os.unlink(config_path)
            except OSError:
                logger.warning(f"[JSHint] Could not remove temporary config {config_path}")

        if result.returncode not in (_EXIT_CLEAN, _EXIT_WARNINGS):
            stderr = (result.stderr or "").strip()
            raise LinterError(f"jshint failed with exit code {result.returncode}: {stderr}")

        warnings = parse_unix_report(result.stdout or "")
        if result.returncode == _EXIT_WARNINGS and not warnings:
            raise LinterError(f"jshint reported failure but no warnings could be parsed: {result.stdout!r}")

        logger.debug(f"[JSHint] {len(warnings)} warning(s)")
        return warnings
