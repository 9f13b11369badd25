"""Detect an existing language toolchain by running its version command."""

import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional, Tuple

from devsetup_cli.catalog import normalize_language

VERSION_COMMANDS = {
    "Python": ("python3", "--version"),
    "JavaScript": ("node", "--version"),
    "Go": ("go", "version"),
    "Rust": ("rustc", "--version"),
    "Java": ("java", "--version"),
}


class ProbeError(Exception):
    """Base class for toolchain detection failures."""


class UnsupportedLanguageError(ProbeError):
    def __init__(self, language: str):
        super().__init__(f"unsupported language: {language}")
        self.language = language


class ToolchainNotFoundError(ProbeError):
    def __init__(self, executable: str):
        super().__init__(f"{executable} not found in PATH")
        self.executable = executable


class ProbeExecutionError(ProbeError):
    """The executable exists but running it failed."""


@dataclass(frozen=True)
class ProbeResult:
    found: bool
    version: Optional[str] = None
    executable_path: Optional[str] = None
    reason: Optional[str] = None


def parse_version(language: str, raw: str) -> str:
    """Normalize raw version output for the given language.

    'Python 3.11.2' -> '3.11.2', 'v20.11.0' -> '20.11.0'. Go, Rust and Java
    output is returned trimmed but otherwise untouched.
    """
    version = raw.strip()
    language = normalize_language(language)
    if language == "Python":
        parts = version.split()
        if len(parts) >= 2:
            version = parts[1]
    elif language == "JavaScript":
        version = version.removeprefix("v")
    return version


def get_language_version(language: str) -> Tuple[str, str]:
    """Run the language's version command and return (version, executable path).

    Raises UnsupportedLanguageError, ToolchainNotFoundError or
    ProbeExecutionError. Nothing is executed when the executable is missing.
    """
    name = normalize_language(language)
    command = VERSION_COMMANDS.get(name)
    if command is None:
        raise UnsupportedLanguageError(name)

    executable, *args = command
    path = shutil.which(executable)
    if path is None:
        raise ToolchainNotFoundError(executable)

    try:
        result = subprocess.run(
            [path, *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise ProbeExecutionError(f"{executable} exited with code {e.returncode}") from e
    except OSError as e:
        raise ProbeExecutionError(f"failed to run {executable}: {e}") from e

    return parse_version(name, result.stdout), path


def probe(language: str) -> ProbeResult:
    """Detect an installed toolchain. Failures yield a not-found result, never an exception."""
    try:
        version, path = get_language_version(language)
    except ProbeError as e:
        return ProbeResult(found=False, reason=str(e))
    return ProbeResult(found=True, version=version, executable_path=path)
