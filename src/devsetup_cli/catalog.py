"""Static catalog of installable versions and recommended editors per language.

This is DATA, not code. To add a language, add its label, versions and
(optionally) its specialized editor below.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class EditorOption:
    """An editor entry offered in the multi-select."""
    label: str
    value: str
    selected: bool = False


# Menu order of the language picker
LANGUAGE_LABELS = (
    "Python 🐍",
    "JavaScript 💫",
    "Go 🚀",
    "Rust 🦀",
    "Java ☕",
)

VERSIONS = MappingProxyType({
    "Python": (
        "3.12.1 (Latest)",
        "3.11.7 (LTS)",
        "3.10.13",
        "3.9.18",
    ),
    "JavaScript": (
        "20.11.0 (Latest)",
        "18.19.0 (LTS)",
        "16.20.2",
        "14.21.3",
    ),
    "Go": (
        "1.22.0 (Latest)",
        "1.21.6 (LTS)",
        "1.20.12",
        "1.19.13",
    ),
    "Rust": (
        "1.75.0 (Latest)",
        "1.74.1",
        "1.73.0",
    ),
    "Java": (
        "21.0.2 (Latest)",
        "17.0.10 (LTS)",
        "11.0.22",
    ),
})

BASE_EDITORS = (
    EditorOption("VS Code 💻", "VS Code", selected=True),
    EditorOption("Neovim 🔮", "Neovim"),
    EditorOption("Sublime Text ✨", "Sublime Text"),
)

SPECIALIZED_EDITORS = MappingProxyType({
    "Python": EditorOption("PyCharm 🐍", "PyCharm"),
    "Go": EditorOption("GoLand 🎯", "GoLand"),
    "JavaScript": EditorOption("WebStorm 🌐", "WebStorm"),
    "Java": EditorOption("IntelliJ IDEA ☕", "IntelliJ IDEA"),
})


def normalize_language(label: str) -> str:
    """Strip the decorative suffix: 'Python 🐍' -> 'Python'."""
    return label.split(" ")[0]


def find_language_label(name: str) -> str | None:
    """Return the display label matching *name* (case-insensitive), or None."""
    wanted = normalize_language(name.strip()).lower()
    for label in LANGUAGE_LABELS:
        if normalize_language(label).lower() == wanted:
            return label
    return None


def available_versions(label: str) -> list[str]:
    """Versions for the language, most recent first. Empty for unknown languages."""
    return list(VERSIONS.get(normalize_language(label), ()))


def editor_options(label: str) -> list[EditorOption]:
    """Base editors in fixed order, followed by the language's own IDE if it has one."""
    options = list(BASE_EDITORS)
    specialized = SPECIALIZED_EDITORS.get(normalize_language(label))
    if specialized is not None:
        options.append(specialized)
    return options
