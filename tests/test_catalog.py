"""Tests for the static version and editor catalog."""

import pytest

from devsetup_cli.catalog import (
    BASE_EDITORS,
    LANGUAGE_LABELS,
    available_versions,
    editor_options,
    find_language_label,
    normalize_language,
)


def _version_key(label):
    return tuple(int(part) for part in label.split(" ")[0].split("."))


# --- normalize_language ---

def test_strips_decorative_suffix():
    assert normalize_language("Python 🐍") == "Python"


def test_plain_name_is_unchanged():
    assert normalize_language("Go") == "Go"


@pytest.mark.parametrize("label", ["Rust 🦀", "Rust", "JavaScript 💫", ""])
def test_normalize_is_idempotent(label):
    once = normalize_language(label)
    assert normalize_language(once) == once


# --- find_language_label ---

def test_finds_label_case_insensitively():
    assert find_language_label("javascript") == "JavaScript 💫"


def test_finds_label_from_display_label():
    assert find_language_label("Java ☕") == "Java ☕"


def test_unknown_language_has_no_label():
    assert find_language_label("COBOL") is None


# --- available_versions ---

@pytest.mark.parametrize("label", LANGUAGE_LABELS)
def test_versions_are_newest_first_without_duplicates(label):
    versions = available_versions(label)
    assert versions
    assert len(set(versions)) == len(versions)
    keys = [_version_key(v) for v in versions]
    assert keys == sorted(keys, reverse=True)
    assert len(set(keys)) == len(keys)


def test_latest_version_is_first():
    assert available_versions("Python 🐍")[0] == "3.12.1 (Latest)"
    assert available_versions("Rust 🦀") == ["1.75.0 (Latest)", "1.74.1", "1.73.0"]


def test_unknown_language_has_no_versions():
    assert available_versions("COBOL 🦕") == []


def test_versions_list_is_a_copy():
    versions = available_versions("Go")
    versions.clear()
    assert available_versions("Go")


# --- editor_options ---

@pytest.mark.parametrize("label", LANGUAGE_LABELS)
def test_base_editors_come_first(label):
    options = editor_options(label)
    assert options[:3] == list(BASE_EDITORS)
    assert len(options) - 3 <= 1


def test_vs_code_is_preselected():
    options = editor_options("Go 🚀")
    assert [opt.value for opt in options if opt.selected] == ["VS Code"]


@pytest.mark.parametrize(
    "label, specialized",
    [
        ("Python 🐍", "PyCharm"),
        ("Go 🚀", "GoLand"),
        ("JavaScript 💫", "WebStorm"),
        ("Java ☕", "IntelliJ IDEA"),
    ],
)
def test_specialized_editor_is_last(label, specialized):
    assert editor_options(label)[-1].value == specialized


def test_rust_gets_only_base_editors():
    assert editor_options("Rust 🦀") == list(BASE_EDITORS)


def test_unknown_language_gets_only_base_editors():
    assert editor_options("Haskell") == list(BASE_EDITORS)
