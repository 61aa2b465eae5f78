"""Tests for name derivation and validation helpers."""

from __future__ import annotations

import pytest

from c1.errors import InvalidName
from c1.naming import (
    UNKNOWN_PACKAGE,
    derive_package_name,
    header_guard,
    validate_module_name,
    validate_package_name,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com/org/repo.git", "repo"),
        ("https://example.com/org/repo", "repo"),
        ("git@example.com:org/repo.git", "repo"),
        ("git@example.com:repo.git", "repo"),
        ("repo", "repo"),
        ("https://example.com/org/", UNKNOWN_PACKAGE),
        (".git", UNKNOWN_PACKAGE),
    ],
)
def test_derive_package_name(url: str, expected: str) -> None:
    assert derive_package_name(url) == expected


def test_validate_module_name_accepts_underscores() -> None:
    assert validate_module_name("net_utils") == "net_utils"


@pytest.mark.parametrize("name", ["net-utils", "", "a b", "mod.c", "../x"])
def test_validate_module_name_rejects_other_characters(name: str) -> None:
    with pytest.raises(InvalidName):
        validate_module_name(name)


def test_validate_package_name_allows_hyphens_but_not_paths() -> None:
    assert validate_package_name("arc-c") == "arc-c"
    with pytest.raises(InvalidName):
        validate_package_name("org/repo")
    with pytest.raises(InvalidName):
        validate_package_name("")


def test_header_guard_uppercases_name() -> None:
    assert header_guard("net_utils") == "_NET_UTILS_H"
