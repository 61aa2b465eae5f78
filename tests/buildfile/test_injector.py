"""Tests for build-file marker injection."""

from __future__ import annotations

import pytest

from c1.buildfile import (
    HEADERS_MARKER,
    SOURCES_MARKER,
    BuildFileInjector,
    append_header,
    append_source,
)
from c1.errors import MarkerMissing

DESCRIPTOR = """\
set(SOURCES
    main.c
    # @c1_sources
)

set(HEADERS
    # @c1_headers
)
"""


def test_append_source_inserts_above_marker_with_same_indent() -> None:
    updated = append_source(DESCRIPTOR, "src/net.c")
    assert "    main.c\n    src/net.c\n    # @c1_sources\n" in updated
    assert updated.replace("    src/net.c\n", "", 1) == DESCRIPTOR


def test_repeated_appends_grow_in_call_order_and_keep_marker() -> None:
    updated = append_source(DESCRIPTOR, "src/a.c")
    updated = append_source(updated, "src/a.c")
    updated = append_source(updated, "src/b.c")

    assert "    src/a.c\n    src/a.c\n    src/b.c\n    # @c1_sources\n" in updated
    assert updated.count(SOURCES_MARKER) == 1


def test_append_header_targets_header_marker() -> None:
    updated = append_header(DESCRIPTOR, "include/net.h")
    assert "set(HEADERS\n    include/net.h\n    # @c1_headers\n)" in updated
    assert "src/" not in updated


def test_only_first_marker_occurrence_is_used() -> None:
    text = "# @c1_sources\n# @c1_sources\n"
    assert append_source(text, "x.c") == "x.c\n# @c1_sources\n# @c1_sources\n"


def test_marker_sharing_line_with_content() -> None:
    text = "set(SOURCES main.c # @c1_sources)\n"
    assert append_source(text, "x.c") == "set(SOURCES main.c x.c\n# @c1_sources)\n"


def test_missing_marker_raises() -> None:
    with pytest.raises(MarkerMissing) as excinfo:
        append_header("set(HEADERS)\n", "include/x.h")
    assert excinfo.value.marker == HEADERS_MARKER


def test_register_module_updates_both_lists() -> None:
    result = BuildFileInjector().register_module(DESCRIPTOR, "net_utils")

    assert result.complete
    assert "    src/net_utils.c\n    # @c1_sources" in result.text
    assert "    include/net_utils.h\n    # @c1_headers" in result.text


def test_register_module_reports_missing_marker_and_keeps_other() -> None:
    text = DESCRIPTOR.replace("    # @c1_headers\n", "")
    result = BuildFileInjector("lib", "inc").register_module(text, "net")

    assert result.missing == [HEADERS_MARKER]
    assert not result.complete
    assert "    lib/net.c\n    # @c1_sources" in result.text
    assert "inc/net.h" not in result.text
