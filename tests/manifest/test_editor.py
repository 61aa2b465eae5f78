"""Tests for surgical dependency edits of project.toml."""

from __future__ import annotations

import pytest

from c1.errors import ParseError
from c1.manifest import load, upsert_dependency
from c1.manifest.editor import entry_key, trailing_comment
from c1.models import DependencySpec

TEMPLATE = """\
[project]
name = "demo"

[dependencies]
# Add your dependencies here
# Example:
# arc-c = { git = "https://github.com/weynechen/arc-c.git", tag = "v0.5.0" }

[build]
compiler = "gcc"
flags = ["-O3", "-Wall"]
"""


def test_insert_into_empty_section_keeps_hint_comments() -> None:
    spec = DependencySpec(git="https://example.com/org/foo.git")
    updated = upsert_dependency(TEMPLATE, "foo", spec)

    assert updated == TEMPLATE.replace(
        '"v0.5.0" }\n\n[build]',
        '"v0.5.0" }\nfoo = { git = "https://example.com/org/foo.git" }\n\n[build]',
    )
    assert load(updated).dependencies == {"foo": spec}


def test_new_entries_append_after_existing_ones() -> None:
    text = upsert_dependency(TEMPLATE, "a", DependencySpec(git="U1"))
    text = upsert_dependency(text, "b", DependencySpec(git="U2", tag="v1"))

    manifest = load(text)
    assert list(manifest.dependencies) == ["a", "b"]
    lines = text.splitlines()
    assert lines.index('b = { git = "U2", tag = "v1" }') == lines.index('a = { git = "U1" }') + 1


def test_adding_new_name_only_inserts_one_line() -> None:
    base = upsert_dependency(TEMPLATE, "a", DependencySpec(git="U1"))
    updated = upsert_dependency(base, "b", DependencySpec(git="U2"))

    before, after = base.splitlines(), updated.splitlines()
    assert len(after) == len(before) + 1
    inserted = after.index('b = { git = "U2" }')
    assert after[:inserted] + after[inserted + 1 :] == before
    assert len(load(updated).dependencies) == len(load(base).dependencies) + 1


def test_existing_entry_is_replaced_in_place() -> None:
    text = upsert_dependency(TEMPLATE, "a", DependencySpec(git="U1"))
    text = upsert_dependency(text, "b", DependencySpec(git="U2"))

    updated = upsert_dependency(text, "a", DependencySpec(git="U1", branch="dev"))

    assert updated == text.replace('a = { git = "U1" }', 'a = { git = "U1", branch = "dev" }')
    manifest = load(updated)
    assert list(manifest.dependencies) == ["a", "b"]
    assert manifest.dependencies["a"].branch == "dev"


def test_reapplying_same_entry_is_idempotent() -> None:
    spec = DependencySpec(git="U1", tag="v2")
    once = upsert_dependency(TEMPLATE, "a", spec)
    assert upsert_dependency(once, "a", spec) == once


def test_quoted_keys_match() -> None:
    text = '[project]\nname = "x"\n\n[dependencies]\n"arc-c" = { git = "old" }\n'
    updated = upsert_dependency(text, "arc-c", DependencySpec(git="new"))
    assert updated == '[project]\nname = "x"\n\n[dependencies]\narc-c = { git = "new" }\n'


def test_commented_entry_is_not_replaced() -> None:
    updated = upsert_dependency(TEMPLATE, "arc-c", DependencySpec(git="U"))
    assert '# arc-c = { git = "https://github.com/weynechen/arc-c.git", tag = "v0.5.0" }' in updated
    assert 'arc-c = { git = "U" }\n' in updated


def test_missing_section_is_appended_after_blank_line() -> None:
    text = '[project]\nname = "x"\n'
    updated = upsert_dependency(text, "foo", DependencySpec(git="U"))
    assert updated == '[project]\nname = "x"\n\n[dependencies]\nfoo = { git = "U" }\n'


def test_missing_section_without_trailing_newline() -> None:
    updated = upsert_dependency('[project]\nname = "x"', "foo", DependencySpec(git="U"))
    assert updated == '[project]\nname = "x"\n\n[dependencies]\nfoo = { git = "U" }\n'


def test_section_at_end_of_file() -> None:
    text = '[project]\nname = "x"\n\n[dependencies]\na = { git = "U1" }'
    updated = upsert_dependency(text, "b", DependencySpec(git="U2"))
    assert updated == text + '\nb = { git = "U2" }\n'


def test_comment_belonging_to_next_section_stays_put() -> None:
    text = (
        '[dependencies]\na = { git = "U1" }\n\n# compiler settings\n[build]\n'
    )
    updated = upsert_dependency(text, "b", DependencySpec(git="U2"))
    assert updated == (
        '[dependencies]\na = { git = "U1" }\nb = { git = "U2" }\n\n# compiler settings\n[build]\n'
    )


def test_windows_newlines_are_preserved() -> None:
    text = '[project]\r\nname = "x"\r\n\r\n[dependencies]\r\na = { git = "U1" }\r\n'
    updated = upsert_dependency(text, "b", DependencySpec(git="U2"))
    assert updated == text + 'b = { git = "U2" }\r\n'


def test_entry_key_decodes_keys() -> None:
    assert entry_key('foo = { git = "u" }') == "foo"
    assert entry_key('  "a.b" = 1') == "a.b"
    assert entry_key("'lit' = 1") == "lit"
    assert entry_key("# foo = 1") is None
    assert entry_key("[build]") is None


def test_replacing_entry_keeps_trailing_comment() -> None:
    text = '[project]\nname = "x"\n\n[dependencies]\na = { git = "U1" }   # pinned\n\n[build]\n'

    updated = upsert_dependency(text, "a", DependencySpec(git="U2"))

    assert updated == text.replace('a = { git = "U1" }   # pinned', 'a = { git = "U2" }   # pinned')
    assert load(updated).dependencies["a"].git == "U2"


def test_hash_inside_url_is_not_a_comment() -> None:
    text = '[dependencies]\na = { git = "https://x/r.git#frag", tag = \'v#1\' } # keep\r\n'

    updated = upsert_dependency(text, "a", DependencySpec(git="U2"))

    assert updated == '[dependencies]\na = { git = "U2" } # keep\r\n'


def test_trailing_comment_extraction() -> None:
    assert trailing_comment('a = { git = "U1" } # pinned') == " # pinned"
    assert trailing_comment('a = { git = "x\\"#y" }') == ""
    assert trailing_comment("a = { git = 'u#1' }#c") == "#c"
    assert trailing_comment('a = { git = "U1" }') == ""


def test_subtable_dependency_is_rejected_with_hint() -> None:
    text = '[project]\nname = "x"\n\n[dependencies]\n\n[dependencies.foo]\ngit = "old"\n'
    assert load(text).dependencies["foo"].git == "old"

    with pytest.raises(ParseError, match="inline table"):
        upsert_dependency(text, "foo", DependencySpec(git="new"))


def test_subtable_for_other_dependency_does_not_block_insert() -> None:
    text = '[dependencies]\na = { git = "U1" }\n\n[dependencies.foo]\ngit = "old"\n'

    updated = upsert_dependency(text, "b", DependencySpec(git="U2"))

    assert list(load('[project]\nname = "x"\n' + updated).dependencies) == ["a", "b", "foo"]
