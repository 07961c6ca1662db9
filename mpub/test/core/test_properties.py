"""Tests for mpub.core.properties module."""

from __future__ import annotations

from pathlib import Path

from mpub.core.properties import load_properties, load_property_store, parse_properties
from mpub.core.result import Err, Ok


class TestParseProperties:
    def test_separators(self) -> None:
        text = "a=1\nb: 2\nc 3\nd = 4\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_comments_and_blank_lines(self) -> None:
        text = "# comment\n! also comment\n\n   \nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    def test_value_keeps_separators(self) -> None:
        assert parse_properties("url=https://example.com/a=b\n") == {
            "url": "https://example.com/a=b"
        }

    def test_line_continuation(self) -> None:
        text = "list=one, \\\n    two, \\\n    three\n"
        assert parse_properties(text) == {"list": "one, two, three"}

    def test_escaped_backslash_is_not_continuation(self) -> None:
        assert parse_properties("path=C:\\\\\nnext=1\n") == {"path": "C:\\\\", "next": "1"}

    def test_key_without_value(self) -> None:
        assert parse_properties("flag\n") == {"flag": ""}

    def test_later_key_wins(self) -> None:
        assert parse_properties("a=1\na=2\n") == {"a": "2"}


class TestLoadPropertyStore:
    def test_missing_optional_files_are_skipped(self, tmp_path: Path) -> None:
        result = load_property_store(optional=(tmp_path / "nope.properties",))
        assert isinstance(result, Ok)
        assert dict(result.value) == {}

    def test_missing_required_file_is_error(self, tmp_path: Path) -> None:
        result = load_property_store(required=(tmp_path / "nope.properties",))
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_layering(self, tmp_path: Path) -> None:
        user = tmp_path / "user.properties"
        project = tmp_path / "project.properties"
        explicit = tmp_path / "explicit.properties"
        user.write_text("a=user\nb=user\nc=user\n", encoding="utf-8")
        project.write_text("b=project\nc=project\n", encoding="utf-8")
        explicit.write_text("c=explicit\n", encoding="utf-8")

        result = load_property_store(optional=(user, project), required=(explicit,))
        assert isinstance(result, Ok)
        store = result.value
        assert store["a"] == "user"
        assert store["b"] == "project"
        assert store["c"] == "explicit"

    def test_load_properties_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "mpub.properties"
        path.write_text("mavenCentralUsername=alice\n", encoding="utf-8")
        assert load_properties(path) == Ok({"mavenCentralUsername": "alice"})
