"""Tests for globbing.py pattern matching."""

from pathlib import Path

import pytest

from confmerge.globbing import expand_braces, match


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Provide a small directory tree."""
    for relative in ["a.json", "b.yml", "c.txt", ".hidden.json", "sub/d.json", "sub/deep/e.json"]:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{}")
    (tmp_path / "dir.json").mkdir()
    return tmp_path


class TestExpandBraces:
    """Tests for expand_braces."""

    def test_no_braces(self) -> None:
        assert expand_braces("*.json") == ["*.json"]

    def test_simple_group(self) -> None:
        assert expand_braces(".rc.{json,yaml,yml}") == [".rc.json", ".rc.yaml", ".rc.yml"]

    def test_multiple_groups(self) -> None:
        assert expand_braces("{a,b}.{x,y}") == ["a.x", "a.y", "b.x", "b.y"]

    def test_nested_group(self) -> None:
        assert expand_braces("{a,b{1,2}}.txt") == ["a.txt", "b1.txt", "b2.txt"]

    def test_single_option_kept_literal(self) -> None:
        assert expand_braces("{a}.txt") == ["{a}.txt"]

    def test_unclosed_group_kept_literal(self) -> None:
        assert expand_braces("{a,b.txt") == ["{a,b.txt"]


class TestMatch:
    """Tests for match."""

    def test_pattern_order_kept(self, tree: Path) -> None:
        """Results follow pattern order, not name order."""
        assert match(["b.yml", "a.json"], cwd=tree) == ["b.yml", "a.json"]

    def test_brace_alternatives_keep_order(self, tree: Path) -> None:
        """Brace alternatives are matched in the order written."""
        assert match(["*.{yml,json}"], cwd=tree) == ["b.yml", "a.json"]

    def test_duplicates_removed(self, tree: Path) -> None:
        """A file matched by two patterns appears once."""
        assert match(["a.json", "*.json"], cwd=tree) == ["a.json"]

    def test_directories_excluded(self, tree: Path) -> None:
        """Only regular files are returned."""
        assert "dir.json" not in match(["*.json"], cwd=tree)

    def test_hidden_files(self, tree: Path) -> None:
        """Wildcards skip dotfiles unless dot is set."""
        assert match(["*.json"], cwd=tree) == ["a.json"]
        assert match(["*.json"], cwd=tree, dot=True) == [".hidden.json", "a.json"]
        assert match([".hidden.json"], cwd=tree) == [".hidden.json"]

    def test_globstar(self, tree: Path) -> None:
        """** matches across directories."""
        assert match(["sub/**/*.json"], cwd=tree) == ["sub/d.json", "sub/deep/e.json"]

    def test_negated_pattern(self, tree: Path) -> None:
        """Patterns starting with ! exclude matches."""
        assert match(["**/*.json", "!sub/**"], cwd=tree) == ["a.json"]

    def test_ignore(self, tree: Path) -> None:
        """ignore patterns exclude matches."""
        assert match(["*.{json,yml}"], cwd=tree, ignore=["*.yml"]) == ["a.json"]

    def test_missing_cwd(self, tmp_path: Path) -> None:
        """A missing base directory matches nothing."""
        assert match(["*"], cwd=tmp_path / "missing") == []

    def test_string_arguments(self, tree: Path) -> None:
        """Bare strings for patterns and ignore are single patterns."""
        assert match("*.{json,yml}", cwd=tree, ignore="*.yml") == ["a.json"]
