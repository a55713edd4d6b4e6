"""Tests for option and value models."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitclient.models import (
    CheckoutOptions,
    CloneOptions,
    FetchOptions,
    GitVersion,
    InitOptions,
    RefSpec,
)


class TestRefSpec:
    """Tests for RefSpec parsing and rendering."""

    def test_parse_forced_wildcard(self) -> None:
        spec = RefSpec.parse("+refs/heads/*:refs/remotes/origin/*")

        assert spec.force is True
        assert spec.source == "refs/heads/*"
        assert spec.destination == "refs/remotes/origin/*"

    def test_parse_plain(self) -> None:
        spec = RefSpec.parse("refs/heads/main:refs/remotes/origin/main")
        assert spec.force is False
        assert str(spec) == "refs/heads/main:refs/remotes/origin/main"

    def test_round_trips_text(self) -> None:
        text = "+refs/heads/*:refs/remotes/origin/*"
        assert str(RefSpec.parse(text)) == text

    @pytest.mark.parametrize(
        "text",
        [
            "refs/heads/main",
            "+:refs/remotes/origin/main",
            "refs/heads/*:refs/remotes/origin/main",
            "refs/heads/*/*:refs/remotes/origin/*/*",
        ],
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="Invalid refspec"):
            RefSpec.parse(text)

    def test_for_remote(self) -> None:
        assert str(RefSpec.for_remote("upstream")) == "+refs/heads/*:refs/remotes/upstream/*"


class TestFetchOptions:
    def test_accepts_strings(self) -> None:
        options = FetchOptions("https://example.com/r.git", ["+refs/heads/*:refs/remotes/o/*"])

        assert options.refspecs == (RefSpec("refs/heads/*", "refs/remotes/o/*", force=True),)

    def test_defaults(self) -> None:
        options = FetchOptions("https://example.com/r.git")

        assert options.refspecs == ()
        assert options.prune is False
        assert options.tags is True

    def test_bad_refspec_string(self) -> None:
        with pytest.raises(ValueError):
            FetchOptions("https://example.com/r.git", ["nonsense"])

    def test_frozen(self) -> None:
        options = FetchOptions("https://example.com/r.git")
        with pytest.raises(AttributeError):
            options.prune = True  # type: ignore[misc]


class TestOptionDefaults:
    def test_clone(self) -> None:
        options = CloneOptions("https://example.com/r.git")
        assert options.remote_name == "origin"
        assert options.reference is None

    def test_checkout(self) -> None:
        options = CheckoutOptions("master", "origin/master")
        assert options.delete_branch_if_exists is False

    def test_init(self) -> None:
        options = InitOptions(workspace=Path("/tmp/x"))
        assert options.bare is False


class TestGitVersion:
    """Tests for GitVersion parsing and comparison."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("git version 2.39.5", GitVersion(2, 39, 5)),
            ("git version 1.7.9", GitVersion(1, 7, 9, 0)),
            ("git version 2.45.2.windows.1", GitVersion(2, 45, 2)),
            ("git version 2.39.3 (Apple Git-146)", GitVersion(2, 39, 3)),
            ("1.7.9.0", GitVersion(1, 7, 9, 0)),
            ("2", GitVersion(2)),
        ],
    )
    def test_parse(self, text: str, expected: GitVersion) -> None:
        assert GitVersion.parse(text) == expected

    def test_parse_without_number(self) -> None:
        with pytest.raises(ValueError):
            GitVersion.parse("git version unknown")

    def test_at_least(self) -> None:
        version = GitVersion(1, 7, 9, 0)

        assert version.at_least(1, 7, 9, 0)
        assert version.at_least(1, 7)
        assert not version.at_least(1, 7, 9, 1)
        assert not version.at_least(2)

    def test_ordering(self) -> None:
        assert GitVersion(1, 7, 8, 9) < GitVersion(1, 7, 9) < GitVersion(1, 10)

    def test_str(self) -> None:
        assert str(GitVersion(2, 39)) == "2.39.0.0"
