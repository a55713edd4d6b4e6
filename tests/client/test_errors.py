"""Tests for git error types."""

from __future__ import annotations

from gitclient.errors import (
    AlreadyInitializedError,
    AuthenticationError,
    BackendUnavailableError,
    BranchExistsError,
    CheckoutConflictError,
    ConflictError,
    GitError,
    NetworkError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
)


class TestGitErrorMessages:
    """Tests for git error message formatting."""

    def test_not_a_repository(self) -> None:
        err = NotARepositoryError("/tmp/x")
        assert "/tmp/x" in str(err)
        assert err.path == "/tmp/x"

    def test_already_initialized(self) -> None:
        err = AlreadyInitializedError("/tmp/x")
        assert "already initialized" in str(err)

    def test_ref_not_found(self) -> None:
        err = RefNotFoundError("origin/nope")
        assert err.ref == "origin/nope"
        assert "origin/nope" in str(err)

    def test_branch_exists(self) -> None:
        err = BranchExistsError("master")
        assert err.name == "master"

    def test_checkout_conflict_lists_paths(self) -> None:
        err = CheckoutConflictError("origin/feature", ["README.md"])

        assert isinstance(err, ConflictError)
        assert err.ref == "origin/feature"
        assert err.paths == ["README.md"]
        assert "checkout of origin/feature" in str(err)
        assert "README.md" in str(err)

    def test_checkout_conflict_without_paths(self) -> None:
        err = CheckoutConflictError("main")
        assert err.paths == []
        assert "working tree" in str(err)

    def test_authentication_error(self) -> None:
        err = AuthenticationError("https://example.com/r.git", "fetch")

        assert err.remote == "https://example.com/r.git"
        assert err.operation == "fetch"
        assert "during fetch" in str(err)

    def test_authentication_error_without_operation(self) -> None:
        assert "during" not in str(AuthenticationError("origin"))

    def test_network_error_is_remote_error(self) -> None:
        err = NetworkError("origin", "connection refused")

        assert isinstance(err, RemoteError)
        assert err.remote == "origin"
        assert "connection refused" in str(err)

    def test_backend_unavailable(self) -> None:
        err = BackendUnavailableError("git", "git not found")
        assert err.name == "git"
        assert err.reason == "git not found"


def test_all_errors_share_base() -> None:
    errors = [
        NotARepositoryError("p"),
        AlreadyInitializedError("p"),
        RefNotFoundError("r"),
        BranchExistsError("b"),
        CheckoutConflictError("r"),
        NetworkError("o", "m"),
        AuthenticationError("o"),
        BackendUnavailableError("n", "r"),
    ]
    assert all(isinstance(e, GitError) for e in errors)
