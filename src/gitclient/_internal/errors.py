"""Centralized error mapping for pygit2 exceptions and git process failures."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from gitclient._internal.parsing import is_auth_failure, is_network_failure
from gitclient.errors import (
    AuthenticationError,
    CheckoutConflictError,
    GitError,
    NetworkError,
)


def classify_failure(
    operation: str, message: str, *, remote: str | None = None
) -> GitError:
    """Pick the domain error for a failed operation from its error text."""
    if remote is not None:
        if is_auth_failure(message):
            return AuthenticationError(remote, operation)
        if is_network_failure(message):
            return NetworkError(remote, f"{operation} failed: {message}")
    return GitError(f"{operation} failed: {message}")


class ErrorMapper:
    """Maps pygit2 exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(operation: str, *, remote: str | None = None) -> Iterator[None]:
        """Context manager for consistent exception translation."""
        try:
            yield
        except GitError:
            raise
        except (pygit2.GitError, OSError, KeyError, ValueError) as e:
            # Lookup errors only mean something here when a remote was involved
            if isinstance(e, (KeyError, ValueError)) and remote is None:
                raise
            msg = str(e)
            if "conflict" in msg.lower() and operation.startswith("checkout"):
                raise CheckoutConflictError(operation.partition(" ")[2] or operation) from e
            if remote is not None and not is_auth_failure(msg):
                raise NetworkError(remote, f"{operation} failed: {msg}") from e
            raise classify_failure(operation, msg, remote=remote) from e


def git_operation(operation: str, *, remote: str | None = None) -> AbstractContextManager[None]:
    """Scope a block so pygit2 failures surface as gitclient errors."""
    return ErrorMapper.guard(operation, remote=remote)
