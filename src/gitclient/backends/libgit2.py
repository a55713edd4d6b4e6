"""Backend built on libgit2 through pygit2."""

from __future__ import annotations

import tempfile
from collections.abc import Sequence
from typing import TYPE_CHECKING

import pygit2

from gitclient._internal.errors import git_operation
from gitclient._internal.parsing import (
    extract_branch_name,
    is_valid_sha,
    make_branch_ref,
    redact_url,
)
from gitclient.backends.base import GitBackend
from gitclient.credentials import CredentialCallbacks
from gitclient.errors import (
    AlreadyInitializedError,
    BranchExistsError,
    NotARepositoryError,
    RefNotFoundError,
)
from gitclient.models import RefSpec

if TYPE_CHECKING:
    from gitclient.credentials import Credential
    from gitclient.models import CheckoutOptions, CloneOptions, FetchOptions


class Pygit2Backend(GitBackend):
    """In-process git; credentials are offered through libgit2 callbacks."""

    name = "pygit2"

    _repo: pygit2.Repository | None = None

    def supports_credentials(self) -> bool:
        return True

    # =========================================================================
    # Operations
    # =========================================================================

    def init(self, bare: bool = False) -> None:
        if self.is_repository():
            raise AlreadyInitializedError(str(self.path))
        self.path.mkdir(parents=True, exist_ok=True)
        with git_operation("init"):
            self._repo = pygit2.init_repository(str(self.path), bare=bare)
        self.log.debug("initialized repository", path=str(self.path), bare=bare)

    def fetch(self, options: FetchOptions, credentials: Sequence[Credential]) -> None:
        repo = self._open()
        if not options.tags:
            self.log.debug("tag download cannot be disabled; libgit2 follows tags")
        remote = repo.remotes.create_anonymous(options.remote_url)
        self._fetch(
            remote,
            options.remote_url,
            [str(spec) for spec in options.refspecs],
            credentials,
            operation="fetch",
            prune=options.prune,
        )

    def clone(self, options: CloneOptions, credentials: Sequence[Credential]) -> None:
        if not self.is_repository():
            self.init()
        if options.reference is not None:
            self.log.info("reference repository ignored", reference=str(options.reference))
        self.set_remote_url(options.remote_name, options.url)
        remote = self._open().remotes[options.remote_name]
        refspec = str(RefSpec.for_remote(options.remote_name))
        self._fetch(remote, options.url, [refspec], credentials, operation="clone")

    def set_remote_url(self, name: str, url: str) -> None:
        repo = self._open()
        with git_operation("set remote url"):
            if self._find_remote(repo, name) is None:
                repo.remotes.create(name, url)
            else:
                repo.remotes.set_url(name, url)
        self.log.debug("remote url set", remote=name, url=redact_url(url))

    def get_remote_url(self, name: str) -> str | None:
        remote = self._find_remote(self._open(), name)
        return remote.url if remote is not None else None

    def get_head_rev(self, url: str, branch: str, credentials: Sequence[Credential]) -> str:
        if self.is_repository():
            return self._remote_head(self._open(), url, branch, credentials)
        # ls-remote needs a repository to hang the remote on
        with tempfile.TemporaryDirectory(prefix="gitclient-ls-remote-") as scratch:
            repo = pygit2.init_repository(scratch, bare=True)
            return self._remote_head(repo, url, branch, credentials)

    def checkout(self, options: CheckoutOptions) -> None:
        repo = self._open()
        commit = self._peel_commit(repo, options.ref)
        existing = repo.branches.local.get(options.branch)
        if existing is not None and not options.delete_branch_if_exists:
            raise BranchExistsError(options.branch)

        with git_operation(f"checkout {options.ref}"):
            repo.checkout_tree(commit, strategy=pygit2.enums.CheckoutStrategy.SAFE)
            if existing is not None:
                # Detach first; libgit2 refuses to delete the branch HEAD is on
                repo.set_head(commit.id)
                existing.delete()
            branch = repo.branches.local.create(options.branch, commit)
            repo.set_head(branch.name)
        self.log.debug("checked out", branch=options.branch, sha=str(commit.id))

    # =========================================================================
    # Introspection
    # =========================================================================

    def has_commit(self, sha: str) -> bool:
        if not is_valid_sha(sha) or not self.is_repository():
            return False
        try:
            obj = self._open().get(sha)
        except ValueError:
            return False
        return isinstance(obj, pygit2.Commit)

    def resolve_ref(self, name: str) -> str:
        return str(self._peel_commit(self._open(), name).id)

    def current_branch(self) -> str | None:
        repo = self._open()
        if repo.head_is_detached:
            return None
        head = repo.references.get("HEAD")
        if head is None:
            return None
        return extract_branch_name(str(head.target))

    # =========================================================================
    # Internals
    # =========================================================================

    def _open(self) -> pygit2.Repository:
        if self._repo is None:
            if not self.is_repository():
                raise NotARepositoryError(str(self.path))
            with git_operation("open repository"):
                self._repo = pygit2.Repository(str(self.path))
        return self._repo

    @staticmethod
    def _find_remote(repo: pygit2.Repository, name: str) -> pygit2.Remote | None:
        for remote in repo.remotes:
            if remote.name == name:
                return remote
        return None

    @staticmethod
    def _peel_commit(repo: pygit2.Repository, ref: str) -> pygit2.Commit:
        """Resolve a sha, branch, full ref or ``<remote>/<branch>`` to a commit."""
        try:
            obj = repo.revparse_single(ref)
            commit = obj.peel(pygit2.Commit)
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise RefNotFoundError(ref) from e
        return commit  # type: ignore[no-any-return]

    def _fetch(
        self,
        remote: pygit2.Remote,
        url: str,
        refspecs: list[str],
        credentials: Sequence[Credential],
        *,
        operation: str,
        prune: bool = False,
    ) -> None:
        callbacks = CredentialCallbacks(credentials, operation)
        enums = pygit2.enums
        self.log.debug(
            operation,
            url=redact_url(url),
            refspecs=refspecs,
            credentials=len(credentials),
        )
        with git_operation(operation, remote=redact_url(url)):
            remote.fetch(
                refspecs or None,
                callbacks=callbacks,
                prune=enums.FetchPrune.PRUNE if prune else enums.FetchPrune.UNSPECIFIED,
            )
        self.log.debug("fetched", url=redact_url(url), credential_attempts=callbacks.attempts)

    def _remote_head(
        self,
        repo: pygit2.Repository,
        url: str,
        branch: str,
        credentials: Sequence[Credential],
    ) -> str:
        ref = make_branch_ref(branch)
        remote = repo.remotes.create_anonymous(url)
        callbacks = CredentialCallbacks(credentials, "ls-remote")
        with git_operation("ls-remote", remote=redact_url(url)):
            heads = remote.list_heads(callbacks=callbacks)
        for head in heads:
            if head.name == ref:
                return str(head.oid)
        raise RefNotFoundError(branch)
