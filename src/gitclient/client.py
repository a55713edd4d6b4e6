"""Credential-scoped git client facade."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from gitclient.backends import get_backend
from gitclient.config.models import GitConfig
from gitclient.models import ClientState, RepositoryHandle

if TYPE_CHECKING:
    import structlog

    from gitclient.backends.base import GitBackend
    from gitclient.credentials import Credential
    from gitclient.models import CheckoutOptions, CloneOptions, FetchOptions, InitOptions


class GitClient:
    """
    One working directory, one backend, one ordered credential list.

    Network operations offer the registered credentials in registration
    order until the remote accepts one. Credentials belong to this instance
    only and stay registered until ``clear_credentials`` is called.
    """

    def __init__(
        self,
        workspace: Path | str,
        backend: str = "git",
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        env: Mapping[str, str] | None = None,
        config: GitConfig | None = None,
    ) -> None:
        self._backend_name = backend
        self._logger = logger
        self._env = dict(env or {})
        self._config = config or GitConfig()
        self._credentials: list[Credential] = []
        self._backend = self._make_backend(Path(workspace))
        self._state = (
            ClientState.INITIALIZED if self._backend.is_repository() else ClientState.UNINITIALIZED
        )

    def _make_backend(self, path: Path) -> GitBackend:
        return get_backend(
            self._backend_name, path, logger=self._logger, env=self._env, config=self._config
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def path(self) -> Path:
        """Working directory this client operates on."""
        return self._backend.path

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def repository(self) -> RepositoryHandle:
        return RepositoryHandle(path=self.path, initialized=self._backend.is_repository())

    @property
    def credentials(self) -> tuple[Credential, ...]:
        """Registered credentials in the order they will be offered."""
        return tuple(self._credentials)

    # =========================================================================
    # Credentials
    # =========================================================================

    def add_default_credentials(self, credential: Credential) -> None:
        """Register a credential for every subsequent network operation."""
        self._credentials.append(credential)

    def clear_credentials(self) -> None:
        """Forget all registered credentials. Safe to call repeatedly."""
        self._credentials.clear()

    # =========================================================================
    # Operations
    # =========================================================================

    def init(self, options: InitOptions | None = None) -> RepositoryHandle:
        """Create an empty repository at the workspace."""
        if options is not None and options.workspace is not None:
            target = Path(options.workspace)
            if target != self.path:
                self._backend = self._make_backend(target)
        self._backend.init(bare=options.bare if options is not None else False)
        self._state = ClientState.INITIALIZED
        return self.repository

    def fetch(self, options: FetchOptions) -> None:
        """Fetch ``options.refspecs`` from ``options.remote_url``."""
        self._backend.fetch(options, self.credentials)
        self._state = ClientState.FETCHED

    def clone(self, options: CloneOptions) -> RepositoryHandle:
        """Initialize, add the remote and fetch all of its branches.

        No local branch is created; check one out explicitly afterwards.
        """
        self._backend.clone(options, self.credentials)
        self._state = ClientState.INITIALIZED
        return self.repository

    def set_remote_url(self, name: str, url: str) -> None:
        self._backend.set_remote_url(name, url)

    def get_remote_url(self, name: str) -> str | None:
        return self._backend.get_remote_url(name)

    def get_head_rev(self, remote_url: str, branch: str) -> str:
        """Commit at the tip of ``branch`` on the remote. Local refs are untouched."""
        return self._backend.get_head_rev(remote_url, branch, self.credentials)

    def checkout(self, options: CheckoutOptions) -> None:
        """Create ``options.branch`` at ``options.ref`` and check it out."""
        self._backend.checkout(options)
        self._state = ClientState.CHECKED_OUT

    # =========================================================================
    # Queries
    # =========================================================================

    def is_commit_in_repo(self, sha: str) -> bool:
        """Whether ``sha`` names a commit present locally. Never hits the network."""
        return self._backend.has_commit(sha)

    def resolve_ref(self, name: str) -> str:
        return self._backend.resolve_ref(name)

    def current_branch(self) -> str | None:
        return self._backend.current_branch()
