"""Backend contract shared by every git implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from gitclient.config.models import GitConfig
from gitclient.core.logging import get_logger

if TYPE_CHECKING:
    import structlog

    from gitclient.credentials import Credential
    from gitclient.models import CheckoutOptions, CloneOptions, FetchOptions


class GitBackend(ABC):
    """One git implementation bound to one working directory.

    Backends receive the client's ordered credential list with every
    network operation; they never keep credentials themselves.
    """

    name: str = ""

    def __init__(
        self,
        path: Path,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        env: Mapping[str, str] | None = None,
        config: GitConfig | None = None,
    ) -> None:
        self.path = Path(path)
        self.log = logger or get_logger(f"gitclient.{self.name}")
        self.env = dict(env or {})
        self.config = config or GitConfig()

    # =========================================================================
    # Capabilities
    # =========================================================================

    @abstractmethod
    def supports_credentials(self) -> bool:
        """Whether credentials can be passed without interactive prompting."""
        ...

    def is_repository(self) -> bool:
        """Whether ``path`` itself holds a repository (work tree or bare)."""
        if (self.path / ".git").exists():
            return True
        return (self.path / "HEAD").is_file() and (self.path / "objects").is_dir()

    # =========================================================================
    # Operations
    # =========================================================================

    @abstractmethod
    def init(self, bare: bool = False) -> None: ...

    @abstractmethod
    def fetch(self, options: FetchOptions, credentials: Sequence[Credential]) -> None: ...

    @abstractmethod
    def clone(self, options: CloneOptions, credentials: Sequence[Credential]) -> None: ...

    @abstractmethod
    def set_remote_url(self, name: str, url: str) -> None: ...

    @abstractmethod
    def get_remote_url(self, name: str) -> str | None: ...

    @abstractmethod
    def get_head_rev(self, url: str, branch: str, credentials: Sequence[Credential]) -> str:
        """Tip of ``branch`` on the remote, without touching local refs."""
        ...

    @abstractmethod
    def checkout(self, options: CheckoutOptions) -> None: ...

    # =========================================================================
    # Introspection
    # =========================================================================

    @abstractmethod
    def has_commit(self, sha: str) -> bool: ...

    @abstractmethod
    def resolve_ref(self, name: str) -> str: ...

    @abstractmethod
    def current_branch(self) -> str | None: ...
