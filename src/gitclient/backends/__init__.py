"""Git implementations behind the client facade."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from gitclient.backends.base import GitBackend
from gitclient.backends.cli import CliGitBackend
from gitclient.backends.libgit2 import Pygit2Backend
from gitclient.config.models import GitConfig

if TYPE_CHECKING:
    import structlog

BACKEND_REGISTRY: dict[str, type[GitBackend]] = {
    CliGitBackend.name: CliGitBackend,
    Pygit2Backend.name: Pygit2Backend,
}


def get_backend(
    name: str,
    path: Path,
    *,
    logger: structlog.stdlib.BoundLogger | None = None,
    env: Mapping[str, str] | None = None,
    config: GitConfig | None = None,
) -> GitBackend:
    """Instantiate the backend registered under ``name`` for ``path``."""
    backend_class = BACKEND_REGISTRY.get(name)
    if backend_class is None:
        known = ", ".join(sorted(BACKEND_REGISTRY))
        raise ValueError(f"Unknown git backend {name!r} (known: {known})")
    return backend_class(path, logger=logger, env=env, config=config)


def available_backends(probe_dir: Path | None = None, config: GitConfig | None = None) -> list[str]:
    """Backends usable with credentials on this machine, native git first."""
    probe = CliGitBackend(probe_dir or Path.cwd(), config=config)
    if probe.supports_credentials():
        return [CliGitBackend.name, Pygit2Backend.name]
    return [Pygit2Backend.name]


__all__ = [
    "BACKEND_REGISTRY",
    "CliGitBackend",
    "GitBackend",
    "Pygit2Backend",
    "available_backends",
    "get_backend",
]
