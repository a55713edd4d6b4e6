"""Immutable option and state models for git client operations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

_VERSION_RE = re.compile(r"(\d+(?:\.\d+){0,3})")


class ClientState(Enum):
    """Lifecycle of one client instance."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    FETCHED = "fetched"
    CHECKED_OUT = "checked_out"


@dataclass(frozen=True, slots=True)
class RefSpec:
    """Maps remote refs onto local refs during fetch."""

    source: str
    destination: str
    force: bool = False

    @classmethod
    def parse(cls, text: str) -> RefSpec:
        """Parse git's ``[+]<src>:<dst>`` form."""
        force = text.startswith("+")
        body = text[1:] if force else text
        source, sep, destination = body.partition(":")
        if not sep or not source or not destination:
            raise ValueError(f"Invalid refspec {text!r}: expected [+]<src>:<dst>")
        if source.count("*") != destination.count("*") or source.count("*") > 1:
            raise ValueError(f"Invalid refspec {text!r}: wildcards must match")
        return cls(source, destination, force)

    @classmethod
    def for_remote(cls, remote_name: str) -> RefSpec:
        """Default fetch refspec for a remote (all branches, forced)."""
        return cls("refs/heads/*", f"refs/remotes/{remote_name}/*", force=True)

    def __str__(self) -> str:
        return f"{'+' if self.force else ''}{self.source}:{self.destination}"


@dataclass(frozen=True, slots=True)
class RepositoryHandle:
    """Working directory of a repository owned by one client."""

    path: Path
    initialized: bool = False


@dataclass(frozen=True, slots=True)
class InitOptions:
    """Options for ``GitClient.init``."""

    workspace: Path | None = None
    bare: bool = False


@dataclass(frozen=True, slots=True)
class FetchOptions:
    """Options for ``GitClient.fetch``."""

    remote_url: str
    refspecs: tuple[RefSpec, ...] = field(default_factory=tuple)
    prune: bool = False
    tags: bool = True

    def __post_init__(self) -> None:
        # Accept lists and refspec strings from callers
        specs = tuple(RefSpec.parse(s) if isinstance(s, str) else s for s in self.refspecs)
        object.__setattr__(self, "refspecs", specs)


@dataclass(frozen=True, slots=True)
class CloneOptions:
    """Options for ``GitClient.clone``.

    ``reference`` names a local repository whose object store may be
    borrowed to reduce transfer. Backends that cannot share object stores
    ignore it.
    """

    url: str
    remote_name: str = "origin"
    reference: Path | None = None


@dataclass(frozen=True, slots=True)
class CheckoutOptions:
    """Options for ``GitClient.checkout``."""

    branch: str
    ref: str
    delete_branch_if_exists: bool = False


@dataclass(frozen=True, slots=True, order=True)
class GitVersion:
    """Dotted git version, compared component-wise."""

    major: int
    minor: int = 0
    patch: int = 0
    build: int = 0

    @classmethod
    def parse(cls, text: str) -> GitVersion:
        """Parse ``git version 2.39.5`` style output or a bare ``1.7.9.0``."""
        match = _VERSION_RE.search(text)
        if match is None:
            raise ValueError(f"No version number in {text!r}")
        parts = [int(p) for p in match.group(1).split(".")]
        return cls(*parts)

    def at_least(self, major: int, minor: int = 0, patch: int = 0, build: int = 0) -> bool:
        return self >= GitVersion(major, minor, patch, build)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"
