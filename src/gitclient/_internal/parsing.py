"""String parsing helpers for git ref names and remote URLs."""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

_REFS_HEADS_PREFIX = "refs/heads/"
_SHA_RE = re.compile(r"^[0-9a-fA-F]{4,64}$")

_AUTH_MARKERS = (
    "authentication",
    "could not read username",
    "could not read password",
    "permission denied",
    "invalid username or password",
    "access denied",
    "terminal prompts disabled",
    "status code: 401",
    "status code: 403",
    "returned error: 401",
    "returned error: 403",
)

_NETWORK_MARKERS = (
    "could not resolve host",
    "could not resolve hostname",
    "unable to access",
    "connection refused",
    "connection timed out",
    "connection reset",
    "network is unreachable",
    "no route to host",
    "failed to connect",
    "could not read from remote repository",
    "operation timed out",
    "timed out",
    "early eof",
)


def extract_branch_name(refname: str) -> str | None:
    """Extract branch name from full ref (e.g., 'refs/heads/main' -> 'main')."""
    if refname.startswith(_REFS_HEADS_PREFIX):
        return refname[len(_REFS_HEADS_PREFIX) :]
    return None


def make_branch_ref(name: str) -> str:
    """Create full branch ref from name."""
    if name.startswith(_REFS_HEADS_PREFIX):
        return name
    return f"{_REFS_HEADS_PREFIX}{name}"


def redact_url(url: str) -> str:
    """Replace any password embedded in a URL with a placeholder."""
    parts = urlsplit(url)
    if not parts.password:
        return url
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username}:[REDACTED]@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def is_auth_failure(message: str) -> bool:
    """True when git/libgit2 output says the credentials were rejected."""
    lowered = message.lower()
    if "credential" in lowered and "helper" not in lowered:
        return True
    return any(marker in lowered for marker in _AUTH_MARKERS)


def is_network_failure(message: str) -> bool:
    """True when git/libgit2 output describes a transport failure."""
    lowered = message.lower()
    return any(marker in lowered for marker in _NETWORK_MARKERS)


def is_valid_sha(text: str) -> bool:
    """True for a full or abbreviated hex object id."""
    return bool(_SHA_RE.match(text))


def conflicting_paths(stderr: str) -> list[str]:
    """Paths listed (tab-indented) in git's 'would be overwritten' error."""
    return [line.strip() for line in stderr.splitlines() if line.startswith("\t")]
