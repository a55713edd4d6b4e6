"""Credential values and their libgit2 callback adapter."""

from __future__ import annotations

import getpass
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import pygit2

from gitclient.errors import AuthenticationError

if TYPE_CHECKING:
    from pygit2.enums import CredentialType

FALLBACK_USERNAME = "git"


class CredentialScope(Enum):
    """Visibility of a credential."""

    GLOBAL = "global"
    ITEM = "item"


@dataclass(frozen=True, slots=True)
class UsernamePasswordCredential:
    """Username and password (or token) for HTTP(S) remotes.

    The generated id and description embed the password, so neither is
    included in the repr.
    """

    id: str = field(repr=False)
    username: str
    password: str = field(repr=False)
    scope: CredentialScope = CredentialScope.GLOBAL
    description: str = field(default="", repr=False)


@dataclass(frozen=True, slots=True)
class SSHPrivateKeyCredential:
    """SSH private key material, optionally passphrase protected."""

    id: str
    username: str
    private_key: str = field(repr=False)
    passphrase: str | None = field(default=None, repr=False)
    scope: CredentialScope = CredentialScope.GLOBAL
    description: str = ""
    key_path: Path | None = None


Credential = UsernamePasswordCredential | SSHPrivateKeyCredential


def username_password_credential(
    username: str, password: str, scope: CredentialScope = CredentialScope.GLOBAL
) -> UsernamePasswordCredential:
    """Build a username/password credential with a stable id."""
    credential_id = f"username-{username}-password-{password}"
    return UsernamePasswordCredential(
        id=credential_id,
        username=username,
        password=password,
        scope=scope,
        description=f"desc: {credential_id}",
    )


def default_username() -> str:
    """Current OS user, or ``FALLBACK_USERNAME`` when the platform cannot name one."""
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return FALLBACK_USERNAME


def private_key_credential(
    username: str,
    key_path: Path | str,
    passphrase: str | None = None,
    scope: CredentialScope = CredentialScope.GLOBAL,
) -> SSHPrivateKeyCredential:
    """Build a private key credential from a key file (read as UTF-8)."""
    path = Path(key_path)
    return SSHPrivateKeyCredential(
        id=f"private-key-{path}",
        username=username,
        private_key=path.read_text(encoding="utf-8"),
        passphrase=passphrase,
        scope=scope,
        description=f"private key from {path}",
        key_path=path,
    )


class CredentialCallbacks(pygit2.RemoteCallbacks):
    """
    RemoteCallbacks offering registered credentials in order.

    libgit2 asks again after each rejected credential, so every call hands
    out the next credential compatible with ``allowed_types``. Once the
    list is exhausted the operation fails with AuthenticationError.
    """

    def __init__(self, credentials: Iterable[Credential], operation: str = "fetch") -> None:
        super().__init__()
        self._credentials = list(credentials)
        self._operation = operation
        self._next = 0

    @property
    def attempts(self) -> int:
        """Number of credentials handed out so far."""
        return self._next

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> pygit2.Username | pygit2.UserPass | pygit2.Keypair:
        """Provide the next usable credential for remote operations."""
        # SSH handshake may ask for the user name alone first
        if allowed_types == pygit2.enums.CredentialType.USERNAME:
            name = username_from_url or self._peek_username() or "git"
            return pygit2.Username(name)

        while self._next < len(self._credentials):
            credential = self._credentials[self._next]
            self._next += 1
            offered = self._offer(credential, username_from_url, allowed_types)
            if offered is not None:
                return offered

        raise AuthenticationError(url, self._operation)

    def _peek_username(self) -> str | None:
        if self._next < len(self._credentials):
            return self._credentials[self._next].username
        return None

    @staticmethod
    def _offer(
        credential: Credential,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> pygit2.UserPass | pygit2.Keypair | None:
        types = pygit2.enums.CredentialType
        if isinstance(credential, UsernamePasswordCredential):
            if allowed_types & types.USERPASS_PLAINTEXT:
                return pygit2.UserPass(credential.username, credential.password)
            return None

        username = username_from_url or credential.username
        if allowed_types & types.SSH_MEMORY:
            return pygit2.KeypairFromMemory(
                username, None, credential.private_key, credential.passphrase
            )
        if allowed_types & types.SSH_KEY and credential.key_path is not None:
            return pygit2.Keypair(username, None, str(credential.key_path), credential.passphrase)
        return None
