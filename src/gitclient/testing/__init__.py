"""Helpers for exercising credentials against real remotes."""

from gitclient.testing.matrix import CredentialCase, build_credential_cases, read_definitions
from gitclient.testing.tempdirs import TemporaryDirectoryAllocator

__all__ = [
    "CredentialCase",
    "TemporaryDirectoryAllocator",
    "build_credential_cases",
    "read_definitions",
]
