"""Non-interactive credential plumbing for the git executable.

git never reads credentials from us directly. Username/password pairs are
answered by a throwaway askpass script; private keys are written to a
0600 file and handed to ssh through GIT_SSH_COMMAND. Everything written
here lives in one temp directory that is removed when the context exits.
"""

from __future__ import annotations

import os
import shlex
import shutil
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from gitclient.credentials import Credential, UsernamePasswordCredential

_ASKPASS_TEMPLATE = """#!/bin/sh
case "$1" in
  [Uu]sername*) cat {user_file} ;;
  *) cat {secret_file} ;;
esac
"""


def _write_private(path: Path, content: str, mode: int) -> Path:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    os.chmod(path, mode)
    return path


def write_askpass_script(directory: Path, username: str, secret: str) -> Path:
    """Write an askpass script answering username and password/passphrase prompts."""
    user_file = _write_private(directory / "username", username, stat.S_IRUSR | stat.S_IWUSR)
    secret_file = _write_private(directory / "secret", secret, stat.S_IRUSR | stat.S_IWUSR)
    script = _ASKPASS_TEMPLATE.format(
        user_file=shlex.quote(str(user_file)),
        secret_file=shlex.quote(str(secret_file)),
    )
    return _write_private(directory / "askpass.sh", script, stat.S_IRWXU)


def write_private_key(directory: Path, key_material: str) -> Path:
    """Write key material to a 0600 file; ssh refuses keys with wider permissions."""
    if not key_material.endswith("\n"):
        key_material += "\n"
    return _write_private(directory / "id_key", key_material, stat.S_IRUSR | stat.S_IWUSR)


def ssh_command(key_file: Path, username: str, *, batch: bool) -> str:
    parts = [
        "ssh",
        "-i",
        str(key_file),
        "-l",
        username,
        "-o",
        "IdentitiesOnly=yes",
        "-o",
        "StrictHostKeyChecking=no",
    ]
    if batch:
        parts += ["-o", "BatchMode=yes"]
    return " ".join(shlex.quote(p) for p in parts)


@contextmanager
def credential_environment(credential: Credential | None) -> Iterator[dict[str, str]]:
    """Yield environment overrides that supply ``credential`` without prompting."""
    env = {"GIT_TERMINAL_PROMPT": "0"}
    if credential is None:
        yield env
        return

    workdir = Path(tempfile.mkdtemp(prefix="gitclient-cred-"))
    try:
        if isinstance(credential, UsernamePasswordCredential):
            script = write_askpass_script(workdir, credential.username, credential.password)
            env["GIT_ASKPASS"] = str(script)
        else:
            key_file = write_private_key(workdir, credential.private_key)
            if credential.passphrase:
                script = write_askpass_script(workdir, credential.username, credential.passphrase)
                env["SSH_ASKPASS"] = str(script)
                env["SSH_ASKPASS_REQUIRE"] = "force"
                env["GIT_SSH_COMMAND"] = ssh_command(key_file, credential.username, batch=False)
            else:
                env["GIT_SSH_COMMAND"] = ssh_command(key_file, credential.username, batch=True)
        yield env
    finally:
        shutil.rmtree(workdir, ignore_errors=True)
