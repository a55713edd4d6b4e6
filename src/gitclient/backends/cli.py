"""Backend driving the native git executable as a subprocess."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from gitclient._internal.askpass import credential_environment
from gitclient._internal.errors import classify_failure
from gitclient._internal.parsing import (
    conflicting_paths,
    is_auth_failure,
    is_valid_sha,
    make_branch_ref,
    redact_url,
)
from gitclient.backends.base import GitBackend
from gitclient.errors import (
    AlreadyInitializedError,
    AuthenticationError,
    BackendUnavailableError,
    BranchExistsError,
    CheckoutConflictError,
    GitError,
    NetworkError,
    NotARepositoryError,
    RefNotFoundError,
)
from gitclient.models import FetchOptions, GitVersion, RefSpec

if TYPE_CHECKING:
    from gitclient.credentials import Credential
    from gitclient.models import CheckoutOptions, CloneOptions

# Network commands must never fall back to an interactive prompt
_NO_PROMPT_ARGS = ("-c", "core.askpass=true")

# Never inherited; the backend's path alone selects the repository
_REPOSITORY_ENV = ("GIT_DIR", "GIT_WORK_TREE")


class CliGitBackend(GitBackend):
    """Runs ``git`` with prompting disabled and credentials supplied out of band."""

    name = "git"

    _version: GitVersion | None
    _version_probed: bool = False

    # =========================================================================
    # Capabilities
    # =========================================================================

    def version(self) -> GitVersion | None:
        """Installed git version, or None if the executable cannot be run."""
        if not self._version_probed:
            self._version_probed = True
            self._version = None
            try:
                result = subprocess.run(
                    [self.config.executable, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=self.config.timeout_sec,
                    check=False,
                )
            except (FileNotFoundError, PermissionError, subprocess.TimeoutExpired):
                return None
            if result.returncode == 0:
                try:
                    self._version = GitVersion.parse(result.stdout)
                except ValueError:
                    self.log.warning("unparsable git version", output=result.stdout.strip())
        return self._version

    def supports_credentials(self) -> bool:
        version = self.version()
        if version is None:
            return False
        return version >= GitVersion.parse(self.config.min_credentials_version)

    # =========================================================================
    # Operations
    # =========================================================================

    def init(self, bare: bool = False) -> None:
        if self.is_repository():
            raise AlreadyInitializedError(str(self.path))
        self.path.mkdir(parents=True, exist_ok=True)
        args = ["init", "--bare"] if bare else ["init"]
        self._run(args)

    def fetch(self, options: FetchOptions, credentials: Sequence[Credential]) -> None:
        self._require_repository()
        args = ["fetch"]
        if not options.tags:
            args.append("--no-tags")
        if options.prune:
            args.append("--prune")
        args.append(options.remote_url)
        args.extend(str(spec) for spec in options.refspecs)
        self._run_authenticated(args, options.remote_url, credentials, "fetch")

    def clone(self, options: CloneOptions, credentials: Sequence[Credential]) -> None:
        if not self.is_repository():
            self.init()
        self.set_remote_url(options.remote_name, options.url)
        if options.reference is not None:
            self._add_alternate(Path(options.reference))
        fetch = FetchOptions(options.url, (RefSpec.for_remote(options.remote_name),))
        self.fetch(fetch, credentials)

    def set_remote_url(self, name: str, url: str) -> None:
        self._require_repository()
        if self.get_remote_url(name) is None:
            self._run(["remote", "add", name, url])
        else:
            self._run(["remote", "set-url", name, url])

    def get_remote_url(self, name: str) -> str | None:
        self._require_repository()
        result = self._run(["config", "--get", f"remote.{name}.url"], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_head_rev(self, url: str, branch: str, credentials: Sequence[Credential]) -> str:
        ref = make_branch_ref(branch)
        result = self._run_authenticated(["ls-remote", url, ref], url, credentials, "ls-remote")
        for line in result.stdout.splitlines():
            sha, _, name = line.partition("\t")
            if name.strip() == ref:
                return sha.strip()
        raise RefNotFoundError(branch)

    def checkout(self, options: CheckoutOptions) -> None:
        self._require_repository()
        sha = self.resolve_ref(options.ref)
        if self._branch_exists(options.branch):
            if not options.delete_branch_if_exists:
                raise BranchExistsError(options.branch)
            # Leave the branch before deleting it; a conflict here keeps it intact
            detach = self._run(["checkout", "--detach", sha], check=False)
            self._raise_for_checkout(options.ref, detach)
            self._run(["branch", "-D", options.branch])

        result = self._run(["checkout", "-b", options.branch, sha], check=False)
        self._raise_for_checkout(options.ref, result)

    # =========================================================================
    # Introspection
    # =========================================================================

    def has_commit(self, sha: str) -> bool:
        if not is_valid_sha(sha) or not self.is_repository():
            return False
        result = self._run(["cat-file", "-e", f"{sha}^{{commit}}"], check=False)
        return result.returncode == 0

    def resolve_ref(self, name: str) -> str:
        self._require_repository()
        result = self._run(["rev-parse", "--verify", "--quiet", f"{name}^{{commit}}"], check=False)
        if result.returncode != 0 or not result.stdout.strip():
            raise RefNotFoundError(name)
        return result.stdout.strip()

    def current_branch(self) -> str | None:
        self._require_repository()
        result = self._run(["symbolic-ref", "--quiet", "--short", "HEAD"], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_repository(self) -> None:
        if not self.is_repository():
            raise NotARepositoryError(str(self.path))

    def _branch_exists(self, name: str) -> bool:
        result = self._run(
            ["show-ref", "--verify", "--quiet", make_branch_ref(name)], check=False
        )
        return result.returncode == 0

    @staticmethod
    def _raise_for_checkout(ref: str, result: subprocess.CompletedProcess[str]) -> None:
        if result.returncode == 0:
            return
        stderr = result.stderr.strip()
        if "would be overwritten" in stderr or "conflict" in stderr.lower():
            raise CheckoutConflictError(ref, conflicting_paths(result.stderr))
        raise GitError(f"checkout failed: {stderr}")

    def _add_alternate(self, reference: Path) -> None:
        """Borrow objects from a local repository instead of transferring them."""
        candidates = (reference / ".git" / "objects", reference / "objects")
        objects = next((c for c in candidates if c.is_dir()), None)
        if objects is None:
            self.log.warning("reference repository not found", reference=str(reference))
            return
        git_dir = self.path / ".git" if (self.path / ".git").is_dir() else self.path
        alternates = git_dir / "objects" / "info" / "alternates"
        alternates.parent.mkdir(parents=True, exist_ok=True)
        with alternates.open("a", encoding="utf-8") as f:
            f.write(f"{objects.resolve()}\n")
        self.log.debug("using reference repository", objects=str(objects))

    def _run_authenticated(
        self,
        args: list[str],
        url: str,
        credentials: Sequence[Credential],
        operation: str,
    ) -> subprocess.CompletedProcess[str]:
        """Run a network command, trying each credential until one is accepted."""
        remote = redact_url(url)
        attempts: list[Credential | None] = list(credentials) or [None]
        for credential in attempts:
            with credential_environment(credential) as cred_env:
                result = self._run(args, remote=remote, extra_env=cred_env, check=False)
            if result.returncode == 0:
                return result
            stderr = result.stderr.strip()
            if is_auth_failure(stderr):
                self.log.debug(
                    "credential rejected",
                    operation=operation,
                    username=credential.username if credential else None,
                )
                continue
            raise classify_failure(operation, stderr, remote=remote)
        raise AuthenticationError(remote, operation)

    def _run(
        self,
        args: list[str],
        *,
        remote: str | None = None,
        extra_env: Mapping[str, str] | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        """Run git in the work tree; log the command line with URLs redacted."""
        argv = [*_NO_PROMPT_ARGS, *args] if remote is not None else list(args)
        self.log.debug("> git " + " ".join(redact_url(a) for a in argv))

        inherited = {k: v for k, v in os.environ.items() if k not in _REPOSITORY_ENV}
        env = {**inherited, **self.env, "LC_ALL": "C", **(extra_env or {})}
        cwd = self.path if self.path.is_dir() else None
        try:
            result = subprocess.run(
                [self.config.executable, *argv],
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=self.config.timeout_sec,
                check=False,
            )
        except FileNotFoundError as e:
            raise BackendUnavailableError(self.name, f"{self.config.executable} not found") from e
        except subprocess.TimeoutExpired as e:
            message = f"git {args[0]} timed out after {self.config.timeout_sec}s"
            if remote is not None:
                raise NetworkError(remote, message) from e
            raise GitError(message) from e

        if check and result.returncode != 0:
            raise GitError(f"git {args[0]} failed: {result.stderr.strip()}")
        return result
