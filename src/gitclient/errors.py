"""Git client error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class AlreadyInitializedError(GitError):
    """A repository already exists at the target path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Repository already initialized: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class BranchExistsError(GitError):
    """Branch already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Branch already exists: {name}")
        self.name = name


class ConflictError(GitError):
    """Operation stopped because of conflicting paths."""

    def __init__(self, operation: str, paths: list[str]) -> None:
        joined = ", ".join(paths) if paths else "working tree"
        super().__init__(f"{operation} resulted in conflicts: {joined}")
        self.operation = operation
        self.paths = paths


class CheckoutConflictError(ConflictError):
    """Local modifications would be overwritten by checkout."""

    def __init__(self, ref: str, paths: list[str] | None = None) -> None:
        super().__init__(f"checkout of {ref}", paths or [])
        self.ref = ref


class RemoteError(GitError):
    """Error communicating with remote."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(f"Remote error ({remote}): {message}")
        self.remote = remote


class NetworkError(RemoteError):
    """Transport-level failure (unreachable host, refused connection, timeout)."""


class AuthenticationError(GitError):
    """No registered credential was accepted by the remote."""

    def __init__(self, remote: str, operation: str | None = None) -> None:
        op_part = f" during {operation}" if operation else ""
        super().__init__(f"Authentication failed for remote {remote!r}{op_part}")
        self.remote = remote
        self.operation = operation


class BackendUnavailableError(GitError):
    """Requested git implementation cannot be used on this machine."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Git backend {name!r} unavailable: {reason}")
        self.name = name
        self.reason = reason
