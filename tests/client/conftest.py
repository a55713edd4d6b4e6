"""Test fixtures for the client and its backends."""

from __future__ import annotations

import shutil
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pygit2
import pytest

from gitclient.client import GitClient
from gitclient.core.logging import LogCapture

SIG = pygit2.Signature("Test User", "test@example.com")


@dataclass(frozen=True)
class Origin:
    """A local bare repository standing in for a remote."""

    path: Path
    master: str
    feature: str

    @property
    def url(self) -> str:
        return str(self.path)


def _commit_file(
    repo: pygit2.Repository,
    ref: str,
    files: dict[str, bytes],
    message: str,
    parents: list[pygit2.Oid],
) -> pygit2.Oid:
    builder = repo.TreeBuilder()
    for name, content in files.items():
        builder.insert(name, repo.create_blob(content), pygit2.enums.FileMode.BLOB)
    tree = builder.write()
    return repo.create_commit(ref, SIG, SIG, message, tree, parents)


@pytest.fixture
def origin(tmp_path: Path) -> Origin:
    """Bare repository with ``master`` and a ``feature`` branch that edits README.md."""
    path = tmp_path / "origin.git"
    repo = pygit2.init_repository(str(path), bare=True)
    master = _commit_file(
        repo, "refs/heads/master", {"README.md": b"# Origin\n"}, "Initial commit", []
    )
    feature = _commit_file(
        repo,
        "refs/heads/feature",
        {"README.md": b"# Origin\n\nFeature work.\n", "feature.txt": b"feature\n"},
        "Feature commit",
        [master],
    )
    repo.set_head("refs/heads/master")
    return Origin(path=path, master=str(master), feature=str(feature))


@pytest.fixture(params=["git", "pygit2"])
def backend_name(request: pytest.FixtureRequest) -> str:
    """Run a test against each backend; native git only when installed."""
    if request.param == "git" and shutil.which("git") is None:
        pytest.skip("git executable not on PATH")
    return request.param  # type: ignore[no-any-return]


@pytest.fixture
def capture() -> Generator[LogCapture, None, None]:
    with LogCapture() as log_capture:
        yield log_capture


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    return tmp_path / "work"


@pytest.fixture
def client(workspace: Path, backend_name: str, capture: LogCapture) -> GitClient:
    return GitClient(workspace, backend_name, logger=capture.logger)
