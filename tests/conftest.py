"""Shared fixtures: a bare "remote" repository and a working clone of it."""

import tempfile
from pathlib import Path

import pytest
from git import Repo


def configure_user(repo: Repo) -> None:
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")


def commit_file(repo: Repo, name: str, content: str, message: str):
    """Write a file in the work tree, stage it and commit it."""
    path = Path(repo.working_tree_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


@pytest.fixture
def git_workspace():
    """Create a bare remote with one commit on master and a clone of it.

    Yields a dict with ``root``, ``remote_path``, ``clone`` (a Repo) and a
    ``new_clone`` factory for pushing from a second working copy.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)

        seed = Repo.init(root / "seed")
        configure_user(seed)
        commit_file(seed, "README.md", "# Test Project\n", "Initial commit")
        seed.git.branch("-M", "master")

        remote_path = root / "remote.git"
        Repo.clone_from(str(root / "seed"), str(remote_path), bare=True)

        counter = {"n": 0}

        def new_clone(name: str = None) -> Repo:
            counter["n"] += 1
            target = root / (name or f"clone-{counter['n']}")
            repo = Repo.clone_from(str(remote_path), str(target))
            configure_user(repo)
            return repo

        clone = new_clone("work")
        yield {
            "root": root,
            "remote_path": remote_path,
            "clone": clone,
            "new_clone": new_clone,
        }
