"""Repository session: the single opened repository issue-git works against."""

import os
from pathlib import Path
from typing import Dict, Optional

import git
from git import Repo

from issue_git.config import APP_NAME, GitConfig
from issue_git.debug import get_logger
from issue_git.errors import ErrorKind, controlled_error

logger = get_logger("git")

STASH_MESSAGE = f"auto generated stash by {APP_NAME}"


def fetch_environment(git_config: GitConfig, ssh_command: Optional[str] = None) -> Dict[str, str]:
    """Environment handed to git for network operations.

    SSH keys come from the running agent; BatchMode makes a missing key fail
    instead of prompting. A user's own ssh command (``GIT_SSH_COMMAND`` or
    ``core.sshCommand``, passed as ``ssh_command``) is used unchanged.
    """
    env: Dict[str, str] = {}
    if git_config.trust_all_certificates:
        env["GIT_SSL_NO_VERIFY"] = "1"

    user_command = ssh_command or os.environ.get("GIT_SSH_COMMAND")
    if user_command:
        env["GIT_SSH_COMMAND"] = user_command
    else:
        ssh_options = ["-o", "BatchMode=yes"]
        if git_config.trust_all_certificates:
            ssh_options += ["-o", "StrictHostKeyChecking=no"]
        env["GIT_SSH_COMMAND"] = " ".join(["ssh"] + ssh_options)

    if os.environ.get("SSH_AUTH_SOCK"):
        env["SSH_AUTH_SOCK"] = os.environ["SSH_AUTH_SOCK"]
    return env


class RepositorySession:
    """Wraps one opened git repository.

    Instances come from ``RepositorySession.open``; the session is never
    closed explicitly.
    """

    def __init__(self, repo: Repo, path: Path):
        self.repo = repo
        self.path = path

    @classmethod
    def open(cls, path) -> "RepositorySession":
        """Open the repository at ``path``."""
        path_to_repo = Path(path).expanduser()
        logger.debug("Initializing %s repository", path_to_repo)
        try:
            repo = Repo(path_to_repo)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise controlled_error(
                ErrorKind.COULD_NOT_INITIALIZE_REPO, {"path_to_repo": str(path_to_repo)}
            ) from e
        if repo.bare:
            raise controlled_error(
                ErrorKind.COULD_NOT_INITIALIZE_REPO, {"path_to_repo": str(path_to_repo)}
            )
        return cls(repo, path_to_repo)

    def configured_ssh_command(self) -> Optional[str]:
        """The ssh command git would use: ``GIT_SSH_COMMAND``, then ``core.sshCommand``."""
        if os.environ.get("GIT_SSH_COMMAND"):
            return os.environ["GIT_SSH_COMMAND"]
        try:
            return self.repo.git.config("--get", "core.sshCommand") or None
        except git.exc.GitCommandError:
            # git config exits 1 when the key is unset
            return None

    def fetch(self, remote_name: str, git_config: GitConfig) -> None:
        if not os.environ.get("SSH_AUTH_SOCK"):
            logger.warning("SSH_AUTH_SOCK is not set, SSH remotes will not authenticate")
        logger.debug("Getting authentication from SSH agent")
        remote = self.repo.remote(remote_name)
        env = fetch_environment(git_config, self.configured_ssh_command())
        with self.repo.git.custom_environment(**env):
            remote.fetch()

    def has_changes(self) -> bool:
        """True when the work tree has uncommitted or untracked changes."""
        return self.repo.is_dirty(untracked_files=True)

    def stash(self, message: str = STASH_MESSAGE) -> None:
        """Stash every change, untracked files included."""
        self.repo.git.stash("push", "--include-untracked", "-m", message)

    def branch_commit(self, ref: str) -> git.Commit:
        """Resolve a ref such as ``origin/master`` to its commit."""
        return self.repo.commit(ref)

    def current_branch_name(self) -> str:
        """Short name of the checked-out branch."""
        try:
            return self.repo.active_branch.name
        except TypeError as e:
            # GitPython raises TypeError when HEAD is detached
            raise controlled_error(ErrorKind.DETACHED_HEAD) from e

    def create_branch(self, name: str, commit: git.Commit) -> git.Head:
        """Create a new branch; an existing branch of that name is an error."""
        if any(head.name == name for head in self.repo.heads):
            raise controlled_error(ErrorKind.BRANCH_EXISTS, {"branch": name})
        return self.repo.create_head(name, commit)

    def checkout_branch(self, name: str) -> None:
        self.repo.heads[name].checkout()
