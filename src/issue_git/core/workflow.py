"""Issue branch workflow.

``IssueGit`` owns the repository session and runs each workflow as a strict
sequence of git steps. The first failing step aborts the rest and nothing is
rolled back: a stash made before a failed checkout stays in the stash list.
"""

from pathlib import Path
from typing import Optional

from issue_git.config import Config
from issue_git.core.history import walk_history
from issue_git.core.naming import create_branch_name, get_issue_id_from_branch
from issue_git.core.session import STASH_MESSAGE, RepositorySession
from issue_git.debug import get_logger
from issue_git.errors import ErrorKind, controlled_error
from issue_git.models.branch import BranchInfo

logger = get_logger("git")


class IssueGit:
    """Branch lifecycle operations for one repository."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self._session: Optional[RepositorySession] = None
        self.last_stash: Optional[str] = None

    @property
    def session(self) -> RepositorySession:
        """The open repository session; fails before ``init``."""
        if self._session is None:
            raise controlled_error(ErrorKind.NOT_INITIALIZED)
        return self._session

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    def init(self, path) -> "IssueGit":
        """Open the repository at ``path``. Only one session per instance."""
        if self._session is not None:
            raise controlled_error(
                ErrorKind.ALREADY_INITIALIZED, {"path_to_repo": str(self._session.path)}
            )
        self._session = RepositorySession.open(path)
        return self

    def create_issue_branch(self, issue: str) -> str:
        """Create and check out the branch for ``issue`` at the remote tip.

        Uncommitted changes are stashed first and are not restored.
        Returns the new branch name.
        """
        session = self.session
        git_config = self.config.git
        logger.debug("Creating branch for issue %s", issue)
        name = create_branch_name(issue, git_config.branch_prefix)
        self.last_stash = None

        logger.debug("Fetching data from remote %s", git_config.remote)
        session.fetch(git_config.remote, git_config)

        logger.debug("Getting local repository status")
        if session.has_changes():
            logger.debug("Stashing changes")
            session.stash(STASH_MESSAGE)
            self.last_stash = STASH_MESSAGE

        commit = session.branch_commit(git_config.base_ref)
        logger.debug("Creating new branch %s at %s", name, commit.hexsha)
        session.create_branch(name, commit)
        session.checkout_branch(name)
        return name

    def push_branch_to_github(self) -> Config:
        """Placeholder for pushing the branch and opening a pull request."""
        # TODO: push the current branch to the remote and open a pull request
        logger.debug("Pushing %s is not implemented", self.session.path)
        return self.config

    def extract_issue_from_current_branch(self) -> str:
        logger.debug("Extracting issue from current branch")
        return get_issue_id_from_branch(self.session.current_branch_name())

    def get_branch_info(self) -> BranchInfo:
        """Name and parsed commits of the current branch relative to the remote base."""
        session = self.session
        logger.debug("Getting branch commit history")
        base_ref = self.config.git.base_ref
        commits = walk_history(session.repo, "HEAD", base_ref)
        return BranchInfo(name=session.current_branch_name(), commits=commits)


def open_repository(path: Path, config: Optional[Config] = None) -> IssueGit:
    """Build an ``IssueGit`` and open the repository at ``path``."""
    return IssueGit(config).init(path)
