"""Commit history between a branch tip and its remote base."""

from typing import List, Union

import git
from git import Repo

from issue_git.core.messages import transform_commit
from issue_git.debug import get_logger
from issue_git.errors import ErrorKind, controlled_error
from issue_git.models.commit import ParsedCommit

logger = get_logger("git")

Ref = Union[str, git.Commit]


def _resolve(repo: Repo, ref: Ref) -> git.Commit:
    if isinstance(ref, git.Commit):
        return ref
    return repo.commit(ref)


def commits_between(repo: Repo, tip: Ref, base: Ref) -> List[git.Commit]:
    """Commits reachable from ``tip`` but not from the merge base.

    Returned oldest first. Raises NoChangesError when both refs are the same
    commit.
    """
    tip_commit = _resolve(repo, tip)
    base_commit = _resolve(repo, base)
    if tip_commit.hexsha == base_commit.hexsha:
        raise controlled_error(
            ErrorKind.NO_CHANGES,
            {"tip": str(tip), "base": str(base), "commit": tip_commit.hexsha},
        )

    merge_bases = repo.merge_base(tip_commit, base_commit)
    if not merge_bases:
        raise controlled_error(ErrorKind.NO_MERGE_BASE, {"tip": str(tip), "base": str(base)})
    common = merge_bases[0]
    logger.debug("Created history walker. Latest common commit: %s", common.hexsha)

    # A range walk keeps branch commits that sit behind a merge from the base
    walker = repo.iter_commits(f"{common.hexsha}..{tip_commit.hexsha}", topo_order=True)
    commits = list(walker)
    commits.reverse()
    return commits


def walk_history(repo: Repo, tip: Ref, base: Ref) -> List[ParsedCommit]:
    """Parsed commits unique to ``tip``, oldest first."""
    return [transform_commit(commit) for commit in commits_between(repo, tip, base)]
