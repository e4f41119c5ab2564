"""Controlled errors raised by issue-git.

A controlled error carries a kind tag and a context payload so the CLI can
report it without a traceback. Errors coming from git itself are not wrapped.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Kinds of controlled errors."""

    COULD_NOT_INITIALIZE_REPO = "could_not_initialize_repo"
    NOT_INITIALIZED = "not_initialized"
    ALREADY_INITIALIZED = "already_initialized"
    NO_CHANGES = "no_changes"
    NO_MERGE_BASE = "no_merge_base"
    DETACHED_HEAD = "detached_head"
    INVALID_ISSUE = "invalid_issue"
    NO_ISSUE_IN_BRANCH = "no_issue_in_branch"
    INVALID_CONFIG = "invalid_config"
    BRANCH_EXISTS = "branch_exists"


MESSAGES = {
    ErrorKind.COULD_NOT_INITIALIZE_REPO: "Could not open a git repository at {path_to_repo}",
    ErrorKind.NOT_INITIALIZED: "Repository session is not initialized; call init() first",
    ErrorKind.ALREADY_INITIALIZED: "Repository session is already open at {path_to_repo}",
    ErrorKind.NO_CHANGES: "No changes: {tip} and {base} point to the same commit",
    ErrorKind.NO_MERGE_BASE: "{tip} and {base} have no common ancestor",
    ErrorKind.DETACHED_HEAD: "HEAD is detached, check out a branch first",
    ErrorKind.INVALID_ISSUE: "Invalid issue identifier: {issue!r}",
    ErrorKind.NO_ISSUE_IN_BRANCH: "No issue identifier found in branch {branch!r}",
    ErrorKind.INVALID_CONFIG: "Invalid configuration in {path}: {reason}",
    ErrorKind.BRANCH_EXISTS: "Branch {branch!r} already exists",
}


class IssueGitError(Exception):
    """Base class for controlled errors."""

    def __init__(self, kind: ErrorKind, context: Optional[Dict[str, Any]] = None):
        self.kind = ErrorKind(kind)
        self.context = dict(context or {})
        super().__init__(self._render())

    def _render(self) -> str:
        template = MESSAGES[self.kind]
        try:
            return template.format(**self.context)
        except KeyError:
            # Missing context keys: fall back to the raw payload
            return f"{self.kind.value}: {self.context}"


class RepositoryInitError(IssueGitError):
    """The repository path could not be opened."""


class SessionNotInitializedError(IssueGitError):
    """An operation ran before the repository session was opened."""


class NoChangesError(IssueGitError):
    """The current branch and the remote base are the same commit."""


_KIND_CLASSES = {
    ErrorKind.COULD_NOT_INITIALIZE_REPO: RepositoryInitError,
    ErrorKind.NOT_INITIALIZED: SessionNotInitializedError,
    ErrorKind.NO_CHANGES: NoChangesError,
}


def controlled_error(kind: ErrorKind, context: Optional[Dict[str, Any]] = None) -> IssueGitError:
    """Build the controlled error matching ``kind``."""
    cls = _KIND_CLASSES.get(ErrorKind(kind), IssueGitError)
    return cls(kind, context)
