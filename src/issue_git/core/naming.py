"""Branch names derived from issue identifiers and back."""

import re

from issue_git.errors import ErrorKind, controlled_error

ISSUE_RE = re.compile(r"^#?([A-Za-z]\w*)-(\d+)$")
BRANCH_ISSUE_RE = re.compile(r"([A-Za-z][A-Za-z0-9]*)-(\d+)")
DEFAULT_PREFIX = "feature/"


def normalize_issue_id(issue: str) -> str:
    """Return ``#PROJECT-123`` for ``PROJECT-123``, ``#project-123`` and friends."""
    match = ISSUE_RE.match((issue or "").strip())
    if not match:
        raise controlled_error(ErrorKind.INVALID_ISSUE, {"issue": issue})
    project, number = match.groups()
    return f"#{project.upper()}-{number}"


def create_branch_name(issue: str, prefix: str = DEFAULT_PREFIX) -> str:
    """e.g. '#abc-12' -> 'feature/ABC-12'"""
    return f"{prefix}{normalize_issue_id(issue).lstrip('#')}"


def get_issue_id_from_branch(branch: str) -> str:
    """Extract the issue identifier from a branch name.

    The last path component is searched first, so 'feature/ABC-12-login'
    yields '#ABC-12' even when a directory part looks like an issue.
    """
    candidates = [branch.rsplit("/", 1)[-1], branch] if branch else []
    for candidate in candidates:
        match = BRANCH_ISSUE_RE.search(candidate)
        if match:
            return normalize_issue_id(f"{match.group(1)}-{match.group(2)}")
    raise controlled_error(ErrorKind.NO_ISSUE_IN_BRANCH, {"branch": branch})
