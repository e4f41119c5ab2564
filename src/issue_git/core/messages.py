"""Commit message parsing.

A message ends with an optional footer line referencing issues::

    Add feature

    Fixes #JIRA-42, #JIRA-43

Parsing never fails; a missing or malformed footer just yields no issues.
"""

import re
from typing import List, Optional

import git

from issue_git.models.commit import ParsedCommit

FOOTER_RE = re.compile(r"^(closes|fixes)\s+(#\w+-\d+(,\s*#\w+-\d+)*)\s*$", re.IGNORECASE)


def _non_empty_lines(raw: str) -> List[str]:
    # Blank means empty after trailing whitespace; kept lines stay verbatim
    return [line for line in (raw or "").split("\n") if line.rstrip()]


def _match_footer(lines: List[str]) -> Optional["re.Match[str]"]:
    if not lines:
        return None
    return FOOTER_RE.match(lines[-1])


def get_issues(raw: str) -> List[str]:
    """Issue tokens listed in the footer line, in order."""
    match = _match_footer(_non_empty_lines(raw))
    if not match:
        return []
    tokens = (token.strip() for token in match.group(2).split(","))
    return [token for token in tokens if token]


def format_message(raw: str) -> str:
    """Message body: non-empty lines without the footer.

    A message made of a single footer line keeps that line as its body.
    """
    lines = _non_empty_lines(raw)
    if _match_footer(lines) and len(lines) > 1:
        lines = lines[:-1]
    return "\n".join(lines)


def parse_commit_message(raw: str) -> ParsedCommit:
    return ParsedCommit(message=format_message(raw), issues=get_issues(raw))


def transform_commit(commit: git.Commit) -> ParsedCommit:
    """Parse the message of a GitPython commit."""
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return parse_commit_message(message)
