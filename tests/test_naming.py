"""Tests for issue identifiers and branch names."""

import pytest

from issue_git.core.naming import (
    create_branch_name,
    get_issue_id_from_branch,
    normalize_issue_id,
)
from issue_git.errors import ErrorKind, IssueGitError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ABC-123", "#ABC-123"),
        ("#ABC-123", "#ABC-123"),
        ("  #abc-7 ", "#ABC-7"),
        ("jira2-42", "#JIRA2-42"),
    ],
)
def test_normalize_issue_id(raw, expected):
    assert normalize_issue_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "ABC", "ABC-", "123-4", "ABC 12", "#-12"])
def test_normalize_rejects_invalid_identifiers(raw):
    with pytest.raises(IssueGitError) as exc_info:
        normalize_issue_id(raw)
    assert exc_info.value.kind == ErrorKind.INVALID_ISSUE
    assert exc_info.value.context == {"issue": raw}


def test_create_branch_name():
    assert create_branch_name("#abc-12") == "feature/ABC-12"
    assert create_branch_name("ABC-12", prefix="") == "ABC-12"
    assert create_branch_name("ABC-12", prefix="bugfix/") == "bugfix/ABC-12"


@pytest.mark.parametrize(
    "branch, expected",
    [
        ("feature/ABC-12", "#ABC-12"),
        ("feature/abc-12-login-page", "#ABC-12"),
        ("ABC-12", "#ABC-12"),
        ("team-1/ABC-12", "#ABC-12"),
        ("team-1/cleanup", "#TEAM-1"),
    ],
)
def test_get_issue_id_from_branch(branch, expected):
    assert get_issue_id_from_branch(branch) == expected


def test_branch_name_round_trip():
    assert get_issue_id_from_branch(create_branch_name("#XY-99")) == "#XY-99"


@pytest.mark.parametrize("branch", ["master", "feature/login", ""])
def test_get_issue_id_from_branch_without_issue(branch):
    with pytest.raises(IssueGitError) as exc_info:
        get_issue_id_from_branch(branch)
    assert exc_info.value.kind == ErrorKind.NO_ISSUE_IN_BRANCH
