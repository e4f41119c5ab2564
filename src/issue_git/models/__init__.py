"""Data models for issue-git."""

from .branch import BranchInfo
from .commit import ParsedCommit

__all__ = ["BranchInfo", "ParsedCommit"]
