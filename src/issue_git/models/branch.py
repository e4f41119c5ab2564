"""Branch summary model."""

from typing import List

from pydantic import BaseModel

from .commit import ParsedCommit


class BranchInfo(BaseModel):
    """The current branch and the commits it adds on top of the remote base."""

    name: str
    commits: List[ParsedCommit] = []  # oldest first

    model_config = {"frozen": True}

    @property
    def issues(self) -> List[str]:
        """Every referenced issue, in first-seen order."""
        seen: List[str] = []
        for commit in self.commits:
            for issue in commit.issues:
                if issue not in seen:
                    seen.append(issue)
        return seen
