"""Parsed commit model."""

from typing import List

from pydantic import BaseModel


class ParsedCommit(BaseModel):
    """A commit message split into its body and referenced issues."""

    message: str
    issues: List[str] = []

    model_config = {"frozen": True}
