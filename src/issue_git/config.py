"""Configuration loading with layered overrides.

Priority chain: built-in defaults < ~/.config/issue-git/config.json < <repo>/.issue-git.json
Deep merge: dicts merge recursively, lists/scalars replace.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from issue_git.debug import get_logger
from issue_git.errors import ErrorKind, controlled_error

APP_NAME = "issue-git"

GLOBAL_CONFIG = Path.home() / ".config" / APP_NAME / "config.json"
PROJECT_CONFIG_NAME = f".{APP_NAME}.json"

logger = get_logger("config")


class GitConfig(BaseModel):
    """Remote and branch settings for the ``git`` namespace."""

    remote: str = "origin"
    branch: str = "master"
    branch_prefix: str = "feature/"
    # Accept any server certificate / host key during fetch
    trust_all_certificates: bool = False

    model_config = {"frozen": True}

    @property
    def base_ref(self) -> str:
        return f"{self.remote}/{self.branch}"


class Config(BaseModel):
    """Top-level issue-git configuration."""

    git: GitConfig = GitConfig()
    sources: List[str] = []

    model_config = {"frozen": True}

    def get(self, path: Sequence[str]) -> Any:
        """Look up a nested section, e.g. ``config.get(["git"])``."""
        node: Any = self.model_dump(exclude={"sources"})
        for key in path:
            node = node[key]
        return node


def deep_merge(base: Dict[str, Any], layer: Dict[str, Any]) -> Dict[str, Any]:
    """Lay ``layer`` over ``base`` without mutating either.

    Nested sections merge key by key; any other value in ``layer`` wins.
    """
    result = dict(base)
    for key, value in layer.items():
        current = result.get(key)
        both_sections = isinstance(current, dict) and isinstance(value, dict)
        result[key] = deep_merge(current, value) if both_sections else value
    return result


def load_json(path: Path) -> Optional[Dict[str, Any]]:
    """Load a JSON object from ``path``; None if the file is missing."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise controlled_error(
            ErrorKind.INVALID_CONFIG, {"path": str(path), "reason": e.msg}
        ) from e
    if not isinstance(data, dict):
        raise controlled_error(
            ErrorKind.INVALID_CONFIG, {"path": str(path), "reason": "expected a JSON object"}
        )
    return data


def load_config(
    project_root: Optional[Path] = None, global_config: Optional[Path] = None
) -> Config:
    """Load config with layered overrides: defaults < global < project."""
    global_path = GLOBAL_CONFIG if global_config is None else Path(global_config)
    layers = [global_path]
    if project_root is not None:
        layers.append(Path(project_root) / PROJECT_CONFIG_NAME)

    result: Dict[str, Any] = {}
    sources = ["defaults"]
    last_path = "defaults"
    for path in layers:
        overrides = load_json(path)
        if overrides:
            result = deep_merge(result, overrides)
            sources.append(str(path))
            last_path = str(path)

    try:
        config = Config(**{**result, "sources": sources})
    except ValidationError as e:
        raise controlled_error(
            ErrorKind.INVALID_CONFIG, {"path": last_path, "reason": str(e)}
        ) from e

    logger.debug("Loaded config from %s", ", ".join(sources))
    return config
