"""
Runtime settings for jpdbstats.

Settings are resolved in increasing order of precedence:

1. the defaults declared on ``Settings``;
2. an optional YAML file (see ``config.yaml`` next to this module);
3. environment variables, including those loaded from a ``.env`` file;
4. explicit overrides, usually command line flags.

The jpdb session cookie (``sid``) is a secret and is normally kept in
``.env`` as ``JPDB_SID`` rather than in the YAML file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_VARS = {
    "JPDB_SID": "session_id",
    "JPDB_BASE_URL": "base_url",
    "JPDB_OUTPUT_DIR": "output_dir",
}


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://jpdb.io"
    session_id: Optional[str] = None
    output_dir: str = "."
    timeout_seconds: float = 30.0
    learn_path: str = "/learn"
    leaderboard_path: str = "/leaderboard"
    stats_path: str = "/stats"

    def warnings(self) -> List[str]:
        """Configuration problems that do not stop a run."""
        found: List[str] = []
        if not self.session_id:
            found.append(
                "No jpdb session cookie configured; set JPDB_SID in .env "
                "or the pages will be read as a logged-out visitor."
            )
        return found


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings")
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{path}: unknown settings {', '.join(unknown)}")
    return data


def _read_env() -> Dict[str, Any]:
    return {
        name: os.environ[var]
        for var, name in ENV_VARS.items()
        if os.environ.get(var)
    }


def load_settings(config_path: Optional[str] = None, *, use_dotenv: bool = True,
                  **overrides: Any) -> Settings:
    """Resolve settings from file, environment and overrides.

    Args:
        config_path: Optional YAML file with keys matching ``Settings``.
        use_dotenv: Load a ``.env`` file into the environment first.
        **overrides: Explicit values; ``None`` means "not given".
    """
    if use_dotenv:
        load_dotenv()
    values: Dict[str, Any] = {}
    if config_path:
        values.update(_read_yaml(config_path))
        logger.debug("Loaded settings from %s", config_path)
    values.update(_read_env())
    values.update({k: v for k, v in overrides.items() if v is not None})
    settings = replace(Settings(), **values)
    return replace(settings, timeout_seconds=float(settings.timeout_seconds))
