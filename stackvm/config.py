from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from stackvm.engine import DEFAULT_MAX_OPS, EngineSettings

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env(path: Path | None = None) -> bool:
    """Load STACKVM_* variables from a `.env` file without overriding the process env.

    Without an explicit path, the project root `.env` wins over one found from CWD.
    """
    if path is None:
        path = repo_root() / ".env"
        if not path.exists():
            found = find_dotenv(usecwd=True)
            path = Path(found) if found else path
    return load_dotenv(path)


@dataclass(frozen=True)
class StackVMSettings:
    max_ops: int = DEFAULT_MAX_OPS
    log_level: str = "WARNING"

    def engine_settings(self) -> EngineSettings:
        return EngineSettings(max_ops=self.max_ops)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _max_ops_from_env(*, env_var: str, default: int) -> int:
    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{env_var} must be a positive integer") from e
    if value < 1:
        raise ValueError(f"{env_var} must be >= 1 when set")
    return value


def _log_level_from_env(*, env_var: str, default: str) -> str:
    raw = (os.getenv(env_var) or "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVELS:
        raise ValueError(f"{env_var} must be one of {', '.join(sorted(_LOG_LEVELS))}")
    return raw


def load_settings() -> StackVMSettings:
    load_env()
    return StackVMSettings(
        max_ops=_max_ops_from_env(env_var="STACKVM_MAX_OPS", default=DEFAULT_MAX_OPS),
        log_level=_log_level_from_env(env_var="STACKVM_LOG_LEVEL", default="WARNING"),
    )
