"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "vslog.log"

DEFAULT_API_HOST = "localhost"
DEFAULT_API_PORT = 18080
DEFAULT_SEND_TIMEOUT = 1.0


PathLike = Union[str, Path]


@dataclass
class Settings:
    """Runtime settings for a recorder and its live bridge."""

    log_file: Path | None = None  # durable sink, disabled when None
    uds_path: Path | None = None  # publish channel address, in-process when None
    fsync: bool = True
    send_timeout: float = DEFAULT_SEND_TIMEOUT
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT


def resolve_path(env_value: PathLike | None) -> Path | None:
    """Resolve a configured path relative to the project root."""
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    return Settings(
        log_file=resolve_path(os.getenv("VSLOG_FILE")),
        uds_path=resolve_path(os.getenv("VSLOG_UDS")),
        fsync=_env_flag("VSLOG_FSYNC", True),
        send_timeout=float(os.getenv("VSLOG_SEND_TIMEOUT", str(DEFAULT_SEND_TIMEOUT))),
        api_host=os.getenv("API_HOST", DEFAULT_API_HOST),
        api_port=int(os.getenv("API_PORT", str(DEFAULT_API_PORT))),
    )
