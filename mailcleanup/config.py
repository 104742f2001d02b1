"""
Configuration for the cleanup session and Gmail client.

Settings are read from a JSON object with camelCase keys. A missing file
means defaults; an unreadable or malformed file is reported as an Err.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from result import Err, Ok, Result

from .categories import DEFAULT_TIME_RANGE, validate_time_range
from .snapshot import AVERAGE_MESSAGE_KB

CONFIG_PATH = "~/.config/mailcleanup/config.json"


@dataclass
class CleanupConfig:
    credentials_path: str = "credentials.json"
    token_path: str = "token.pickle"
    default_time_range: Any = DEFAULT_TIME_RANGE
    average_message_kb: float = AVERAGE_MESSAGE_KB
    log_delay_seconds: float = 1.0
    request_timeout: Optional[float] = 30
    verbose: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "credentialsPath": self.credentials_path,
            "tokenPath": self.token_path,
            "defaultTimeRange": self.default_time_range,
            "averageMessageKb": self.average_message_kb,
            "logDelaySeconds": self.log_delay_seconds,
            "requestTimeout": self.request_timeout,
            "verbose": self.verbose,
        }


def from_dict(data: Dict[str, Any], defaults: Optional[CleanupConfig] = None) -> CleanupConfig:
    defaults = defaults or CleanupConfig()
    timeout_raw = data.get("requestTimeout", defaults.request_timeout)

    return CleanupConfig(
        credentials_path=str(data.get("credentialsPath", defaults.credentials_path)),
        token_path=str(data.get("tokenPath", defaults.token_path)),
        default_time_range=validate_time_range(data.get("defaultTimeRange", defaults.default_time_range)),
        average_message_kb=float(data.get("averageMessageKb", defaults.average_message_kb)),
        log_delay_seconds=max(0.0, float(data.get("logDelaySeconds", defaults.log_delay_seconds))),
        request_timeout=float(timeout_raw) if timeout_raw is not None else None,
        verbose=bool(data.get("verbose", defaults.verbose)),
    )


def load_config(path: Optional[str] = None) -> Result[CleanupConfig, str]:
    resolved = path or os.path.expanduser(CONFIG_PATH)
    if not os.path.exists(resolved):
        return Ok(CleanupConfig())

    try:
        with open(resolved, encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            return Err(f"Config at {resolved} must be a JSON object.")
        return Ok(from_dict(payload))
    except Exception as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")


def sample_config_json() -> str:
    return json.dumps(CleanupConfig().to_dict(), indent=2)
