"""ClientSettings - backend location and HTTP client options.

Values come from a ``.env`` file, overridden by the process environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from dotenv import dotenv_values

DEFAULT_ENV_PATH = Path(".env")


def normalize_base_url(url: str) -> str:
    """Ensure the base URL ends with a single slash so paths can be appended."""
    return url.rstrip("/") + "/"


@dataclass(frozen=True)
class ClientSettings:
    """Settings for talking to the scoreboard backend."""

    DEFAULT_BACKEND_URL: ClassVar[str] = "http://123.4.5.6:3000/"
    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_LOG_LEVEL: ClassVar[str] = "WARNING"

    backend_url: str = DEFAULT_BACKEND_URL
    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "backend_url", normalize_base_url(self.backend_url))

    @classmethod
    def from_env(cls, env_path: Path = DEFAULT_ENV_PATH) -> "ClientSettings":
        """Load settings; environment variables win over the ``.env`` file."""
        values: dict[str, str] = {}
        if env_path.exists():
            values.update(
                {k: v for k, v in dotenv_values(env_path).items() if v is not None}
            )
        for name in ("BACKEND_URL", "SCOREBOARD_TIMEOUT", "SCOREBOARD_LOG_LEVEL"):
            if name in os.environ:
                values[name] = os.environ[name]

        timeout_raw = values.get("SCOREBOARD_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else cls.DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(
                f"SCOREBOARD_TIMEOUT must be a number, got {timeout_raw!r}"
            ) from None

        return cls(
            backend_url=values.get("BACKEND_URL") or cls.DEFAULT_BACKEND_URL,
            request_timeout=timeout,
            log_level=(values.get("SCOREBOARD_LOG_LEVEL") or cls.DEFAULT_LOG_LEVEL).upper(),
        )

    def scores_url(self, challenge: object) -> str:
        return f"{self.backend_url}api/game/scores/{challenge}"

    def refresh_url(self) -> str:
        return f"{self.backend_url}api/auth/refresh"

    def challenge_info_url(self, challenge: object) -> str:
        return f"{self.backend_url}api/game/challenges/{challenge}"
