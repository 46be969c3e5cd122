from __future__ import annotations

import os
from dataclasses import dataclass, asdict

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class BrokerSettings:
    """Runtime config for a broker; read from the environment or passed in."""

    log_level: str = "INFO"
    log_payloads: bool = False  # payload reprs can be large or sensitive

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "BrokerSettings":
        if env_file:
            load_dotenv(env_file, override=False)
        return cls(
            log_level=os.getenv("MESSAGE_SERVICE_LOG_LEVEL", cls.log_level).upper(),
            log_payloads=os.getenv("MESSAGE_SERVICE_LOG_PAYLOADS", "").strip().lower() in _TRUTHY,
        )

    def to_dict(self):
        return asdict(self)
