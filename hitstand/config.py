"""
Runtime settings, read from the environment.

    HITSTAND_SESSION_TTL        seconds before a session is evicted (1800)
    HITSTAND_EVICTION_INTERVAL  seconds between eviction passes (3600)
    HITSTAND_REPLY_TIMEOUT      seconds a request waits for its session (2.0)
    HITSTAND_LOG_LEVEL          logging level name (INFO)
    ALLOWED_ORIGINS             comma-separated CORS origins (*)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os


@dataclass
class Settings:
    session_ttl: float = 1800.0
    eviction_interval: float = 3600.0
    reply_timeout: float = 2.0
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            session_ttl=float(env.get("HITSTAND_SESSION_TTL", 1800)),
            eviction_interval=float(env.get("HITSTAND_EVICTION_INTERVAL", 3600)),
            reply_timeout=float(env.get("HITSTAND_REPLY_TIMEOUT", 2.0)),
            log_level=env.get("HITSTAND_LOG_LEVEL", "INFO").upper(),
            allowed_origins=env.get("ALLOWED_ORIGINS", "*").split(","),
        )
