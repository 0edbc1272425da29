import os
from dataclasses import dataclass
from typing import Optional

# client timing, seconds
POLL_INTERVAL = 1.0
HEARTBEAT_INTERVAL = 10.0
REQUEST_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8081
    sweep_interval: float = 60
    max_idle: float = 15 * 60
    log_level: str = "info"
    log_file: Optional[str] = None


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        host=(os.getenv("POLL_CHAT_HOST") or defaults.host).strip(),
        port=int(os.getenv("POLL_CHAT_PORT") or defaults.port),
        sweep_interval=float(
            os.getenv("POLL_CHAT_SWEEP_INTERVAL") or defaults.sweep_interval
        ),
        max_idle=float(os.getenv("POLL_CHAT_MAX_IDLE") or defaults.max_idle),
        log_level=(os.getenv("POLL_CHAT_LOG_LEVEL") or defaults.log_level)
        .strip()
        .lower(),
        log_file=(os.getenv("POLL_CHAT_LOG_FILE") or "").strip() or None,
    )
