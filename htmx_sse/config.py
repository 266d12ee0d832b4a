# htmx_sse/config.py
from functools import lru_cache
from pathlib import Path
import os
from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]

# Load in ascending precedence; later overrides earlier
load_dotenv(ROOT / ".env")
load_dotenv(ROOT / ".env.local", override=True)

VERSION = "0.1.0"


class Settings:
    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS (empty disables the middleware)
    ALLOWED_ORIGINS: list[str] = [
        s.strip() for s in os.getenv("ALLOWED_ORIGINS", "").split(",") if s.strip()
    ]

    # Simulated job
    STEP_INTERVAL_MS: int = int(os.getenv("STEP_INTERVAL_MS", "500"))
    MAX_INCREMENT: int = int(os.getenv("MAX_INCREMENT", "10"))

    # SSE keepalive comments
    SSE_PING_SECONDS: int = int(os.getenv("SSE_PING_SECONDS", "15"))

    @property
    def step_interval(self) -> float:
        return self.STEP_INTERVAL_MS / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
