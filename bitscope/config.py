"""Centralized configuration — all env vars in one place."""

import os

DEFAULT_UPSTREAM_BASE_URL = "https://blockstream.info/api"


class Settings:
    """Application settings loaded from environment variables.

    Keyword arguments override the environment, which keeps tests from
    having to patch ``os.environ``.
    """

    def __init__(self, **overrides):
        self.upstream_base_url: str = os.getenv("UPSTREAM_BASE_URL", DEFAULT_UPSTREAM_BASE_URL).rstrip("/")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "4000"))

        # Timing, in milliseconds
        self.upstream_timeout_ms: int = int(os.getenv("UPSTREAM_TIMEOUT_MS", "10000"))
        self.refresh_interval_ms: int = int(os.getenv("REFRESH_INTERVAL_MS", "30000"))

        # Cache bounds
        self.blocks_limit: int = int(os.getenv("BLOCKS_LIMIT", "15"))
        self.mempool_limit: int = int(os.getenv("MEMPOOL_LIMIT", "10"))

        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def upstream_timeout(self) -> float:
        return self.upstream_timeout_ms / 1000

    @property
    def refresh_interval(self) -> float:
        return self.refresh_interval_ms / 1000

    def validate(self) -> list[str]:
        """Return a list of human-readable config problems (empty when valid)."""
        problems = []
        if not self.upstream_base_url:
            problems.append("UPSTREAM_BASE_URL is empty")
        for var in _POSITIVE:
            if getattr(self, _attr_for(var)) <= 0:
                problems.append(f"{var} must be positive")
        return problems


_POSITIVE = ["UPSTREAM_TIMEOUT_MS", "REFRESH_INTERVAL_MS", "BLOCKS_LIMIT", "MEMPOOL_LIMIT"]

settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    return env_var.lower()
