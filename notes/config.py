"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file (``NOTES_`` prefix)."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTES_",
    }

    # Storage
    data_dir: Path = Path.home() / ".rupertg_notes"
    storage_key: str = "rupertg_notes"
    storage_quota_bytes: int = 5 * 1024 * 1024  # 0 disables the quota

    # Logging
    log_level: str = "INFO"

    # MCP server
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8001
    metrics_port: int = 0  # 0 disables the Prometheus endpoint


settings = Settings()
