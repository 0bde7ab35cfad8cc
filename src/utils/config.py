"""Configuration loading and validation for the webtool API."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

SUPPORTED_KV_BACKENDS = ("sqlite", "memory")


def load_config() -> dict:
    """Load configuration from environment variables."""

    # Helper function to resolve paths relative to project root
    def resolve_path(path: str | None, default_relative: str) -> str:
        if not path:
            return str(PROJECT_ROOT / default_relative)
        if Path(path).is_absolute():
            return path
        return str(PROJECT_ROOT / path)

    config = {
        # Storage
        "kv_backend": os.getenv("KV_BACKEND", "sqlite").lower(),
        "kv_db_path": resolve_path(os.getenv("KV_DB_PATH"), ".webtool/kv.db"),
        # List caps, oldest entries are dropped beyond these
        "max_videos": int(os.getenv("MAX_VIDEOS", "50")),
        "max_submissions": int(os.getenv("MAX_SUBMISSIONS", "100")),
        # Header set by the fronting proxy with the real client address
        "client_ip_header": os.getenv("CLIENT_IP_HEADER", "CF-Connecting-IP"),
        "cors_allow_origin": os.getenv("CORS_ALLOW_ORIGIN", "*"),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() == "true",
        # Server
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT", "8000")),
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if config.get("kv_backend") not in SUPPORTED_KV_BACKENDS:
        errors.append(
            f"KV_BACKEND must be one of {', '.join(SUPPORTED_KV_BACKENDS)}, got {config.get('kv_backend')!r}"
        )

    for key, env_name in (("max_videos", "MAX_VIDEOS"), ("max_submissions", "MAX_SUBMISSIONS")):
        if int(config.get(key, 0)) < 1:
            errors.append(f"{env_name} must be at least 1")

    if not str(config.get("client_ip_header", "")).strip():
        errors.append("CLIENT_IP_HEADER must not be empty")

    return errors
