"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "fto-scout-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787
    debug: bool = False


class UpstreamSettings(BaseModel):
    timeout: float = 30.0
    follow_redirects: bool = True
    max_connections: int = 100
    max_keepalive_connections: int = 20


class CorsSettings(BaseModel):
    # "*" echoes any Origin; list explicit origins to lock this down
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])


class LimitSettings(BaseModel):
    max_body_size: int = 10 * 1024 * 1024
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    config_file = config_file or CONFIG_FILE
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
