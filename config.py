"""
Configuration settings for the serveit directory server
"""

import ipaddress
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Application
    app_name: str = "serveit"
    app_version: str = "1.0.0"
    log_level: str = "info"

    # Network binding
    interface: str = "127.0.0.1"
    port: int = 8080

    # Directory to serve; current working directory when unset
    root_dir: Optional[str] = None

    class Config:
        env_prefix = "SERVEIT_"
        env_file = ".env"
        case_sensitive = False

# Loaded on first use, not at import
@lru_cache()
def get_settings() -> Settings:
    return Settings()

def validate_settings(interface: str, port: int):
    """Validate the bind address before the server starts"""
    errors = []

    try:
        ipaddress.ip_address(interface)
    except ValueError:
        errors.append(f"invalid interface address: {interface!r}")

    if not 0 <= port <= 65535:
        errors.append(f"port out of range: {port}")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
