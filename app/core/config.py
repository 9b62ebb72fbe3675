"""
Application configuration using Pydantic Settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Cat ASCII Art API"
    api_description: str = "Serves a random cat picture rendered as ASCII art HTML"
    api_version: str = "1.0.0"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080
    graceful_shutdown_timeout: int = 30  # seconds to drain in-flight requests

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = ""  # empty = console only
    log_file_max_bytes: int = 5 * 1024 * 1024
    log_file_backup_count: int = 2

    # Remote Cat API Settings
    cat_api_url: str = "https://api.thecatapi.com/v1/images/search"
    cat_api_key: str = ""  # optional, sent as x-api-key
    http_timeout: float = 30.0
    http_pool_limit: int = 100

    # ASCII Art Rendering Settings
    ascii_columns: int = 100
    ascii_glyphs: str = " .:-=+*#%@"
    ascii_char_aspect: float = 0.5  # character cell width / height
    ascii_color: bool = True
    ascii_background_color: bool = True
    ascii_show_original_toggle: bool = True
    ascii_font_size_px: int = 8

    @field_validator("ascii_glyphs")
    @classmethod
    def check_glyphs(cls, v):
        """A ramp needs at least two glyphs to express any brightness."""
        if len(v) < 2:
            raise ValueError("ascii_glyphs must contain at least two characters")
        return v

    @field_validator("ascii_columns", "http_pool_limit")
    @classmethod
    def check_positive(cls, v):
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
