import json
import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")


class ApiConfig(BaseModel):
    title: str = Field(default="tubegrab", description="API title")
    description: str = Field(default="Inspect and download YouTube formats through yt-dlp", description="API description")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode (exposes /docs)")


class ExtractorConfig(BaseModel):
    binary_dir: str = Field(default="bin", description="Directory holding the locally provisioned yt-dlp binary")
    system_binary: str = Field(default="yt-dlp", description="Fallback yt-dlp executable looked up on PATH")
    download_url: str = Field(
        default="https://github.com/yt-dlp/yt-dlp/releases/latest/download",
        description="Release base URL the binary is provisioned from"
    )
    auto_provision: bool = Field(default=True, description="Download yt-dlp when no local binary exists")
    provision_timeout: float = Field(default=60.0, gt=0, description="HTTP timeout while provisioning, in seconds")


class DownloadConfig(BaseModel):
    chunk_size: int = Field(default=64 * 1024, ge=1024, description="Relay chunk size in bytes")
    probe_timeout: Optional[float] = Field(default=None, gt=0, description="Metadata probe timeout (none by default)")
    stderr_max_lines: int = Field(default=50, ge=1, description="yt-dlp stderr lines kept for diagnostics")


class FormatConfig(BaseModel):
    quality_tiers: List[int] = Field(default=[1080, 720, 480, 360], description="Video heights offered, best first")
    default_audio_bitrate: int = Field(default=128, ge=1, description="Bitrate label used when yt-dlp reports none")
    video_ext: str = Field(default="mp4", description="Container required for combined video formats")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")
    supported_locales: list = Field(default=["en", "ja"], description="Supported locales")


class Config(BaseSettings):
    """Main configuration model"""
    model_config = SettingsConfigDict(env_prefix="TUBEGRAB_", env_nested_delimiter="__")

    api: ApiConfig = Field(default_factory=ApiConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    formats: FormatConfig = Field(default_factory=FormatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)

    @classmethod
    def load_from_file(cls, config_path: str = "config.json") -> "Config":
        """Load configuration from JSON file"""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
            logger.info(f"Configuration loaded from {config_path}")
            return cls(**config_data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config from {config_path}: {str(e)}")
            logger.info("Using environment/default configuration")
            return cls()


def load_config() -> Config:
    """Load configuration with priority: config.json > env vars > defaults"""
    if os.path.exists(CONFIG_PATH):
        return Config.load_from_file(CONFIG_PATH)
    return Config()


# Global config instance
config = load_config()
