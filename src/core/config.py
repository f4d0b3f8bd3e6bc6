"""
Application settings using Pydantic for validation and type safety.
Security: FTP credentials are loaded from environment variables only.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration, built once at startup and passed down explicitly."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="SlideGrab", description="Application name")
    debug: bool = Field(default=False, description="Debug mode flag")
    log_level: str = Field(default="INFO", description="Root log level")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=9002, ge=1, le=65535, description="Server port")

    # Public download links are built as {base_url}/{remote_path}
    base_url: str = Field(default="", description="Public base URL of the remote store")

    # Remote store (FTP)
    ftp_host: str = Field(default="", description="FTP host")
    ftp_user: str = Field(default="", description="FTP user")
    ftp_pass: str = Field(default="", description="FTP password (sensitive)")
    ftp_port: int = Field(default=21, ge=1, le=65535, description="FTP port")
    ftp_connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for each blocking FTP socket operation",
    )
    remote_root: str = Field(default="SS_DL", description="Root directory on the remote store")

    # Source pages
    allowed_hosts: list[str] = Field(
        default=["www.slideshare.net"],
        description="Hosts accepted as presentation sources",
    )
    page_timeout: float = Field(default=30.0, gt=0, description="Presentation page fetch timeout in seconds")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
        ),
        description="User-Agent sent with page and image requests",
    )

    # Image fetching
    image_timeout: float = Field(default=20.0, gt=0, description="Per-image fetch timeout in seconds")
    jpeg_quality: int = Field(default=90, ge=1, le=95, description="JPEG quality for normalized slides")
    pdf_fetch_concurrency: int = Field(default=25000, ge=1, description="Fetch ceiling for PDF exports")
    pptx_fetch_concurrency: int = Field(default=10, ge=1, description="Fetch ceiling for PPTX exports")
    zip_fetch_concurrency: int = Field(default=10, ge=1, description="Fetch ceiling for ZIP exports")
    temp_dir: Optional[Path] = Field(
        default=None,
        description="Directory for temporary slide images and artifacts (system temp if unset)",
    )

    @property
    def has_ftp(self) -> bool:
        """Check if the FTP remote store is fully configured."""
        return bool(self.ftp_host and self.ftp_user and self.ftp_pass)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Links are joined with a single slash."""
        return v.rstrip("/")

    @field_validator("remote_root")
    @classmethod
    def strip_root_slashes(cls, v: str) -> str:
        return v.strip("/")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()
