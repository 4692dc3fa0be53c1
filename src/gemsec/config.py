"""Runtime configuration loaded from environment variables."""

import logging
import os
from typing import Literal, Optional

from pydantic import BaseModel, Field

TOOL_NAME = "GemSec"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class Settings(BaseModel):
    """Scanner and transport settings."""

    auto_open: bool = Field(default=True, description="Open HTML reports in the default browser")
    html_report: bool = Field(default=True, description="Write an HTML report for each analysis")
    reports_dir: Optional[str] = Field(
        default=None, description="Where reports go; defaults to the scanned project's root"
    )
    max_file_bytes: int = Field(default=500_000, description="Skip source files larger than this")
    log_level: str = Field(default="INFO", description="Root logging level")
    transport: Literal["stdio", "sse", "http"] = Field(default="stdio", description="MCP transport")
    host: str = Field(default="0.0.0.0", description="Bind host for network transports")
    port: int = Field(default=3030, description="Bind port for network transports")


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        auto_open=not _env_flag("GEMSEC_NO_AUTO_OPEN", False),
        html_report=_env_flag("GEMSEC_HTML_REPORT", True),
        reports_dir=os.environ.get("GEMSEC_REPORTS_DIR") or None,
        max_file_bytes=int(os.environ.get("GEMSEC_MAX_FILE_BYTES", "500000")),
        log_level=os.environ.get("GEMSEC_LOG_LEVEL", "INFO").upper(),
        transport=os.environ.get("GEMSEC_TRANSPORT", "stdio").lower(),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3030")),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for an entrypoint."""
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
