"""
Configuration for the transfer verification tool.

CLI flags take precedence, then environment variables (optionally loaded
from a .env file), then the defaults defined here.
"""

from pathlib import Path

__all__ = [
    "AWS_CREDENTIALS_PATH",
    "AWS_CREDENTIALS_VAR",
    "DIVISION_VAR",
    "ENV_FILE_VAR",
    "PROFILE_VAR",
    "REGION_VAR",
    "SBG_API_URL",
    "SBG_BULK_BATCH_SIZE",
    "SBG_CREDENTIALS_PATH",
    "SBG_CREDENTIALS_VAR",
    "SBG_PAGE_LIMIT",
    "SBG_REQUEST_TIMEOUT",
]

# Credential files (INI format, one section per division/profile)
SBG_CREDENTIALS_PATH: str = str(Path.home() / ".sevenbridges" / "credentials")
AWS_CREDENTIALS_PATH: str = str(Path.home() / ".aws" / "credentials")

# Seven Bridges platform API
SBG_API_URL: str = "https://api.sbgenomics.com/v2"
SBG_REQUEST_TIMEOUT: float = 60.0  # Seconds per HTTP request
SBG_BULK_BATCH_SIZE: int = 100  # Maximum file ids per bulk details request
SBG_PAGE_LIMIT: int = 100  # Items requested per listing page

# Environment variables consulted when a CLI flag is omitted
ENV_FILE_VAR: str = "TRANSFER_VERIFY_ENV_FILE"
DIVISION_VAR: str = "SBG_DIVISION"
PROFILE_VAR: str = "AWS_PROFILE"
SBG_CREDENTIALS_VAR: str = "SBG_CREDENTIALS_FILE"
AWS_CREDENTIALS_VAR: str = "AWS_SHARED_CREDENTIALS_FILE"
REGION_VAR: str = "AWS_DEFAULT_REGION"
