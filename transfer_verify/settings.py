"""Runtime settings resolved from CLI flags, environment and config defaults."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

import config as config_module


@dataclass(frozen=True)
class Settings:
    """Explicit configuration handed to the verifier; never read from globals."""

    division: str
    profile: str
    sbg_credentials_path: Path
    aws_credentials_path: Path
    region: Optional[str] = None
    sbg_api_url: str = config_module.SBG_API_URL
    request_timeout: float = config_module.SBG_REQUEST_TIMEOUT
    bulk_batch_size: int = config_module.SBG_BULK_BATCH_SIZE


def resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file supplies fallback settings.

    Priority order:
      1. Explicit parameter
      2. TRANSFER_VERIFY_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    env_file = os.environ.get(config_module.ENV_FILE_VAR)
    if env_file:
        return env_file
    return str(Path.home() / ".env")


def load_environment(env_path: Optional[str] = None) -> str:
    """Load the resolved .env file without overriding variables already set."""
    resolved_path = resolve_env_path(env_path)
    if load_dotenv(resolved_path):
        logging.debug("Loaded environment overrides from %s", resolved_path)
    return resolved_path


def _first_set(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def apply_environment_defaults(args: argparse.Namespace) -> argparse.Namespace:
    """Fill omitted CLI options from environment variables and config defaults."""
    args.division = _first_set(args.division, os.environ.get(config_module.DIVISION_VAR))
    args.profile = _first_set(args.profile, os.environ.get(config_module.PROFILE_VAR))
    args.sbcred = _first_set(
        args.sbcred,
        os.environ.get(config_module.SBG_CREDENTIALS_VAR),
        config_module.SBG_CREDENTIALS_PATH,
    )
    args.awscred = _first_set(
        args.awscred,
        os.environ.get(config_module.AWS_CREDENTIALS_VAR),
        config_module.AWS_CREDENTIALS_PATH,
    )
    args.region = _first_set(args.region, os.environ.get(config_module.REGION_VAR))
    return args


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build Settings from fully resolved CLI arguments."""
    return Settings(
        division=args.division,
        profile=args.profile,
        sbg_credentials_path=Path(args.sbcred).expanduser(),
        aws_credentials_path=Path(args.awscred).expanduser(),
        region=args.region,
    )


__all__ = [
    "Settings",
    "apply_environment_defaults",
    "load_environment",
    "resolve_env_path",
    "settings_from_args",
]
