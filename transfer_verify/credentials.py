"""
Seven Bridges credentials file loading.

The file is an INI file with one section per division holding `auth_token`
and an optional `api_endpoint`. AWS profiles are resolved by boto3 itself
(see s3_client.create_aws_session).
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError, CredentialsNotFoundError


@dataclass(frozen=True)
class SbgCredentials:
    """Seven Bridges auth token (and optional API endpoint) for one division."""

    auth_token: str
    api_endpoint: Optional[str] = None

    def __repr__(self) -> str:
        return f"SbgCredentials(api_endpoint={self.api_endpoint!r}, auth_token='***')"


def _read_ini(cred_path: Path) -> configparser.ConfigParser:
    if not cred_path.is_file():
        raise ConfigurationError(f"Credentials file not found: {cred_path}")
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with cred_path.open(encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, configparser.Error) as exc:
        raise ConfigurationError(f"Unable to read credentials file {cred_path}: {exc}") from exc
    return parser


def load_sbg_credentials(cred_path: Path, division: str) -> SbgCredentials:
    """
    Load the auth token for a division from a Seven Bridges credentials file.

    Raises:
        ConfigurationError: If the file is unreadable
        CredentialsNotFoundError: If the division or its token is missing
    """
    parser = _read_ini(cred_path)
    if not parser.has_section(division):
        raise CredentialsNotFoundError(division, cred_path, "division section missing")
    section = parser[division]
    token = section.get("auth_token", "").strip()
    if not token:
        raise CredentialsNotFoundError(division, cred_path, "auth_token required")
    endpoint = section.get("api_endpoint", "").strip() or None
    logging.info("SB credentials loaded for division %s from %s", division, cred_path)
    return SbgCredentials(token, endpoint)


__all__ = ["SbgCredentials", "load_sbg_credentials"]
