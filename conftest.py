"""Pytest configuration for the transfer verification tool."""

# pylint: disable=wrong-import-position

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the developer's ~/.env and credential variables.

    Points TRANSFER_VERIFY_ENV_FILE at an empty temporary .env file, points
    AWS_CONFIG_FILE away from ~/.aws/config, and clears every environment
    variable that can stand in for a CLI flag or feed botocore credentials.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setenv("TRANSFER_VERIFY_ENV_FILE", str(env_file))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    for name in (
        "SBG_DIVISION",
        "AWS_PROFILE",
        "SBG_CREDENTIALS_FILE",
        "AWS_SHARED_CREDENTIALS_FILE",
        "AWS_DEFAULT_REGION",
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    yield str(env_file)

