"""
S3 client creation and bucket resolution for the target side.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import boto3
import botocore.session
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from .errors import BucketNotFoundError, ConfigurationError, CredentialsNotFoundError

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}
_FORBIDDEN_CODES = {"403", "AccessDenied", "Forbidden"}


def create_aws_session(
    profile: str,
    credentials_file: Optional[Path] = None,
    region: Optional[str] = None,
) -> boto3.Session:
    """
    Open a boto3 session for a named profile.

    Static keys, role_arn/source_profile, credential_process and SSO profiles
    are all resolved by botocore's own credential chain.

    Args:
        profile: Profile name in the shared credentials/config files
        credentials_file: Shared credentials file to read instead of ~/.aws/credentials
        region: AWS region name (optional; boto3 falls back to its own resolution)

    Raises:
        CredentialsNotFoundError: If the profile is unknown or yields no credentials
        ConfigurationError: If botocore cannot build credentials for the profile
    """
    core_session = botocore.session.Session()
    if credentials_file is not None:
        core_session.set_config_variable("credentials_file", str(credentials_file))
    try:
        session = boto3.Session(botocore_session=core_session, profile_name=profile, region_name=region)
        credentials = session.get_credentials()
    except ProfileNotFound as exc:
        raise CredentialsNotFoundError(profile, credentials_file, "profile not found") from exc
    except BotoCoreError as exc:
        raise ConfigurationError(f"Unable to load AWS profile '{profile}': {exc}") from exc
    if credentials is None:
        raise CredentialsNotFoundError(profile, credentials_file, "no credentials resolved for profile")
    logging.info("AWS session opened for profile %s", profile)
    return session


def create_s3_client(
    profile: str,
    credentials_file: Optional[Path] = None,
    region: Optional[str] = None,
):
    """
    Create an S3 boto3 client for a named profile.

    Returns:
        boto3 S3 client
    """
    session = create_aws_session(profile, credentials_file, region)
    return session.client("s3")


def resolve_bucket(s3, bucket: str) -> str:
    """
    Confirm the bucket exists and is reachable with the current credentials.

    Raises:
        BucketNotFoundError: If the bucket is missing, forbidden, or the check fails
    """
    try:
        s3.head_bucket(Bucket=bucket)
    except ClientError as exc:
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in _MISSING_BUCKET_CODES:
            raise BucketNotFoundError(bucket, "does not exist") from exc
        if code in _FORBIDDEN_CODES:
            raise BucketNotFoundError(bucket, "access denied") from exc
        raise BucketNotFoundError(bucket, code or str(exc)) from exc
    except BotoCoreError as exc:
        raise BucketNotFoundError(bucket, str(exc)) from exc
    return bucket


__all__ = ["create_aws_session", "create_s3_client", "resolve_bucket"]
