"""Unit tests for transfer_verify.s3_client"""

from unittest import mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from transfer_verify.errors import BucketNotFoundError, ConfigurationError, CredentialsNotFoundError
from transfer_verify.s3_client import create_aws_session, create_s3_client, resolve_bucket


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "HeadBucket")


class TestAwsSession:
    """Tests for profile resolution through boto3 sessions"""

    def test_static_key_profile(self, credential_files):
        """Test a profile with static keys yields an S3 client using those keys"""
        aws_path, _ = credential_files

        client = create_s3_client("cb_bshot", aws_path)

        assert client.service_name == "s3"
        assert client.session.profile_name == "cb_bshot"
        assert client.session.get_credentials().access_key == "AKIABSHOT"

    def test_role_profile_is_accepted(self, credential_files):
        """Test a role_arn/source_profile profile without static keys resolves"""
        aws_path, _ = credential_files

        session = create_aws_session("assumed", aws_path)

        assert session.get_credentials().method == "assume-role"

    def test_region_is_forwarded(self, credential_files):
        """Test the region reaches the session the client is built from"""
        aws_path, _ = credential_files

        client = create_s3_client("cb_bshot", aws_path, region="us-west-2")

        assert client.region_name == "us-west-2"

    def test_unknown_profile(self, credential_files):
        """Test unknown profiles raise CredentialsNotFoundError"""
        aws_path, _ = credential_files

        with pytest.raises(CredentialsNotFoundError, match="nobody"):
            create_s3_client("nobody", aws_path)

    def test_missing_credentials_file(self, tmp_path):
        """Test a credentials file that does not exist leaves the profile unknown"""
        with pytest.raises(CredentialsNotFoundError, match="cb_bshot"):
            create_s3_client("cb_bshot", tmp_path / "absent")

    def test_invalid_role_profile(self, credential_files):
        """Test botocore profile errors become configuration errors"""
        aws_path, _ = credential_files

        with pytest.raises(ConfigurationError, match="Unable to load AWS profile 'broken'"):
            create_s3_client("broken", aws_path)


def test_resolve_bucket_ok():
    """Test an accessible bucket resolves to its name"""
    s3 = mock.Mock()
    assert resolve_bucket(s3, "my-bucket") == "my-bucket"
    s3.head_bucket.assert_called_once_with(Bucket="my-bucket")


@pytest.mark.parametrize(
    ("code", "reason"),
    [("404", "does not exist"), ("NoSuchBucket", "does not exist"), ("403", "access denied"), ("Weird", "Weird")],
)
def test_resolve_bucket_client_errors(code, reason):
    """Test head_bucket failures become BucketNotFoundError"""
    s3 = mock.Mock()
    s3.head_bucket.side_effect = _client_error(code)

    with pytest.raises(BucketNotFoundError, match=reason):
        resolve_bucket(s3, "my-bucket")


def test_resolve_bucket_connection_error():
    """Test transport failures are reported as resolution failures"""
    s3 = mock.Mock()
    s3.head_bucket.side_effect = EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")

    with pytest.raises(BucketNotFoundError, match="Failed to open bucket my-bucket"):
        resolve_bucket(s3, "my-bucket")
