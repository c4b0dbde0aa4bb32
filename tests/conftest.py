"""Shared pytest fixtures for test files."""

from __future__ import annotations

from unittest import mock

import pytest
from botocore.exceptions import ClientError

from transfer_verify.credentials import SbgCredentials


class _StubBotoClient:
    """Minimal stub for boto3 clients used in tests."""

    def __init__(self, service_name: str, session=None, **kwargs):
        self.service_name = service_name
        self.session = session
        self.region_name = kwargs.get("region_name") or getattr(session, "region_name", None)
        self.client_kwargs = kwargs
        self.exceptions = ClientError

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            del args, kwargs
            return {}

        return _method


@pytest.fixture(autouse=True)
def stub_boto3_client(monkeypatch):
    """Replace boto3 session clients with a stub so tests don't call real AWS."""

    def fake_client(self, service_name, **kwargs):
        return _StubBotoClient(service_name, session=self, **kwargs)

    monkeypatch.setattr("boto3.session.Session.client", fake_client)


@pytest.fixture
def sbg_credentials():
    """Seven Bridges token without a custom endpoint."""
    return SbgCredentials("token-abc")


@pytest.fixture
def credential_files(tmp_path):
    """Write matching AWS and Seven Bridges credentials files and return their paths."""
    aws_path = tmp_path / "aws_credentials"
    aws_path.write_text(
        "[default]\naws_access_key_id = AKIADEFAULT\naws_secret_access_key = default-secret\n\n"
        "[cb_bshot]\naws_access_key_id = AKIABSHOT\naws_secret_access_key = bshot-secret\n\n"
        "[assumed]\nrole_arn = arn:aws:iam::123456789012:role/transfer-audit\nsource_profile = cb_bshot\n\n"
        "[broken]\nrole_arn = arn:aws:iam::123456789012:role/transfer-audit\nsource_profile = ghost\n"
    )
    sbg_path = tmp_path / "sbg_credentials"
    sbg_path.write_text(
        "[default]\napi_endpoint = https://api.sbgenomics.com/v2\nauth_token = defaulttoken\n\n"
        "[big-shot]\napi_endpoint = https://api.sbgenomics.com/v2\nauth_token = bigshottoken\n"
    )
    return aws_path, sbg_path


def _json_response(status: int, payload=None, text: str = "") -> mock.Mock:
    response = mock.Mock()
    response.status_code = status
    response.ok = 200 <= status < 300  # noqa: PLR2004
    response.reason = "OK" if response.ok else "Error"
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def json_response():
    """Factory for fake requests.Response objects."""
    return _json_response
