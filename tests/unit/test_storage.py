from __future__ import annotations

import io

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from core.errors import RemoteAccessDenied, RemoteNotFound, RemoteTransient
from core.storage import S3SourceClient


@pytest.fixture
def s3(settings):
    client = boto3.client(
        "s3",
        region_name=settings.region,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
    )
    with Stubber(client) as stubber:
        yield client, stubber


def _expected(settings):
    return {"Bucket": settings.bucket, "Key": settings.key}


def test_open_object_returns_body(settings, s3, sample_csv) -> None:
    client, stubber = s3
    data = sample_csv.encode("utf-8")
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(data), len(data)), "ContentLength": len(data)},
        _expected(settings),
    )
    body = S3SourceClient(settings, client=client).open_object()
    assert body.read() == data
    stubber.assert_no_pending_responses()


def test_empty_object_returns_none(settings, s3) -> None:
    client, stubber = s3
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(b""), 0), "ContentLength": 0},
        _expected(settings),
    )
    assert S3SourceClient(settings, client=client).open_object() is None


@pytest.mark.parametrize(
    "code,status,expected",
    [
        ("NoSuchKey", 404, RemoteNotFound),
        ("NoSuchBucket", 404, RemoteNotFound),
        ("AccessDenied", 403, RemoteAccessDenied),
        ("InvalidAccessKeyId", 403, RemoteAccessDenied),
        ("InternalError", 500, RemoteTransient),
        ("SlowDown", 503, RemoteTransient),
    ],
)
def test_client_errors_are_classified(settings, s3, code, status, expected) -> None:
    client, stubber = s3
    stubber.add_client_error("get_object", service_error_code=code, service_message="boom", http_status_code=status)
    with pytest.raises(expected) as excinfo:
        S3SourceClient(settings, client=client).open_object()
    assert excinfo.value.code == code
    assert excinfo.value.status_code == status


def test_connection_errors_are_transient(settings) -> None:
    class _Unreachable:
        def get_object(self, **kwargs):
            raise EndpointConnectionError(endpoint_url="https://s3.example.invalid")

    with pytest.raises(RemoteTransient, match="s3.example.invalid"):
        S3SourceClient(settings, client=_Unreachable()).open_object()
