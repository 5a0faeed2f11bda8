from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings
from core.errors import RemoteAccessDenied, RemoteNotFound, RemoteSourceError, RemoteTransient


logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NotFound", "404"}
ACCESS_DENIED_CODES = {"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch", "AllAccessDisabled", "403"}


def build_s3_client(settings: Settings) -> Any:
    return boto3.client(
        "s3",
        region_name=settings.region,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        endpoint_url=settings.endpoint_url,
    )


def classify_client_error(exc: ClientError) -> RemoteSourceError:
    error = exc.response.get("Error", {}) or {}
    code = str(error.get("Code") or "")
    status = (exc.response.get("ResponseMetadata", {}) or {}).get("HTTPStatusCode")
    message = str(error.get("Message") or exc)
    if code in NOT_FOUND_CODES or status == 404:
        return RemoteNotFound(message, code=code, status_code=status)
    if code in ACCESS_DENIED_CODES or status == 403:
        return RemoteAccessDenied(message, code=code, status_code=status)
    return RemoteTransient(message, code=code, status_code=status)


class S3SourceClient:
    """Fetches the configured CSV object from S3."""

    def __init__(self, settings: Settings, client: Any = None):
        self.bucket = settings.bucket
        self.key = settings.key
        self._client = client if client is not None else build_s3_client(settings)

    def open_object(self) -> Optional[Any]:
        """Return the object's streaming body, or None when the object is empty."""
        logger.info("fetching s3://%s/%s", self.bucket, self.key)
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=self.key)
        except ClientError as exc:
            err = classify_client_error(exc)
            logger.warning("s3 get_object failed (%s): %s", err.code or type(err).__name__, err)
            raise err from exc
        except BotoCoreError as exc:
            logger.warning("s3 get_object failed: %s", exc)
            raise RemoteTransient(str(exc)) from exc

        body = response.get("Body")
        if body is None or response.get("ContentLength") == 0:
            if body is not None:
                body.close()
            return None
        return body
