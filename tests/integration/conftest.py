"""Integration test fixtures for LocalStack S3."""

from __future__ import annotations

import os

import boto3
import pytest
from botocore.exceptions import BotoCoreError, ClientError

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
BUCKET_NAME = "nacha-outbound-inttest"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client(
            "s3",
            region_name="us-east-1",
            endpoint_url=LOCALSTACK_URL,
            aws_access_key_id="test",
            aws_secret_access_key="test",
        )
        client.list_buckets()
        return True
    except (BotoCoreError, ClientError):
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack."""
    return boto3.client(
        "s3",
        region_name="us-east-1",
        endpoint_url=LOCALSTACK_URL,
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture(scope="session")
def outbound_bucket(localstack_s3):
    """Create the outbound bucket once per session."""
    localstack_s3.create_bucket(Bucket=BUCKET_NAME)
    return BUCKET_NAME
