"""Repository: S3 object storage and CloudFront invalidation for the deployed config."""

import json
import math
import uuid
from typing import Any, Dict

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from shared.aws import get_client
from shared.config import env_int
from shared.exceptions import InvalidationError, InvalidationTimeoutError, StorageError

logger = Logger(service="config-deployment")

CONTENT_TYPE = "application/json"
DEFAULT_MAX_WAIT_SEC = 10
DEFAULT_POLL_DELAY_SEC = 2

_MISSING_CODES = {"NoSuchKey", "NoSuchBucket", "404"}


def serialize(data: Dict[str, Any]) -> bytes:
    """Compact JSON, same bytes for the same payload."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class ConfigObjectRepository:
    """Writes and removes the single JSON object at (bucket, key)."""

    def __init__(self) -> None:
        self.s3 = get_client("s3")

    def put_json(self, bucket: str, key: str, data: Dict[str, Any]) -> None:
        logger.info("Writing object", extra={"bucket_name": bucket, "key": key})
        try:
            self.s3.put_object(
                Bucket=bucket,
                Key=key,
                Body=serialize(data),
                ContentType=CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to write s3://{bucket}/{key}: {e}") from e

    def delete(self, bucket: str, key: str) -> None:
        """Deletes the object; an object (or bucket) that is already gone is not an error."""
        logger.info("Deleting object", extra={"bucket_name": bucket, "key": key})
        try:
            self.s3.delete_object(Bucket=bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in _MISSING_CODES:
                logger.warning("Object already absent", extra={"bucket_name": bucket, "key": key, "code": code})
                return
            raise StorageError(f"Failed to delete s3://{bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to delete s3://{bucket}/{key}: {e}") from e


class DistributionRepository:
    """Creates CloudFront invalidations and waits for them with a fixed ceiling."""

    def __init__(self) -> None:
        self.cloudfront = get_client("cloudfront")

    def create_invalidation(self, distribution_id: str, path: str) -> str:
        logger.info("Creating invalidation", extra={"distribution_id": distribution_id, "path": path})
        try:
            res = self.cloudfront.create_invalidation(
                DistributionId=distribution_id,
                InvalidationBatch={
                    "Paths": {"Quantity": 1, "Items": [path]},
                    "CallerReference": str(uuid.uuid4()),
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise InvalidationError(f"Failed to invalidate {path} on {distribution_id}: {e}") from e
        invalidation_id = (res.get("Invalidation") or {}).get("Id")
        if not invalidation_id:
            raise InvalidationError(f"CloudFront returned no invalidation id for {distribution_id}")
        return invalidation_id

    def wait_until_completed(self, distribution_id: str, invalidation_id: str) -> None:
        """
        Blocks until the invalidation is Completed.

        Bound: INVALIDATION_MAX_WAIT_SECONDS (default 10), polled every
        INVALIDATION_POLL_DELAY_SECONDS (default 2).

        Raises:
            InvalidationTimeoutError: bound exceeded.
            InvalidationError: the waiter hit a failure state or the API errored.
        """
        max_wait = env_int("INVALIDATION_MAX_WAIT_SECONDS", DEFAULT_MAX_WAIT_SEC)
        delay = max(1, env_int("INVALIDATION_POLL_DELAY_SECONDS", DEFAULT_POLL_DELAY_SEC))
        max_attempts = max(1, math.ceil(max_wait / delay))

        waiter = self.cloudfront.get_waiter("invalidation_completed")
        try:
            waiter.wait(
                DistributionId=distribution_id,
                Id=invalidation_id,
                WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
            )
        except WaiterError as e:
            if "Max attempts exceeded" in str(e.kwargs.get("reason", "")):
                raise InvalidationTimeoutError(distribution_id, invalidation_id, max_wait) from e
            raise InvalidationError(f"Invalidation {invalidation_id} failed: {e}") from e
        except (ClientError, BotoCoreError) as e:
            raise InvalidationError(f"Invalidation {invalidation_id} failed: {e}") from e
        logger.info("Invalidation completed", extra={"distribution_id": distribution_id, "invalidation_id": invalidation_id})
