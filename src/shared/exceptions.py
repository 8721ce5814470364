"""Error taxonomy for the config deployment custom resource."""


class ConfigDeploymentError(Exception):
    """Base class for failures reported back to CloudFormation."""

    pass


class StorageError(ConfigDeploymentError):
    """Raised when an S3 put or delete fails."""

    pass


class InvalidationError(ConfigDeploymentError):
    """Raised when the CloudFront invalidation fails or cannot be created."""

    pass


class InvalidationTimeoutError(InvalidationError):
    """Raised when the invalidation does not complete within the wait bound."""

    def __init__(self, distribution_id: str, invalidation_id: str, max_wait_seconds: int):
        self.distribution_id = distribution_id
        self.invalidation_id = invalidation_id
        self.max_wait_seconds = max_wait_seconds
        super().__init__(
            f"Invalidation {invalidation_id} on distribution {distribution_id} "
            f"did not complete within {max_wait_seconds}s"
        )


class CallbackDeliveryError(ConfigDeploymentError):
    """Raised when the response cannot be delivered to the pre-signed URL."""

    pass
