"""Service: reconciles the deployed config object with the requested lifecycle transition."""

import uuid
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.parser import parse

from config_deployment.repository import ConfigObjectRepository, DistributionRepository
from config_deployment.schemas import ResourceProperties, ResourcePropertiesBase

logger = Logger(service="config-deployment")

PHYSICAL_ID_PREFIX = "cdk.publishedConfig."
REQUEST_TYPES = ("Create", "Update", "Delete")


def new_physical_resource_id() -> str:
    return f"{PHYSICAL_ID_PREFIX}{uuid.uuid4()}"


def resolve_physical_resource_id(request_type: str, current_id: Optional[str]) -> str:
    """Fresh id on Create; the id CloudFormation already holds otherwise."""
    if request_type == "Create" or not current_id:
        return new_physical_resource_id()
    return current_id


class ConfigDeploymentService:
    def __init__(self):
        self.repo = ConfigObjectRepository()
        self.distributions = DistributionRepository()

    def handle(
        self,
        request_type: str,
        properties: Dict[str, Any],
        old_properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Validates the properties and applies the transition.

        Raises:
            pydantic.ValidationError: invalid properties (nothing was touched).
            StorageError / InvalidationError: AWS side effect failed.
            ValueError: unknown request type.
        """
        if request_type not in REQUEST_TYPES:
            raise ValueError(f"Unsupported request type: {request_type}")

        props = parse(event=properties or {}, model=ResourceProperties)

        if request_type == "Create":
            self.create(props)
        elif request_type == "Update":
            old_props = parse(event=old_properties or {}, model=ResourcePropertiesBase)
            self.update(props, old_props)
        else:
            self.delete(props)

    def create(self, props: ResourceProperties) -> None:
        self._publish(props)

    def update(self, props: ResourceProperties, old_props: ResourcePropertiesBase) -> None:
        moved = props.location != old_props.location
        if moved and not props.retain_on_delete:
            old_bucket, old_key = old_props.location
            logger.info("Destination changed, removing previous object",
                        extra={"old_bucket": old_bucket, "old_key": old_key})
            self.repo.delete(old_bucket, old_key)
        self._publish(props)

    def delete(self, props: ResourceProperties) -> None:
        if props.retain_on_delete:
            logger.info("RetainOnDelete set, keeping object", extra={"bucket_name": props.bucket_name, "key": props.destination_key})
            return
        self.repo.delete(props.bucket_name, props.destination_key)
        self._invalidate(props)

    def _publish(self, props: ResourceProperties) -> None:
        self.repo.put_json(props.bucket_name, props.destination_key, props.data)
        self._invalidate(props)

    def _invalidate(self, props: ResourceProperties) -> None:
        path = props.invalidation_path
        if path is None:
            return
        invalidation_id = self.distributions.create_invalidation(props.distribution_id, path)
        self.distributions.wait_until_completed(props.distribution_id, invalidation_id)
