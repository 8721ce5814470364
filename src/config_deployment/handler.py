"""
Handler for the Custom::CDKConfigDeployment resource.

CloudFormation invokes it once per lifecycle event (Create, Update, Delete).
The outcome is always reported through the ResponseURL, success or failure.
"""

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    CloudFormationCustomResourceEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from shared.cfn_response import FAILED, SUCCESS, send
from config_deployment.schemas import format_validation_error
from config_deployment.service import ConfigDeploymentService, resolve_physical_resource_id

logger = Logger(service="config-deployment")


@logger.inject_lambda_context
@event_source(data_class=CloudFormationCustomResourceEvent)
def lambda_handler(event: CloudFormationCustomResourceEvent, context: LambdaContext) -> None:
    request_type = event.get("RequestType") or ""
    physical_resource_id = resolve_physical_resource_id(request_type, event.get("PhysicalResourceId"))
    logger.append_keys(
        request_type=request_type,
        logical_resource_id=event.get("LogicalResourceId"),
        physical_resource_id=physical_resource_id,
    )

    try:
        service = ConfigDeploymentService()
        service.handle(
            request_type,
            event.get("ResourceProperties") or {},
            event.get("OldResourceProperties"),
        )
    except ValidationError as e:
        reason = format_validation_error(e)
        logger.warning("Propriedades inválidas", extra={"errors": e.errors(include_url=False)})
        send(event, context, FAILED, physical_resource_id, reason)
        return
    except Exception as e:
        logger.exception("Failed to process event")
        send(event, context, FAILED, physical_resource_id, str(e) or type(e).__name__)
        return

    send(event, context, SUCCESS, physical_resource_id)
