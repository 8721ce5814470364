"""
CloudFormation custom resource response client.

Delivers exactly one result document to the pre-signed S3 URL carried by the
event (ResponseURL). Delivery is best-effort: CloudFormation times the
resource out on its own if nothing arrives, so failures are logged, never raised.

Optional env: CALLBACK_TIMEOUT_SECONDS (default 15).
"""

import json
import ssl
import urllib.error
import urllib.request
from typing import Any, Literal

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import CloudFormationCustomResourceEvent

from shared.config import env_int
from shared.exceptions import CallbackDeliveryError

logger = Logger(service="cfn-response")

SUCCESS = "SUCCESS"
FAILED = "FAILED"
DEFAULT_TIMEOUT_SEC = 15

ResponseStatus = Literal["SUCCESS", "FAILED"]


def build_response_body(
    event: CloudFormationCustomResourceEvent,
    context: Any,
    status: ResponseStatus,
    physical_resource_id: str | None = None,
    reason: str | None = None,
) -> dict[str, Any]:
    log_stream_name = getattr(context, "log_stream_name", None)
    return {
        "Status": status,
        "Reason": reason or f"See the details in CloudWatch Log Stream: {log_stream_name}",
        "PhysicalResourceId": physical_resource_id or log_stream_name,
        "StackId": event.get("StackId"),
        "RequestId": event.get("RequestId"),
        "LogicalResourceId": event.get("LogicalResourceId"),
        "NoEcho": False,
    }


def _put(url: str, body: bytes) -> int:
    timeout = env_int("CALLBACK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SEC)
    try:
        # S3 rejects the signature if a content-type is sent
        req = urllib.request.Request(
            url,
            data=body,
            method="PUT",
            headers={"content-type": "", "content-length": str(len(body))},
        )
        with urllib.request.urlopen(
            req, timeout=timeout, context=ssl.create_default_context()
        ) as resp:
            return resp.status
    except urllib.error.HTTPError as e:
        raise CallbackDeliveryError(f"ResponseURL retornou erro HTTP {e.code}") from e
    except urllib.error.URLError as e:
        raise CallbackDeliveryError(f"Falha de conexão com ResponseURL: {e.reason}") from e
    except (TimeoutError, OSError) as e:
        raise CallbackDeliveryError(f"Falha de conexão com ResponseURL: {e}") from e
    except ValueError as e:
        raise CallbackDeliveryError(f"ResponseURL inválida: {e}") from e


def send(
    event: CloudFormationCustomResourceEvent,
    context: Any,
    status: ResponseStatus,
    physical_resource_id: str | None = None,
    reason: str | None = None,
) -> bool:
    """
    PUTs the response document to the event ResponseURL. Never raises.

    Returns:
        True when CloudFormation's endpoint accepted the document, False otherwise.
    """
    logger.info("Sending response to CloudFormation", extra={"status": status, "reason": reason})
    if not event.get("ResponseURL"):
        logger.error("Event has no ResponseURL, nothing to report to")
        return False
    body = build_response_body(event, context, status, physical_resource_id, reason)
    data = json.dumps(body).encode("utf-8")
    try:
        status_code = _put(event["ResponseURL"], data)
    except CallbackDeliveryError as e:
        logger.error("Failed executing request", extra={"error": str(e)})
        return False
    logger.info("Got response from CloudFormation", extra={"statusCode": status_code})
    return True
