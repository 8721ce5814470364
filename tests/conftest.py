import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Garante que src esteja no path (imports no formato do bundle da Lambda)
_root = Path(__file__).resolve().parents[1]
src_path = str(_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from shared import aws  # noqa: E402


@pytest.fixture
def lambda_context() -> MagicMock:
    context = MagicMock()
    context.function_name = "config-deployment-handler"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:config-deployment-handler"
    context.aws_request_id = "req-0001"
    context.log_stream_name = "2026/10/19/[$LATEST]abcdef"
    return context


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Credenciais falsas: nenhum teste pode alcançar a AWS real."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    aws.reset_clients()
    yield
    aws.reset_clients()


def _cfn_event(
    request_type: str,
    properties: dict,
    old_properties: dict | None = None,
    physical_resource_id: str | None = None,
) -> dict:
    """Evento de custom resource como o CloudFormation envia."""
    event = {
        "RequestType": request_type,
        "ServiceToken": "arn:aws:lambda:us-east-1:123456789012:function:config-deployment-handler",
        "ResponseURL": "https://cloudformation-custom-resource-response-useast1.s3.amazonaws.com/arn%3Aaws/abc?X-Amz-Signature=sig",
        "StackId": "arn:aws:cloudformation:us-east-1:123456789012:stack/app/guid",
        "RequestId": "unique-request-id",
        "LogicalResourceId": "ConfigDeploymentCustomResource",
        "ResourceType": "Custom::CDKConfigDeployment",
        "ResourceProperties": {"ServiceToken": "arn:aws:lambda:...", **properties},
    }
    if old_properties is not None:
        event["OldResourceProperties"] = {"ServiceToken": "arn:aws:lambda:...", **old_properties}
    if physical_resource_id is not None:
        event["PhysicalResourceId"] = physical_resource_id
    return event


@pytest.fixture
def make_event():
    return _cfn_event
