import os

import boto3

_clients: dict = {}


def get_client(service_name: str):
    """
    Returns a cached boto3 client for the service (s3, cloudfront).

    Clients are reused across warm invocations of the same Lambda container.
    """
    client = _clients.get(service_name)
    if client is None:
        region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        client = boto3.client(service_name, region_name=region) if region else boto3.client(service_name)
        _clients[service_name] = client
    return client


def reset_clients() -> None:
    """Drops cached clients (used by tests that swap credentials or mocks)."""
    _clients.clear()
