"""
Stack-side helpers for the Custom::CDKConfigDeployment resource.

- build_resource_properties: the property set a stack sends to the handler.
- HandlerRegistry: resolves the shared handler function for a memory setting.
  One handler is shared per (uuid, memory limit); the registry belongs to the
  caller's construction context.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from config_deployment.schemas import SCHEMA_KEYS
from shared.casing import pascal_key

RESOURCE_TYPE = "Custom::CDKConfigDeployment"
HANDLER_UUID = "4742745F-9DE9-4CF6-A516-A661706F63F0"


def build_resource_properties(
    bucket_name: str,
    destination_key: str,
    data: Dict[str, Any],
    *,
    retain_on_delete: Optional[bool] = None,
    distribution_id: Optional[str] = None,
    distribution_path: Optional[str] = None,
    pascalize: bool = False,
    case_transform: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Renders the custom resource properties. Unset optionals are omitted so the
    handler applies its own defaults.

    Raises:
        ValueError: distribution_path without distribution_id, a distribution
            path not starting with "/", or payload keys clashing with the schema.
    """
    if distribution_path:
        if not distribution_id:
            raise ValueError("Distribution must be specified if distribution path is specified")
        if not distribution_path.startswith("/"):
            raise ValueError('Distribution paths must start with "/"')

    payload = {pascal_key(k): v for k, v in data.items()} if pascalize else dict(data)
    clashes = sorted(SCHEMA_KEYS.intersection(payload))
    if clashes:
        raise ValueError(f"Config keys collide with resource properties: {', '.join(clashes)}")

    properties: Dict[str, Any] = {
        "BucketName": bucket_name,
        "DestinationKey": destination_key,
    }
    optional = {
        "RetainOnDelete": retain_on_delete,
        "DistributionId": distribution_id,
        "DistributionPath": distribution_path,
        "CaseTransform": case_transform,
    }
    properties.update({k: v for k, v in optional.items() if v is not None})
    properties.update(payload)
    return properties


@dataclass(frozen=True)
class HandlerSpec:
    uuid: str
    construct_id: str
    memory_limit: Optional[int] = None


def render_unique_id(memory_limit: Optional[int] = None) -> str:
    if memory_limit is None:
        return ""
    if isinstance(memory_limit, bool) or not isinstance(memory_limit, int) or memory_limit <= 0:
        raise ValueError(f"memory_limit must be a positive integer, got {memory_limit!r}")
    return f"-{memory_limit}MiB"


@dataclass
class HandlerRegistry:
    """Keyed registry of handler functions: one entry per distinct memory limit."""

    base_uuid: str = HANDLER_UUID
    _handlers: Dict[str, HandlerSpec] = field(default_factory=dict)

    def resolve(self, memory_limit: Optional[int] = None) -> HandlerSpec:
        suffix = render_unique_id(memory_limit)
        key = f"{self.base_uuid}{suffix}"
        spec = self._handlers.get(key)
        if spec is None:
            spec = HandlerSpec(uuid=key, construct_id=f"CustomResource{suffix}", memory_limit=memory_limit)
            self._handlers[key] = spec
        return spec

    def __len__(self) -> int:
        return len(self._handlers)
