from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, model_validator

from shared.casing import camelize

# Chaves do schema fixo; todo o resto vira payload (data)
SCHEMA_KEYS = {
    "BucketName",
    "DestinationKey",
    "RetainOnDelete",
    "DistributionId",
    "DistributionPath",
    "CaseTransform",
    "ServiceToken",
    "Camelize",
}


class ResourcePropertiesBase(BaseModel):
    """Fixed part of the custom resource properties (also used for OldResourceProperties)."""

    model_config = ConfigDict(extra="allow")

    bucket_name: StrictStr = Field(..., alias="BucketName")
    destination_key: StrictStr = Field(..., alias="DestinationKey")
    retain_on_delete: bool = Field(False, alias="RetainOnDelete")
    distribution_id: Optional[StrictStr] = Field(None, alias="DistributionId")
    distribution_path: Optional[StrictStr] = Field(None, alias="DistributionPath")
    case_transform: bool = Field(True, alias="CaseTransform")
    service_token: Optional[str] = Field(None, alias="ServiceToken", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def accept_camelize_alias(cls, values: Any) -> Any:
        """Older stacks send the flag as `Camelize`; CaseTransform wins when both exist."""
        if isinstance(values, dict) and "Camelize" in values:
            values = dict(values)
            camelize_flag = values.pop("Camelize")
            values.setdefault("CaseTransform", camelize_flag)
        return values

    @property
    def location(self) -> tuple[str, str]:
        return self.bucket_name, self.destination_key

    @property
    def raw_data(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class ResourceProperties(ResourcePropertiesBase):
    """Validated desired state; `data` is the payload persisted to S3."""

    @model_validator(mode="after")
    def distribution_path_requires_id(self):
        if self.distribution_path and not self.distribution_id:
            raise ValueError("DistributionPath can only exist if DistributionId exists.")
        return self

    @property
    def data(self) -> Dict[str, Any]:
        if self.case_transform:
            return camelize(self.raw_data)
        return self.raw_data

    @property
    def invalidation_path(self) -> Optional[str]:
        """
        Path sent to CloudFront, or None when no distribution is configured.

        CloudFront requires paths to start with "/", so the destination key
        is qualified when used as the default.
        """
        if not self.distribution_id:
            return None
        if self.distribution_path:
            return self.distribution_path
        key = self.destination_key
        return key if key.startswith("/") else f"/{key}"


def format_validation_error(error: ValidationError) -> str:
    """Turns a pydantic ValidationError into `Field: message` pairs for the FAILED reason."""
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "Invalid resource properties: " + "; ".join(parts)
