from copy import copy
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationInfo, field_validator


class PurgeType(str, Enum):
    URLS = "urls"
    CACHE_TAGS = "cache-tags"


class PurgeRequest(BaseModel):
    """
    Purge instruction sent by internal clients.
    Missing fields fall back to empty values; the upstream API decides
    whether they make sense.
    """
    model_config = ConfigDict(populate_by_name=True)

    purge_type: str = Field(default="", alias="purgeType")
    action_type: str = Field(default="", alias="actionType")
    environment: str = ""
    paths: list[str] = []
    post_purge_request: StrictBool = Field(default=False, alias="postPurgeRequest")

    @field_validator("*", mode="before")
    @classmethod
    def null_means_empty(cls, v, info: ValidationInfo):
        if v is None:
            return copy(cls.model_fields[info.field_name].default)
        return v


class PurgeResponse(BaseModel):
    """Akamai Fast Purge answer. Unknown keys are kept and relayed."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    http_status: int = Field(default=0, alias="httpStatus")
    detail: str = ""
    estimated_seconds: Optional[int] = Field(default=None, alias="estimatedSeconds")
    purge_id: Optional[str] = Field(default=None, alias="purgeId")
    support_id: Optional[str] = Field(default=None, alias="supportId")
    title: Optional[str] = None
    described_by: Optional[str] = Field(default=None, alias="describedBy")


class ErrorResponse(BaseModel):
    error: str
