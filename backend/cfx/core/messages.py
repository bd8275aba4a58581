"""Shared CFX message envelope pieces.

Only the message shapes live here; delivery and dispatch belong to the
transport layer that embeds this package.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class StatusResult(str, Enum):
    """Outcome of a request handled by an endpoint."""

    SUCCESS = "Success"
    FAILED = "Failed"
    REJECTED = "Rejected"


class RequestResult(BaseModel):
    """Result block carried by every CFX response message."""

    model_config = ConfigDict(populate_by_name=True)

    result: StatusResult = Field(default=StatusResult.SUCCESS, alias="Result")
    result_code: int = Field(default=0, alias="ResultCode")
    message: str | None = Field(default=None, alias="Message")


class CFXMessage(BaseModel):
    """Base class for all CFX messages.

    Subclasses set ``cfx_namespace`` to the dotted namespace they belong to;
    the full message name is the namespace plus the class name.
    """

    model_config = ConfigDict(populate_by_name=True)

    cfx_namespace: ClassVar[str] = "CFX"

    @classmethod
    def message_name(cls) -> str:
        return f"{cls.cfx_namespace}.{cls.__name__}"

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
