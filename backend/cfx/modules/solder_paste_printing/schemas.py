"""Pydantic schemas for stencil printer clean requests and responses."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from cfx.core.messages import CFXMessage, RequestResult

_NAMESPACE = "CFX.ResourcePerformance.SolderPastePrinting"


class SMTCleanType(str, Enum):
    """Kind of stencil clean operation."""

    DRY_CLEAN = "DryClean"
    WET_CLEAN = "WetClean"
    VACUUM_CLEAN = "VacuumClean"


class CleanStencilRequest(CFXMessage):
    """Asks a stencil printer to perform a stencil clean operation."""

    cfx_namespace = _NAMESPACE

    clean_type_requested: SMTCleanType = Field(alias="CleanTypeRequested")


class CleanStencilResponse(CFXMessage):
    """Printer's answer to a CleanStencilRequest."""

    cfx_namespace = _NAMESPACE

    result: RequestResult = Field(default_factory=RequestResult, alias="Result")
