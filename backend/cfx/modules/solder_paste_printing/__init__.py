"""Solder paste printing messages (stencil cleaning requests)."""

from cfx.modules.solder_paste_printing.schemas import (
    CleanStencilRequest,
    CleanStencilResponse,
    SMTCleanType,
)

__all__ = [
    "CleanStencilRequest",
    "CleanStencilResponse",
    "SMTCleanType",
]
