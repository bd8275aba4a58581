"""PCB inspection module: panel/board/component inspection-result tree."""

from cfx.modules.pcb_inspection.schemas import (
    Board,
    BoardVerdict,
    Component,
    Fiducial,
    GeometricObject,
    InspectionObject,
    InspectionSummary,
    Panel,
)
from cfx.modules.pcb_inspection.serialization import (
    InspectionTreeParseError,
    dump_json,
    dump_payload,
    load_board,
    load_panel,
)
from cfx.modules.pcb_inspection.service import InspectionTreeService

__all__ = [
    "Board",
    "BoardVerdict",
    "Component",
    "Fiducial",
    "GeometricObject",
    "InspectionObject",
    "InspectionSummary",
    "InspectionTreeParseError",
    "InspectionTreeService",
    "Panel",
    "dump_json",
    "dump_payload",
    "load_board",
    "load_panel",
]
