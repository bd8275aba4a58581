"""Pass/fail reporting over inspected panels."""

from __future__ import annotations

from cfx.core.logging import get_logger
from cfx.modules.pcb_inspection.schemas import (
    Board,
    BoardVerdict,
    InspectionObject,
    InspectionSummary,
    Panel,
)
from cfx.modules.pcb_inspection.serialization import TreeSource, load_panel
from cfx.modules.pcb_inspection.tree import iter_defect_sources, walk

logger = get_logger(__name__)


class InspectionTreeService:
    """Loads inspection trees and derives per-board verdicts from them."""

    def load_panel_json(self, data: TreeSource) -> Panel:
        panel = load_panel(data)
        logger.info(
            "panel_loaded",
            panel_identifier=panel.panel_identifier,
            board_count=len(panel.boards),
            node_count=sum(1 for _ in walk(panel)),
        )
        return panel

    def summarize(self, panel: Panel) -> InspectionSummary:
        verdicts = [self._verdict(board) for board in panel.boards]
        summary = InspectionSummary(
            panel_identifier=panel.panel_identifier,
            is_defect=panel.is_defect,
            board_count=len(verdicts),
            defective_board_count=sum(1 for verdict in verdicts if verdict.is_defect),
            boards=verdicts,
        )
        logger.debug(
            "panel_summarized",
            panel_identifier=panel.panel_identifier,
            is_defect=summary.is_defect,
            defective_board_count=summary.defective_board_count,
        )
        return summary

    def mark_repaired(self, node: InspectionObject) -> None:
        """Flag ``node`` as repaired, clearing the defect status of its subtree."""
        node.is_repaired = True
        logger.info(
            "inspection_object_repaired",
            kind=type(node).__name__,
            name=node.name,
        )

    @staticmethod
    def _verdict(board: Board) -> BoardVerdict:
        return BoardVerdict(
            name=board.name,
            unit_identifier=board.unit_identifier,
            is_defect=board.is_defect,
            is_repaired=board.is_repaired,
            defect_source_count=sum(1 for _ in iter_defect_sources(board)),
        )
