"""Reading and writing inspection trees in their external JSON form."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from cfx.core.config import get_settings
from cfx.core.logging import get_logger
from cfx.modules.pcb_inspection.schemas import Board, InspectionObject, Panel

logger = get_logger(__name__)

NodeT = TypeVar("NodeT", bound=InspectionObject)

TreeSource = str | bytes | bytearray | Mapping[str, Any]


class InspectionTreeParseError(ValueError):
    """Raised when an external representation is not a valid inspection tree."""


def dump_payload(node: InspectionObject) -> dict[str, Any]:
    """Externalize ``node`` as a JSON-compatible dict using the CFX keys."""
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_json(node: InspectionObject, indent: int | None = None) -> str:
    if indent is None:
        indent = get_settings().serialization_indent
    return node.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def _load(model: type[NodeT], data: TreeSource) -> NodeT:
    try:
        if isinstance(data, (str, bytes, bytearray)):
            node = model.model_validate_json(data)
        else:
            node = model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "inspection_tree_parse_failed",
            model=model.__name__,
            error_count=exc.error_count(),
        )
        raise InspectionTreeParseError(
            f"Invalid {model.__name__} representation ({exc.error_count()} error(s))"
        ) from exc

    node.update_parent_reference(None)
    return node


def load_board(data: TreeSource) -> Board:
    """Parse a board and link every node to its parent."""
    return _load(Board, data)


def load_panel(data: TreeSource) -> Panel:
    """Parse a panel and link every node to its parent."""
    return _load(Panel, data)
