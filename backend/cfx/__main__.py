"""Entry point: python -m cfx <panel.json>

Prints the pass/fail summary of an inspected panel as JSON. Exits 0 when the
panel passes, 1 when it is defective and 2 when the file cannot be read as a
panel.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cfx import __version__
from cfx.core.config import get_settings
from cfx.core.logging import configure_logging, get_logger
from cfx.modules.pcb_inspection.serialization import InspectionTreeParseError
from cfx.modules.pcb_inspection.service import InspectionTreeService

logger = get_logger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cfx-inspect",
        description="Summarize the defect status of an inspected PCB panel.",
    )
    parser.add_argument("panel", type=Path, help="Panel JSON document (CFX keys).")
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent for the printed summary; defaults to SERIALIZATION_INDENT.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    service = InspectionTreeService()
    try:
        panel = service.load_panel_json(args.panel.read_bytes())
    except (OSError, InspectionTreeParseError) as exc:
        logger.error("panel_read_failed", path=str(args.panel), error=str(exc))
        return 2

    summary = service.summarize(panel)
    indent = args.indent if args.indent is not None else settings.serialization_indent
    print(summary.model_dump_json(by_alias=True, indent=indent))
    return 1 if summary.is_defect else 0


if __name__ == "__main__":
    sys.exit(main())
