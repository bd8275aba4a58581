"""
Pytest fixtures for inspection tree testing.
Provides a settings cache reset and small ready-made panels.
"""

import pytest

from cfx.core.config import get_settings
from cfx.modules.pcb_inspection.schemas import Board, Component, Fiducial, Panel


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_board() -> Board:
    return Board(
        name="B1",
        unit_identifier="UNIT-0001",
        fiducials=[Fiducial(name="FID1", pos_x=1.0, pos_y=1.0)],
        components=[
            Component(name="C1", reference_designator="R1", part_number="RES-10K"),
            Component(name="C2", reference_designator="C7", part_number="CAP-100N"),
        ],
    )


@pytest.fixture
def defective_fiducial_board() -> Board:
    return Board(
        name="B2",
        unit_identifier="UNIT-0002",
        fiducials=[Fiducial(name="FID1", local_defect=True), Fiducial(name="FID2")],
        components=[Component(name="C1", reference_designator="U1")],
    )


@pytest.fixture
def panel(clean_board: Board, defective_fiducial_board: Board) -> Panel:
    panel = Panel(panel_identifier="PNL-42", boards=[clean_board, defective_fiducial_board])
    panel.update_parent_reference(None)
    return panel
