from __future__ import annotations

import json

import pytest

from cfx.core.config import get_settings
from cfx.modules.pcb_inspection.schemas import Board, Component, Fiducial, Panel
from cfx.modules.pcb_inspection.serialization import (
    InspectionTreeParseError,
    dump_json,
    dump_payload,
    load_board,
    load_panel,
)


def test_empty_sub_boards_are_omitted() -> None:
    payload = dump_payload(Board(name="B1"))

    assert "Boards" not in payload
    assert payload["Fiducials"] == []
    assert payload["Components"] == []


def test_non_empty_sub_boards_are_emitted() -> None:
    payload = dump_payload(Board(boards=[Board(name="SB")]))

    assert [item["Name"] for item in payload["Boards"]] == ["SB"]
    assert "Boards" not in payload["Boards"][0]


def test_calculated_status_and_parent_are_not_emitted(panel: Panel) -> None:
    payload = dump_payload(panel)
    board_payload = payload["Boards"][1]

    # IsDefect carries the local flag only; the board itself is clean locally.
    assert board_payload["IsDefect"] is False
    assert board_payload["Fiducials"][0]["IsDefect"] is True
    assert "Parent" not in board_payload
    assert "parent" not in board_payload


def test_none_attributes_are_omitted() -> None:
    payload = dump_payload(Component(reference_designator="R1"))

    assert payload == {"IsDefect": False, "IsRepaired": False, "RefDesignator": "R1"}


def test_field_names_filter_without_aliases() -> None:
    payload = Board(name="B").model_dump(exclude_none=True)

    assert "boards" not in payload
    assert payload["fiducials"] == []


def test_children_come_last() -> None:
    payload = dump_payload(Board(name="B", pos_x=1.5, boards=[Board()]))

    assert list(payload)[-3:] == ["Fiducials", "Components", "Boards"]


def test_empty_sub_board_round_trip() -> None:
    original = Board(name="B1", components=[Component(name="C1")])

    restored = load_board(dump_json(original))

    assert restored.boards == []
    assert dump_payload(restored) == dump_payload(original)


def test_missing_and_null_collections_read_as_empty() -> None:
    board = load_board({"Name": "B1", "Fiducials": None})

    assert board.fiducials == []
    assert board.components == []
    assert board.boards == []
    assert board.is_defect is False


def test_null_items_inside_collections_are_dropped() -> None:
    board = load_board(
        '{"Components": [null, {"Name": "C1", "IsDefect": true}, null], "Boards": [null]}'
    )

    assert [component.name for component in board.components] == ["C1"]
    assert board.boards == []
    assert board.is_defect is True


def test_load_panel_links_parents() -> None:
    panel = load_panel(
        {
            "PanelIdentifier": "PNL-1",
            "Boards": [
                {"Name": "B1"},
                {"Name": "B2", "Fiducials": [{"Name": "F1", "IsDefect": True}]},
            ],
        }
    )

    second = panel.boards[1]
    assert second.parent is panel
    assert second.fiducials[0].parent is second
    assert panel.is_defect is True


def test_load_accepts_field_names() -> None:
    board = load_board({"name": "B1", "is_repaired": True, "local_defect": True})

    assert board.is_repaired is True
    assert board.is_defect is False


def test_nested_round_trip_keeps_order_and_flags() -> None:
    original = Panel(
        panel_identifier="PNL-7",
        boards=[
            Board(
                name="B1",
                fiducials=[Fiducial(name="F2"), Fiducial(name="F1")],
                boards=[Board(name="SB", is_repaired=True, local_defect=True)],
            )
        ],
    )

    restored = load_panel(dump_json(original, indent=2).encode("utf-8"))

    board = restored.boards[0]
    assert [fiducial.name for fiducial in board.fiducials] == ["F2", "F1"]
    assert board.boards[0].is_repaired is True
    assert board.boards[0].local_defect is True
    assert restored.is_defect is False
    assert board.boards[0].parent is board


def test_dump_json_uses_configured_indent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SERIALIZATION_INDENT", raising=False)
    board = Board(name="B1")

    assert "\n" not in dump_json(board)

    monkeypatch.setenv("SERIALIZATION_INDENT", "2")
    get_settings.cache_clear()

    text = dump_json(board)
    assert text.startswith('{\n  "Name"')
    assert json.loads(text)["Name"] == "B1"


@pytest.mark.parametrize(
    "data",
    [
        "{not json",
        '{"Fiducials": "many"}',
        {"Components": [{"IsDefect": "definitely"}]},
        ["Board"],
    ],
)
def test_invalid_representation_raises_parse_error(data: object) -> None:
    with pytest.raises(InspectionTreeParseError, match="Invalid Board representation"):
        load_board(data)  # type: ignore[arg-type]


def test_empty_panel_omits_boards() -> None:
    payload = dump_payload(Panel(panel_identifier="PNL-0"))

    assert payload == {"IsDefect": False, "IsRepaired": False, "PanelIdentifier": "PNL-0"}


def test_null_children_appended_after_parse_are_dropped_on_dump() -> None:
    board = Board(name="B1", components=[Component(name="C1")])
    board.components.append(None)  # type: ignore[arg-type]
    board.fiducials.append(None)  # type: ignore[arg-type]
    board.boards.append(None)  # type: ignore[arg-type]

    payload = dump_payload(board)

    assert [item["Name"] for item in payload["Components"]] == ["C1"]
    assert payload["Fiducials"] == []
    assert "Boards" not in payload
    assert json.loads(dump_json(board)) == payload


def test_null_boards_on_panel_are_dropped_on_dump() -> None:
    panel = Panel(boards=[Board(name="B1")])
    panel.boards.insert(0, None)  # type: ignore[arg-type]

    payload = dump_payload(panel)

    assert [item["Name"] for item in payload["Boards"]] == ["B1"]


def test_deeply_nested_boards_dump_and_reload() -> None:
    leaf = Board(name="depth-30", components=[Component(local_defect=True)])
    root = leaf
    for level in range(29, 0, -1):
        root = Board(name=f"depth-{level}", boards=[root])

    restored = load_board(dump_json(root))

    assert restored.is_defect is True
    assert dump_payload(restored) == dump_payload(root)
