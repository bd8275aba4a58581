"""Pydantic schemas for the PCB inspection-result tree.

A panel owns boards; a board owns fiducials, components and (rarely)
sub-boards of the same shape. External keys use the PascalCase names of the
CFX JSON binding; Python code may use either the field name or the alias.

Every node exposes two algorithms that are written once on
``InspectionObject`` against the per-variant ``children()`` enumeration:

* ``is_defect`` -- bottom-up, uncached defect aggregation gated by the
  node's own ``is_repaired`` flag.
* ``update_parent_reference`` -- top-down assignment of the non-owning
  ``parent`` back-reference.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from cfx.modules.pcb_inspection.filters import (
    FieldPredicate,
    apply_field_filters,
    coerce_collection,
    drop_null_items,
    is_non_empty,
    present,
)


class ParentLink:
    """Non-owning handle to a node's structural parent.

    Holds a weak reference, so a child never keeps its parent alive. Links
    are lookup-only and do not take part in value equality of nodes.
    """

    __slots__ = ("_ref",)

    def __init__(self, target: InspectionObject | None = None) -> None:
        self._ref = weakref.ref(target) if target is not None else None

    def __call__(self) -> InspectionObject | None:
        if self._ref is None:
            return None
        return self._ref()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParentLink):
            return NotImplemented
        return True

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: dict[int, Any]) -> ParentLink:
        # A copied subtree is detached until propagation runs on it.
        return ParentLink()


# ---------------------------------------------------------------------------
# Inspection objects
# ---------------------------------------------------------------------------


class InspectionObject(BaseModel):
    """Any node of the inspection tree that can report a defect status."""

    model_config = ConfigDict(populate_by_name=True)

    # Encode-time predicates keyed by field name; see filters.py.
    serialization_predicates: ClassVar[dict[str, FieldPredicate]] = {}

    name: str | None = Field(default=None, alias="Name")
    local_defect: bool = Field(default=False, alias="IsDefect")
    is_repaired: bool = Field(default=False, alias="IsRepaired")

    _parent: ParentLink = PrivateAttr(default_factory=ParentLink)

    @model_validator(mode="before")
    @classmethod
    def accept_is_defect_keyword(cls, data: Any) -> Any:
        """Let ``is_defect=...`` set the local flag, the same as assigning it does."""
        if isinstance(data, dict) and "is_defect" in data:
            data = dict(data)
            value = data.pop("is_defect")
            if "local_defect" not in data and "IsDefect" not in data:
                data["local_defect"] = value
        return data

    @property
    def parent(self) -> InspectionObject | None:
        """Structural parent as of the last propagation pass, or None for a root."""
        return self._parent()

    @property
    def is_defect(self) -> bool:
        """Whether this node or any descendant is defective.

        A repaired node reports False regardless of its own flag and its
        children. Only the queried node's repaired flag is consulted; a
        repaired child merely stops contributing its own subtree.
        """
        if self.is_repaired:
            return False
        if self.local_defect:
            return True
        return any(child.is_defect for child in self.children())

    @is_defect.setter
    def is_defect(self, value: bool) -> None:
        self.local_defect = value

    def children(self) -> Iterator[InspectionObject]:
        """Direct children in evaluation order. Leaves have none."""
        return iter(())

    def update_parent_reference(self, new_parent: InspectionObject | None) -> None:
        """Point this node at ``new_parent`` and re-link the whole subtree below it.

        Must be called again by whoever changes a child collection.
        """
        self._parent = ParentLink(new_parent)
        for child in self.children():
            child.update_parent_reference(self)

    @model_serializer(mode="wrap")
    def externalize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Apply the per-field predicates to the encoded payload.

        Every nesting level adds wrap-serializer frames, so pydantic's
        recursion guard trips at a fraction of the depth of a plain model.
        Board nesting in the low hundreds cannot be dumped; real panels stay
        within a handful of levels.
        """
        payload = handler(self)
        return apply_field_filters(payload, _keyed_predicates(type(self)))


def _keyed_predicates(model: type[InspectionObject]) -> dict[str, FieldPredicate]:
    """Index a model's predicates under both the field name and its alias."""
    keyed: dict[str, FieldPredicate] = {}
    for field_name, predicate in model.serialization_predicates.items():
        keyed[field_name] = predicate
        alias = model.model_fields[field_name].alias
        if alias:
            keyed[alias] = predicate
    return keyed


class GeometricObject(InspectionObject):
    """Inspection object with an (opaque) placement on the panel."""

    pos_x: float | None = Field(default=None, alias="PosX")
    pos_y: float | None = Field(default=None, alias="PosY")
    size_x: float | None = Field(default=None, alias="SizeX")
    size_y: float | None = Field(default=None, alias="SizeY")
    rotation: float | None = Field(default=None, alias="Rotation")


class Fiducial(GeometricObject):
    """Reference mark used for optical alignment."""


class Component(GeometricObject):
    """A placed part."""

    reference_designator: str | None = Field(default=None, alias="RefDesignator")
    part_number: str | None = Field(default=None, alias="PartNumber")


class Board(GeometricObject):
    """A board of a (multi-)panel, itself an inspection object.

    ``boards`` holds sub-boards. It is usually empty and is left out of the
    external representation in that case.
    """

    serialization_predicates = {"boards": is_non_empty}

    unit_identifier: str | None = Field(default=None, alias="UnitIdentifier")
    # Children come last in the external representation.
    fiducials: list[Fiducial] = Field(default_factory=list, alias="Fiducials")
    components: list[Component] = Field(default_factory=list, alias="Components")
    boards: list[Board] = Field(default_factory=list, alias="Boards")

    @field_validator("fiducials", "components", "boards", mode="before")
    @classmethod
    def absent_as_empty(cls, value: Any) -> Any:
        return coerce_collection(value)

    @field_serializer("fiducials", "components", "boards", mode="wrap")
    def skip_null_children(self, value: list[Any], handler: SerializerFunctionWrapHandler) -> Any:
        return handler(drop_null_items(value))

    def children(self) -> Iterator[InspectionObject]:
        yield from present(self.fiducials)
        yield from present(self.components)
        yield from present(self.boards)


class Panel(InspectionObject):
    """Top-level container of one or more boards."""

    serialization_predicates = {"boards": is_non_empty}

    panel_identifier: str | None = Field(default=None, alias="PanelIdentifier")
    boards: list[Board] = Field(default_factory=list, alias="Boards")

    @field_validator("boards", mode="before")
    @classmethod
    def absent_as_empty(cls, value: Any) -> Any:
        return coerce_collection(value)

    @field_serializer("boards", mode="wrap")
    def skip_null_children(self, value: list[Any], handler: SerializerFunctionWrapHandler) -> Any:
        return handler(drop_null_items(value))

    def children(self) -> Iterator[InspectionObject]:
        yield from present(self.boards)


# ---------------------------------------------------------------------------
# Verdicts
# ---------------------------------------------------------------------------


class BoardVerdict(BaseModel):
    """Pass/fail outcome for one top-level board of a panel."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="Name")
    unit_identifier: str | None = Field(default=None, alias="UnitIdentifier")
    is_defect: bool = Field(alias="IsDefect")
    is_repaired: bool = Field(alias="IsRepaired")
    defect_source_count: int = Field(ge=0, alias="DefectSourceCount")


class InspectionSummary(BaseModel):
    """Pass/fail report for a whole panel."""

    model_config = ConfigDict(populate_by_name=True)

    panel_identifier: str | None = Field(default=None, alias="PanelIdentifier")
    is_defect: bool = Field(alias="IsDefect")
    board_count: int = Field(ge=0, alias="BoardCount")
    defective_board_count: int = Field(ge=0, alias="DefectiveBoardCount")
    boards: list[BoardVerdict] = Field(default_factory=list, alias="Boards")
