"""Traversal helpers over an inspection tree.

All helpers are plain generators over ``children()`` and ``parent``; none of
them caches anything, so results always reflect the tree as it is now.
"""

from __future__ import annotations

from collections.abc import Iterator

from cfx.modules.pcb_inspection.schemas import InspectionObject


def walk(root: InspectionObject) -> Iterator[InspectionObject]:
    """Yield ``root`` and every descendant in pre-order."""
    yield root
    for child in root.children():
        yield from walk(child)


def ancestors(node: InspectionObject) -> Iterator[InspectionObject]:
    """Yield the parent chain of ``node``, nearest first.

    Relies on the links set by the last ``update_parent_reference`` pass.
    """
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def find_root(node: InspectionObject) -> InspectionObject:
    root = node
    for root in ancestors(node):
        pass
    return root


def iter_defect_sources(root: InspectionObject) -> Iterator[InspectionObject]:
    """Yield nodes whose own defect flag makes ``root`` defective.

    A repaired node hides itself and its subtree.
    """
    if root.is_repaired:
        return
    if root.local_defect:
        yield root
    for child in root.children():
        yield from iter_defect_sources(child)
