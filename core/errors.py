# core/errors.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

__all__ = [
    "TreeStoreError",
    "MalformedDocument",
    "InvalidParent",
    "InvalidTitle",
    "NodeNotFound",
    "CyclicMove",
]


class TreeStoreError(Exception):
    """Base class for every rejected list operation."""


class MalformedDocument(TreeStoreError):
    """The persisted list could not be parsed into an item forest."""


class InvalidParent(TreeStoreError):
    """The parent id is not live, or the new item would have a blank title."""


class InvalidTitle(InvalidParent):
    """A blank title was supplied."""


class NodeNotFound(TreeStoreError):
    """The item id is not (or no longer) part of the forest."""


class CyclicMove(TreeStoreError):
    """The move would make an item a descendant of itself."""

    def __init__(self, node_id: str, parent_id: str):
        super().__init__(f"Cannot move {node_id} under {parent_id}: it is that item or one of its descendants")
        self.node_id = node_id
        self.parent_id = parent_id
