"""Command objects for edge edit operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Hashable

from edge_editor.model.edge_model import ActivePoint, Edge


class EditCommand(ABC):
    """Base class for reversible edge edit commands."""

    merge_key: Hashable | None = None

    @abstractmethod
    def apply(self) -> Edge | None:
        """Apply the command and return the resulting edge (``None`` when removed)."""

    @abstractmethod
    def revert(self) -> Edge | None:
        """Revert the command and return the prior edge (``None`` when it did not exist)."""

    @abstractmethod
    def merge(self, newer: "EditCommand") -> "EditCommand":
        """Return one command spanning ``self`` followed by ``newer``."""


class ReplaceEdgeCommand(EditCommand):
    """Swap one version of an edge for another.

    ``before`` is ``None`` for additions and ``after`` is ``None`` for removals.
    ``write`` stores the given version (or removes the edge for ``None``).
    """

    def __init__(
        self,
        *,
        edge_id: str,
        before: Edge | None,
        after: Edge | None,
        write: Callable[[str, Edge | None], None],
        merge_key: Hashable | None = None,
    ) -> None:
        self.edge_id = edge_id
        self.before = before
        self.after = after
        self.merge_key = merge_key
        self._write = write

    def apply(self) -> Edge | None:
        self._write(self.edge_id, self.after)
        return self.after

    def revert(self) -> Edge | None:
        self._write(self.edge_id, self.before)
        return self.before

    def merge(self, newer: EditCommand) -> EditCommand:
        if not isinstance(newer, ReplaceEdgeCommand) or newer.edge_id != self.edge_id:
            raise ValueError("Can only merge edits of the same edge.")
        return ReplaceEdgeCommand(
            edge_id=self.edge_id,
            before=self.before,
            after=newer.after,
            write=self._write,
            merge_key=self.merge_key,
        )


def replace_points_command(
    edge: Edge,
    points: tuple[ActivePoint, ...],
    write: Callable[[str, Edge | None], None],
    merge_key: Hashable | None = None,
) -> ReplaceEdgeCommand:
    return ReplaceEdgeCommand(
        edge_id=edge.id,
        before=edge,
        after=replace(edge, points=points),
        write=write,
        merge_key=merge_key,
    )
