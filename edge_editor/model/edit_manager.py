"""Undo/redo manager for edge edit commands."""

from __future__ import annotations

import logging

from edge_editor.model.edge_model import Edge
from edge_editor.model.edit_commands import EditCommand
from edge_editor.model.invariants import InvariantError, validate_points

logger = logging.getLogger(__name__)


class EditManager:
    """Execute reversible edit commands and manage undo/redo stacks.

    Consecutive commands sharing a ``merge_key`` collapse into one undo step
    (a drag produces one entry, not one per pointer move) until ``seal`` is
    called.
    """

    def __init__(self, max_depth: int = 200) -> None:
        self._undo_stack: list[EditCommand] = []
        self._redo_stack: list[EditCommand] = []
        self._max_depth = max_depth
        self._sealed = True

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def execute(self, command: EditCommand) -> Edge | None:
        """Execute a command, push it to undo history, and clear redo history.

        The result is validated; an invalid result is reverted and the
        ``InvariantError`` propagates with history left unchanged.
        """
        result = command.apply()
        if result is not None:
            try:
                validate_points(result.points)
            except InvariantError:
                command.revert()
                raise

        top = self._undo_stack[-1] if self._undo_stack else None
        if (
            not self._sealed
            and top is not None
            and command.merge_key is not None
            and top.merge_key == command.merge_key
        ):
            self._undo_stack[-1] = top.merge(command)
        else:
            self._undo_stack.append(command)
            if len(self._undo_stack) > self._max_depth:
                del self._undo_stack[0]
        self._redo_stack.clear()
        self._sealed = command.merge_key is None
        return result

    def seal(self) -> None:
        """Stop merging into the latest undo entry."""
        self._sealed = True

    def undo(self) -> Edge | None:
        """Undo the latest command and return the restored edge when available."""
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        result = command.revert()
        self._redo_stack.append(command)
        self._sealed = True
        logger.debug("Undo %s", type(command).__name__)
        return result

    def redo(self) -> Edge | None:
        """Redo the latest undone command and return the reapplied edge when available."""
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        result = command.apply()
        self._undo_stack.append(command)
        self._sealed = True
        logger.debug("Redo %s", type(command).__name__)
        return result

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._sealed = True
