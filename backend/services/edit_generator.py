"""
Edit Generator Service - Turn formatter output into line/column text edits
"""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Iterable

from models.edit import DeleteEdit, InsertEdit, TextEdit

LINE_BREAK_PATTERN = re.compile(r"\r?\n")


class InvalidInputError(ValueError):
    """Raised when the engine is given something other than text"""


class InvalidEditError(ValueError):
    """Raised when an edit does not address the document it is applied to"""


def split_lines(text: str) -> list[str]:
    """Split text on \\n or \\r\\n. A bare \\r is kept as content."""
    if not text:
        return []
    return LINE_BREAK_PATTERN.split(text)


class EditGenerator:
    """Compute and apply whole-line text edits"""

    def compute_edits(self, original_text: str, new_text: str) -> list[TextEdit]:
        """
        Compare the two buffers line by line at the same index.

        Changed lines are cleared and rewritten in full, so every edit starts at
        column 0 or spans a whole original line. No edit can shift the columns of
        another, which keeps the list valid when applied as a single batch.
        """
        for name, value in (("original_text", original_text), ("new_text", new_text)):
            if not isinstance(value, str):
                raise InvalidInputError(
                    f"{name} must be a string, got {type(value).__name__}"
                )

        old_lines = split_lines(original_text)
        new_lines = split_lines(new_text)
        edits: list[TextEdit] = []

        for i, new_line in enumerate(new_lines):
            if i < len(old_lines):
                if new_line == old_lines[i]:
                    continue
                edits.append(DeleteEdit(line=i, start_col=0, end_col=len(old_lines[i])))
            edits.append(InsertEdit(line=i, col=0, text=new_line))

        for i in range(len(new_lines), len(old_lines)):
            edits.append(DeleteEdit(line=i, start_col=0, end_col=len(old_lines[i])))

        return edits

    def apply_edits(self, text: str, edits: Iterable[TextEdit]) -> str:
        """
        Apply a batch of edits the way the editor does.

        All positions refer to the document before any edit in the batch. A line
        that is fully deleted and gets no insert is removed along with its line
        break; inserts past the last line append new lines.
        """
        lines = split_lines(text)
        eol = "\r\n" if "\r\n" in text else "\n"

        deletes: dict[int, list[DeleteEdit]] = defaultdict(list)
        inserts: dict[int, list[InsertEdit]] = defaultdict(list)
        for edit in edits:
            if isinstance(edit, DeleteEdit):
                self._check_delete(edit, lines)
                deletes[edit.line].append(edit)
            else:
                if edit.line < len(lines) and edit.col > len(lines[edit.line]):
                    raise InvalidEditError(
                        f"Insert column {edit.col} is past the end of line {edit.line}"
                    )
                if edit.line >= len(lines) and edit.col != 0:
                    raise InvalidEditError(
                        f"Insert on new line {edit.line} must start at column 0"
                    )
                inserts[edit.line].append(edit)

        result: list[str] = []
        for i, line in enumerate(lines):
            removed = self._removed_columns(deletes.get(i, []))
            if removed is not None and removed >= set(range(len(line))) and i not in inserts:
                # Whole line dropped
                continue
            result.append(self._rewrite_line(line, removed, inserts.get(i, [])))

        expected = len(lines)
        for line_no in sorted(k for k in inserts if k >= len(lines)):
            if line_no != expected:
                raise InvalidEditError(
                    f"Insert at line {line_no} leaves a gap after line {expected - 1}"
                )
            result.append("".join(edit.text for edit in inserts[line_no]))
            expected += 1

        return self._join_lines(result, eol)

    def _join_lines(self, lines: list[str], eol: str) -> str:
        parts = []
        for i, line in enumerate(lines):
            parts.append(line)
            if i < len(lines) - 1:
                # A trailing \r would merge with "\n" into one CRLF break
                parts.append("\r\n" if line.endswith("\r") else eol)
        return "".join(parts)

    def _check_delete(self, edit: DeleteEdit, lines: list[str]) -> None:
        if edit.line >= len(lines):
            raise InvalidEditError(f"Delete targets missing line {edit.line}")
        if edit.start_col > edit.end_col or edit.end_col > len(lines[edit.line]):
            raise InvalidEditError(
                f"Delete range [{edit.start_col}, {edit.end_col}) is invalid "
                f"for line {edit.line}"
            )

    def _removed_columns(self, deletes: list[DeleteEdit]) -> set[int] | None:
        if not deletes:
            return None
        removed: set[int] = set()
        for edit in deletes:
            removed.update(range(edit.start_col, edit.end_col))
        return removed

    def _rewrite_line(
        self,
        line: str,
        removed: set[int] | None,
        inserts: list[InsertEdit],
    ) -> str:
        by_col: dict[int, list[str]] = defaultdict(list)
        for edit in inserts:
            by_col[edit.col].append(edit.text)

        parts = []
        for col in range(len(line) + 1):
            parts.extend(by_col.get(col, []))
            if col < len(line) and (removed is None or col not in removed):
                parts.append(line[col])
        return "".join(parts)
