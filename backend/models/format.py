"""Format mode data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .edit import TextEdit


class FormatStatus(str, Enum):
    """Outcome of a format request"""

    FORMATTED = "formatted"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"  # language not handled
    NEEDS_SAVE = "needs_save"  # editor must save before formatting
    UNAVAILABLE = "unavailable"  # formatter executable missing


class FormatRequest(BaseModel):
    """Request to format an open document"""

    file_path: str
    content: str
    language: str = "scad"
    request_id: str | None = None
    is_dirty: bool = False
    is_untitled: bool = False
    workspace_root: str | None = None


class FormatResponse(BaseModel):
    """Edits that turn the document into its formatted form"""

    request_id: str
    file_path: str
    status: FormatStatus
    edits: list[TextEdit] = []
    message: str | None = None


class EditsRequest(BaseModel):
    """Request to compute edits between two buffers"""

    original: str
    formatted: str


class EditsResponse(BaseModel):
    """Edits computed between two buffers"""

    edits: list[TextEdit]
    edit_count: int


class OutputResponse(BaseModel):
    """Contents of the formatter output channel"""

    lines: list[str]
    visible: bool
