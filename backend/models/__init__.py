"""Models module - Pydantic data models"""

from .edit import DeleteEdit, InsertEdit, TextEdit
from .format import (
    EditsRequest,
    EditsResponse,
    FormatRequest,
    FormatResponse,
    FormatStatus,
    OutputResponse,
)
from .invocation import InvocationResult, InvocationStatus

__all__ = [
    # Edit models
    "DeleteEdit",
    "InsertEdit",
    "TextEdit",
    # Format models
    "EditsRequest",
    "EditsResponse",
    "FormatRequest",
    "FormatResponse",
    "FormatStatus",
    "OutputResponse",
    # Invocation models
    "InvocationResult",
    "InvocationStatus",
]
