"""Text edit data models"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class DeleteEdit(BaseModel):
    """Remove the range [start_col, end_col) on a line of the original document"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"
    line: int = Field(ge=0)  # 0-indexed
    start_col: int = Field(ge=0)
    end_col: int = Field(ge=0)


class InsertEdit(BaseModel):
    """Insert text at (line, col) of the original document"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["insert"] = "insert"
    line: int = Field(ge=0)  # 0-indexed
    col: int = Field(ge=0)
    text: str


TextEdit = Annotated[Union[DeleteEdit, InsertEdit], Field(discriminator="kind")]
