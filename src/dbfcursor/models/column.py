from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from .common import ColumnType

class Column(BaseModel):
    """One field descriptor. ``offset`` counts from the byte after the deletion marker."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: ColumnType
    type_code: str = Field(..., min_length=1, max_length=1)
    offset: int = Field(..., ge=0)
    size: int = Field(..., gt=0)
    decimal_count: int = Field(0, ge=0)

    @property
    def end(self) -> int:
        return self.offset + self.size
