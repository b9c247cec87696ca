from __future__ import annotations
from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from .column import Column

class TableHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = Field(..., ge=0, le=255)
    last_modified: Optional[date] = None
    record_count: int = Field(..., ge=0)
    header_size: int = Field(..., ge=33)
    record_size: int = Field(..., ge=1)
    language_driver: int = 0
    columns: List[Column] = Field(default_factory=list)
