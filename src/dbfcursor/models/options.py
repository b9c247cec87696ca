from __future__ import annotations
import codecs
from typing import Literal
from pydantic import BaseModel, ConfigDict, field_validator

class ReaderOptions(BaseModel):
    """How text columns are turned into ``str``."""
    model_config = ConfigDict(frozen=True)

    encoding: str = "ascii"
    encoding_errors: Literal["strict", "replace", "ignore"] = "strict"

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"unknown encoding {v!r}") from None
