from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class TargetsFile(BaseModel):
    # URLs stay plain strings: they are store keys and must not be normalized.
    targets: List[str] = Field(default_factory=list)
