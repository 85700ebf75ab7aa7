"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class AnalyzeRequest(BaseModel):
    mask: list[list[int]] = Field(..., description="Foreground mask as rows of 0/1 values")
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="AnalysisConfig overrides (e.g. reference_point_choice='EP')",
    )

    @field_validator("mask")
    @classmethod
    def _rectangular(cls, rows: list[list[int]]) -> list[list[int]]:
        if not rows or not rows[0]:
            raise ValueError("mask must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("mask rows must all have the same length")
        if any(v not in (0, 1) for row in rows for v in row):
            raise ValueError("mask values must be 0 or 1")
        return rows
