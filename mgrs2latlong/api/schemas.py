from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConvertRequest(BaseModel):
    mgrs: str = Field(description="MGRS reference, spacing and case are ignored")

    model_config = ConfigDict(json_schema_extra={"example": {"mgrs": "33T WM 12345 67890"}})


class ConversionErrorOut(BaseModel):
    kind: Literal["format", "range"]
    reason: str


class PointOut(BaseModel):
    """A converted reference; ``precision_m`` is the side of the grid box it names."""

    mgrs: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(gt=-180.0, le=180.0)
    precision_m: int


class ConvertResult(BaseModel):
    input: str
    ok: bool
    point: Optional[PointOut] = None
    error: Optional[ConversionErrorOut] = None


class BatchRequest(BaseModel):
    values: List[str] = Field(default_factory=list)

    @field_validator("values")
    @classmethod
    def _cap_values(cls, v: List[str]) -> List[str]:
        if len(v) > 10_000:
            raise ValueError("at most 10000 values per request")
        return v


class BatchResponse(BaseModel):
    results: List[ConvertResult] = Field(default_factory=list)


class DetectRequest(BaseModel):
    header: List[str]
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class CandidateOut(BaseModel):
    name: str
    position: int
    sampled: int
    lexical_matches: int
    parsed_matches: int


class DetectResponse(BaseModel):
    column: Optional[str] = None
    candidates: List[CandidateOut] = Field(default_factory=list)
