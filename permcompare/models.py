from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class SanitizeRequest(BaseModel):
    text: str = ""


class SanitizeResponse(BaseModel):
    text: str
    names: List[str] = Field(default_factory=list)


class CompareRequest(BaseModel):
    primary_text: str = Field(default="", examples=["Alpha\nBeta"])
    mirror_text: str = Field(default="", examples=["alpha\nBeta\nGamma"])


class ComparisonRowModel(BaseModel):
    name: str
    description: str = ""


class CompareSummary(BaseModel):
    primary: int = 0
    mirror: int = 0
    missing: int = 0
    described: int = 0


class EmptyResultMessage(BaseModel):
    title: str
    detail: str


class CompareResponse(BaseModel):
    rows: List[ComparisonRowModel] = Field(default_factory=list)
    summary: CompareSummary
    message: Optional[EmptyResultMessage] = None


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class DescriptionsResponse(BaseModel):
    entries: int
    source: Optional[str] = None
    sha256: Optional[str] = None
    encoding: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[ReportItem] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
