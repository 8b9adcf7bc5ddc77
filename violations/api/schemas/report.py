"""Violations report response schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class HealthInfo(BaseModel):
    """Health score for a category or the whole build."""
    score: int = Field(..., description="Health score, 0 (worst) to 100", ge=0, le=100)
    description: str = Field(..., description="Human readable summary")
    icon: str = Field(..., description="Health icon name")


class TypeReportInfo(BaseModel):
    """One violation category row."""
    type: str = Field(..., description="Violation category")
    icon: Optional[str] = Field(None, description="Health icon, absent if the category is not configured")
    number: int = Field(..., description="Violation count, negative if no report files were found")


class ReportSummary(BaseModel):
    """Violations summary for one build."""
    build: int = Field(..., description="Build number")
    health: Optional[HealthInfo] = Field(None, description="Worst category health")
    healths: List[HealthInfo] = Field(default_factory=list, description="Health per configured category")
    violations: Dict[str, int] = Field(default_factory=dict, description="Category to violation count")
    type_reports: List[TypeReportInfo] = Field(default_factory=list, description="Rows ordered by category")
    unstable: bool = Field(False, description="Whether any category exceeds its unstable threshold")


class FileCountInfo(BaseModel):
    """One file's counts within a category listing."""
    name: str = Field(..., description="File name as recorded in violations.xml")
    count: int = Field(..., description="Violations of the listed category")
    counts: Dict[str, int] = Field(default_factory=dict, description="Counts for every category")


class TypeFiles(BaseModel):
    """Files with violations of one category, worst first."""
    build: int = Field(..., description="Build number")
    type: str = Field(..., description="Violation category")
    number: Optional[int] = Field(None, description="Recorded total for the category")
    files: List[FileCountInfo] = Field(default_factory=list)
