"""Pydantic schemas for API response models."""

from .report import FileCountInfo, HealthInfo, ReportSummary, TypeFiles, TypeReportInfo

__all__ = [
    'FileCountInfo',
    'HealthInfo',
    'ReportSummary',
    'TypeFiles',
    'TypeReportInfo',
]
