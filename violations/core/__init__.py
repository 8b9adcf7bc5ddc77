"""Violations core: per-build report, detailed model and health scoring.

Public API:
    ViolationsReport(build, config, violations) → per-build facade
    load_config(path) → ViolationsConfig
    parse_build_model(xml_file) → ModelResult
    FileSystemBuildRepository(builds_root, config) → BuildRepository
"""

from .build import Build, BuildRepository, InMemoryBuildRepository, ViolationsBuildAction
from .cache import ModelCache
from .config import ConfigError, TypeConfig, ViolationsConfig, load_config
from .health import HealthReport, min_health
from .model import BuildModel, FileModel, FileModelProxy, Severity, Violation
from .parser import ModelParseError, ModelResult, parse_build_model, parse_file_model
from .report import TypeReport, ViolationsReport
from .repository import FileSystemBuildRepository

__all__ = [
    "Build",
    "BuildModel",
    "BuildRepository",
    "ConfigError",
    "FileModel",
    "FileModelProxy",
    "FileSystemBuildRepository",
    "HealthReport",
    "InMemoryBuildRepository",
    "ModelCache",
    "ModelParseError",
    "ModelResult",
    "Severity",
    "TypeConfig",
    "TypeReport",
    "Violation",
    "ViolationsBuildAction",
    "ViolationsConfig",
    "ViolationsReport",
    "load_config",
    "min_health",
    "parse_build_model",
    "parse_file_model",
]
