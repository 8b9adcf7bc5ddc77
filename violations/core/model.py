"""Detailed violations model.

Defines the data structures built from the per-build XML artifacts.
These are pure data containers. Parsing lives in ``parser.py``.

    BuildModel
      ├── type_counts      category -> total count
      ├── type_files       category -> [FileCount] (worst files first)
      └── file_model_map   file name -> FileModelProxy
                                          └── FileModel (parsed on first use)
                                                └── violations: category -> [Violation]
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .build import Build

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Violation severity, HIGH being the most severe (level 0)."""

    HIGH = "High"
    MEDIUM_HIGH = "Medium High"
    MEDIUM = "Medium"
    MEDIUM_LOW = "Medium Low"
    LOW = "Low"

    @property
    def level(self) -> int:
        return _SEVERITY_ORDER.index(self)

    @classmethod
    def from_level(cls, level: int) -> "Severity":
        if level < 0:
            return cls.HIGH
        if level >= len(_SEVERITY_ORDER):
            return cls.LOW
        return _SEVERITY_ORDER[level]

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Severity":
        """Case-insensitive lookup; unknown names map to MEDIUM."""
        if name:
            normalized = name.strip().replace("_", " ").lower()
            for severity in cls:
                if severity.value.lower() == normalized:
                    return severity
        return cls.MEDIUM


_SEVERITY_ORDER = [
    Severity.HIGH,
    Severity.MEDIUM_HIGH,
    Severity.MEDIUM,
    Severity.MEDIUM_LOW,
    Severity.LOW,
]


@dataclass
class Violation:
    """A single violation reported against a line of a file."""

    line: int
    type: str  # category, e.g. "checkstyle"
    source: str  # rule id within the category, e.g. "Indentation"
    message: str
    severity: Severity = Severity.MEDIUM
    popup_message: Optional[str] = None

    @property
    def severity_level(self) -> int:
        return self.severity.level

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "type": self.type,
            "source": self.source,
            "message": self.message,
            "severity": self.severity.value,
            "severity_level": self.severity_level,
            "popup_message": self.popup_message or self.message,
        }


@dataclass
class FileModel:
    """All violations for one file, grouped by category and sorted by line."""

    display_name: str
    source_file: Optional[str] = None  # absolute path of the analysed file
    last_modified: Optional[int] = None  # epoch millis
    violations: Dict[str, List[Violation]] = field(default_factory=dict)

    def add_violation(self, violation: Violation) -> None:
        self.violations.setdefault(violation.type, []).append(violation)

    def sort(self) -> None:
        for items in self.violations.values():
            items.sort(key=lambda v: (v.line, v.severity_level, v.source))

    def count(self, type_name: Optional[str] = None) -> int:
        if type_name is not None:
            return len(self.violations.get(type_name, []))
        return sum(len(items) for items in self.violations.values())

    def lines(self) -> List[int]:
        """Distinct lines carrying at least one violation."""
        return sorted({v.line for items in self.violations.values() for v in items})

    def to_dict(self, limit: Optional[int] = None) -> dict:
        return {
            "name": self.display_name,
            "source_file": self.source_file,
            "last_modified": self.last_modified,
            "total": self.count(),
            "types": {
                type_name: {
                    "count": len(items),
                    "violations": [v.to_dict() for v in items[:limit]],
                }
                for type_name, items in sorted(self.violations.items())
            },
        }


@dataclass
class FileCount:
    """Per-category violation counts for one file, as listed in violations.xml."""

    name: str
    counts: Dict[str, int] = field(default_factory=dict)

    def total(self) -> int:
        return sum(self.counts.values())


class FileModelProxy:
    """Lazy handle to one file's detail artifact.

    The per-file XML is only parsed the first time the model is asked for.
    A proxy is shared through the cached BuildModel, so binding it to a build
    for rendering returns a separate ``FileView`` instead of mutating it.
    """

    def __init__(self, name: str, xml_file: Path):
        self.name = name
        self.xml_file = xml_file
        self._file_model: Optional[FileModel] = None

    def get_file_model(self) -> FileModel:
        """Parse (once) and return the file model.

        Raises:
            ModelParseError: If the per-file artifact cannot be parsed.
        """
        if self._file_model is None:
            from .parser import parse_file_model

            self._file_model = parse_file_model(self.xml_file)
        return self._file_model

    def is_loaded(self) -> bool:
        return self._file_model is not None

    def build(self, build: "Build") -> "FileView":
        """Bind the proxy to the build being rendered."""
        return FileView(self, build)

    def __repr__(self) -> str:
        return f"FileModelProxy({self.name!r})"


class FileView:
    """A FileModelProxy bound to a build and a request context path."""

    def __init__(self, proxy: FileModelProxy, build: "Build"):
        self.proxy = proxy
        self.build = build
        self.context = ""

    def context_path(self, path: str) -> "FileView":
        self.context = path
        return self

    @property
    def name(self) -> str:
        return self.proxy.name

    def to_dict(self, limit: Optional[int] = None) -> dict:
        return {
            "kind": "file",
            "build": self.build.number,
            "context_path": self.context,
            "file": self.proxy.get_file_model().to_dict(limit=limit),
        }


@dataclass
class BuildModel:
    """Everything violations.xml says about a build."""

    xml_file: Path
    type_counts: Dict[str, int] = field(default_factory=dict)
    type_files: Dict[str, List[FileCount]] = field(default_factory=dict)
    file_model_map: Dict[str, FileModelProxy] = field(default_factory=dict)

    def add_file_count(self, file_count: FileCount, proxy: FileModelProxy) -> None:
        self.file_model_map[file_count.name] = proxy
        for type_name, count in file_count.counts.items():
            self.type_files.setdefault(type_name, []).append(file_count)

    def finish(self) -> None:
        """Sort file maps once parsing is done: names ascending, worst files first."""
        self.file_model_map = dict(sorted(self.file_model_map.items()))
        for type_name, files in self.type_files.items():
            files.sort(key=lambda fc, t=type_name: (-fc.counts.get(t, 0), fc.name))
        self.type_files = dict(sorted(self.type_files.items()))

    def get_file_model_map(self) -> Dict[str, FileModelProxy]:
        return self.file_model_map
